from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from src.config import Settings
from src.scraper.errors import ScraperError

LOGGER = logging.getLogger(__name__)


class BrowserSession:
    """One browser plus one context, shared by every page-level operation.

    The session starts lazily on first use and must be released with
    ``close()``; each operation borrows its own page through ``page()``.
    """

    def __init__(
        self,
        *,
        headless: bool = True,
        browser_channel: str | None = "chrome",
        user_agent: str | None = None,
        viewport_width: int = 390,
        viewport_height: int = 844,
        is_mobile: bool = True,
        extra_chromium_args: list[str] | None = None,
    ) -> None:
        self._headless = headless
        self._browser_channel = (browser_channel or "").strip() or None
        self._user_agent = user_agent
        self._viewport = {"width": viewport_width, "height": viewport_height}
        self._is_mobile = is_mobile
        self._extra_chromium_args = list(extra_chromium_args or [])

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, config: Settings) -> BrowserSession:
        return cls(
            headless=config.scraper_headless,
            browser_channel=config.scraper_browser_channel,
            user_agent=config.scraper_user_agent,
            viewport_width=config.scraper_viewport_width,
            viewport_height=config.scraper_viewport_height,
            is_mobile=config.scraper_is_mobile,
            extra_chromium_args=config.scraper_extra_chromium_args,
        )

    @property
    def is_started(self) -> bool:
        return self._context is not None

    async def __aenter__(self) -> BrowserSession:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()

    async def start(self) -> BrowserContext:
        async with self._lock:
            if self._context is not None:
                return self._context

            if self._playwright is None:
                self._playwright = await async_playwright().start()
            if self._browser is None:
                self._browser = await self._launch_browser(self._playwright)

            context_options: dict[str, Any] = {
                "viewport": self._viewport,
                "is_mobile": self._is_mobile,
            }
            if self._user_agent:
                context_options["user_agent"] = self._user_agent
            self._context = await self._browser.new_context(**context_options)
            LOGGER.info(
                "Browser session started headless=%s channel=%s",
                self._headless,
                self._browser_channel or "bundled",
            )
            return self._context

    async def close(self) -> None:
        async with self._lock:
            context, browser, playwright = self._context, self._browser, self._playwright
            self._context = None
            self._browser = None
            self._playwright = None

            try:
                if context is not None:
                    await context.close()
            finally:
                try:
                    if browser is not None:
                        await browser.close()
                finally:
                    if playwright is not None:
                        await playwright.stop()
                        LOGGER.info("Browser session closed")

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        try:
            context = await self.start()
            page = await context.new_page()
        except PlaywrightError as exc:
            raise ScraperError(f"Could not open a browser page: {exc.message}") from exc

        try:
            yield page
        finally:
            try:
                await page.close()
            except PlaywrightError as exc:
                # The page is already gone when the browser crashed mid-operation.
                LOGGER.warning("Could not close page: %s", exc.message)

    async def _launch_browser(self, playwright: Playwright) -> Browser:
        launch_options: dict[str, Any] = {"headless": self._headless}
        if self._extra_chromium_args:
            launch_options["args"] = self._extra_chromium_args
        if self._browser_channel:
            launch_options["channel"] = self._browser_channel

        try:
            return await playwright.chromium.launch(**launch_options)
        except PlaywrightError:
            if not self._browser_channel:
                raise
            # Fallback to bundled Chromium if requested browser channel is unavailable.
            LOGGER.warning("Browser channel %r unavailable, using bundled Chromium", self._browser_channel)
            launch_options.pop("channel", None)
            return await playwright.chromium.launch(**launch_options)
