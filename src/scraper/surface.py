from __future__ import annotations

from typing import Protocol

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from src.scraper.errors import NavigationError, SurfaceError


class RenderedSurface(Protocol):
    """Live, script-rendered view of a page as seen by the extractors."""

    async def navigate(self, url: str, timeout_ms: int) -> None: ...

    async def title(self) -> str: ...

    async def body_text(self) -> str: ...

    async def element_texts(self, selector: str) -> list[str]: ...

    async def count(self, selector: str) -> int: ...

    async def wheel(self, delta_y: int) -> None: ...

    async def press(self, key: str) -> None: ...

    async def click(self, selector: str, timeout_ms: int) -> bool: ...

    async def wait(self, delay_ms: int) -> None: ...


class PlaywrightSurface:
    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def page(self) -> Page:
        return self._page

    async def navigate(self, url: str, timeout_ms: int) -> None:
        try:
            await self._page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationError(url, f"timed out after {timeout_ms} ms") from exc
        except PlaywrightError as exc:
            raise NavigationError(url, exc.message) from exc

    async def title(self) -> str:
        try:
            return await self._page.title()
        except PlaywrightError as exc:
            raise SurfaceError("title read", exc.message) from exc

    async def body_text(self) -> str:
        try:
            return await self._page.locator("body").text_content() or ""
        except PlaywrightError as exc:
            raise SurfaceError("body text read", exc.message) from exc

    async def element_texts(self, selector: str) -> list[str]:
        try:
            return await self._page.locator(selector).all_text_contents()
        except PlaywrightError as exc:
            raise SurfaceError(f"text read of {selector!r}", exc.message) from exc

    async def count(self, selector: str) -> int:
        try:
            return await self._page.locator(selector).count()
        except PlaywrightError as exc:
            raise SurfaceError(f"count of {selector!r}", exc.message) from exc

    async def wheel(self, delta_y: int) -> None:
        try:
            await self._page.mouse.wheel(0, delta_y)
        except PlaywrightError as exc:
            raise SurfaceError("scroll", exc.message) from exc

    async def press(self, key: str) -> None:
        try:
            await self._page.keyboard.press(key)
        except PlaywrightError as exc:
            raise SurfaceError(f"key press {key!r}", exc.message) from exc

    async def click(self, selector: str, timeout_ms: int) -> bool:
        try:
            await self._page.click(selector, timeout=timeout_ms)
        except PlaywrightError:
            # Covers timeouts: the element never showed up.
            return False
        return True

    async def wait(self, delay_ms: int) -> None:
        try:
            await self._page.wait_for_timeout(max(0, delay_ms))
        except PlaywrightError as exc:
            raise SurfaceError("wait", exc.message) from exc
