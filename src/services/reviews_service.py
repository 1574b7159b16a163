from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from playwright.async_api import Page

from src.config import Settings, settings as default_settings
from src.models.review import PlaceInfo, ReviewRecord
from src.pipeline.extractor import ReviewExtractor
from src.pipeline.normalizer import ReviewNormalizer
from src.pipeline.patterns import DEFAULT_PATTERNS, ExtractionPatterns
from src.pipeline.place_info import PlaceInfoExtractor
from src.pipeline.segments import build_segment_source
from src.scraper.dialogs import DEFAULT_DISMISS_STEPS, DismissStep, dismiss_dialogs
from src.scraper.loader import IncrementalLoader
from src.scraper.session import BrowserSession
from src.scraper.surface import PlaywrightSurface, RenderedSurface

LOGGER = logging.getLogger(__name__)


class ReviewsService:
    def __init__(
        self,
        session: BrowserSession,
        *,
        config: Settings | None = None,
        patterns: ExtractionPatterns = DEFAULT_PATTERNS,
        dismiss_steps: tuple[DismissStep, ...] = DEFAULT_DISMISS_STEPS,
        surface_factory: Callable[[Page], RenderedSurface] = PlaywrightSurface,
    ) -> None:
        self._session = session
        self._config = config or default_settings
        self._patterns = patterns
        self._dismiss_steps = dismiss_steps
        self._surface_factory = surface_factory

        self.loader = IncrementalLoader(
            max_iterations=self._config.loader_max_iterations,
            stall_threshold=self._config.loader_stall_threshold,
            scroll_step_px=self._config.loader_scroll_step_px,
            settle_ms=self._config.loader_settle_ms,
            keyboard_every=self._config.loader_keyboard_every,
            keyboard_settle_ms=self._config.loader_keyboard_settle_ms,
        )
        self.normalizer = ReviewNormalizer(
            patterns,
            default_rating=self._config.reviews_default_rating,
            max_text_chars=self._config.reviews_max_text_chars,
            min_text_chars=self._config.reviews_min_text_chars,
        )
        self.place_extractor = PlaceInfoExtractor(patterns)

    async def get_reviews(
        self,
        url: str,
        count: int | None = None,
        strategy: str | None = None,
    ) -> list[ReviewRecord]:
        target_url = self._validate_url(url)
        target_count = self._config.reviews_default_count if count is None else int(count)
        if target_count < 0:
            raise ValueError("count must be zero or a positive integer.")

        source = build_segment_source(strategy or self._config.scraper_segment_source, self._patterns)
        extractor = ReviewExtractor(source, self.normalizer)

        async with self._open_surface() as surface:
            await self._open_place_page(surface, target_url)
            await surface.wait(self._config.scraper_post_dismiss_wait_ms)

            loaded = await self.loader.load(surface, source, target_count)
            if target_count == 0:
                return []
            await surface.wait(self._config.scraper_post_load_wait_ms)

            snapshot = await source.snapshot(surface)

        reviews = extractor.extract(snapshot, limit=target_count)
        LOGGER.info(
            "Fetched reviews url=%s source=%s loaded=%s returned=%s requested=%s",
            target_url,
            source.name,
            loaded,
            len(reviews),
            target_count,
        )
        return reviews

    async def get_place_info(self, url: str) -> PlaceInfo | None:
        target_url = self._validate_url(url)

        async with self._open_surface() as surface:
            await self._open_place_page(surface, target_url)
            title = await surface.title()
            body_text = await surface.body_text()

        info = self.place_extractor.extract(title, body_text)
        if info.is_empty():
            LOGGER.info("No place info recognised url=%s", target_url)
            return None
        return info

    @asynccontextmanager
    async def _open_surface(self) -> AsyncIterator[RenderedSurface]:
        async with self._session.page() as page:
            yield self._surface_factory(page)

    async def _open_place_page(self, surface: RenderedSurface, url: str) -> None:
        await surface.navigate(url, timeout_ms=self._config.scraper_navigation_timeout_ms)
        await surface.wait(self._config.scraper_post_navigation_wait_ms)
        dismissed = await dismiss_dialogs(surface, self._dismiss_steps)
        if dismissed:
            LOGGER.debug("Dismissed dialogs %s url=%s", dismissed, url)

    def _validate_url(self, url: str) -> str:
        value = (url or "").strip()
        if not value:
            raise ValueError("Parameter 'url' cannot be empty.")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Parameter 'url' must be an http(s) URL, got '{value}'.")
        return value

