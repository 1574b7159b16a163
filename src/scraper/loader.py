from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.scraper.surface import RenderedSurface

if TYPE_CHECKING:
    from src.pipeline.segments import SegmentSource

LOGGER = logging.getLogger(__name__)


class IncrementalLoader:
    """Scrolls a surface until enough review entries render or progress stalls.

    Rendering completes asynchronously with no completion event, so progress
    is inferred from the visible entry count between scroll steps.
    """

    def __init__(
        self,
        *,
        max_iterations: int = 50,
        stall_threshold: int = 10,
        scroll_step_px: int = 800,
        settle_ms: int = 600,
        keyboard_every: int = 5,
        keyboard_settle_ms: int = 500,
    ) -> None:
        self._max_iterations = max(1, max_iterations)
        self._stall_threshold = max(1, stall_threshold)
        self._scroll_step_px = max(1, scroll_step_px)
        self._settle_ms = max(0, settle_ms)
        self._keyboard_every = max(0, keyboard_every)
        self._keyboard_settle_ms = max(0, keyboard_settle_ms)

    async def load(self, surface: RenderedSurface, source: SegmentSource, target_count: int) -> int:
        """Return the last observed entry count, a lower bound on what rendered."""
        previous_count = 0
        stalled_rounds = 0
        current_count = 0

        for scroll_idx in range(1, self._max_iterations + 1):
            current_count = await source.count(surface)

            if current_count >= target_count:
                LOGGER.debug("Loader reached target=%s count=%s", target_count, current_count)
                return current_count

            if current_count == previous_count:
                stalled_rounds += 1
                if stalled_rounds >= self._stall_threshold:
                    LOGGER.info(
                        "Loader stalled at count=%s target=%s after %s scrolls",
                        current_count,
                        target_count,
                        scroll_idx - 1,
                    )
                    return current_count
            else:
                stalled_rounds = 0

            previous_count = current_count

            await surface.wheel(self._scroll_step_px)
            await surface.wait(self._settle_ms)

            if self._keyboard_every and scroll_idx % self._keyboard_every == 0:
                await surface.press("End")
                await surface.wait(self._keyboard_settle_ms)

        LOGGER.info("Loader hit max_iterations=%s count=%s target=%s", self._max_iterations, current_count, target_count)
        return current_count
