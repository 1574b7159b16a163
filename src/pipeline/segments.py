from __future__ import annotations

import logging
import re
from typing import Literal

from pydantic import BaseModel, Field

from src.models.review import RawSegment
from src.pipeline.patterns import DEFAULT_PATTERNS, ExtractionPatterns
from src.scraper.selectors import SELECTOR_PATTERNS
from src.scraper.surface import RenderedSurface

LOGGER = logging.getLogger(__name__)

SnapshotKind = Literal["structured", "text_scan"]


class ReviewSnapshot(BaseModel):
    """Raw review content captured from the surface after loading."""

    kind: SnapshotKind
    blocks: list[str] = Field(default_factory=list)


def split_structured_block(block: str, anchor_regex: re.Pattern[str]) -> RawSegment | None:
    match = anchor_regex.search(block)
    if match is None:
        return None

    return RawSegment(
        before=block[: match.start()].strip(),
        anchor=match.group(0),
        after=block[match.end() :].strip(),
        kind="structured",
    )


def scan_text_segments(
    text: str,
    anchor_regex: re.Pattern[str],
    *,
    lookback: int = 200,
    lookahead: int = 1000,
) -> list[RawSegment]:
    """Slice free page text between consecutive date anchors.

    Both windows are bounded: the lookback keeps the previous review's tail
    out of the name region and the lookahead stops at the next anchor.
    """
    matches = list(anchor_regex.finditer(text))
    segments: list[RawSegment] = []

    for idx, match in enumerate(matches):
        start = match.start()
        next_start = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        after_end = min(next_start, start + lookahead)

        segments.append(
            RawSegment(
                before=text[max(0, start - lookback) : start],
                anchor=match.group(0),
                after=text[match.end() : max(match.end(), after_end)],
                kind="text_scan",
            )
        )

    return segments


class SegmentSource:
    """Where review segments come from on a rendered surface."""

    name = "base"

    def __init__(self, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> None:
        self._patterns = patterns
        self._anchor_regex = patterns.date_anchor_regex()

    async def count(self, surface: RenderedSurface) -> int:
        raise NotImplementedError

    async def snapshot(self, surface: RenderedSurface) -> ReviewSnapshot:
        raise NotImplementedError

    def segments(self, snapshot: ReviewSnapshot) -> list[RawSegment]:
        if snapshot.kind == "text_scan":
            segments: list[RawSegment] = []
            for block in snapshot.blocks:
                segments.extend(scan_text_segments(block, self._anchor_regex))
            return segments

        structured: list[RawSegment] = []
        for block in snapshot.blocks:
            segment = split_structured_block(block, self._anchor_regex)
            if segment is None:
                LOGGER.debug("Skipping review element without a date anchor")
                continue
            structured.append(segment)
        return structured


class StructuredSegmentSource(SegmentSource):
    name = "structured"

    def __init__(
        self,
        patterns: ExtractionPatterns = DEFAULT_PATTERNS,
        selectors: tuple[str, ...] = SELECTOR_PATTERNS["REVIEW_ITEMS"],
    ) -> None:
        super().__init__(patterns)
        self._selectors = selectors

    async def count(self, surface: RenderedSurface) -> int:
        for selector in self._selectors:
            total = await surface.count(selector)
            if total > 0:
                return total
        return 0

    async def snapshot(self, surface: RenderedSurface) -> ReviewSnapshot:
        for selector in self._selectors:
            if await surface.count(selector) <= 0:
                continue
            texts = await surface.element_texts(selector)
            return ReviewSnapshot(kind="structured", blocks=texts)
        return ReviewSnapshot(kind="structured")


class TextScanSegmentSource(SegmentSource):
    name = "text_scan"

    async def count(self, surface: RenderedSurface) -> int:
        body = await surface.body_text()
        return sum(1 for _ in self._anchor_regex.finditer(body))

    async def snapshot(self, surface: RenderedSurface) -> ReviewSnapshot:
        return ReviewSnapshot(kind="text_scan", blocks=[await surface.body_text()])


class AutoSegmentSource(SegmentSource):
    """Structured review elements when the page has them, page text otherwise."""

    name = "auto"

    def __init__(
        self,
        patterns: ExtractionPatterns = DEFAULT_PATTERNS,
        selectors: tuple[str, ...] = SELECTOR_PATTERNS["REVIEW_ITEMS"],
    ) -> None:
        super().__init__(patterns)
        self._structured = StructuredSegmentSource(patterns, selectors)
        self._text_scan = TextScanSegmentSource(patterns)

    async def count(self, surface: RenderedSurface) -> int:
        structured_count = await self._structured.count(surface)
        if structured_count > 0:
            return structured_count
        return await self._text_scan.count(surface)

    async def snapshot(self, surface: RenderedSurface) -> ReviewSnapshot:
        snapshot = await self._structured.snapshot(surface)
        if snapshot.blocks:
            return snapshot
        LOGGER.debug("No review elements found, falling back to page text scan")
        return await self._text_scan.snapshot(surface)


_SEGMENT_SOURCES: dict[str, type[SegmentSource]] = {
    "structured": StructuredSegmentSource,
    "text_scan": TextScanSegmentSource,
    "auto": AutoSegmentSource,
}


def build_segment_source(name: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> SegmentSource:
    normalized = (name or "").strip().lower().replace("-", "_").replace(" ", "_")
    aliases = {"dom": "structured", "text": "text_scan", "scan": "text_scan", "regex": "text_scan"}
    normalized = aliases.get(normalized, normalized)

    source_cls = _SEGMENT_SOURCES.get(normalized)
    if source_cls is None:
        raise ValueError(
            f"Unknown segment source '{name}'. "
            "Supported: structured | text_scan | auto"
        )
    return source_cls(patterns)
