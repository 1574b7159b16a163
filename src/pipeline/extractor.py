from __future__ import annotations

import logging

from pydantic import ValidationError

from src.models.review import RawSegment, ReviewRecord
from src.pipeline.dedupe import dedupe_reviews
from src.pipeline.normalizer import ReviewNormalizer
from src.pipeline.segments import ReviewSnapshot, SegmentSource

LOGGER = logging.getLogger(__name__)


class ReviewExtractor:
    def __init__(self, source: SegmentSource, normalizer: ReviewNormalizer | None = None) -> None:
        self.source = source
        self.normalizer = normalizer or ReviewNormalizer()

    def extract(self, snapshot: ReviewSnapshot, limit: int | None = None) -> list[ReviewRecord]:
        segments = self.source.segments(snapshot)
        reviews: list[ReviewRecord] = []
        skipped = 0

        for segment in segments:
            review = self._normalize_segment(segment)
            if review is None:
                skipped += 1
                continue
            reviews.append(review)

        unique = dedupe_reviews(reviews)
        LOGGER.debug(
            "Extracted reviews kind=%s segments=%s kept=%s skipped=%s duplicates=%s",
            snapshot.kind,
            len(segments),
            len(unique),
            skipped,
            len(reviews) - len(unique),
        )

        if limit is not None:
            return unique[: max(0, limit)]
        return unique

    def _normalize_segment(self, segment: RawSegment) -> ReviewRecord | None:
        try:
            return self.normalizer.normalize(segment)
        except (ValidationError, ValueError) as exc:
            LOGGER.debug("Skipping malformed review segment anchor=%r: %s", segment.anchor, exc)
            return None
