from collections.abc import Iterable

from src.models.review import ReviewRecord

DEDUPE_TEXT_PREFIX_CHARS = 50


def review_fingerprint(review: ReviewRecord) -> str:
    return review.name + review.text[:DEDUPE_TEXT_PREFIX_CHARS]


def dedupe_reviews(reviews: Iterable[ReviewRecord]) -> list[ReviewRecord]:
    """Drop re-rendered copies of a review, keeping the first one seen.

    The page renders some reviews twice (collapsed and expanded) with no
    stable identifier, so name plus text prefix is the only usable key.
    """
    seen: set[str] = set()
    unique: list[ReviewRecord] = []

    for review in reviews:
        key = review_fingerprint(review)
        if key in seen:
            continue
        seen.add(key)
        unique.append(review)

    return unique
