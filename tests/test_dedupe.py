from src.models.review import ReviewRecord
from src.pipeline.dedupe import dedupe_reviews


def _review(name: str, text: str, rating: int = 5) -> ReviewRecord:
    return ReviewRecord(name=name, rating=rating, text=text, date="1 week ago")


def test_dedupe_keeps_first_seen_record() -> None:
    reviews = [
        _review("Alice Smith", "Great service and a very tidy waiting room.", rating=5),
        _review("Bob Lee", "Fair prices, friendly staff.", rating=4),
        _review("Alice Smith", "Great service and a very tidy waiting room.", rating=1),
    ]

    unique = dedupe_reviews(reviews)

    assert [review.name for review in unique] == ["Alice Smith", "Bob Lee"]
    assert unique[0].rating == 5


def test_dedupe_key_uses_text_prefix_only() -> None:
    prefix = "p" * 50
    reviews = [_review("Alice Smith", prefix + " short"), _review("Alice Smith", prefix + " expanded version")]

    assert len(dedupe_reviews(reviews)) == 1


def test_dedupe_is_idempotent() -> None:
    reviews = [
        _review("Alice Smith", "Great service and a very tidy waiting room."),
        _review("Alice Smith", "Great service and a very tidy waiting room."),
        _review("Carla Diaz", "Great service and a very tidy waiting room."),
    ]

    once = dedupe_reviews(reviews)

    assert dedupe_reviews(once) == once
    assert len(once) == 2
