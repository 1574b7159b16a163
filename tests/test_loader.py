import asyncio

from src.pipeline.segments import StructuredSegmentSource
from src.scraper.loader import IncrementalLoader


def _items(total: int) -> list[str]:
    return [f"Reviewer {idx}{idx + 1} days ago★★★★★Review body number {idx}." for idx in range(total)]


def test_load_stops_once_target_is_visible(make_surface) -> None:
    surface = make_surface(items=_items(30), initial_items=5, items_per_scroll=5)
    loader = IncrementalLoader()

    loaded = asyncio.run(loader.load(surface, StructuredSegmentSource(), target_count=12))

    assert loaded == 15
    assert surface.wheels == 2


def test_load_with_zero_target_does_not_scroll(make_surface) -> None:
    surface = make_surface(items=_items(3))
    loader = IncrementalLoader()

    loaded = asyncio.run(loader.load(surface, StructuredSegmentSource(), target_count=0))

    assert loaded == 3
    assert surface.wheels == 0


def test_load_gives_up_after_stall_threshold(make_surface) -> None:
    surface = make_surface(items=_items(3), initial_items=3, items_per_scroll=5)
    loader = IncrementalLoader(max_iterations=50, stall_threshold=10)

    loaded = asyncio.run(loader.load(surface, StructuredSegmentSource(), target_count=20))

    assert loaded == 3
    assert surface.wheels == 10


def test_load_is_bounded_by_max_iterations(make_surface) -> None:
    surface = make_surface(items=_items(1000), initial_items=0, items_per_scroll=1)
    loader = IncrementalLoader(max_iterations=50, stall_threshold=10, keyboard_every=5)

    loaded = asyncio.run(loader.load(surface, StructuredSegmentSource(), target_count=500))

    assert loaded == 49
    assert surface.wheels == 50
    assert surface.presses == ["End"] * 10


def test_load_waits_after_each_scroll(make_surface) -> None:
    surface = make_surface(items=_items(10), initial_items=2, items_per_scroll=4)
    loader = IncrementalLoader(settle_ms=600, keyboard_every=0)

    asyncio.run(loader.load(surface, StructuredSegmentSource(), target_count=10))

    assert surface.wheels == 2
    assert surface.waits == [600, 600]
    assert surface.presses == []
