from contextlib import asynccontextmanager

import pytest


class FakeSurface:
    """In-memory rendered surface that reveals review items as it is scrolled."""

    def __init__(
        self,
        *,
        title: str = "",
        body: str | None = None,
        items: list[str] | None = None,
        item_selector: str = ".hjmQqc",
        initial_items: int | None = None,
        items_per_scroll: int = 0,
        clickable: tuple[str, ...] = (),
        navigate_error: Exception | None = None,
    ) -> None:
        self._title = title
        self._body = body
        self._items = list(items or [])
        self._item_selector = item_selector
        self._initial_items = len(self._items) if initial_items is None else initial_items
        self._items_per_scroll = items_per_scroll
        self._clickable = set(clickable)
        self._navigate_error = navigate_error

        self.navigations: list[str] = []
        self.clicks: list[str] = []
        self.presses: list[str] = []
        self.waits: list[int] = []
        self.wheels = 0

    def visible_items(self) -> list[str]:
        visible = self._initial_items + self.wheels * self._items_per_scroll
        return self._items[: min(len(self._items), visible)]

    async def navigate(self, url: str, timeout_ms: int) -> None:
        self.navigations.append(url)
        if self._navigate_error is not None:
            raise self._navigate_error

    async def title(self) -> str:
        return self._title

    async def body_text(self) -> str:
        if self._body is not None:
            return self._body
        return " ".join(self.visible_items())

    async def element_texts(self, selector: str) -> list[str]:
        if selector != self._item_selector:
            return []
        return self.visible_items()

    async def count(self, selector: str) -> int:
        if selector != self._item_selector:
            return 0
        return len(self.visible_items())

    async def wheel(self, delta_y: int) -> None:
        self.wheels += 1

    async def press(self, key: str) -> None:
        self.presses.append(key)

    async def click(self, selector: str, timeout_ms: int) -> bool:
        self.clicks.append(selector)
        return selector in self._clickable

    async def wait(self, delay_ms: int) -> None:
        self.waits.append(delay_ms)


class FakeSession:
    def __init__(self) -> None:
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def page(self):
        self.opened += 1
        try:
            yield object()
        finally:
            self.closed += 1


@pytest.fixture
def make_surface():
    return FakeSurface


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
