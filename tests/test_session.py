import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError

from src.scraper.session import BrowserSession


class Resource:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.closed = False

    async def close(self) -> None:
        self.closed = True
        if self.error is not None:
            raise self.error

    async def stop(self) -> None:
        await self.close()


def test_close_stops_browser_and_driver_when_context_close_fails() -> None:
    session = BrowserSession()
    context = Resource(PlaywrightError("Target page, context or browser has been closed"))
    browser = Resource()
    driver = Resource()
    session._context, session._browser, session._playwright = context, browser, driver

    with pytest.raises(PlaywrightError):
        asyncio.run(session.close())

    assert context.closed and browser.closed and driver.closed
    assert not session.is_started
    assert session._browser is None
    assert session._playwright is None


def test_page_scope_tolerates_page_already_gone() -> None:
    session = BrowserSession()
    page = Resource(PlaywrightError("Target page, context or browser has been closed"))

    class Context:
        async def new_page(self) -> Resource:
            return page

    session._context = Context()

    async def use_page() -> Resource:
        async with session.page() as opened:
            return opened

    assert asyncio.run(use_page()) is page
    assert page.closed
