import asyncio

import pytest

from src.scraper.dialogs import DEFAULT_DISMISS_STEPS, DismissStep, dismiss_dialogs
from src.scraper.errors import DialogDismissError


def test_dismiss_dialogs_clicks_present_dialogs_in_order(make_surface) -> None:
    surface = make_surface(clickable=('button:has-text("Accept all")', 'button:has-text("Continue")'))

    dismissed = asyncio.run(dismiss_dialogs(surface))

    assert dismissed == ["cookie_consent", "continue"]
    assert surface.clicks[0] == 'button:has-text("Accept all")'


def test_dismiss_dialogs_ignores_missing_optional_dialogs(make_surface) -> None:
    surface = make_surface()

    dismissed = asyncio.run(dismiss_dialogs(surface))

    assert dismissed == []
    # Every selector of every step was tried once.
    assert len(surface.clicks) == sum(len(step.selectors) for step in DEFAULT_DISMISS_STEPS)


def test_dismiss_dialogs_raises_for_missing_required_step(make_surface) -> None:
    surface = make_surface()
    steps = (DismissStep(label="login_wall", selectors=("button.close",), required=True),)

    with pytest.raises(DialogDismissError):
        asyncio.run(dismiss_dialogs(surface, steps))
