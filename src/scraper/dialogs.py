from __future__ import annotations

import logging
from typing import Final

from pydantic import BaseModel, ConfigDict

from src.scraper.errors import DialogDismissError
from src.scraper.selectors import SELECTOR_PATTERNS
from src.scraper.surface import RenderedSurface

LOGGER = logging.getLogger(__name__)


class DismissStep(BaseModel):
    label: str
    selectors: tuple[str, ...]
    timeout_ms: int = 2000
    required: bool = False

    model_config = ConfigDict(frozen=True)


DEFAULT_DISMISS_STEPS: Final[tuple[DismissStep, ...]] = (
    DismissStep(label="cookie_consent", selectors=SELECTOR_PATTERNS["CONSENT_ACCEPT"]),
    DismissStep(label="app_prompt", selectors=SELECTOR_PATTERNS["APP_PROMPT_DISMISS"]),
    DismissStep(label="continue", selectors=SELECTOR_PATTERNS["CONTINUE_BUTTON"], timeout_ms=1000),
)


async def dismiss_dialogs(
    surface: RenderedSurface,
    steps: tuple[DismissStep, ...] = DEFAULT_DISMISS_STEPS,
) -> list[str]:
    """Run each dismissal step once, in order, and return the labels that clicked.

    A missing dialog is the normal case; only steps marked ``required`` fail.
    """
    dismissed: list[str] = []

    for step in steps:
        clicked = False
        for selector in step.selectors:
            if await surface.click(selector, timeout_ms=step.timeout_ms):
                clicked = True
                break

        if clicked:
            LOGGER.debug("Dismissed dialog step=%s", step.label)
            dismissed.append(step.label)
            continue

        if step.required:
            raise DialogDismissError(f"Required dialog step '{step.label}' found nothing to click.")
        LOGGER.debug("Dialog step=%s not present", step.label)

    return dismissed
