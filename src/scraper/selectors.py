from typing import Final

# Selector strategy for the mobile place page. Class names are obfuscated and
# rotate, so every group lists fallbacks in priority order.
SELECTOR_PATTERNS: Final[dict[str, tuple[str, ...]]] = {
    # One element per rendered review entry
    "REVIEW_ITEMS": (
        ".hjmQqc",
        "div[data-review-id]",
        "div.jftiEf",
    ),
    # Optional dialogs shown before the place page becomes usable
    "CONSENT_ACCEPT": (
        'button:has-text("Accept all")',
        'button[aria-label="Accept all"]',
    ),
    "APP_PROMPT_DISMISS": (
        'button:has-text("Go back to web")',
    ),
    "CONTINUE_BUTTON": (
        'button:has-text("Continue")',
    ),
}
