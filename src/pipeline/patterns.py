import re
from typing import Final

from pydantic import BaseModel, ConfigDict

# Bump when the rendered review format drifts and the tables below change.
PATTERNS_VERSION: Final[str] = "2026.01"


class ExtractionPatterns(BaseModel):
    """Declarative pattern tables used by the review and place parsers."""

    version: str = PATTERNS_VERSION
    date_anchor: str = r"\d+\s+(?:day|week|month|year)s?\s+ago"
    star_glyph: str = "★"
    star_glyphs: str = "★☆"
    star_phrase: str = r"(\d)\s*star"
    capitalized_word: str = r"[A-Z][a-z]+"
    trailing_name: str = r"([A-Z][a-zA-Z]+(?:\s+[A-Z][a-zA-Z]+)*)\s*$"
    trailing_name_bleed: str = r"\s+[A-Z][a-z]+\s+[A-Z][a-z]+\s*$"
    ui_chrome: tuple[str, ...] = (
        "Report review",
        "Helpful",
        "Share",
        "Cancel",
    )
    street_suffixes: tuple[str, ...] = ("St", "Ave", "Blvd", "Rd", "Dr", "Ln", "Way", "Ct")
    anonymous_name: str = "Anonymous"

    model_config = ConfigDict(frozen=True)

    def date_anchor_regex(self) -> re.Pattern[str]:
        return re.compile(self.date_anchor, re.IGNORECASE)

    def star_phrase_regex(self) -> re.Pattern[str]:
        return re.compile(self.star_phrase, re.IGNORECASE)

    def ui_chrome_regex(self) -> re.Pattern[str]:
        chrome = "|".join(re.escape(item) for item in self.ui_chrome)
        return re.compile(rf"^(?:{chrome})\b\s*|\s*\b(?:{chrome})$")

    def leading_stars_regex(self) -> re.Pattern[str]:
        return re.compile(rf"^[{re.escape(self.star_glyphs)}\s]+")

    def address_regex(self) -> re.Pattern[str]:
        suffixes = "|".join(re.escape(suffix) for suffix in self.street_suffixes)
        return re.compile(
            rf"(?<![\d.])\d+\s+(?:[A-Za-z0-9.#']+\s+){{0,6}}?(?:{suffixes})\b\.?"
            r"[^\n]{0,80}?\b[A-Z]{2}\s*\d{5}(?:-\d{4})?"
        )


DEFAULT_PATTERNS: Final[ExtractionPatterns] = ExtractionPatterns()
