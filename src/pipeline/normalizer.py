import re

from src.models.review import RawSegment, ReviewRecord
from src.pipeline.patterns import DEFAULT_PATTERNS, ExtractionPatterns


class ReviewNormalizer:
    _WHITESPACE_REGEX = re.compile(r"\s+")
    _DUPLICATE_PROBE_CHARS = 50

    def __init__(
        self,
        patterns: ExtractionPatterns = DEFAULT_PATTERNS,
        *,
        default_rating: int = 0,
        max_text_chars: int = 500,
        min_text_chars: int = 10,
        structured_rating_window: int = 20,
        text_scan_rating_window: int = 50,
    ) -> None:
        if not 0 <= default_rating <= 5:
            raise ValueError(f"default_rating must be between 0 and 5, got {default_rating}")

        self._patterns = patterns
        self._default_rating = default_rating
        self._max_text_chars = max_text_chars
        self._min_text_chars = min_text_chars
        self._rating_windows = {
            "structured": structured_rating_window,
            "text_scan": text_scan_rating_window,
        }

        self._star_phrase_regex = patterns.star_phrase_regex()
        self._leading_stars_regex = patterns.leading_stars_regex()
        self._ui_chrome_regex = patterns.ui_chrome_regex()
        self._two_names_regex = re.compile(
            rf"^{patterns.capitalized_word}\s+{patterns.capitalized_word}"
        )
        self._trailing_name_regex = re.compile(patterns.trailing_name)
        self._trailing_bleed_regex = re.compile(patterns.trailing_name_bleed)

    def normalize(self, segment: RawSegment) -> ReviewRecord | None:
        """Build a review from one segment, or None when the body is noise."""
        if segment.kind == "text_scan":
            name = self.extract_trailing_name(segment.before)
        else:
            name = self.extract_name(segment.before)

        window = self._rating_windows[segment.kind]
        rating = self.parse_rating(segment.after[:window])
        text = self.clean_text(segment.after, strip_trailing_name=segment.kind == "text_scan")
        if len(text) < self._min_text_chars:
            return None

        return ReviewRecord(
            name=name or self._patterns.anonymous_name,
            rating=rating,
            text=text,
            date=segment.anchor.strip(),
        )

    def extract_name(self, full_name: str) -> str:
        # "Dawn Melancon, Realtor, NextHome" -> "Dawn Melancon"
        if "," in full_name:
            return full_name.split(",", 1)[0].strip()

        words = full_name.split()
        if len(words) >= 2:
            first_two = " ".join(words[:2])
            if self._two_names_regex.match(first_two):
                return first_two

        return full_name.strip()

    def extract_trailing_name(self, lookback: str) -> str:
        match = self._trailing_name_regex.search(lookback)
        if not match:
            return self._patterns.anonymous_name
        return match.group(1).strip()

    def parse_rating(self, window: str) -> int:
        star_count = window.count(self._patterns.star_glyph)
        if star_count > 0:
            return min(star_count, 5)

        match = self._star_phrase_regex.search(window)
        if match:
            return min(int(match.group(1)), 5)

        return self._default_rating

    def clean_text(self, raw_text: str, *, strip_trailing_name: bool = False) -> str:
        text = self._leading_stars_regex.sub("", raw_text).strip()
        text = self._strip_ui_chrome(text)
        text = self.collapse_expanded_duplicate(text)
        if strip_trailing_name:
            text = self._trailing_bleed_regex.sub("", text)
            text = self._strip_ui_chrome(text)
        text = self._WHITESPACE_REGEX.sub(" ", text).strip()
        return text[: self._max_text_chars]

    def collapse_expanded_duplicate(self, text: str) -> str:
        """Keep only the expanded copy when a truncated copy precedes it.

        The usual case is an even split where the second half repeats the
        opening. When the truncated copy is much shorter than the expanded
        one the halves do not line up, so the first later occurrence of the
        opening characters marks where the expanded copy starts.
        """
        probe = text[: self._DUPLICATE_PROBE_CHARS]
        if len(probe) < self._DUPLICATE_PROBE_CHARS:
            return text

        second_half = text[len(text) // 2 :].lstrip()
        if second_half.startswith(probe):
            return second_half

        repeat_at = text.find(probe, len(probe))
        if repeat_at > 0:
            return text[repeat_at:]

        return text

    def _strip_ui_chrome(self, text: str) -> str:
        # Chrome labels can stack, e.g. "Helpful Share".
        replaced = 1
        while replaced and text:
            text, replaced = self._ui_chrome_regex.subn("", text)
            text = text.strip()
        return text
