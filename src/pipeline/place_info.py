import re

from src.models.review import PlaceInfo
from src.pipeline.patterns import DEFAULT_PATTERNS, ExtractionPatterns


class PlaceInfoExtractor:
    """Best-effort place summary from the page title and body text.

    Every field is matched independently; a miss leaves the field at its
    empty/zero default instead of failing the whole record.
    """

    _NAME_REGEX = re.compile(r"^(.+?)\s*[-–]")
    _REVIEW_COUNT_REGEX = re.compile(r"(\d[\d,.]*)\s*reviews?\b", re.IGNORECASE)
    # Place header aggregate, e.g. "4.5(1,234)". Reviewer badges such as
    # "Local Guide · 45 reviews" never follow a rating.
    _AGGREGATE_COUNT_REGEX = re.compile(r"\d\.\d\s*\(\s*(\d[\d,.]*)\s*\)")
    _RATING_REGEX = re.compile(r"(\d\.\d)\s*(?:stars?|\()", re.IGNORECASE)

    def __init__(self, patterns: ExtractionPatterns = DEFAULT_PATTERNS) -> None:
        self._address_regex = patterns.address_regex()

    def extract(self, title: str, body_text: str) -> PlaceInfo:
        return PlaceInfo(
            name=self.parse_name(title),
            address=self.parse_address(body_text),
            rating=self.parse_rating(body_text),
            review_count=self.parse_review_count(title) or self.parse_aggregate_review_count(body_text),
        )

    def parse_name(self, title: str) -> str:
        match = self._NAME_REGEX.search(title or "")
        return match.group(1).strip() if match else ""

    def parse_review_count(self, title: str) -> int:
        return self._match_count(self._REVIEW_COUNT_REGEX, title)

    def parse_aggregate_review_count(self, body_text: str) -> int:
        return self._match_count(self._AGGREGATE_COUNT_REGEX, body_text)

    def parse_rating(self, body_text: str) -> float:
        match = self._RATING_REGEX.search(body_text or "")
        if not match:
            return 0.0
        rating = float(match.group(1))
        return rating if 0.0 <= rating <= 5.0 else 0.0

    def parse_address(self, body_text: str) -> str:
        match = self._address_regex.search(body_text or "")
        return match.group(0).strip() if match else ""

    @staticmethod
    def _match_count(regex: re.Pattern[str], value: str) -> int:
        match = regex.search(value or "")
        if not match:
            return 0
        digits = re.sub(r"\D", "", match.group(1))
        return int(digits) if digits else 0
