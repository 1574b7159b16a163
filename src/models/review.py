from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ReviewRecord(BaseModel):
    name: str = ""
    rating: int = Field(default=0, ge=0, le=5)
    text: str = ""
    date: str = ""


class PlaceInfo(BaseModel):
    name: str = ""
    address: str = ""
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0, alias="reviewCount")

    model_config = ConfigDict(populate_by_name=True)

    def is_empty(self) -> bool:
        return not (self.name or self.address or self.rating or self.review_count)


class RawSegment(BaseModel):
    """Slice of rendered text attributed to one candidate review.

    ``before`` holds the name/rating region preceding the date anchor and
    ``after`` the trailing review content.
    """

    before: str
    anchor: str
    after: str
    kind: Literal["structured", "text_scan"] = "structured"
