from src.models.review import PlaceInfo, RawSegment, ReviewRecord

__all__ = ["PlaceInfo", "RawSegment", "ReviewRecord"]
