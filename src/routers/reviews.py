from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from src.config import settings
from src.models.review import PlaceInfo, ReviewRecord
from src.scraper.errors import ScraperError
from src.services.reviews_service import ReviewsService

router = APIRouter()


def get_reviews_service(request: Request) -> ReviewsService:
    return request.app.state.reviews_service


@router.get("/reviews", response_model=list[ReviewRecord], tags=["Reviews"])
async def get_reviews(
    url: str = Query(..., description="Google Maps place URL"),
    count: int = Query(default=settings.reviews_default_count, ge=0, description="Number of reviews to fetch"),
    strategy: str | None = Query(default=None, description="structured | text_scan | auto"),
    service: ReviewsService = Depends(get_reviews_service),
) -> list[ReviewRecord]:
    try:
        return await service.get_reviews(url=url, count=count, strategy=strategy)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ScraperError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error fetching reviews: {exc}",
        ) from exc


@router.get("/place", response_model=PlaceInfo | None, tags=["Place"])
async def get_place_info(
    url: str = Query(..., description="Google Maps place URL"),
    service: ReviewsService = Depends(get_reviews_service),
) -> PlaceInfo | None:
    try:
        return await service.get_place_info(url=url)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ScraperError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error fetching place info: {exc}",
        ) from exc
