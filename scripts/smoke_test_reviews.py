import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.config import settings
from src.scraper.session import BrowserSession
from src.services.reviews_service import ReviewsService

DEFAULT_URL = (
    "https://www.google.com/maps/place/Perry+G.+Gruman/@27.944512,-82.5023384,17z/"
    "data=!4m8!3m7!1s0x88c2c30da03dcf4d:0xb26f41be773ec7d3!8m2!3d27.9445073!4d-82.4997635!9m1!1b1!16s%2Fg%2F1tg16j0q"
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Smoke test: fetch place info and reviews for a Google Maps place URL."
    )
    parser.add_argument("url", nargs="?", default=DEFAULT_URL, help="Google Maps place URL.")
    parser.add_argument(
        "--count",
        type=int,
        default=20,
        help="Number of reviews to fetch (default: 20).",
    )
    parser.add_argument(
        "--strategy",
        choices=("structured", "text_scan", "auto"),
        default=settings.scraper_segment_source,
        help=f"Segment source used to split reviews (default: {settings.scraper_segment_source}).",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window (default: headless).",
    )
    return parser.parse_args()


async def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    config = settings.model_copy(update={"scraper_headless": False}) if args.headed else settings
    session = BrowserSession.from_settings(config)
    service = ReviewsService(session, config=config)

    try:
        print(f"URL: {args.url}")
        print("--- Place Info ---")
        place_info = await service.get_place_info(args.url)
        print(json.dumps(place_info.model_dump(by_alias=True) if place_info else None, ensure_ascii=False, indent=2))

        print(f"--- Reviews (strategy={args.strategy}, count={args.count}) ---")
        reviews = await service.get_reviews(args.url, count=max(0, args.count), strategy=args.strategy)
        print(json.dumps([review.model_dump() for review in reviews], ensure_ascii=False, indent=2))
        print(f"Fetched {len(reviews)} reviews")
    finally:
        await session.close()


if __name__ == "__main__":
    asyncio.run(main())
