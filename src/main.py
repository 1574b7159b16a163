import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import settings
from src.routers.health import router as health_router
from src.routers.reviews import router as reviews_router
from src.scraper.session import BrowserSession
from src.services.reviews_service import ReviewsService

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The browser itself launches on the first request that needs a page.
    session = BrowserSession.from_settings(settings)
    app.state.browser_session = session
    app.state.reviews_service = ReviewsService(session, config=settings)
    try:
        yield
    finally:
        await session.close()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="API for extracting reviews and place details from Google Maps place pages.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(reviews_router)
