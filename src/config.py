from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Maps Reviews Extractor"
    app_env: str = "dev"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    scraper_headless: bool = True
    scraper_browser_channel: str = "chrome"
    scraper_user_agent: str = (
        "Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) "
        "Version/16.0 Mobile/15E148 Safari/604.1"
    )
    scraper_viewport_width: int = 390
    scraper_viewport_height: int = 844
    scraper_is_mobile: bool = True
    scraper_extra_chromium_args: Annotated[list[str], NoDecode] = Field(default_factory=list)
    scraper_navigation_timeout_ms: int = 60000
    scraper_post_navigation_wait_ms: int = 3000
    scraper_post_dismiss_wait_ms: int = 2000
    scraper_post_load_wait_ms: int = 1000
    scraper_segment_source: str = "structured"

    loader_max_iterations: int = 50
    loader_stall_threshold: int = 10
    loader_scroll_step_px: int = 800
    loader_settle_ms: int = 600
    loader_keyboard_every: int = 5
    loader_keyboard_settle_ms: int = 500

    reviews_default_count: int = 10
    reviews_max_text_chars: int = 500
    reviews_min_text_chars: int = 10
    reviews_default_rating: int = Field(default=0, ge=0, le=5)

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("scraper_extra_chromium_args", mode="before")
    @classmethod
    def parse_scraper_extra_chromium_args(cls, value: object) -> object:
        if isinstance(value, str):
            return [arg.strip() for arg in value.split(",") if arg.strip()]
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
