"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from tenki.ingest.jma_client import DEFAULT_USER_AGENT, JMA_FORECAST_BASE_URL


class RegionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    slug: str
    area_code: str = Field(pattern=r"^\d{6}$")


class FeedConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = JMA_FORECAST_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class RenderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    placeholder: str = "-"
    image_dir: str = "img"
    html_path: str = "weather.html"
    short_range_slots: int = Field(default=3, ge=1)
    weekly_slots: int = Field(default=7, ge=1)
    advisory_days: int = Field(default=7, ge=1, le=14)


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: str = Field(default="WARNING", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    region: str = "osaka"
    feed: FeedConfig = FeedConfig()
    render: RenderConfig = RenderConfig()
    logging: LoggingConfig = LoggingConfig()
    regions: list[RegionConfig] = []
