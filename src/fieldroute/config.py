"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FEED_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQ3bMMFf71-vdGNiWFnf7pD9XuAAUSA7J-g08ocyC2LNiVOTUHi56lB-7bKTKj0KK9nJGs9vU0THQ0E"
    "/pub?gid=1044390124&single=true&output=csv"
)

DEFAULT_TOUR_PLAN: dict[str, tuple[str, ...]] = {
    "Monday": ("Juria",),
    "Tuesday": ("Ghess",),
    "Wednesday": ("Gaisilate",),
    "Thursday": ("Dava",),
    "Friday": ("Padampur",),
    "Saturday": ("Paikmal", "Mandosil"),
}


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Field Route API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for exported snapshots.")
    feed_url: str = Field(default=DEFAULT_FEED_URL, description="Published CSV feed of customer accounts.")
    feed_timeout_seconds: float = Field(default=30.0, gt=0.0)
    feed_max_retries: int = Field(default=2, ge=0)
    feed_backoff_seconds: float = Field(default=1.0, ge=0.0)
    hq_latitude: float = Field(default=20.9964, ge=-90.0, le=90.0)
    hq_longitude: float = Field(default=83.0526, ge=-180.0, le=180.0)
    average_speed_kmh: float = Field(
        default=25.0,
        gt=0.0,
        description="Assumed average road speed used for travel-time estimates. Tune per territory.",
    )
    tour_plan: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(DEFAULT_TOUR_PLAN),
        description="Weekday name to the areas visited on that day.",
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone used to decide the current weekday (e.g., Asia/Kolkata). Local clock when unset.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        return _coerce_str_tuple(value)

    @field_validator("tour_plan", mode="before")
    @classmethod
    def _parse_tour_plan(cls, value: Any) -> dict[str, tuple[str, ...]]:
        """Accept a mapping or a JSON object such as {"Monday": ["Juria"]}."""
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("tour_plan must be a JSON object of weekday -> areas") from exc
        if not isinstance(value, dict):
            raise ValueError("tour_plan must be a mapping of weekday -> areas")
        return {str(day).strip().title(): _coerce_str_tuple(areas) for day, areas in value.items()}


def _coerce_str_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, tuple):
        return tuple(str(item) for item in value)
    if isinstance(value, list):
        return tuple(str(item) for item in value)
    if isinstance(value, str):
        # Try JSON first
        try:
            parsed = json.loads(value)
            if isinstance(parsed, list):
                return tuple(str(item) for item in parsed)
        except (json.JSONDecodeError, TypeError):
            pass
        # Try comma-separated
        if "," in value:
            return tuple(item.strip() for item in value.split(",") if item.strip())
        if value.strip():
            return (value.strip(),)
    return tuple()


settings = Settings()
