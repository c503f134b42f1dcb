"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LOGITRACK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "LogiTrack Registry API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for report exports.")
    average_speed_kmh: float = Field(
        default=60.0,
        gt=0.0,
        description="Speed model used to derive route durations from distances.",
    )
    express_time_factor: float = Field(
        default=0.7,
        gt=0.0,
        le=1.0,
        description="Multiplier applied to the base delivery estimate of express packages.",
    )
    report_days_per_month: int = Field(default=30, ge=1)
    report_days_per_year: int = Field(default=365, ge=1)
    notification_sender: str = Field(
        default="LogiTrack",
        description="Sender name stamped on outgoing delivery notifications.",
    )
    log_level: Literal["critical", "error", "warning", "info", "debug"] = "info"
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
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
