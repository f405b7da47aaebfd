"""Application settings loaded from the environment and .env via Pydantic."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class ViewerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCHEDULE_VIEWER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_schedule: str = Field(default="PreUpdate", description="Schedule shown when the link names none")
    share_base_url: str = Field(
        default="https://schedule-viewer.local/",
        description="Base address that shared links are built on",
    )
    output_format: str = Field(default="svg", description="Format requested from the layout engine")
    layout_program: str = Field(default="dot", description="Graphviz layout program")
    style: Literal["light", "dark_discord", "dark_github"] = "dark_github"
    rankdir: Literal["LR", "TD"] = "LR"
    edge_style: Literal["none", "line", "polyline", "curved", "ortho", "spline"] = "spline"
    remove_transitive_edges: bool = True
    prettify_system_names: bool = True
    collapse_single_system_sets: bool = False
    ambiguity_enable: bool = True
    ambiguity_enable_on_world: bool = False
    export_release_delay_ms: int = Field(
        default=5000,
        ge=0,
        description="Delay before a temporary export file is released after opening it",
    )

    @field_validator("default_schedule")
    @classmethod
    def _require_default_schedule(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("default_schedule must not be empty")
        return value

    @field_validator("share_base_url")
    @classmethod
    def _require_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("share_base_url must not be empty")
        return value


_settings: Optional[ViewerSettings] = None


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def get_settings() -> ViewerSettings:
    global _settings
    if _settings is None:
        env_path = _project_root() / ".env"
        if not env_path.exists():
            logger.debug("No .env file found at %s; using environment and defaults", env_path)
        _settings = ViewerSettings()
    return _settings


def reset_settings_cache() -> None:
    global _settings
    _settings = None
