"""Mini README: Centralised configuration for the month budget tracker.

Structure:
    * MonthBudgetSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor shared by the CLI and the web interface.

Usage:
    Every field can be overridden with a ``MONTHBUDGET_`` prefixed environment
    variable or a ``.env`` file, e.g. ``MONTHBUDGET_DATA_DIRECTORY=~/budget``.
    Tests that change the environment must call ``get_settings.cache_clear()``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class MonthBudgetSettings(BaseSettings):
    """Runtime configuration for storage, display and the local web interface."""

    environment: str = Field(
        "production",
        description="Environment label; \"development\" lowers the default log level to DEBUG.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted budget document.",
    )
    storage_filename: str = Field(
        "budget.json",
        description="Name of the JSON document inside the data directory.",
    )
    storage_namespace: str = Field(
        "monthbudget:v1",
        description="Key of the entry holding the month mapping inside the document.",
    )
    log_level: Optional[str] = Field(
        None,
        description="Root logging level name; derived from the environment when unset.",
    )
    log_file: Optional[Path] = Field(
        None,
        description="Optional file receiving a copy of every log record.",
    )
    currency_symbol: str = Field("€", description="Symbol appended to displayed amounts.")
    recent_entry_limit: int = Field(
        8,
        description="Number of most recent entries listed per envelope or cumulative.",
        ge=1,
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the local web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the local web interface exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "MONTHBUDGET_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories and make sure the data directory exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def storage_path(self) -> Path:
        """Full path of the persisted budget document."""

        return self.data_directory / self.storage_filename

    @property
    def effective_log_level(self) -> str:
        """Explicit ``log_level`` or the environment default (DEBUG in development)."""

        if self.log_level:
            return self.log_level
        return "DEBUG" if self.environment.strip().lower() == "development" else "INFO"


@lru_cache()
def get_settings() -> MonthBudgetSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return MonthBudgetSettings()
