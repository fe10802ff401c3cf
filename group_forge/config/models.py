"""Pydantic models used across the Group Forge configuration flow."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from ..groups import AccountSource, Tags, ValueType


class GenerationFrequency(str, Enum):
    """How often a generator is expected to be re-run."""

    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class HiveConfig(BaseModel):
    """Access settings for the ranked influencer API."""

    base_url: str = "https://api.borg.id/"
    api_key_env: str = "HIVE_API_KEY"
    timeout: float = 20.0

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        if not value:
            raise ValueError("base_url cannot be empty")
        return value if value.endswith("/") else value + "/"


class LocalListConfig(BaseModel):
    """A hand-maintained group stored as YAML under the lists directory."""

    name: str
    value_type: ValueType = ValueType.INFO
    account_sources: list[AccountSource] = Field(default_factory=lambda: [AccountSource.ETHEREUM])
    tags: list[Tags] = Field(default_factory=list)
    data: dict[str, int | float | str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_sources(self) -> "LocalListConfig":
        if not self.account_sources:
            raise ValueError("account_sources cannot be empty")
        return self


def _default_schedules() -> dict[GenerationFrequency, str]:
    return {
        GenerationFrequency.DAILY: "0 2 * * *",
        GenerationFrequency.WEEKLY: "0 3 * * 1",
        GenerationFrequency.MONTHLY: "0 4 1 * *",
    }


class GlobalConfig(BaseModel):
    """Global controls shared by every generation run."""

    store_backend: Literal["sqlite", "file", "mongodb", "memory"] = "sqlite"
    store_path: Path = Field(default=Path("data/store/groups.db"))
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "group_forge"
    lists_dir: Path = Field(default=Path("data/lists"))
    fetch_concurrency: int = 10
    show_progress: bool = True
    hive: HiveConfig = Field(default_factory=HiveConfig)
    schedules: dict[GenerationFrequency, str] = Field(default_factory=_default_schedules)

    @field_validator("store_path", "lists_dir", mode="before")
    @classmethod
    def _coerce_paths(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("fetch_concurrency")
    @classmethod
    def _positive_concurrency(cls, value: int) -> int:
        if value < 1:
            raise ValueError("fetch_concurrency must be >= 1")
        return value

    @field_validator("schedules")
    @classmethod
    def _validate_crontabs(cls, value: dict[GenerationFrequency, str]) -> dict[GenerationFrequency, str]:
        for frequency, expression in value.items():
            if frequency is GenerationFrequency.ONCE:
                raise ValueError("'once' generators run at start-up and take no cron expression")
            if not isinstance(expression, str) or len(expression.split()) != 5:
                raise ValueError(f"Invalid cron expression for {frequency.value}: {expression!r}")
        return value

    def resolve(self, base_dir: Path, path: Path) -> Path:
        """Return ``path`` relative to the project root unless already absolute."""

        if not path.is_absolute():
            return (base_dir / path).resolve()
        return path


__all__ = [
    "GenerationFrequency",
    "GlobalConfig",
    "HiveConfig",
    "LocalListConfig",
]
