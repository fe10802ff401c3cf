"""Configuration loading helpers for Group Forge."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .models import GlobalConfig, LocalListConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
GLOBAL_CONFIG_FILENAME = "global_config.yaml"
LIST_CONFIG_SUFFIX = ".yaml"


def _slugify(name: str) -> str:
    return "".join(ch.lower() if ch.isalnum() else "-" for ch in name).strip("-")


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def _write_file(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as stream:
        if path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(payload, stream, allow_unicode=True, sort_keys=False)
        else:
            json.dump(payload, stream, indent=2, ensure_ascii=False)


@dataclass(slots=True)
class ConfigLocator:
    """Resolve important paths from project root."""

    project_root: Path | None = None
    data_dir: Path | None = None
    store_dir: Path | None = None
    lists_dir: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get("GROUP_FORGE_HOME")
        if env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = (self.project_root or Path(__file__).resolve().parents[2]).resolve()
        self.project_root = root
        self.data_dir = (root / "data").resolve()
        self.store_dir = (self.data_dir / "store").resolve()
        self.lists_dir = (self.data_dir / "lists").resolve()
        self.logs_dir = (root / "logs").resolve()
        self.ensure_directories()

    def ensure_directories(self) -> None:
        for directory in (self.data_dir, self.store_dir, self.lists_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def global_config_path(self) -> Path:
        return self.data_dir / GLOBAL_CONFIG_FILENAME


class ConfigRepository:
    """Repository encapsulating config IO and schema validation."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()
        self._global_cache: GlobalConfig | None = None

    # ------------------------------------------------------------------
    # Global configuration helpers
    # ------------------------------------------------------------------
    def load_global_config(self) -> GlobalConfig:
        if self._global_cache is not None:
            return self._global_cache
        path = self.locator.global_config_path()
        if path.exists():
            payload = _read_file(path)
            global_cfg = GlobalConfig.model_validate(payload)
        else:
            global_cfg = GlobalConfig()
            self.save_global_config(global_cfg)
        self._global_cache = global_cfg
        return global_cfg

    def save_global_config(self, config: GlobalConfig) -> None:
        path = self.locator.global_config_path()
        payload = config.model_dump(mode="json")
        _write_file(path, payload)
        self._global_cache = config

    def resolve_path(self, path: Path) -> Path:
        return self.load_global_config().resolve(self.locator.project_root, path)

    # ------------------------------------------------------------------
    # Local list helpers
    # ------------------------------------------------------------------
    def lists_dir(self) -> Path:
        return self.resolve_path(self.load_global_config().lists_dir)

    def list_path(self, list_name: str) -> Path:
        return self.lists_dir() / f"{_slugify(list_name)}{LIST_CONFIG_SUFFIX}"

    def list_local_list_files(self) -> Iterable[Path]:
        directory = self.lists_dir()
        if not directory.exists():
            return []
        return sorted(
            path for path in directory.glob("*") if path.is_file() and path.suffix in CONFIG_EXTENSIONS
        )

    def list_local_lists(self) -> list[LocalListConfig]:
        return [self.load_local_list(path) for path in self.list_local_list_files()]

    def load_local_list(self, identifier: str | Path) -> LocalListConfig:
        path = identifier if isinstance(identifier, Path) else self.list_path(identifier)
        if not path.exists():
            raise FileNotFoundError(f"Local list not found: {identifier}")
        try:
            return LocalListConfig.model_validate(_read_file(path))
        except (ValidationError, ValueError, yaml.YAMLError) as exc:
            raise ConfigError(f"Invalid local list {path.name}: {exc}") from exc

    def save_local_list(self, config: LocalListConfig) -> Path:
        path = self.list_path(config.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_file(path, config.model_dump(mode="json"))
        return path

    # ------------------------------------------------------------------
    # Leaderboard helpers
    # ------------------------------------------------------------------
    def leaderboard_path(self, name: str) -> Path:
        return self.locator.data_dir / f"{_slugify(name)}{LIST_CONFIG_SUFFIX}"

    def load_leaderboard(self, name: str) -> dict[str, str]:
        """Map of ENS name to Twitter handle, empty when the file does not exist."""
        path = self.leaderboard_path(name)
        if not path.exists():
            return {}
        try:
            payload = _read_file(path)
        except (ValueError, yaml.YAMLError) as exc:
            raise ConfigError(f"Invalid leaderboard {path.name}: {exc}") from exc
        if not all(isinstance(handle, str) for handle in payload.values()):
            raise ConfigError(f"Invalid leaderboard {path.name}: handles must be strings")
        return {str(ens): handle.lstrip("@") for ens, handle in payload.items()}


__all__ = ["ConfigLocator", "ConfigRepository", "CONFIG_EXTENSIONS"]
