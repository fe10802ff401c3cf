"""Exception hierarchy shared by the engine, stores and CLI."""

from __future__ import annotations


class GroupForgeError(Exception):
    """Base class for errors surfaced to the CLI."""


class FetchError(GroupForgeError):
    """Transport or auth failure talking to an external API."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class AdditionalDataFormatError(GroupForgeError, ValueError):
    """Raised when the additional data option cannot be parsed."""


class UnknownGeneratorError(GroupForgeError, KeyError):
    """Raised when a generator name is not part of the library."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown generator"


class DependencyCycleError(GroupForgeError):
    """Raised when generators depend on each other in a loop."""

    def __init__(self, cycle: list[str]) -> None:
        super().__init__("Dependency cycle detected: " + " -> ".join(cycle))
        self.cycle = cycle


class StoreError(GroupForgeError):
    """Raised when a store backend cannot be built or used."""


class ConfigError(GroupForgeError, ValueError):
    """Raised when a configuration or local list file is invalid."""


__all__ = [
    "AdditionalDataFormatError",
    "ConfigError",
    "DependencyCycleError",
    "FetchError",
    "GroupForgeError",
    "StoreError",
    "UnknownGeneratorError",
]
