"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import GenerationFrequency, GlobalConfig, HiveConfig, LocalListConfig

__all__ = [
    "ConfigLocator",
    "ConfigRepository",
    "GenerationFrequency",
    "GlobalConfig",
    "HiveConfig",
    "LocalListConfig",
]
