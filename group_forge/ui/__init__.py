"""User interaction helpers."""

from .progress import DownloadStatus, GenerationProgress, GenerationState

__all__ = ["DownloadStatus", "GenerationProgress", "GenerationState"]
