"""AMI cleaner jobs package."""

from .base import BaseJob
from .clean_images import CleanImagesJob, PurgeResult, run_cleanup

__all__ = [
    "BaseJob",
    "CleanImagesJob",
    "PurgeResult",
    "run_cleanup",
]
