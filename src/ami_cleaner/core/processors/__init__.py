"""Processing helpers for AMI cleanup."""

from .image_selector import select_expired_images

__all__ = ["select_expired_images"]
