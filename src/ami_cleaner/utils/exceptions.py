"""Exception classes for AMI cleanup operations.

Every error raised by the cleaner derives from ``AMICleanerError`` so the
CLI and Lambda adapters can log it once and terminate the run.
"""

from typing import Optional


class AMICleanerError(Exception):
    """Base exception for AMI cleaner errors."""

    pass


class ConfigurationError(AMICleanerError):
    """Invalid options or settings, detected before any AWS call."""

    pass


class ProviderQueryError(AMICleanerError):
    """Listing owned images failed."""

    pass


class ProviderDeleteError(AMICleanerError):
    """Deregistering a single image failed."""

    def __init__(self, message: str, image_id: Optional[str] = None):
        super().__init__(message)
        self.image_id = image_id
