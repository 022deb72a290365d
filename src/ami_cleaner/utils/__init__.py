from .exceptions import (
    AMICleanerError,
    ConfigurationError,
    ProviderDeleteError,
    ProviderQueryError,
)
from .config import ConfigManager
from .logger import log_fatal_error, setup_logger
from .session import make_session

__all__ = [
    "ConfigManager",
    "AMICleanerError",
    "ConfigurationError",
    "ProviderDeleteError",
    "ProviderQueryError",
    "setup_logger",
    "log_fatal_error",
    "make_session",
]
