# utils/logger.py
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    enable_rotation: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Setup logger with console output and an optional rotating log file"""
    log_level = logging.getLevelName(str(level).upper())
    if not isinstance(log_level, int):
        raise ConfigurationError(f"Invalid logging level: {level!r}")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Prevent duplicate handlers
    if not logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_file:
            logs_dir = Path("logs")
            log_path = logs_dir / log_file

            try:
                logs_dir.mkdir(exist_ok=True)
                if enable_rotation:
                    file_handler = logging.handlers.RotatingFileHandler(
                        log_path,
                        maxBytes=max_bytes,
                        backupCount=backup_count,
                        encoding="utf-8",
                    )
                else:
                    file_handler = logging.FileHandler(log_path, encoding="utf-8")

                file_handler.setFormatter(formatter)
                file_handler.setLevel(logging.DEBUG)  # All levels to file
                logger.addHandler(file_handler)

            except (OSError, PermissionError) as e:
                # Lambda and other read-only filesystems end up here
                logger.warning(
                    f"Failed to create log file {log_path}: {e}. Logging to console only."
                )

        # Prevent propagation to root logger to avoid duplicate messages
        logger.propagate = False

    return logger


def log_fatal_error(logger: logging.Logger, error: Exception, message: str) -> None:
    """Write the single ERROR entry for an error that ends the run."""
    context = {"error": str(error), "error_type": type(error).__name__}
    image_id = getattr(error, "image_id", None)
    if image_id:
        context["image_id"] = image_id
        message = f"{message} (image {image_id})"
    logger.error(f"{message}: {error}", extra=context)
