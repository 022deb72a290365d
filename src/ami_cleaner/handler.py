"""AWS Lambda entry point for scheduled AMI cleanup.

Options are read from the function's environment variables (``DELETE``,
``PREFIX``, ``DAYS``, ``TAG_KEY``, ``TAG_VALUE``, ``INVERT``, ``REGION``,
``PROFILE``). A scheduled event may override them through an ``options``
mapping in its payload, e.g. ``{"options": {"days": 60, "delete": true}}``.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from ami_cleaner.core.aws.ec2 import EC2Manager
from ami_cleaner.core.constants import CONFIG_ENV_VAR
from ami_cleaner.core.models.options import CleanerOptions
from ami_cleaner.jobs.clean_images import run_cleanup
from ami_cleaner.utils.config import ConfigManager
from ami_cleaner.utils.exceptions import AMICleanerError, ConfigurationError
from ami_cleaner.utils.logger import log_fatal_error, setup_logger


def resolve_options(
    event: Any,
    environ: Mapping[str, str],
    config_manager: ConfigManager,
) -> CleanerOptions:
    base = CleanerOptions(days=config_manager.get_retention_days())
    options = CleanerOptions.from_env(environ, base=base)

    overrides = event.get("options") if isinstance(event, Mapping) else None
    if overrides is None:
        return options
    if not isinstance(overrides, Mapping):
        raise ConfigurationError("event 'options' must be a mapping")
    return CleanerOptions.from_mapping(overrides, base=options)


def handle(
    event: Any,
    config_manager: Optional[ConfigManager] = None,
    logger: Optional[logging.Logger] = None,
    environ: Optional[Mapping[str, str]] = None,
    ec2_manager: Optional[EC2Manager] = None,
) -> Dict[str, Any]:
    """Run one cleanup pass for an invocation and return its summary."""
    environ = os.environ if environ is None else environ
    config_manager = config_manager or ConfigManager(environ.get(CONFIG_ENV_VAR))
    logger = logger or setup_logger(
        "ami_cleaner.handler",
        log_file=None,  # Lambda captures stdout
        level=config_manager.get_logging_level(),
    )

    try:
        options = resolve_options(event, environ, config_manager)
        result = run_cleanup(
            options,
            config_manager=config_manager,
            logger=logger,
            ec2_manager=ec2_manager,
        )
    except AMICleanerError as e:
        log_fatal_error(logger, e, "Unable to complete image purge")
        raise

    summary = result.to_dict()
    logger.info(summary["message"])
    return summary


def lambda_handler(event, context):
    """Handler registered with the Lambda runtime."""
    return handle(event)
