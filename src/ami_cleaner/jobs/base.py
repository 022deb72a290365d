"""Base job class for AMI operations."""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

import boto3

from ami_cleaner.utils.config import ConfigManager
from ami_cleaner.utils.logger import setup_logger
from ami_cleaner.utils.session import make_session


class BaseJob(ABC):
    """Base class for all AMI cleaner jobs."""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        job_name: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the job with configuration and a logger.

        A logger passed in is used as-is, which lets callers (and tests) capture
        every entry the job writes.
        """
        self.config_manager = config_manager or ConfigManager()
        self.job_name = job_name or self.__class__.__name__.lower().replace("job", "")
        self.correlation_id = str(uuid.uuid4())[:8]  # Short correlation ID for tracking

        self.logger = logger or setup_logger(
            name=self.__class__.__module__,
            log_file=self.config_manager.get_log_file(),
            level=self.config_manager.get_logging_level(),
        )

    def create_aws_session(
        self, region: Optional[str] = None, profile: Optional[str] = None
    ) -> boto3.Session:
        """
        Create AWS session, falling back to configured region and profile
        """
        region = region or self.config_manager.get_aws_region()
        profile = profile or self.config_manager.get_aws_profile()

        self.logger.info(
            f"[{self.correlation_id}] Creating AWS session "
            f"(region={region or 'default'}, profile={profile or 'default'})",
            extra={
                "correlation_id": self.correlation_id,
                "operation": self.job_name,
                "region": region,
                "profile": profile,
            },
        )
        return make_session(region=region, profile=profile)

    @abstractmethod
    def execute(self, **kwargs) -> Any:
        """Execute the job with given parameters."""
        pass
