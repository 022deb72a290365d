"""Core AMI cleanup module."""

from .aws import EC2Manager, create_ec2_manager
from .models import (
    AMIInfo,
    CleanerOptions,
    FilterCriteria,
)
from .processors import select_expired_images

__all__ = [
    # AWS Managers
    "EC2Manager",
    "create_ec2_manager",
    # Models
    "AMIInfo",
    "CleanerOptions",
    "FilterCriteria",
    # Processors
    "select_expired_images",
]
