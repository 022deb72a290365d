"""Simple data models for AMI cleanup."""

# AMI models
from .ami import (
    AMIInfo,
    parse_creation_date,
)

# Run configuration
from .criteria import FilterCriteria
from .options import CleanerOptions

__all__ = [
    "AMIInfo",
    "parse_creation_date",
    "FilterCriteria",
    "CleanerOptions",
]
