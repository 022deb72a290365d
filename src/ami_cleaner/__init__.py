"""AMI Cleaner - purge expired machine images owned by an AWS account."""

__version__ = "1.0.0"
