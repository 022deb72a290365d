#!/usr/bin/env python3
"""Core constants for AMI cleanup."""

# Retention
DEFAULT_RETENTION_DAYS = 30

# EC2 image listing
IMAGE_OWNER_SELF = "self"

# Configuration
CONFIG_ENV_VAR = "AMI_CLEANER_CONFIG"
LAMBDA_ENV_VAR = "LAMBDA"

# Logging
DEFAULT_LOG_FILE = "ami_cleaner.log"
