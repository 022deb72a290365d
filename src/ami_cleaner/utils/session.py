#!/usr/bin/env python3
"""
utils/session.py

Session management utilities for AWS interactions.
"""

from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError

from .exceptions import ConfigurationError


def make_session(
    region: Optional[str] = None, profile: Optional[str] = None
) -> boto3.Session:
    """Create a boto3 Session for the given region and named profile.

    Empty values fall back to the standard boto3 credential and region chain
    (environment variables, shared config, instance/Lambda role).
    """
    try:
        return boto3.Session(
            profile_name=profile or None,
            region_name=region or None,
        )
    except BotoCoreError as e:
        # ProfileNotFound and friends
        raise ConfigurationError(f"Unable to create AWS session: {e}") from e
