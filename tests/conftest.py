import logging
from datetime import datetime, timedelta, timezone

import pytest

from ami_cleaner.core.models.ami import AMIInfo
from ami_cleaner.utils.exceptions import ProviderDeleteError, ProviderQueryError

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

CLEANER_ENV_VARS = [
    "DELETE", "PREFIX", "DAYS", "TAG_KEY", "TAG_VALUE", "INVERT",
    "PROFILE", "REGION", "LAMBDA", "AMI_CLEANER_CONFIG", "LOG_LEVEL", "LOG_FILE",
]


def make_image(image_id, days_old, name="", tags=None):
    return AMIInfo(
        image_id=image_id,
        name=name,
        creation_date=NOW - timedelta(days=days_old),
        tags=tags or {},
    )


class FakeEC2Manager:
    """In-memory stand-in for EC2Manager."""

    def __init__(self, images=None, fail_on=None, list_error=None):
        self.images = list(images or [])
        self.fail_on = fail_on
        self.list_error = list_error
        self.describe_calls = 0
        self.deregistered = []
        self.deregister_calls = []

    def describe_images(self):
        self.describe_calls += 1
        if self.list_error:
            raise ProviderQueryError(self.list_error)
        return list(self.images)

    def deregister_image(self, image_id):
        self.deregister_calls.append(image_id)
        if image_id == self.fail_on:
            raise ProviderDeleteError(
                f"Error deregistering image {image_id}: denied", image_id=image_id
            )
        self.deregistered.append(image_id)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def capture_logger():
    logger = logging.getLogger("tests.capture")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    logger.addHandler(handler)
    logger.records = handler.records
    yield logger
    logger.removeHandler(handler)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CLEANER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_FILE", "")
    yield
    app_logger = logging.getLogger("ami_cleaner")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
