import pytest

from ami_cleaner.handler import handle, resolve_options
from ami_cleaner.utils.config import ConfigManager
from ami_cleaner.utils.exceptions import ConfigurationError, ProviderDeleteError

from conftest import FakeEC2Manager, make_image

SCHEDULED_EVENT = {
    "version": "0",
    "detail-type": "Scheduled Event",
    "source": "aws.events",
    "region": "us-east-1",
    "detail": {},
}


def run(event, environ, ec2, logger):
    return handle(event, config_manager=ConfigManager(), logger=logger, environ=environ, ec2_manager=ec2)


def test_scheduled_event_uses_environment_options(capture_logger):
    ec2 = FakeEC2Manager([make_image("a", 400, name="web-1"), make_image("b", 400, name="db-1")])

    summary = run(SCHEDULED_EVENT, {"PREFIX": "web", "DELETE": "true"}, ec2, capture_logger)

    assert summary["status"] == "success"
    assert summary["dry_run"] is False
    assert summary["images"] == ["a"]
    assert ec2.deregistered == ["a"]


def test_event_options_override_environment(capture_logger):
    ec2 = FakeEC2Manager([make_image("a", 400)])

    summary = run({"options": {"delete": False}}, {"DELETE": "true"}, ec2, capture_logger)

    assert summary["dry_run"] is True
    assert ec2.deregister_calls == []


def test_event_region_does_not_override_options():
    options = resolve_options(SCHEDULED_EVENT, {"REGION": "eu-west-1"}, ConfigManager())

    assert options.region == "eu-west-1"


def test_non_mapping_options_rejected():
    with pytest.raises(ConfigurationError):
        resolve_options({"options": ["delete"]}, {}, ConfigManager())


def test_configuration_error_raised_before_listing(capture_logger):
    ec2 = FakeEC2Manager([make_image("a", 400)])

    with pytest.raises(ConfigurationError):
        run({}, {"TAG_KEY": "keep"}, ec2, capture_logger)

    assert ec2.describe_calls == 0
    assert [r.levelname for r in capture_logger.records] == ["ERROR"]


def test_delete_failure_logged_once_with_image_id(capture_logger):
    ec2 = FakeEC2Manager([make_image("a", 400), make_image("b", 400)], fail_on="a")

    with pytest.raises(ProviderDeleteError):
        run({}, {"DELETE": "1"}, ec2, capture_logger)

    errors = [r for r in capture_logger.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert errors[0].image_id == "a"
    assert ec2.deregister_calls == ["a"]
