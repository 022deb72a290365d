import pytest
from click.testing import CliRunner

from ami_cleaner import __version__
from ami_cleaner.cli import cli

from conftest import FakeEC2Manager, make_image


@pytest.fixture
def fake_ec2(monkeypatch, clean_env):
    ec2 = FakeEC2Manager([make_image("a", 400, name="web-1"), make_image("b", 0, name="web-2")])
    monkeypatch.setattr(
        "ami_cleaner.jobs.clean_images.create_ec2_manager",
        lambda session, region=None, logger=None: ec2,
    )
    return ec2


def invoke(args, env=None):
    runner = CliRunner()
    return runner.invoke(cli, args, env={"REGION": "us-east-1", **(env or {})})


def test_dry_run_by_default(fake_ec2):
    result = invoke(["clean"])

    assert result.exit_code == 0, result.output
    assert fake_ec2.describe_calls == 1
    assert fake_ec2.deregister_calls == []


def test_delete_flag_deregisters(fake_ec2):
    result = invoke(["clean", "--delete", "--prefix", "web"])

    assert result.exit_code == 0, result.output
    assert fake_ec2.deregistered == ["a"]


def test_delete_enabled_from_environment(fake_ec2):
    result = invoke(["clean"], env={"DELETE": "true"})

    assert result.exit_code == 0, result.output
    assert fake_ec2.deregistered == ["a"]


@pytest.mark.parametrize(
    "args", [["--tag-key", "keep"], ["--tag-value", "true"]]
)
def test_tag_key_without_value_fails_before_listing(fake_ec2, args):
    result = invoke(["clean", *args])

    assert result.exit_code == 1
    assert fake_ec2.describe_calls == 0


def test_delete_failure_exits_non_zero(fake_ec2):
    fake_ec2.images = [make_image("a", 400), make_image("b", 400), make_image("c", 400)]
    fake_ec2.fail_on = "b"

    result = invoke(["clean", "--delete"])

    assert result.exit_code == 1
    assert fake_ec2.deregister_calls == ["a", "b"]


def test_listing_failure_exits_non_zero(fake_ec2):
    fake_ec2.list_error = "AccessDenied"

    result = invoke(["clean"])

    assert result.exit_code == 1


def test_days_option_controls_cutoff(fake_ec2):
    result = invoke(["clean", "--delete", "--days", "500"])

    assert result.exit_code == 0, result.output
    assert fake_ec2.deregistered == []


def test_days_default_from_settings_file(fake_ec2, tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("cleaner:\n  days: 1000\n")

    result = invoke(["--config", str(settings), "clean", "--delete"])

    assert result.exit_code == 0, result.output
    assert fake_ec2.deregistered == []


def test_lambda_flag_runs_through_handler(fake_ec2):
    result = invoke(["clean", "--lambda", "--delete"])

    assert result.exit_code == 0, result.output
    assert fake_ec2.deregistered == ["a"]


def test_lambda_flag_failure_exits_non_zero(fake_ec2):
    fake_ec2.list_error = "AccessDenied"

    result = invoke(["clean"], env={"LAMBDA": "1"})

    assert result.exit_code == 1


def test_version(clean_env):
    result = CliRunner().invoke(cli, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_region_logs_error_and_exits(clean_env, monkeypatch, tmp_path):
    for name in ("AWS_REGION", "AWS_DEFAULT_REGION", "AWS_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "no-config"))

    result = CliRunner().invoke(cli, ["clean"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Unable to complete image purge" in result.output


def test_invalid_log_level_exits_before_listing(fake_ec2):
    result = invoke(["clean"], env={"LOG_LEVEL": "LOUD"})

    assert result.exit_code == 1
    assert "Invalid logging level" in result.output
    assert fake_ec2.describe_calls == 0
