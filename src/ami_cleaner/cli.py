#!/usr/bin/env python3
"""
AMI Cleaner - CLI
Purge expired AMIs owned by an AWS account
"""

import logging
from typing import Optional

import click

from ami_cleaner import __version__
from ami_cleaner.core.constants import CONFIG_ENV_VAR, LAMBDA_ENV_VAR
from ami_cleaner.core.models.options import CleanerOptions
from ami_cleaner.handler import handle
from ami_cleaner.jobs.clean_images import run_cleanup
from ami_cleaner.utils.config import ConfigManager
from ami_cleaner.utils.exceptions import AMICleanerError
from ami_cleaner.utils.logger import log_fatal_error, setup_logger


def setup_logging(config_manager: ConfigManager, verbose: bool = False) -> logging.Logger:
    level = "DEBUG" if verbose else config_manager.get_logging_level()
    return setup_logger("ami_cleaner", config_manager.get_log_file(), level)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar=CONFIG_ENV_VAR,
    help="Path to a settings.yaml file",
)
@click.pass_context
def cli(ctx, config_path):
    """AMI Cleaner - purge expired machine images"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.option("-D", "--delete", is_flag=True, envvar="DELETE",
              help="Actually purge AMIs (runs in dry-run mode by default).")
@click.option("--prefix", default="", envvar="PREFIX",
              help="Name prefix to filter on (not affected by --invert).")
@click.option("--days", type=int, default=None, envvar="DAYS",
              help="Age of AMI in days before it is a candidate for removal (default: 30).")
@click.option("--tag-key", default="", envvar="TAG_KEY",
              help="Key of tag to operate on. Requires --tag-value.")
@click.option("--tag-value", default="", envvar="TAG_VALUE",
              help="Value of tag to operate on. Requires --tag-key.")
@click.option("-i", "--invert", is_flag=True, envvar="INVERT",
              help="Only purge AMIs that do NOT match the tag provided.")
@click.option("-p", "--profile", envvar="PROFILE", help="The AWS profile to use.")
@click.option("-r", "--region", envvar="REGION", help="The AWS region to use.")
@click.option("--lambda", "lambda_mode", is_flag=True, envvar=LAMBDA_ENV_VAR,
              help="Run through the AWS Lambda handler.")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def clean(ctx, delete, prefix, days, tag_key, tag_value, invert, profile, region,
          lambda_mode, verbose):
    """Find AMIs older than the retention period and purge them"""
    try:
        config_manager = ConfigManager(ctx.obj.get("config_path"))
        logger = setup_logging(config_manager, verbose)
    except AMICleanerError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        options = CleanerOptions(
            delete=delete,
            prefix=prefix,
            days=days if days is not None else config_manager.get_retention_days(),
            tag_key=tag_key,
            tag_value=tag_value,
            invert=invert,
            profile=profile,
            region=region,
        )

        if lambda_mode:
            logger.info("Running Lambda handler.")
            handle({"options": options.to_dict()}, config_manager=config_manager, logger=logger)
            return

        result = run_cleanup(options, config_manager=config_manager, logger=logger)
    except AMICleanerError as e:
        # The Lambda adapter has already logged its own failure
        if not lambda_mode:
            log_fatal_error(logger, e, "Unable to complete image purge")
        ctx.exit(1)

    logger.info(result.to_dict()["message"])


@cli.command()
def version():
    """Show version information"""
    click.echo(f"AMI Cleaner {__version__}")


def main(argv: Optional[list] = None):
    cli(args=argv, prog_name="ami-cleaner")


if __name__ == "__main__":
    main()
