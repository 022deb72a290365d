#!/usr/bin/env python3
"""
Clean Images Job

Lists the AMIs owned by an account, selects those older than the retention
period that match the name prefix and tag filter, then deregisters them or,
by default, only reports what would be removed.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ami_cleaner.core.aws.ec2 import EC2Manager, create_ec2_manager
from ami_cleaner.core.models.ami import AMIInfo
from ami_cleaner.core.models.criteria import FilterCriteria
from ami_cleaner.core.models.options import CleanerOptions
from ami_cleaner.core.processors.image_selector import select_expired_images
from ami_cleaner.utils.config import ConfigManager
from .base import BaseJob


@dataclass
class PurgeResult:
    """Outcome of a completed purge pass."""
    dry_run: bool
    images: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        action = "Would deregister" if self.dry_run else "Deregistered"
        return {
            "status": "success",
            "message": f"{'DRY RUN: ' if self.dry_run else ''}{action} {len(self.images)} images",
            "dry_run": self.dry_run,
            "images": list(self.images),
        }


class CleanImagesJob(BaseJob):
    """Job to purge expired AMIs"""

    def __init__(
        self,
        criteria: FilterCriteria,
        ec2_manager: Optional[EC2Manager] = None,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[logging.Logger] = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
    ):
        super().__init__(config_manager=config_manager, job_name="clean_images", logger=logger)
        self.criteria = criteria.validate()
        self.region = region
        self.profile = profile
        self._ec2_manager = ec2_manager

    @property
    def ec2_manager(self) -> EC2Manager:
        if self._ec2_manager is None:
            session = self.create_aws_session(self.region, self.profile)
            self._ec2_manager = create_ec2_manager(session, self.region, self.logger)
        return self._ec2_manager

    def list_owned_images(self) -> List[AMIInfo]:
        """Fetch every image owned by the account. Raises ProviderQueryError."""
        images = self.ec2_manager.describe_images()
        self.logger.info(f"[{self.correlation_id}] Found {len(images)} owned images")
        return images

    def select_expired_images(self, images: List[AMIInfo]) -> List[AMIInfo]:
        candidates = select_expired_images(images, self.criteria)
        self.logger.info(
            f"[{self.correlation_id}] {len(candidates)} images created before "
            f"{self.criteria.expiration_cutoff.isoformat()} selected for purge"
        )
        return candidates

    def purge_images(self, candidates: List[AMIInfo]) -> PurgeResult:
        """
        Deregister (or report, in dry-run mode) each candidate in order.

        The first failed deregistration raises ProviderDeleteError and the
        remaining candidates are left untouched.
        """
        result = PurgeResult(dry_run=self.criteria.dry_run)

        for image in candidates:
            context = {
                "correlation_id": self.correlation_id,
                "image_id": image.image_id,
                "image_name": image.name,
                "image_state": image.state,
                "creation_date": image.creation_date.isoformat() if image.creation_date else None,
                "dry_run": self.criteria.dry_run,
            }

            if self.criteria.dry_run:
                self.logger.info(
                    f"[{self.correlation_id}] DRY RUN: would deregister image "
                    f"{image.image_id} ({image.name}) created {context['creation_date']}",
                    extra=context,
                )
                result.images.append(image.image_id)
                continue

            self.ec2_manager.deregister_image(image.image_id)
            self.logger.info(
                f"[{self.correlation_id}] Deregistered image "
                f"{image.image_id} ({image.name}) created {context['creation_date']}",
                extra=context,
            )
            result.images.append(image.image_id)

        return result

    def execute(self, **kwargs) -> PurgeResult:
        """Run list -> select -> purge."""
        images = self.list_owned_images()
        candidates = self.select_expired_images(images)
        return self.purge_images(candidates)


def run_cleanup(
    options: CleanerOptions,
    config_manager: Optional[ConfigManager] = None,
    logger: Optional[logging.Logger] = None,
    ec2_manager: Optional[EC2Manager] = None,
    now: Optional[datetime] = None,
) -> PurgeResult:
    """
    Validate options and run one cleanup pass.

    Shared by the command line and Lambda entry points. Configuration errors
    are raised before any AWS call is made.

    Args:
        options: Parsed run options
        config_manager: Settings used for region/profile/logging fallbacks
        logger: Logger to write entries to
        ec2_manager: Pre-built EC2 manager (a session is created when omitted)
        now: Reference time for the retention cutoff, defaults to the current UTC time

    Returns:
        PurgeResult describing the reported or deregistered images
    """
    criteria = options.to_criteria(now=now)
    job = CleanImagesJob(
        criteria,
        ec2_manager=ec2_manager,
        config_manager=config_manager,
        logger=logger,
        region=options.region,
        profile=options.profile,
    )
    return job.execute()
