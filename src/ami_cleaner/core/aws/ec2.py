"""Simple EC2 Manager for AMI operations."""

import logging
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ami_cleaner.core.constants import IMAGE_OWNER_SELF
from ami_cleaner.core.models.ami import AMIInfo
from ami_cleaner.utils.exceptions import (
    ConfigurationError,
    ProviderDeleteError,
    ProviderQueryError,
)


class EC2Manager:
    """Lists and deregisters images owned by the calling account."""

    def __init__(
        self,
        session: boto3.Session,
        region: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.session = session
        self.region = region or session.region_name
        try:
            self.ec2_client = session.client("ec2", region_name=self.region)
        except BotoCoreError as e:
            # NoRegionError when neither --region nor a default region is set
            raise ConfigurationError(f"Unable to create EC2 client: {e}") from e
        self.logger = logger or logging.getLogger(__name__)

    def describe_images(self) -> List[AMIInfo]:
        """Describe all AMIs owned by this account, in listing order."""
        try:
            response = self.ec2_client.describe_images(Owners=[IMAGE_OWNER_SELF])
        except (ClientError, BotoCoreError) as e:
            raise ProviderQueryError(f"Error describing images: {e}") from e

        try:
            images = [AMIInfo.from_aws_image(image) for image in response.get("Images", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderQueryError(f"Unexpected image record in listing: {e}") from e

        self.logger.debug(f"Found {len(images)} images owned by this account in {self.region}")
        return images

    def deregister_image(self, image_id: str) -> None:
        """Deregister a single AMI."""
        try:
            self.ec2_client.deregister_image(ImageId=image_id)
        except (ClientError, BotoCoreError) as e:
            raise ProviderDeleteError(
                f"Error deregistering image {image_id}: {e}", image_id=image_id
            ) from e


def create_ec2_manager(
    session: boto3.Session,
    region: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> EC2Manager:
    """Create EC2Manager instance."""
    return EC2Manager(session, region, logger)
