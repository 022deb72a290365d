"""Simple data models for AWS AMI management."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def parse_creation_date(value: Any) -> Optional[datetime]:
    """Parse an EC2 ``CreationDate`` into an aware UTC datetime.

    EC2 reports it as an ISO-8601 string such as ``2024-05-01T10:11:12.000Z``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class AMIInfo:
    """Simple AMI information model."""
    image_id: str
    name: str = ""
    creation_date: Optional[datetime] = None
    state: str = ""
    tags: Dict[str, str] = field(default_factory=dict)

    def has_tag(self, key: str, value: str) -> bool:
        """True when the tag key is present and carries exactly this value."""
        return key in self.tags and self.tags[key] == value

    @classmethod
    def from_aws_image(cls, image: Dict[str, Any]) -> "AMIInfo":
        """Create AMIInfo from AWS image data."""
        tags = {}
        for tag in image.get("Tags", []):
            if tag.get("Key"):
                tags[tag["Key"]] = tag.get("Value", "")

        return cls(
            image_id=image["ImageId"],
            name=image.get("Name", ""),
            creation_date=parse_creation_date(image.get("CreationDate")),
            state=image.get("State", ""),
            tags=tags,
        )
