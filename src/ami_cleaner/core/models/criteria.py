"""Filter criteria describing a single cleanup run."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from ami_cleaner.core.constants import DEFAULT_RETENTION_DAYS
from ami_cleaner.utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class FilterCriteria:
    """Immutable selection and purge settings.

    Images created strictly before ``expiration_cutoff`` are purge candidates,
    narrowed by ``name_prefix`` and by the (optionally inverted) tag test.
    """
    expiration_cutoff: datetime
    name_prefix: str = ""
    tag_key: str = ""
    tag_value: str = ""
    invert: bool = False
    delete_enabled: bool = False

    @property
    def has_tag_filter(self) -> bool:
        return bool(self.tag_key)

    @property
    def dry_run(self) -> bool:
        return not self.delete_enabled

    def validate(self) -> "FilterCriteria":
        """Reject a tag key without a value (or the reverse)."""
        if bool(self.tag_key) != bool(self.tag_value):
            raise ConfigurationError("must specify both a tag key and tag value")
        if self.expiration_cutoff.tzinfo is None:
            raise ConfigurationError("expiration cutoff must be timezone-aware")
        return self

    @classmethod
    def from_retention(
        cls,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        now: Optional[datetime] = None,
        name_prefix: str = "",
        tag_key: str = "",
        tag_value: str = "",
        invert: bool = False,
        delete_enabled: bool = False,
    ) -> "FilterCriteria":
        """Build validated criteria with ``cutoff = now (UTC) - retention_days``."""
        if retention_days < 0:
            raise ConfigurationError(
                f"retention days must not be negative, got {retention_days}"
            )
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        criteria = cls(
            expiration_cutoff=now.astimezone(timezone.utc) - timedelta(days=retention_days),
            name_prefix=name_prefix or "",
            tag_key=tag_key or "",
            tag_value=tag_value or "",
            invert=invert,
            delete_enabled=delete_enabled,
        )
        return criteria.validate()
