"""Run options shared by the CLI and Lambda entry points."""

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ami_cleaner.core.constants import DEFAULT_RETENTION_DAYS
from ami_cleaner.utils.exceptions import ConfigurationError
from .criteria import FilterCriteria

# Option name -> environment variable
ENV_VARS = {
    "delete": "DELETE",
    "prefix": "PREFIX",
    "days": "DAYS",
    "tag_key": "TAG_KEY",
    "tag_value": "TAG_VALUE",
    "invert": "INVERT",
    "profile": "PROFILE",
    "region": "REGION",
}

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off", ""}


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def _to_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid integer for {name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid integer for {name}: {value!r}") from e


@dataclass
class CleanerOptions:
    """Options recognised by a cleanup run, before criteria are derived."""
    delete: bool = False
    prefix: str = ""
    days: int = DEFAULT_RETENTION_DAYS
    tag_key: str = ""
    tag_value: str = ""
    invert: bool = False
    profile: Optional[str] = None
    region: Optional[str] = None

    def to_criteria(self, now: Optional[datetime] = None) -> FilterCriteria:
        return FilterCriteria.from_retention(
            retention_days=self.days,
            now=now,
            name_prefix=self.prefix,
            tag_key=self.tag_key,
            tag_value=self.tag_value,
            invert=self.invert,
            delete_enabled=self.delete,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(
        cls, values: Mapping[str, Any], base: Optional["CleanerOptions"] = None
    ) -> "CleanerOptions":
        """Overlay option values (e.g. a scheduled event payload) on ``base``.

        Keys that are absent or ``None`` keep the base value; unknown keys are ignored.
        """
        options = base.to_dict() if base else cls().to_dict()
        for f in fields(cls):
            value = values.get(f.name)
            if value is None:
                continue
            if f.name in ("delete", "invert"):
                options[f.name] = _to_bool(f.name, value)
            elif f.name == "days":
                options[f.name] = _to_int(f.name, value)
            else:
                options[f.name] = str(value)
        return cls(**options)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str], base: Optional["CleanerOptions"] = None
    ) -> "CleanerOptions":
        """Read options from environment variables such as ``DAYS`` or ``TAG_KEY``."""
        values = {
            name: environ[env_var]
            for name, env_var in ENV_VARS.items()
            if env_var in environ
        }
        return cls.from_mapping(values, base=base)
