"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses

from ratekeeper.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Dataclass settings read from ``<_prefix>_<FIELD>`` environment variables.

    Subclasses declare typed fields with defaults and override
    :meth:`_validate`; it runs after construction whichever way the
    instance was built, so a direct ``RateLimiterSettings(capacity=0)`` is
    rejected exactly like ``RATEKEEPER_CAPACITY=0``.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """Environment variable that feeds *field_name*."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Override to add field and cross-field validation."""

    def _require_positive(self, *field_names: str) -> None:
        for name in field_names:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidSettingValueError(name, value, "must be a number")
            if value <= 0:
                raise InvalidSettingValueError(name, value, "must be positive")


__all__ = ["Settings"]
