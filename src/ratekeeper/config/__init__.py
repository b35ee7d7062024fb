"""Config – 12-factor settings, loaders, and limiter wiring."""

from ratekeeper.config.rate_limiter import RateLimiterSettings, build_rate_limiter, configure_logging
from ratekeeper.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
)
from ratekeeper.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RateLimiterSettings",
    "Settings",
    "SettingsLoader",
    "build_rate_limiter",
    "configure_logging",
]
