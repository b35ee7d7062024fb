"""Config settings – 12-factor env-based configuration."""
from ratekeeper.config.settings.base import Settings
from ratekeeper.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader"]
