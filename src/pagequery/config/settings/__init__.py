"""Config settings – 12-factor env-based configuration."""
from pagequery.config.settings.base import SearchSettings, Settings
from pagequery.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SearchSettings", "Settings", "SettingsLoader"]
