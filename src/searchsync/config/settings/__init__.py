"""Config settings – 12-factor env-based configuration."""
from searchsync.config.settings.base import Settings
from searchsync.config.settings.factory import SettingsFactory
from searchsync.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from searchsync.config.settings.search import SearchSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "SearchSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
