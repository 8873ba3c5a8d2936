"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    get_settings: Lazily loaded, cached Settings instance
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation bundle settings class
"""

from msgbundle.configuration.i18n import I18nSettings
from msgbundle.configuration.settings import Settings, get_settings

__all__ = ["Settings", "I18nSettings", "get_settings"]
