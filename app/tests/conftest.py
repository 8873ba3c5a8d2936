"""Shared fixtures for msgbundle tests."""

import pytest

from msgbundle.configuration import I18nSettings, get_settings
from msgbundle.logging import configure_logging

I18N_ENV_VARS = (
    "I18N_DEFAULT_LOCALE",
    "I18N_LOCALES",
    "I18N_FALLBACKS",
    "I18N_TRANSLATIONS",
    "I18N_FORMAT",
    "I18N_STRICT_MODE",
    "I18N_CURRENCY",
)


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Route engine logs through stdlib logging, warnings and above only."""
    configure_logging(log_level="WARNING", is_production=False)


@pytest.fixture
def clean_i18n_env(monkeypatch):
    """Remove I18N_* variables so settings start from their defaults."""
    for name in I18N_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def make_i18n_settings(clean_i18n_env):
    """Build I18nSettings from alias keyword arguments."""

    def _make(**values):
        return I18nSettings(_env_file=None, **values)

    return _make
