"""msgbundle configuration settings - main aggregator."""

import functools

from pydantic_settings import BaseSettings, SettingsConfigDict

from msgbundle.configuration.i18n import I18nSettings


class Settings(BaseSettings):
    """msgbundle configuration settings - main aggregator.

    Environment Variables:
        PREFIX: Environment prefix; empty means production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from msgbundle.configuration import get_settings

        settings = get_settings()
        default_locale = settings.i18n.default_locale

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    i18n: I18nSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        if "i18n" not in kwargs:
            kwargs["i18n"] = I18nSettings()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment on first use.

    Nothing is read at import time, so an invalid I18N_* variable only
    fails the callers that actually ask for settings. Call
    get_settings.cache_clear() to reload.

    Raises:
        pydantic.ValidationError: If the environment holds invalid values.
    """
    return Settings()
