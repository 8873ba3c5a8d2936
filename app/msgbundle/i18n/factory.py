"""Factory functions for creating bundles from settings."""

from typing import Any, Optional

from msgbundle.configuration import I18nSettings, get_settings
from msgbundle.i18n.bundle import Bundle, BundleConfig
from msgbundle.i18n.deserializers import get_deserializer
from msgbundle.i18n.messageformat import MessageFormatOptions
from msgbundle.logging import get_module_logger

logger = get_module_logger()


def config_from_settings(settings: I18nSettings, **overrides: Any) -> BundleConfig:
    """Build a BundleConfig from I18nSettings.

    Args:
        settings: Translation settings.
        **overrides: BundleConfig fields that replace the settings values
            (e.g. custom formatters via message_format=...).

    Returns:
        BundleConfig
    """
    values = {
        "default_locale": settings.default_locale,
        "locales": settings.locale_list,
        "fallbacks": settings.fallbacks,
        "deserializer": get_deserializer(settings.file_format),
        "message_format": MessageFormatOptions(
            strict=settings.strict_mode,
            currency=settings.currency,
        ),
    }
    values.update(overrides)
    return BundleConfig(**values)


def create_bundle(
    settings: Optional[I18nSettings] = None,
    preload: bool = True,
    **overrides: Any,
) -> Bundle:
    """Create and configure a Bundle.

    Args:
        settings: Translation settings (default: application settings).
        preload: Whether to load the configured translation globs now.
        **overrides: BundleConfig fields overriding the settings.

    Returns:
        Bundle: Configured bundle

    Raises:
        TranslationLoadError: If preloading fails.

    Usage:
        # Use environment configuration
        bundle = create_bundle()

        # Custom formatters on top of the environment configuration
        bundle = create_bundle(
            message_format=MessageFormatOptions(custom_formatters={"upper": upper})
        )
    """
    settings = settings or get_settings().i18n
    bundle = Bundle(config_from_settings(settings, **overrides))

    patterns = settings.translation_patterns
    if preload and patterns:
        bundle.load_glob(*patterns)
        logger.info(
            "bundle_created_with_preload",
            patterns=patterns,
            locale_count=len(bundle.index.locales()),
        )
    else:
        logger.info("bundle_created_lazy", patterns=patterns)

    return bundle
