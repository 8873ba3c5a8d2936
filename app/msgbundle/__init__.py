"""msgbundle - locale-aware message resolution with fallbacks and MessageFormat."""

from msgbundle.i18n import (
    Bundle,
    BundleConfig,
    Localizer,
    MessageFormatError,
    MessageFormatOptions,
    TranslationLoadError,
    Vars,
    create_bundle,
)

__all__ = [
    "Bundle",
    "BundleConfig",
    "Localizer",
    "MessageFormatError",
    "MessageFormatOptions",
    "TranslationLoadError",
    "Vars",
    "create_bundle",
]
