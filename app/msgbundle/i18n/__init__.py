"""i18n engine - translation resolution for msgbundle.

Provides locale registration and negotiation, translation loading,
fallback resolution and MessageFormat-based message formatting.

Main components:
- models: LocaleTag, TranslationUnit, Confidence, Vars
- locales / matcher: LocaleSet and LocaleMatcher
- index / fallback / cache: TranslationIndex, FallbackResolver, RuntimeCache
- messageformat: MessageFormat compiler and MessageFormatOptions
- bundle / localizer: Bundle and the per-locale Localizer
- loader / deserializers: translation files to {locale: {key: text}}
"""

from msgbundle.i18n.bundle import Bundle, BundleConfig
from msgbundle.i18n.cache import RuntimeCache
from msgbundle.i18n.deserializers import (
    ini_deserializer,
    json_deserializer,
    toml_deserializer,
    yaml_deserializer,
)
from msgbundle.i18n.errors import MessageFormatError, TranslationLoadError
from msgbundle.i18n.factory import create_bundle
from msgbundle.i18n.fallback import FallbackResolver
from msgbundle.i18n.index import TranslationIndex
from msgbundle.i18n.locales import LocaleSet
from msgbundle.i18n.localizer import Localizer, trim_context
from msgbundle.i18n.matcher import LocaleMatcher, parse_accept_language
from msgbundle.i18n.messageformat import MessageFormat, MessageFormatOptions
from msgbundle.i18n.models import Confidence, LocaleTag, TranslationUnit, Vars

__all__ = [
    "Bundle",
    "BundleConfig",
    "Confidence",
    "FallbackResolver",
    "LocaleMatcher",
    "LocaleSet",
    "LocaleTag",
    "Localizer",
    "MessageFormat",
    "MessageFormatError",
    "MessageFormatOptions",
    "RuntimeCache",
    "TranslationIndex",
    "TranslationLoadError",
    "TranslationUnit",
    "Vars",
    "create_bundle",
    "ini_deserializer",
    "json_deserializer",
    "parse_accept_language",
    "toml_deserializer",
    "trim_context",
    "yaml_deserializer",
]
