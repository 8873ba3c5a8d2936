"""Per-locale translation facade.

A Localizer translates for exactly one locale of a bundle. Lookups never
fail: a missing translation degrades to the key text itself, which is also
compiled as a MessageFormat pattern ("text-as-key").
"""

from typing import TYPE_CHECKING, Any, Optional

from msgbundle.i18n.errors import MessageFormatError
from msgbundle.i18n.messageformat import MessageFormat
from msgbundle.i18n.models import LocaleTag, TranslationUnit, Vars
from msgbundle.logging import get_module_logger

if TYPE_CHECKING:
    from msgbundle.i18n.bundle import Bundle

logger = get_module_logger()


def trim_context(value: str) -> str:
    """Remove a trailing " <context>" suffix from a key.

    Only the last suffix is treated as context, so keys that contain "<"
    elsewhere survive: trim_context("a <b> <c>") == "a <b>".
    """
    if value.endswith(">"):
        idx = value.rfind(" <")
        if idx != -1:
            return value[:idx]
    return value


class Localizer:
    """Translation methods for one locale.

    Create via Bundle.new_localizer(). Localizers are cheap and borrow the
    bundle; they hold no state of their own.

    Attributes:
        bundle: Bundle providing translations.
    """

    def __init__(self, bundle: "Bundle", locale: LocaleTag):
        self.bundle = bundle
        self._locale = locale

    @property
    def locale(self) -> str:
        """Locale this localizer translates to."""
        return str(self._locale)

    def get(self, key: str, variables: Optional[Vars] = None) -> str:
        """Translate key, formatting it with variables.

        Without variables the raw translation is returned, placeholders
        included. With variables, formatting errors fall back to the raw
        translation.

        Args:
            key: Message key or source text.
            variables: Optional MessageFormat variables.

        Returns:
            Translated text; key itself when nothing can be resolved.
        """
        unit = self._lookup(key)
        if unit is None:
            return key
        return self._localize(unit, variables)

    def get_x(self, key: str, context: str, variables: Optional[Vars] = None) -> str:
        """Translate key disambiguated by context.

        get_x("Post", "verb") looks up "Post <verb>".
        """
        return self.get(f"{key} <{context}>", variables)

    def get_f(self, key: str, *args: Any) -> str:
        """Translate key and apply printf-style substitution.

        The key is used as the format string when no translation exists.
        Substitution errors return the unsubstituted translation.
        """
        text = self.get(key)
        if not args:
            return text
        try:
            return text % args
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(
                "printf_substitution_failed",
                key=key,
                locale=self.locale,
                error=str(e),
            )
            return text

    def format(self, pattern: str, variables: Optional[Vars] = None) -> str:
        """Compile and format a MessageFormat pattern for this locale.

        Bypasses the translation index; for ad hoc messages that are not
        stored in translation files.

        Raises:
            MessageFormatError: If the pattern cannot be compiled or formatted.
        """
        formatter = MessageFormat(self._locale.base, self.bundle.options)
        compiled = formatter.compile(pattern)
        return compiled(variables)

    def _lookup(self, key: str) -> Optional[TranslationUnit]:
        """Resolve key to a translation unit.

        Order:
        1. Translations indexed for this locale (fallbacks included)
        2. Runtime cache
        3. The key itself, compiled for the default locale and cached
        """
        unit = self.bundle.index.get(self._locale, key)
        if unit is not None:
            return unit

        default_locale = self.bundle.locale_set.default

        def _build() -> TranslationUnit:
            logger.debug("runtime_translation_cached", key=key, locale=self.locale)
            return self.bundle.build_unit(default_locale, key, trim_context(key))

        return self.bundle.runtime_cache.get_or_create(key, _build)

    def _localize(self, unit: TranslationUnit, variables: Optional[Vars]) -> str:
        if unit.compiled is None or variables is None:
            return unit.text
        try:
            result = unit.compiled(variables)
        except MessageFormatError as e:
            logger.debug(
                "message_format_failed",
                key=unit.key,
                locale=self.locale,
                error=str(e),
            )
            return unit.text
        except Exception as e:
            # Catalog lookups never raise, whatever a formatter does
            logger.warning(
                "message_format_crashed",
                key=unit.key,
                locale=self.locale,
                error=str(e),
                error_type=type(e).__name__,
            )
            return unit.text
        if not isinstance(result, str):
            return unit.text
        return result

    def __repr__(self) -> str:
        return f"Localizer(locale={self.locale!r})"
