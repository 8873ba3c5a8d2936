"""Translation bundle.

A Bundle owns everything needed to resolve messages: the supported locales,
the translation index, the fallback graph, the runtime cache and the
formatting options. Localizers borrow a bundle to translate for one locale.

Usage:
    bundle = Bundle(
        BundleConfig(
            default_locale="en",
            locales=["en", "zh-Hans"],
            fallbacks={"zh-Hant": ["zh-Hans"]},
        )
    )
    bundle.load_glob("locales/*.json")

    localizer = bundle.new_localizer(bundle.match_available_locale(header))
    localizer.get("greeting", {"name": "John"})
"""

from dataclasses import dataclass, field
from importlib.resources.abc import Traversable
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence

from msgbundle.i18n.cache import RuntimeCache
from msgbundle.i18n.deserializers import Deserializer, json_deserializer
from msgbundle.i18n.errors import MessageFormatError
from msgbundle.i18n.fallback import FallbackResolver, parse_fallbacks
from msgbundle.i18n.index import TranslationIndex
from msgbundle.i18n.loader import PathLike, TranslationFileLoader
from msgbundle.i18n.locales import LocaleSet
from msgbundle.i18n.matcher import LocaleMatcher
from msgbundle.i18n.messageformat import MessageFormat, MessageFormatOptions
from msgbundle.i18n.models import LocaleTag, MessageFunction, TranslationUnit
from msgbundle.logging import get_module_logger

if TYPE_CHECKING:
    from msgbundle.i18n.localizer import Localizer

logger = get_module_logger()


@dataclass
class BundleConfig:
    """Bundle construction options.

    Attributes:
        default_locale: Locale used when nothing better matches (default:
            first entry of locales, or "en").
        locales: Supported locales; invalid entries are ignored.
        fallbacks: {locale: [fallback, ...]} tried before the default locale.
        deserializer: Turns translation file bytes into {key: text}
            (default: JSON).
        message_format: Options for compiling translations (custom
            formatters, strict mode, currency).
    """

    default_locale: Optional[str] = None
    locales: Sequence[str] = ()
    fallbacks: Mapping[str, Sequence[str]] = field(default_factory=dict)
    deserializer: Deserializer = json_deserializer
    message_format: MessageFormatOptions = field(default_factory=MessageFormatOptions)


class Bundle:
    """Internationalization bundle managing translations, locales and fallbacks.

    Configuration is fixed at construction; translation data is added with
    the load_* methods. Loading must finish before concurrent lookups start.
    """

    def __init__(self, config: Optional[BundleConfig] = None):
        config = config or BundleConfig()

        self.locale_set = LocaleSet(config.locales, config.default_locale)
        self.matcher = LocaleMatcher(self.locale_set)
        self.options = config.message_format
        self.index = TranslationIndex()
        self.runtime_cache = RuntimeCache()
        self.fallback_resolver = FallbackResolver(
            self.index,
            self.locale_set.default,
            parse_fallbacks(config.fallbacks, self.matcher),
        )
        self._loader = TranslationFileLoader(config.deserializer)

        logger.info(
            "initialized_bundle",
            default_locale=self.default_locale,
            locales=self.supported_locales,
        )

    @property
    def default_locale(self) -> str:
        return str(self.locale_set.default)

    @property
    def supported_locales(self) -> List[str]:
        """Supported locales, default first."""
        return [str(tag) for tag in self.locale_set]

    def is_language_supported(self, locale: str) -> bool:
        """Check whether locale matches any supported locale.

        Locales outside supported_locales may still be supported through
        the matcher (e.g. "en-GB" when "en" is configured).
        """
        return self.matcher.is_supported(locale)

    def match_available_locale(self, *accept_headers: Optional[str]) -> str:
        """Best supported locale for Accept-Language header values.

        Returns:
            Locale string; the default locale when nothing matches.
        """
        return str(self.matcher.negotiate(*accept_headers))

    def new_localizer(self, *locales: str) -> "Localizer":
        """Create a Localizer for the first candidate with loaded translations.

        Args:
            *locales: Candidate locales in preference order.

        Returns:
            Localizer bound to the selected locale, or to the default locale
            if no candidate matches exactly.
        """
        from msgbundle.i18n.localizer import Localizer

        selected = self.locale_set.default
        for candidate in locales:
            tag = self.matcher.match_exact(candidate)
            if tag is not None and self.index.has_locale(tag):
                selected = tag
                break

        return Localizer(self, selected)

    def compile(self, locale: LocaleTag, text: str) -> Optional[MessageFunction]:
        """Compile text for the base language of locale.

        Returns:
            Compiled message, or None if the formatter or the pattern is
            rejected.
        """
        try:
            return MessageFormat(locale.base, self.options).compile(text)
        except MessageFormatError as e:
            logger.debug(
                "template_compile_failed",
                locale=str(locale),
                text=text,
                error=str(e),
            )
            return None

    def build_unit(self, locale: LocaleTag, key: str, text: str) -> TranslationUnit:
        return TranslationUnit(
            locale=locale,
            key=key,
            text=text,
            compiled=self.compile(locale, text),
        )

    def index_message(
        self, locale: str, key: str, text: str
    ) -> Optional[TranslationUnit]:
        """Compile and index one translation.

        Args:
            locale: Locale name; must match a supported locale exactly.
            key: Message key.
            text: Translation text.

        Returns:
            Indexed unit, or None if the locale is not supported.
        """
        tag = self.matcher.match_exact(locale)
        if tag is None:
            logger.debug("ignored_unsupported_locale", locale=locale, key=key)
            return None
        unit = self.build_unit(tag, key, text)
        self.index.put(unit)
        return unit

    def load_messages(self, messages: Mapping[str, Mapping[str, str]]) -> None:
        """Load translations from a {locale: {key: text}} mapping.

        Locales that are not supported are ignored. Loading is additive:
        later values replace earlier ones for the same locale and key.
        Missing keys are then filled from the fallback chains.
        """
        loaded = 0
        for locale, translations in messages.items():
            tag = self.matcher.match_exact(locale)
            if tag is None:
                logger.debug("ignored_unsupported_locale", locale=locale)
                continue

            self.index.ensure_locale(tag)
            for key, text in translations.items():
                self.index.put(self.build_unit(tag, key, text))
                loaded += 1

        filled = self.fallback_resolver.resolve_missing()
        logger.info(
            "translations_loaded",
            message_count=loaded,
            fallback_count=filled,
            locale_count=len(self.index.locales()),
        )

    def load_files(self, *paths: PathLike) -> None:
        """Load translation files; the locale comes from each file name.

        Raises:
            TranslationLoadError: If a file cannot be read or parsed. Nothing
                is loaded in that case.
        """
        self.load_messages(self._loader.read_files(paths))

    def load_glob(self, *patterns: str) -> None:
        """Load every translation file matching the glob patterns.

        Raises:
            TranslationLoadError: If a pattern, file or document is invalid.
        """
        self.load_messages(self._loader.read_glob(patterns))

    def load_resources(self, root: Traversable, *patterns: str) -> None:
        """Load translation files shipped as package resources.

        Args:
            root: Resource root, e.g. importlib.resources.files("myapp").
            *patterns: Glob patterns relative to root.

        Raises:
            TranslationLoadError: If a pattern, file or document is invalid.
        """
        self.load_messages(self._loader.read_resources(root, patterns))

    def translations(self, locale: str) -> Dict[str, str]:
        """Raw text of every indexed translation for a locale."""
        tag = self.matcher.match_exact(locale)
        if tag is None:
            return {}
        return {key: unit.text for key, unit in self.index.units(tag).items()}
