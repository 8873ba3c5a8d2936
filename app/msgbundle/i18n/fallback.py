"""Fallback resolution for missing translations.

Runs once per load: every key the default locale has is materialized into
each other loaded locale that lacks it, so lookups never walk the chain at
request time.
"""

from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set

from msgbundle.i18n.index import TranslationIndex
from msgbundle.i18n.matcher import LocaleMatcher
from msgbundle.i18n.models import LocaleTag, TranslationUnit
from msgbundle.logging import get_module_logger

logger = get_module_logger()


def parse_fallbacks(
    fallbacks: Optional[Mapping[str, Sequence[str]]],
    matcher: LocaleMatcher,
) -> Dict[LocaleTag, List[LocaleTag]]:
    """Resolve a {locale: [fallback, ...]} mapping to supported locales.

    Keys and targets go through matcher.match_exact, the same resolution
    translations are indexed with, so "ja" reaches "ja-JP" and "zh-CN"
    reaches "zh-Hans". Entries that are invalid or not supported are
    dropped with a warning; a locale whose whole chain is dropped keeps an
    empty chain.

    Args:
        fallbacks: Configured fallback chains.
        matcher: Matcher over the bundle's supported locales.

    Returns:
        {supported locale: ordered supported fallbacks}.
    """
    graph: Dict[LocaleTag, List[LocaleTag]] = {}
    for locale, chain in (fallbacks or {}).items():
        source = matcher.match_exact(locale)
        if source is None:
            logger.warning("ignored_unsupported_fallback_locale", locale=locale)
            continue
        if isinstance(chain, str):
            chain = [chain]

        # Spellings of the same locale share one chain
        targets = graph.setdefault(source, [])
        for candidate in chain:
            target = matcher.match_exact(candidate)
            if target is None:
                logger.warning(
                    "ignored_unsupported_fallback_target",
                    locale=locale,
                    fallback=candidate,
                )
            elif target not in targets:
                targets.append(target)

    return graph


class FallbackResolver:
    """Walks a locale fallback graph to find substitute translations.

    The graph may contain cycles. Locales without an explicit chain fall back
    to the default locale, which is the terminal safety net of every walk.

    Attributes:
        index: Index to search and fill.
        default_locale: Locale every walk ends at.
        fallbacks: {locale: ordered fallback locales}.
    """

    def __init__(
        self,
        index: TranslationIndex,
        default_locale: LocaleTag,
        fallbacks: Optional[Mapping[LocaleTag, Sequence[LocaleTag]]] = None,
    ):
        self.index = index
        self.default_locale = default_locale
        self.fallbacks: Dict[LocaleTag, List[LocaleTag]] = {
            locale: list(chain) for locale, chain in (fallbacks or {}).items()
        }

    def lookup(self, locale: LocaleTag, key: str) -> Optional[TranslationUnit]:
        """Find the best substitute unit for key in locale.

        Fallbacks are tried in order; each fallback's own unit wins over
        anything reachable through its chain. The walk uses an explicit stack
        and a visited set, so it terminates on any graph.

        Args:
            locale: Locale missing the key.
            key: Message key.

        Returns:
            Substitute unit, the default locale's unit, or None.
        """
        default_unit = self.index.get(self.default_locale, key)

        chain = self.fallbacks.get(locale)
        if chain is None:
            return default_unit

        visited: Set[LocaleTag] = {locale}
        stack: List[Iterator[LocaleTag]] = [iter(chain)]

        while stack:
            candidate = next(stack[-1], None)
            if candidate is None:
                # Chain exhausted: this level resolves to the default unit
                stack.pop()
                if default_unit is not None:
                    return default_unit
                continue

            unit = self.index.get(candidate, key)
            if unit is not None:
                return unit

            if candidate in visited:
                continue
            visited.add(candidate)

            sub_chain = self.fallbacks.get(candidate)
            if sub_chain is None:
                if default_unit is not None:
                    return default_unit
                continue
            stack.append(iter(sub_chain))

        return default_unit

    def resolve_missing(self) -> int:
        """Materialize fallback units for keys missing outside the default locale.

        Returns:
            Number of units added to the index.
        """
        default_keys = self.index.keys(self.default_locale)
        filled = 0

        for locale in self.index.locales():
            if locale == self.default_locale:
                continue
            for key in list(self.index.missing(locale, default_keys)):
                unit = self.lookup(locale, key)
                if unit is not None:
                    self.index.put(unit, locale=locale)
                    filled += 1

        logger.debug(
            "fallbacks_resolved",
            default_locale=str(self.default_locale),
            filled=filled,
        )
        return filled
