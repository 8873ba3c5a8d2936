"""Locale matching and language negotiation.

Resolves the supported locale that best fits a requested tag or an
Accept-Language header. Tag distances come from langcodes (CLDR language
matching data).
"""

import functools
from typing import List, Optional, Tuple

import langcodes

from msgbundle.i18n.locales import LocaleSet
from msgbundle.i18n.models import Confidence, LocaleTag
from msgbundle.logging import get_module_logger

logger = get_module_logger()


@functools.lru_cache(maxsize=1024)
def _tag_distance(desired: str, supported: str) -> int:
    return langcodes.tag_distance(desired, supported)


def parse_accept_language(header: Optional[str]) -> List[Tuple[LocaleTag, float]]:
    """Parse an Accept-Language header into weighted tags.

    Parses "zh-CN,zh;q=0.9,en;q=0.7" -> [(zh-CN, 1.0), (zh, 0.9), (en, 0.7)].
    Malformed fragments, wildcards and q=0 entries are skipped.

    Args:
        header: Accept-Language header value.

    Returns:
        Tags sorted by quality (descending, stable for equal weights).
    """
    if not header:
        return []

    preferences = []
    for part in header.split(","):
        lang_range, _, params = part.partition(";")
        lang_range = lang_range.strip()
        if not lang_range or lang_range == "*":
            continue

        quality: Optional[float] = 1.0
        for param in params.split(";"):
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value.strip())
                except ValueError:
                    quality = None

        if quality is None or not 0 < quality <= 1:
            continue

        try:
            tag = LocaleTag.parse(lang_range)
        except ValueError:
            continue
        if tag.is_undefined:
            continue

        preferences.append((tag, quality))

    return sorted(preferences, key=lambda x: x[1], reverse=True)


class LocaleMatcher:
    """Matches requested locales against a bundle's supported locales.

    Attributes:
        locale_set: Supported locales; the default comes first.
    """

    def __init__(self, locale_set: LocaleSet):
        self.locale_set = locale_set

    @property
    def default(self) -> LocaleTag:
        return self.locale_set.default

    def confidence(self, desired: LocaleTag, supported: LocaleTag) -> Confidence:
        """Confidence that supported satisfies desired."""
        if desired == supported:
            return Confidence.EXACT
        return Confidence.from_distance(_tag_distance(desired.tag, supported.tag))

    def match(self, *desired: LocaleTag) -> Tuple[Optional[LocaleTag], Confidence]:
        """Find the supported locale with the highest confidence.

        Ties are broken by desired order, then by supported order. A desired
        tag that is itself supported always wins over an equivalent one.

        Args:
            *desired: Requested tags in preference order.

        Returns:
            (best supported tag or None, confidence).
        """
        best: Optional[LocaleTag] = None
        best_confidence = Confidence.NO

        for tag in desired:
            if tag in self.locale_set:
                return tag, Confidence.EXACT

            for supported in self.locale_set:
                confidence = self.confidence(tag, supported)
                if confidence > best_confidence:
                    best, best_confidence = supported, confidence

            if best_confidence is Confidence.EXACT:
                break

        return best, best_confidence

    def match_exact(self, candidate: str) -> Optional[LocaleTag]:
        """Return the supported locale only on an exact match.

        Args:
            candidate: Locale string (e.g. "zh_hans", "en-US").

        Returns:
            Supported LocaleTag, or None if invalid or not an exact match.
        """
        try:
            tag = LocaleTag.parse(candidate)
        except ValueError:
            return None

        matched, confidence = self.match(tag)
        if confidence is Confidence.EXACT:
            return matched
        return None

    def is_supported(self, candidate: str) -> bool:
        """Check whether candidate matches any supported locale at all."""
        try:
            tag = LocaleTag.parse(candidate)
        except ValueError:
            return False

        _, confidence = self.match(tag)
        return confidence > Confidence.NO

    def negotiate(self, *accept_headers: Optional[str]) -> LocaleTag:
        """Pick the best supported locale for Accept-Language headers.

        Args:
            *accept_headers: Raw header values, each possibly listing
                several weighted tags.

        Returns:
            Best matching supported locale, or the default locale when the
            input is empty, invalid, or nothing matches.
        """
        desired: List[LocaleTag] = []
        for header in accept_headers:
            desired.extend(tag for tag, _ in parse_accept_language(header))

        if not desired:
            logger.debug("no_acceptable_locale_in_header", default=str(self.default))
            return self.default

        matched, confidence = self.match(*desired)
        if matched is not None and confidence > Confidence.NO:
            logger.debug(
                "negotiated_locale",
                locale=str(matched),
                confidence=confidence.name,
            )
            return matched

        logger.debug("no_matching_locale_in_header", default=str(self.default))
        return self.default
