"""Supported locale registration and ordering."""

from typing import Iterable, Iterator, List, Optional, Tuple

from msgbundle.i18n.models import BASELINE_LOCALE, LocaleTag
from msgbundle.logging import get_module_logger

logger = get_module_logger()


def parse_locales(candidates: Iterable[str]) -> List[LocaleTag]:
    """Parse candidate locale strings, dropping invalid and undefined tags.

    Args:
        candidates: Locale strings in any common spelling.

    Returns:
        Parsed tags in input order, without duplicates.
    """
    tags: List[LocaleTag] = []
    for candidate in candidates:
        try:
            tag = LocaleTag.parse(candidate)
        except ValueError:
            logger.debug("ignored_invalid_locale", locale=candidate)
            continue
        if tag.is_undefined:
            logger.debug("ignored_undefined_locale", locale=candidate)
            continue
        if tag not in tags:
            tags.append(tag)
    return tags


class LocaleSet:
    """Ordered set of the locales a bundle supports.

    The default locale is always present exactly once and always first.

    Default resolution order:
    1. Explicit default (if it parses)
    2. First configured locale
    3. Baseline language ("en")
    """

    def __init__(
        self,
        locales: Iterable[str] = (),
        default_locale: Optional[str] = None,
    ):
        tags = parse_locales(locales)

        default: Optional[LocaleTag] = None
        if default_locale:
            parsed = parse_locales([default_locale])
            if parsed:
                default = parsed[0]
            else:
                logger.warning("invalid_default_locale", locale=default_locale)
        if default is None:
            default = tags[0] if tags else LocaleTag.parse(BASELINE_LOCALE)

        if default in tags:
            tags.remove(default)
        tags.insert(0, default)

        self._default = default
        self._tags: Tuple[LocaleTag, ...] = tuple(tags)

    @property
    def default(self) -> LocaleTag:
        """The default locale (always at index 0)."""
        return self._default

    @property
    def tags(self) -> Tuple[LocaleTag, ...]:
        return self._tags

    def index(self, tag: LocaleTag) -> int:
        return self._tags.index(tag)

    def __iter__(self) -> Iterator[LocaleTag]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __repr__(self) -> str:
        return f"LocaleSet({[str(tag) for tag in self._tags]!r})"
