"""Per-locale translation index."""

from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from msgbundle.i18n.models import LocaleTag, TranslationUnit


class TranslationIndex:
    """Container for the translation units of every loaded locale.

    Units are stored as {locale: {key: TranslationUnit}}. Loading is
    additive: putting a unit replaces any unit with the same locale and key,
    nothing is ever cleared.
    """

    def __init__(self):
        self._units: Dict[LocaleTag, Dict[str, TranslationUnit]] = {}

    def get(self, locale: LocaleTag, key: str) -> Optional[TranslationUnit]:
        """Retrieve a unit by locale and key.

        Returns:
            TranslationUnit, or None if either is unknown.
        """
        units = self._units.get(locale)
        if units is None:
            return None
        return units.get(key)

    def put(self, unit: TranslationUnit, locale: Optional[LocaleTag] = None) -> None:
        """Store a unit.

        Args:
            unit: Unit to store.
            locale: Locale to store it under (default: unit.locale). Fallback
                resolution stores units under locales other than their own.
        """
        self.ensure_locale(locale or unit.locale)[unit.key] = unit

    def ensure_locale(self, locale: LocaleTag) -> Dict[str, TranslationUnit]:
        if locale not in self._units:
            self._units[locale] = {}
        return self._units[locale]

    def has_locale(self, locale: LocaleTag) -> bool:
        return locale in self._units

    def locales(self) -> List[LocaleTag]:
        """Loaded locales in load order."""
        return list(self._units)

    def keys(self, locale: LocaleTag) -> List[str]:
        return list(self._units.get(locale, {}))

    def units(self, locale: LocaleTag) -> Mapping[str, TranslationUnit]:
        return dict(self._units.get(locale, {}))

    def missing(self, locale: LocaleTag, keys: Iterable[str]) -> Iterator[str]:
        """Yield the keys that locale has no unit for."""
        units = self._units.get(locale, {})
        return (key for key in keys if key not in units)

    def __contains__(self, locale: object) -> bool:
        return locale in self._units

    def __len__(self) -> int:
        return sum(len(units) for units in self._units.values())
