"""Runtime cache for translations of keys that were never loaded.

When a key is missing from every loaded locale, the key text itself is used
as the message ("text-as-key"). The compiled unit is cached once per bundle
and shared by all locales.
"""

import threading
from typing import Callable, Dict, Optional

from msgbundle.i18n.models import TranslationUnit


class RuntimeCache:
    """Thread-safe map of key -> runtime-compiled TranslationUnit.

    Reads happen concurrently from request threads; writes are
    insert-if-absent under a lock, so the first stored unit wins and the map
    is never left half-written.

    Attributes:
        _units: Dict mapping key to TranslationUnit.
        _lock: Threading lock guarding writes.
    """

    def __init__(self):
        self._units: Dict[str, TranslationUnit] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[TranslationUnit]:
        return self._units.get(key)

    def get_or_create(
        self,
        key: str,
        factory: Callable[[], TranslationUnit],
    ) -> TranslationUnit:
        """Return the cached unit for key, creating it on first use.

        The factory runs outside the lock; concurrent misses may compile the
        same key twice, but only one unit is ever stored and returned.

        Args:
            key: Message key.
            factory: Builds the unit when the key is not cached.

        Returns:
            The cached TranslationUnit.
        """
        unit = self._units.get(key)
        if unit is not None:
            return unit

        created = factory()
        with self._lock:
            return self._units.setdefault(key, created)

    def clear(self) -> None:
        with self._lock:
            self._units.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._units

    def __len__(self) -> int:
        return len(self._units)
