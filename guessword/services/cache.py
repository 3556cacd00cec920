from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


def cache_key(word: str, language: str) -> str:
    """Cache key format: "{word}:{language}" with the word lowercased."""
    return f"{word.lower()}:{language}"


@dataclass
class _Entry:
    value: str
    expires_at: float  # clock reading after which the entry is stale


class DescriptionCache:
    """
    Time-limited store for generated word descriptions.

    Notes
    -----
    - Build one per owner (e.g. one per Streamlit session) and pass it to
      `ai_text.generate_text`; there is no shared module-level instance.
    - `clock` returns seconds and defaults to `time.monotonic`; tests inject a
      fake clock to step over expiry without sleeping.
    """

    def __init__(self, ttl_minutes: float = 30, clock: Callable[[], float] = time.monotonic) -> None:
        self.default_ttl_seconds = ttl_minutes * 60
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}

    def add(self, word: str, language: str, description: str, ttl_seconds: Optional[float] = None) -> None:
        """Store `description`; `ttl_seconds` overrides the default TTL for this entry."""
        key = cache_key(word, language)
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._entries[key] = _Entry(value=description, expires_at=self._clock() + ttl)
        logger.debug("Cache: added %s", key)

    def get(self, word: str, language: str) -> Optional[str]:
        """Return the cached description, or None if missing or expired."""
        key = cache_key(word, language)
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache: miss for %s", key)
            return None
        if entry.expires_at <= self._clock():
            logger.debug("Cache: expired %s", key)
            del self._entries[key]
            return None
        logger.debug("Cache: hit for %s", key)
        return entry.value

    def has(self, word: str, language: str) -> bool:
        key = cache_key(word, language)
        entry = self._entries.get(key)
        if entry is None:
            return False
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return False
        return True

    def clear(self) -> None:
        self._entries.clear()
        logger.debug("Cache: cleared all entries")

    def clean_expired(self) -> int:
        """Drop every stale entry and return how many were removed."""
        now = self._clock()
        stale = [k for k, e in self._entries.items() if e.expires_at <= now]
        for k in stale:
            del self._entries[k]
        if stale:
            logger.debug("Cache: cleaned up %d expired entries", len(stale))
        return len(stale)

    def size(self) -> int:
        """Number of live entries."""
        self.clean_expired()
        return len(self._entries)
