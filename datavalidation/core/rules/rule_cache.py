"""
In-memory cache of parsed rule sets.

Entries never expire on their own; they are dropped only by invalidate().
Writers replace the whole entry table under a lock, so a reader always sees
either the old table or the new one.
"""

import threading

from datavalidation.core.models import RuleSet
from datavalidation.observability.logger import get_logger
from datavalidation.observability.metrics import cache_invalidations_total, increment_counter

logger = get_logger(__name__)


class RuleSetCache:
    """Copy-on-write mapping of rule-set identifier to RuleSet."""

    def __init__(self):
        self._entries: dict[str, RuleSet] = {}
        self._lock = threading.Lock()

    def get(self, identifier: str) -> RuleSet | None:
        return self._entries.get(identifier)

    def put(self, identifier: str, rule_set: RuleSet) -> None:
        with self._lock:
            entries = dict(self._entries)
            entries[identifier] = rule_set
            self._entries = entries

    def invalidate(self, identifier: str | None = None) -> int:
        """
        Drop one cached rule set, or all of them.

        Args:
            identifier: Entry to drop; None clears the cache

        Returns:
            Number of entries removed
        """
        with self._lock:
            if identifier is None:
                removed = len(self._entries)
                self._entries = {}
            elif identifier in self._entries:
                entries = dict(self._entries)
                del entries[identifier]
                self._entries = entries
                removed = 1
            else:
                removed = 0

        if removed:
            increment_counter(cache_invalidations_total, removed)
            logger.info(
                "Invalidated cached rule sets",
                extra={"rule_set": identifier or "*", "removed": removed},
            )
        return removed

    def identifiers(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)
