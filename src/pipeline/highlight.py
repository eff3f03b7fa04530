"""Transient "new match" marking.

The tracker holds ids only and owns no timer; whoever displays the
highlight decides when to clear it.
"""

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class NewMatchTracker:
    """Settable, clearable set of freshly discovered match ids.

    Usage::

        tracker = NewMatchTracker()
        tracker.mark([m.id for m in found])
        if tracker.is_new(match.id):
            ...  # highlight
        tracker.discard(ids)  # after the display delay
    """

    def __init__(self) -> None:
        self._ids: frozenset[str] = frozenset()

    def mark(self, match_ids: Iterable[str]) -> None:
        """Replace the current set with ``match_ids``."""
        self._ids = frozenset(match_ids)
        logger.debug("NewMatchTracker: marked %d matches", len(self._ids))

    def is_new(self, match_id: str) -> bool:
        return match_id in self._ids

    def discard(self, match_ids: Iterable[str]) -> None:
        """Unmark only the given ids, leaving any newer batch in place."""
        self._ids = self._ids - frozenset(match_ids)

    def clear(self) -> None:
        self._ids = frozenset()

    @property
    def ids(self) -> frozenset[str]:
        return self._ids

    def __len__(self) -> int:
        return len(self._ids)
