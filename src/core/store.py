"""In-memory, append-only stores for profiles and matches.

Both stores keep most-recent-first order for display. Order has no effect
on matching.
"""

import logging
import random
from collections.abc import Callable, Iterable, Iterator

from src.core.schemas import Match, Profile

logger = logging.getLogger(__name__)

ProfilePredicate = Callable[[Profile], bool]


class ProfileStore:
    """Every submitted profile, newest first."""

    def __init__(self) -> None:
        self._profiles: list[Profile] = []

    def add(self, profile: Profile) -> Profile:
        self._profiles.insert(0, profile)
        logger.debug("ProfileStore: added %s (%d total)", profile.id, len(self._profiles))
        return profile

    def all(self) -> tuple[Profile, ...]:
        return tuple(self._profiles)

    def filter(self, predicate: ProfilePredicate) -> Iterator[Profile]:
        """Lazily yield profiles accepted by ``predicate``."""
        return (p for p in self.all() if predicate(p))

    def clear(self) -> None:
        self._profiles.clear()

    def __len__(self) -> int:
        return len(self._profiles)


class MatchStore:
    """Every match ever discovered, newest batch first.

    Batches are prepended as a unit so a discovery run keeps its own order.
    Nothing is deduplicated across runs.
    """

    def __init__(self) -> None:
        self._matches: list[Match] = []
        self._by_id: dict[str, Match] = {}

    def extend(self, matches: Iterable[Match]) -> None:
        batch = list(matches)
        if not batch:
            return
        self._matches[:0] = batch
        for m in batch:
            self._by_id[m.id] = m
        logger.debug("MatchStore: stored %d matches (%d total)", len(batch), len(self._matches))

    def all(self) -> tuple[Match, ...]:
        return tuple(self._matches)

    def get(self, match_id: str) -> Match | None:
        return self._by_id.get(match_id)

    def pick_random(self, rng: random.Random) -> Match | None:
        """Pick one match uniformly, or None when the store is empty."""
        if not self._matches:
            return None
        return rng.choice(self._matches)

    def clear(self) -> None:
        self._matches.clear()
        self._by_id.clear()

    def __len__(self) -> int:
        return len(self._matches)


def search_predicate(term: str) -> ProfilePredicate:
    """Case-insensitive member search over name, country and both skills.

    An empty term matches everyone.
    """
    needle = term.lower()

    def _matches(profile: Profile) -> bool:
        return (
            needle in profile.name.lower()
            or needle in profile.country.lower()
            or needle in profile.offered_skill.lower()
            or needle in profile.desired_skill.lower()
        )

    return _matches
