"""Skill compatibility test and match discovery.

Discovery for a new profile runs once against a snapshot of the existing
profiles, before the new profile is stored:
  a. existing teaches what new wants  -> Match(teacher=existing, learner=new)
  b. new teaches what existing wants  -> Match(teacher=new, learner=existing)
Both checks run for every existing profile, (a) before (b).
"""

import itertools
import logging
from collections.abc import Iterable

from src.core.schemas import Match, Profile

logger = logging.getLogger(__name__)


def is_compatible(desired: str, offered: str) -> bool:
    """Return True if either skill text contains the other (case-insensitive).

    Symmetric in its arguments. An empty string is contained in anything.
    """
    desired_lower = desired.lower()
    offered_lower = offered.lower()
    return desired_lower in offered_lower or offered_lower in desired_lower


class MatchEngine:
    """Finds the matches a new profile creates.

    Stateful only in its id sequence: match ids are
    ``{teacher_id}-{learner_id}-{seq}`` so repeated pairings never collide.
    """

    def __init__(self) -> None:
        self._seq = itertools.count(1)

    def discover(
        self,
        new_profile: Profile,
        existing_profiles: Iterable[Profile],
    ) -> list[Match]:
        found: list[Match] = []
        for existing in existing_profiles:
            if existing.id == new_profile.id:
                continue
            if is_compatible(new_profile.desired_skill, existing.offered_skill):
                found.append(self._match(teacher=existing, learner=new_profile))
            if is_compatible(existing.desired_skill, new_profile.offered_skill):
                found.append(self._match(teacher=new_profile, learner=existing))
        logger.debug("MatchEngine: %d matches for profile %s", len(found), new_profile.id)
        return found

    def _match(self, *, teacher: Profile, learner: Profile) -> Match:
        return Match(
            id=f"{teacher.id}-{learner.id}-{next(self._seq)}",
            teacher=teacher,
            learner=learner,
            matched_skill=teacher.offered_skill,
        )
