"""Session context: wires validation, stores, match engine, and new-match tracker.

Submission flow (one atomic step):
  1. Validate the four fields (nothing is stored on failure)
  2. Build the profile
  3. Discover matches against a snapshot of existing profiles
  4. Prepend matches, then store the profile
  5. Mark the matches as new and notify subscribers
"""

import json
import logging
import random
from collections.abc import Callable
from typing import NamedTuple

from pydantic import ValidationError

from src.core.config import Settings
from src.core.schemas import Match, Profile, ProfileSubmission
from src.core.store import MatchStore, ProfileStore, search_predicate
from src.pipeline.highlight import NewMatchTracker
from src.pipeline.matcher import MatchEngine

logger = logging.getLogger(__name__)


class SubmissionResult(NamedTuple):
    """The stored profile and the matches its submission created."""

    profile: Profile
    matches: list[Match]


SubmissionListener = Callable[[SubmissionResult], None]


class SkillSwapSession:
    """All state for one directory session.

    Build with :meth:`create`; :meth:`reset` returns it to the empty state.
    """

    def __init__(self, settings: Settings, rng: random.Random) -> None:
        self.settings = settings
        self.profiles = ProfileStore()
        self.matches = MatchStore()
        self.new_matches = NewMatchTracker()
        self._engine = MatchEngine()
        self._rng = rng
        self._listeners: list[SubmissionListener] = []

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> "SkillSwapSession":
        settings = settings or Settings()
        if rng is None:
            rng = random.Random(settings.session.random_seed)
        return cls(settings, rng)

    def reset(self) -> None:
        """Drop all profiles, matches and highlights. Subscribers are kept."""
        self.profiles.clear()
        self.matches.clear()
        self.new_matches.clear()
        self._engine = MatchEngine()
        logger.info("Session reset")

    def submit_profile(
        self,
        name: str,
        country: str,
        offered_skill: str,
        desired_skill: str,
    ) -> SubmissionResult:
        """Validate, match and store a new profile.

        Raises ValidationError if any field is empty; the session is left
        untouched in that case.
        """
        try:
            submission = ProfileSubmission(
                name=name,
                country=country,
                offered_skill=offered_skill,
                desired_skill=desired_skill,
            )
        except ValidationError as e:
            logger.warning("Rejected submission: %d invalid field(s)", e.error_count())
            raise

        profile = Profile.from_submission(submission)
        found = self._engine.discover(profile, self.profiles.all())
        self.matches.extend(found)
        self.profiles.add(profile)
        if found:
            self.new_matches.mark(m.id for m in found)

        logger.info(
            "Profile '%s' submitted (teaches '%s', wants '%s'): %d new matches",
            profile.name, profile.offered_skill, profile.desired_skill, len(found),
        )

        result = SubmissionResult(profile=profile, matches=found)
        self._notify(result)
        return result

    def subscribe(self, listener: SubmissionListener) -> Callable[[], None]:
        """Call ``listener`` after every completed submission.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def list_profiles(self) -> tuple[Profile, ...]:
        return self.profiles.all()

    def list_matches(self) -> tuple[Match, ...]:
        return self.matches.all()

    def search_profiles(self, term: str) -> list[Profile]:
        return list(self.profiles.filter(search_predicate(term)))

    def is_new(self, match_id: str) -> bool:
        return self.new_matches.is_new(match_id)

    def clear_new(self, match_ids: list[str] | None = None) -> None:
        """Clear highlights: all of them, or only ``match_ids``."""
        if match_ids is None:
            self.new_matches.clear()
        else:
            self.new_matches.discard(match_ids)

    def pick_random_match(self) -> Match | None:
        return self.matches.pick_random(self._rng)

    def _notify(self, result: SubmissionResult) -> None:
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception:
                logger.exception("Submission listener %r failed", listener)


def export_session_json(session: SkillSwapSession) -> str:
    """Export profiles and matches as a JSON string."""
    data = {
        "profiles": [
            {
                "id": p.id,
                "name": p.name,
                "country": p.country,
                "offered_skill": p.offered_skill,
                "desired_skill": p.desired_skill,
                "created_at": p.created_at.isoformat(),
            }
            for p in session.list_profiles()
        ],
        "matches": [
            {
                "id": m.id,
                "teacher_id": m.teacher.id,
                "teacher": m.teacher.name,
                "learner_id": m.learner.id,
                "learner": m.learner.name,
                "matched_skill": m.matched_skill,
                "found_at": m.found_at.isoformat(),
                "is_new": session.is_new(m.id),
            }
            for m in session.list_matches()
        ],
    }
    return json.dumps(data, indent=2)
