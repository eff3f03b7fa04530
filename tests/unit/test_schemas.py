"""Tests for core schemas: ProfileSubmission, Profile, Match."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from src.core.schemas import Match, Profile, ProfileSubmission


def _submission(**overrides: object) -> ProfileSubmission:
    defaults: dict[str, object] = {
        "name": "Ana",
        "country": "Spain",
        "offered_skill": "Spanish",
        "desired_skill": "Guitar",
    }
    defaults.update(overrides)
    return ProfileSubmission(**defaults)  # type: ignore[arg-type]


class TestProfileSubmission:
    def test_valid(self) -> None:
        s = _submission()
        assert s.name == "Ana"
        assert s.offered_skill == "Spanish"

    def test_keeps_text_as_typed(self) -> None:
        s = _submission(name="  Ana  ", desired_skill=" Guitar ")
        assert s.name == "  Ana  "
        assert s.desired_skill == " Guitar "

    @pytest.mark.parametrize("field", ["name", "country", "offered_skill", "desired_skill"])
    def test_empty_field_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            _submission(**{field: ""})

    def test_blank_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _submission(country="   ")

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProfileSubmission(name="Ana", country="Spain", offered_skill="Spanish")  # type: ignore[call-arg]

    def test_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            _submission(name="")

    def test_case_preserved(self) -> None:
        assert _submission(offered_skill="PYTHON").offered_skill == "PYTHON"


class TestProfile:
    def test_from_submission(self) -> None:
        p = Profile.from_submission(_submission())
        assert p.name == "Ana"
        assert p.country == "Spain"
        assert p.desired_skill == "Guitar"
        assert isinstance(p.created_at, datetime)

    def test_ids_unique(self) -> None:
        s = _submission()
        assert Profile.from_submission(s).id != Profile.from_submission(s).id

    def test_frozen(self) -> None:
        p = Profile.from_submission(_submission())
        with pytest.raises(ValidationError):
            p.name = "Other"  # type: ignore[misc]


class TestMatch:
    def test_holds_profile_references(self) -> None:
        teacher = Profile.from_submission(_submission(name="T"))
        learner = Profile.from_submission(_submission(name="L"))
        m = Match(id="t-l-1", teacher=teacher, learner=learner, matched_skill="Spanish")
        assert m.teacher is teacher
        assert m.learner is learner
        assert isinstance(m.found_at, datetime)

    def test_frozen(self) -> None:
        teacher = Profile.from_submission(_submission())
        m = Match(id="x", teacher=teacher, learner=teacher, matched_skill="Spanish")
        with pytest.raises(ValidationError):
            m.matched_skill = "Other"  # type: ignore[misc]
