"""Core data models for the skill exchange directory."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _new_profile_id() -> str:
    return uuid4().hex


class ProfileSubmission(BaseModel):
    """The four fields a user fills in to join.

    All fields are required and must contain something other than
    whitespace. Values are kept exactly as typed. A failing submission
    raises ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    offered_skill: str
    desired_skill: str

    @field_validator("name", "country", "offered_skill", "desired_skill")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "field must not be empty"
            raise ValueError(msg)
        return v


class Profile(BaseModel):
    """A submitted member profile.

    Frozen: profiles are never edited or removed within a session.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_profile_id)
    name: str
    country: str
    offered_skill: str
    desired_skill: str
    created_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_submission(cls, submission: ProfileSubmission) -> "Profile":
        return cls(**submission.model_dump())


class Match(BaseModel):
    """One teaching relationship: ``teacher`` can teach what ``learner`` wants."""

    model_config = ConfigDict(frozen=True)

    id: str
    teacher: Profile
    learner: Profile
    matched_skill: str
    found_at: datetime = Field(default_factory=datetime.now)
