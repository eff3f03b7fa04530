"""Configuration models and YAML loaders for the skill exchange session."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_COUNTRIES = [
    "United States", "Canada", "United Kingdom", "Australia", "Germany", "France",
    "Spain", "Italy", "Netherlands", "Sweden", "Norway", "Denmark", "Finland",
    "Japan", "South Korea", "China", "India", "Brazil", "Argentina", "Mexico",
    "South Africa", "Egypt", "Nigeria", "Kenya", "Morocco", "Other",
]

# Alternate spellings accepted in submission files.
_SUBMISSION_ALIASES = {
    "can_teach": "offered_skill",
    "want_to_learn": "desired_skill",
}


class SessionConfig(BaseModel):
    """Timing and randomness for a single session."""

    highlight_seconds: float = Field(default=3.0, ge=0.0)
    submit_delay_ms: int = Field(default=500, ge=0, le=10_000)
    random_seed: int | None = None


class DisplayConfig(BaseModel):
    """Presentation settings consumed by the CLI."""

    countries: list[str] = Field(default_factory=lambda: list(DEFAULT_COUNTRIES))
    date_format: str = "%Y-%m-%d"

    @field_validator("countries")
    @classmethod
    def countries_not_empty(cls, v: list[str]) -> list[str]:
        cleaned = [c.strip() for c in v if c.strip()]
        if not cleaned:
            msg = "countries must not be empty"
            raise ValueError(msg)
        return cleaned


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    session: SessionConfig = Field(default_factory=SessionConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)


def load_submissions(path: str | Path) -> list[dict[str, Any]]:
    """Read profile submissions from a YAML file.

    The file holds either a top-level list of mappings or a mapping with a
    ``profiles`` list. Entries are returned unvalidated so the caller can
    reject them one at a time.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Profiles file not found: {path}"
        raise FileNotFoundError(msg)
    raw = yaml.safe_load(path.read_text())
    if isinstance(raw, dict):
        if "profiles" not in raw:
            msg = f"Profiles file has no 'profiles' key: {path}"
            raise ValueError(msg)
        raw = raw["profiles"]
    if raw is None:
        return []
    if not isinstance(raw, list):
        msg = f"Profiles file must contain a list of profiles: {path}"
        raise ValueError(msg)

    entries: list[dict[str, Any]] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            msg = f"Profile entry {i} is not a mapping"
            raise ValueError(msg)
        entries.append({_SUBMISSION_ALIASES.get(k, k): v for k, v in item.items()})
    return entries
