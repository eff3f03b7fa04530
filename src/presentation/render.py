"""Plain-text views of session state for the CLI."""

from collections.abc import Callable, Sequence

from src.core.schemas import Match, Profile

NEW_MARKER = "*NEW*"


def render_members(profiles: Sequence[Profile], date_format: str = "%Y-%m-%d") -> str:
    if not profiles:
        return "No members found."
    lines = [f"Community Members ({len(profiles)})"]
    for p in profiles:
        lines.append(
            f"  {p.name} ({p.country}) teaches '{p.offered_skill}', "
            f"wants '{p.desired_skill}', joined {p.created_at.strftime(date_format)}"
        )
    return "\n".join(lines)


def render_matches(
    matches: Sequence[Match],
    is_new: Callable[[str], bool],
    date_format: str = "%Y-%m-%d",
) -> str:
    if not matches:
        return "No matches yet."
    lines = [f"Skill Matches ({len(matches)})"]
    for m in matches:
        marker = f" {NEW_MARKER}" if is_new(m.id) else ""
        lines.append(
            f"  {m.teacher.name} ({m.teacher.country}) -> "
            f"{m.learner.name} ({m.learner.country}): "
            f"{m.matched_skill}, found {m.found_at.strftime(date_format)}{marker}"
        )
    return "\n".join(lines)


def render_spotlight(match: Match | None) -> str:
    """Random match popup."""
    if match is None:
        return "No matches yet."
    return "\n".join([
        "Random Match!",
        f"  Teacher: {match.teacher.name} ({match.teacher.country}) can teach {match.teacher.offered_skill}",
        f"  Learner: {match.learner.name} ({match.learner.country}) wants to learn {match.learner.desired_skill}",
        f"  Skill Match: {match.matched_skill}",
    ])
