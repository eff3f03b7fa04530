"""CLI entry point for the SkillSwap directory."""

import argparse
import logging
import sys
import time
from collections.abc import Callable
from typing import Any

from src.core.config import Settings, load_submissions
from src.pipeline.session import SkillSwapSession, SubmissionResult, export_session_json
from src.presentation.render import render_matches, render_members, render_spotlight

logger = logging.getLogger(__name__)

INTERACTIVE_HELP = (
    "Commands: add, list, matches, search TERM, random, export, reset, help, quit"
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SkillSwap - match people who can teach a skill with people who want to learn it",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- replay subcommand ---
    replay_parser = subparsers.add_parser(
        "replay",
        help="Submit profiles from a YAML file and show the resulting matches",
    )
    replay_parser.add_argument(
        "--profiles",
        required=True,
        help="Path to a YAML file listing profiles to submit in order",
    )
    replay_parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    replay_parser.add_argument(
        "--search",
        default="",
        help="Only list members whose name, country or skills contain TERM",
    )
    replay_parser.add_argument(
        "--random",
        action="store_true",
        help="Show one randomly selected match",
    )
    replay_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export session state to format (json)",
    )
    replay_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- interactive subcommand ---
    interactive_parser = subparsers.add_parser(
        "interactive",
        help="Submit profiles one at a time from the terminal",
    )
    interactive_parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in settings)",
    )
    interactive_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    return parser


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str | None) -> Settings:
    if path is None:
        return Settings()
    return Settings.from_yaml(path)


class HighlightTimer:
    """Expires new-match highlights a fixed delay after each submission.

    Deadlines are checked on demand via :meth:`expire`, so the session is
    only ever touched from the caller's thread.
    """

    def __init__(
        self,
        session: SkillSwapSession,
        delay_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self._delay = delay_seconds
        self._clock = clock
        self._pending: list[tuple[float, list[str]]] = []
        self.unsubscribe = session.subscribe(self._on_submission)

    def _on_submission(self, result: SubmissionResult) -> None:
        if result.matches:
            deadline = self._clock() + self._delay
            self._pending.append((deadline, [m.id for m in result.matches]))

    def expire(self) -> None:
        now = self._clock()
        still_pending = []
        for deadline, ids in self._pending:
            if deadline <= now:
                self._session.clear_new(ids)
            else:
                still_pending.append((deadline, ids))
        self._pending = still_pending

    def cancel(self) -> None:
        """Drop every pending deadline, e.g. after the session is reset."""
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)


def _entry_field(entry: dict[str, Any], key: str) -> str:
    """Read one field of a YAML profile entry. Missing and null both mean empty."""
    value = entry.get(key)
    return "" if value is None else str(value)


def run_replay(
    session: SkillSwapSession,
    profiles_path: str,
    search: str = "",
    show_random: bool = False,
    export_format: str | None = None,
) -> None:
    """Submit every profile in the file, then print members and matches."""
    entries = load_submissions(profiles_path)
    submitted = 0
    for i, entry in enumerate(entries):
        try:
            session.submit_profile(
                name=_entry_field(entry, "name"),
                country=_entry_field(entry, "country"),
                offered_skill=_entry_field(entry, "offered_skill"),
                desired_skill=_entry_field(entry, "desired_skill"),
            )
        except ValueError as e:
            logger.warning("Skipping profile entry %d: %s", i, e)
            continue
        submitted += 1

    date_format = session.settings.display.date_format
    print(f"Submitted {submitted} of {len(entries)} profiles, "
          f"{len(session.list_matches())} matches found.\n")
    print(render_members(session.search_profiles(search), date_format))
    print()
    print(render_matches(session.list_matches(), session.is_new, date_format))

    if show_random:
        print()
        print(render_spotlight(session.pick_random_match()))

    if export_format == "json":
        print(f"\n{export_session_json(session)}")


def _prompt_field(label: str, input_fn: Callable[[str], str]) -> str:
    return input_fn(f"{label}: ").strip()


def cmd_add(
    session: SkillSwapSession,
    input_fn: Callable[[str], str],
    sleep: Callable[[float], None],
) -> None:
    """Prompt for the four profile fields and submit them."""
    countries = session.settings.display.countries
    name = _prompt_field("Name", input_fn)
    print("Countries: " + ", ".join(countries))
    country = _prompt_field("Country", input_fn)
    offered = _prompt_field("I can teach", input_fn)
    desired = _prompt_field("I want to learn", input_fn)

    print("Finding matches...")
    sleep(session.settings.session.submit_delay_ms / 1000)
    try:
        result = session.submit_profile(name, country, offered, desired)
    except ValueError:
        print("Error: all fields are required.", file=sys.stderr)
        return

    if result.matches:
        print(f"Amazing! {len(result.matches)} new skill match(es) found.")
        print(render_matches(result.matches, session.is_new, session.settings.display.date_format))
    else:
        print(f"Welcome, {result.profile.name}! No matches yet.")


def run_interactive(
    session: SkillSwapSession,
    input_fn: Callable[[str], str] = input,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Read commands until ``quit`` or end of input."""
    timer = HighlightTimer(session, session.settings.session.highlight_seconds, clock)
    date_format = session.settings.display.date_format
    print(INTERACTIVE_HELP)

    while True:
        try:
            line = input_fn("skillswap> ").strip()
        except EOFError:
            break
        timer.expire()
        command, _, arg = line.partition(" ")
        command = command.lower()

        if command in ("quit", "exit"):
            break
        elif command == "add":
            cmd_add(session, input_fn, sleep)
        elif command == "list":
            print(render_members(session.list_profiles(), date_format))
        elif command == "matches":
            print(render_matches(session.list_matches(), session.is_new, date_format))
        elif command == "search":
            print(render_members(session.search_profiles(arg.strip()), date_format))
        elif command == "random":
            print(render_spotlight(session.pick_random_match()))
        elif command == "export":
            print(export_session_json(session))
        elif command == "reset":
            session.reset()
            timer.cancel()
            print("Session cleared.")
        elif command in ("help", ""):
            print(INTERACTIVE_HELP)
        else:
            print(f"Unknown command: {command}")
            print(INTERACTIVE_HELP)

    timer.unsubscribe()


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(2)

    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    session = SkillSwapSession.create(settings)

    if args.command == "replay":
        try:
            run_replay(session, args.profiles, args.search, args.random, args.export)
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        run_interactive(session)


if __name__ == "__main__":
    main()
