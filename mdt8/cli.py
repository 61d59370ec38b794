"""
Command-line interface for the meditation tracker.

Each run loads the state file, rolls the tracked day forward when the date
changed, executes one command, prints a single result line and saves the
state again, whether or not the command succeeded.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from . import __version__
from .commands import Cancel, Command, Mod, Start, Status, Stop
from .config import Settings, resolve_state_path
from .errors import SaveFailure
from .services import CommandResult, DayTracker, execute
from .storage import load_or_default, save_state
from .utils import format_duration, make_clock

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


# =============================================================================
# ARGUMENTS
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="mdt8",
        description=(
            "Aids in the cultivation of a regular mindfulness meditation practice. "
            "Use 'mdt8 start' and 'mdt8 stop' to log meditation time, "
            "and 'mdt8 status' to view your meditation time today."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="FILE",
        help=(
            "The state file to use. By default '$XDG_CONFIG_HOME/mdt8.json'. "
            "Set 'goalMinutes' in that file to set your daily goal."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print debug logging to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser("status", help="Prints the day's meditation stats.")
    subparsers.add_parser("start", help="Starts the session timer.")
    subparsers.add_parser("stop", help="Stops the session timer, adding the time measured to the day's tally.")
    subparsers.add_parser("cancel", help="Stops the session timer, discarding the time.")
    mod_parser = subparsers.add_parser("mod", help="Manually add or subtract time from the day's tally.")
    mod_parser.add_argument(
        "value",
        type=int,
        metavar="VALUE",
        help="The value by which to change the tally, in minutes. May be negative.",
    )
    return parser


def command_from_args(args: argparse.Namespace) -> Optional[Command]:
    if args.command == "status":
        return Status()
    if args.command == "start":
        return Start()
    if args.command == "stop":
        return Stop()
    if args.command == "cancel":
        return Cancel()
    if args.command == "mod":
        return Mod(minutes=args.value)
    return None


# =============================================================================
# OUTPUT
# =============================================================================

def render_result(tracker: DayTracker, result: CommandResult) -> List[str]:
    command = result.command
    if isinstance(command, Status):
        return [
            f"You plan to spend {format_duration(tracker.goal_duration())} per day on mindfulness.",
            f"So far, you've spent {format_duration(tracker.completed_today_duration())}.",
        ]
    if result.error is not None:
        if isinstance(command, Start):
            return [f"Could not start session: {result.error}"]
        if isinstance(command, Stop):
            return [f"Could not stop session: {result.error}"]
        if isinstance(command, Cancel):
            return [f"Could not cancel session: {result.error}"]
        return [f"Unknown error: {result.error}"]
    if isinstance(command, Start):
        return ["Started timer.", "Remember to breathe deeply and relax."]
    if isinstance(command, Stop):
        return ["Stopped timer."]
    if isinstance(command, Cancel):
        return ["Cancelled ongoing session."]
    if isinstance(command, Mod):
        return [f"Modified today's total time by {command.minutes} minutes."]
    return []


def _configure_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


# =============================================================================
# ENTRY POINT
# =============================================================================

def run(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    """Run one invocation and return the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    command = command_from_args(args)
    if command is None:
        parser.print_help()
        return 1

    if settings is None:
        try:
            settings = Settings()
        except ValidationError as exc:
            print(f"Invalid configuration: {exc}", file=sys.stderr)
            return 1
    _configure_logging(settings, args.verbose)

    clock = make_clock(settings.tzinfo())
    path = resolve_state_path(settings, args.config)
    now = clock()

    state, notice = load_or_default(path, settings, now)
    if notice:
        print(notice)

    tracker = DayTracker(state, clock=clock)
    tracker.roll_day_if_needed(now)

    result = execute(tracker, command)
    for line in render_result(tracker, result):
        print(line)

    try:
        save_state(tracker.state, path)
    except SaveFailure as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


def main() -> None:
    sys.exit(run())


__all__ = ["create_parser", "command_from_args", "render_result", "run", "main"]
