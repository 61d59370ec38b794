"""Command values handed from the command line to the tracker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(slots=True, frozen=True)
class Status:
    """Show the daily goal and today's total."""


@dataclass(slots=True, frozen=True)
class Start:
    """Start the session timer."""


@dataclass(slots=True, frozen=True)
class Stop:
    """Stop the timer and add the measured time to today's tally."""


@dataclass(slots=True, frozen=True)
class Cancel:
    """Stop the timer and discard the measured time."""


@dataclass(slots=True, frozen=True)
class Mod:
    """Add or subtract whole minutes from today's tally."""

    minutes: int


Command = Union[Status, Start, Stop, Cancel, Mod]


__all__ = ["Command", "Status", "Start", "Stop", "Cancel", "Mod"]
