from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Optional

from .commands import Cancel, Command, Mod, Start, Status, Stop
from .errors import AlreadyInSession, NoActiveSession, TrackerError
from .schemas import TrackedDay, TrackerState
from .utils import Clock, day_key, local_now

logger = logging.getLogger(__name__)


def _elapsed_seconds(start: dt.datetime, end: dt.datetime) -> int:
    # Whole seconds, fractions dropped. A clock set backwards yields 0.
    return max(0, int((end - start).total_seconds()))


class DayTracker:
    """Session lifecycle and day rollover on top of a ``TrackerState``."""

    def __init__(self, state: TrackerState, clock: Optional[Clock] = None) -> None:
        self.state = state
        self._clock: Clock = clock or local_now

    def now(self) -> dt.datetime:
        return self._clock()

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------
    def is_session_active(self) -> bool:
        return self.state.current_session_start is not None

    def start_session(self) -> None:
        if self.is_session_active():
            raise AlreadyInSession()
        self.state.current_session_start = self.now()
        logger.debug("Session started at %s", self.state.current_session_start.isoformat())

    def stop_session(self) -> None:
        if not self.is_session_active():
            raise NoActiveSession()
        self._commit_session(self.now())

    def cancel_session(self) -> None:
        if not self.is_session_active():
            raise NoActiveSession()
        logger.debug("Session started at %s discarded", self.state.current_session_start.isoformat())
        self.state.current_session_start = None

    def _commit_session(self, end: dt.datetime) -> int:
        start = self.state.current_session_start
        assert start is not None
        elapsed = _elapsed_seconds(start, end)
        self.state.completed_today_seconds += elapsed
        self.state.current_session_start = None
        logger.debug("Session committed: %s seconds", elapsed)
        return elapsed

    # ------------------------------------------------------------------
    # Day tracking
    # ------------------------------------------------------------------
    def is_current_day(self, now: dt.datetime) -> bool:
        tracked = self.state.tracking_date
        if now.tzinfo is not None:
            tracked = tracked.astimezone(now.tzinfo)
        return day_key(now) == day_key(tracked)

    def roll_day_if_needed(self, now: dt.datetime) -> bool:
        """Close out the tracked day when ``now`` falls on another day.

        An active session is committed to the old day first. Only one history
        entry is written, however many days passed since the last run.
        Returns True when a rollover happened.
        """
        if self.is_current_day(now):
            return False

        if self.is_session_active():
            self._commit_session(now)

        previous = self.state.tracking_date
        if now.tzinfo is not None:
            previous = previous.astimezone(now.tzinfo)
        year, ordinal = day_key(previous)
        self.state.prior_days.append(
            TrackedDay(year=year, ordinal=ordinal, completed_seconds=self.state.completed_today_seconds)
        )
        logger.debug(
            "Rolled over from %d-%03d (%d seconds) to %s",
            year,
            ordinal,
            self.state.completed_today_seconds,
            now.date().isoformat(),
        )

        self.state.tracking_date = now
        self.state.completed_today_seconds = 0
        self.state.current_session_start = None
        return True

    # ------------------------------------------------------------------
    # Tally
    # ------------------------------------------------------------------
    def adjust(self, delta_minutes: int) -> None:
        delta = int(delta_minutes) * 60
        if delta >= 0:
            self.state.completed_today_seconds += delta
        else:
            self.state.completed_today_seconds = max(0, self.state.completed_today_seconds + delta)
        logger.debug("Adjusted today's tally by %d minutes", delta_minutes)

    def goal_duration(self) -> dt.timedelta:
        return dt.timedelta(minutes=self.state.goal_minutes)

    def completed_today_duration(self) -> dt.timedelta:
        return dt.timedelta(seconds=self.state.completed_today_seconds)


@dataclass(slots=True)
class CommandResult:
    command: Command
    error: Optional[TrackerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def execute(tracker: DayTracker, command: Command) -> CommandResult:
    """Run one command. Session errors come back in the result, not raised."""
    try:
        if isinstance(command, Start):
            tracker.start_session()
        elif isinstance(command, Stop):
            tracker.stop_session()
        elif isinstance(command, Cancel):
            tracker.cancel_session()
        elif isinstance(command, Mod):
            tracker.adjust(command.minutes)
        elif isinstance(command, Status):
            pass
        else:
            raise TypeError(f"Unsupported command: {command!r}")
    except TrackerError as exc:
        logger.debug("%s failed: %s", type(command).__name__, exc)
        return CommandResult(command=command, error=exc)
    return CommandResult(command=command)


__all__ = ["DayTracker", "CommandResult", "execute"]
