"""
Reading and writing the persisted tracker record.

The record is a single JSON document. A missing or unreadable file is never
fatal: callers fall back to a fresh default record which the next save
overwrites. A failed save is reported to the caller.
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError

from .config import Settings
from .errors import LoadFailure, SaveFailure, StateFileMissing
from .schemas import TrackerState

logger = logging.getLogger(__name__)


def load_state(path: Path) -> TrackerState:
    """Load the record at ``path``, raising ``LoadFailure`` when it cannot be used."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise StateFileMissing(f"State file not found: {path}", path=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadFailure(f"Could not read state file {path}: {exc}", path=path) from exc

    try:
        state = TrackerState.model_validate_json(raw)
    except ValidationError as exc:
        raise LoadFailure(f"Invalid state file {path}: {exc}", path=path) from exc

    logger.debug("Loaded state from %s (%d prior days)", path, len(state.prior_days))
    return state


def save_state(state: TrackerState, path: Path) -> None:
    """Write the full record to ``path``, replacing any previous content."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(state.to_json() + "\n", encoding="utf-8")
    except OSError as exc:
        raise SaveFailure(f"Could not write state file '{path}': {exc}", path=path) from exc
    logger.debug("Saved state to %s", path)


def load_or_default(
    path: Path,
    settings: Settings,
    now: dt.datetime,
) -> Tuple[TrackerState, Optional[str]]:
    """Load the record, or build a default one plus a notice explaining why."""
    try:
        return load_state(path), None
    except LoadFailure as exc:
        logger.debug("Falling back to default state: %s", exc)
        notice = f"Could not load state: {exc}\nCreating new state file at '{path}'."
        return TrackerState.default(now, goal_minutes=settings.default_goal_minutes), notice


__all__ = ["load_state", "save_state", "load_or_default"]
