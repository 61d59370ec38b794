from __future__ import annotations

from pathlib import Path
from typing import Optional


class Mdt8Error(RuntimeError):
    """Base class for all tracker errors."""


class TrackerError(Mdt8Error):
    """A session operation that could not be carried out."""


class AlreadyInSession(TrackerError):
    def __init__(self) -> None:
        super().__init__("There is already a session in progress.")


class NoActiveSession(TrackerError):
    def __init__(self) -> None:
        super().__init__("There is no session in progress.")


class LoadFailure(Mdt8Error):
    """The state file could not be read or parsed."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class StateFileMissing(LoadFailure):
    pass


class SaveFailure(Mdt8Error):
    """The state file could not be written."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "Mdt8Error",
    "TrackerError",
    "AlreadyInSession",
    "NoActiveSession",
    "LoadFailure",
    "StateFileMissing",
    "SaveFailure",
]
