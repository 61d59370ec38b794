from __future__ import annotations

import datetime as dt
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from mdt8.config import Settings
from mdt8.schemas import TrackerState
from mdt8.services import DayTracker

UTC = dt.timezone.utc


class FakeClock:
    def __init__(self, now: dt.datetime) -> None:
        self.current = now

    def __call__(self) -> dt.datetime:
        return self.current

    def advance(self, **kwargs: float) -> dt.datetime:
        self.current = self.current + dt.timedelta(**kwargs)
        return self.current


@pytest.fixture()
def sample_now() -> dt.datetime:
    return dt.datetime(2024, 3, 14, 9, 30, tzinfo=UTC)


@pytest.fixture()
def clock(sample_now: dt.datetime) -> FakeClock:
    return FakeClock(sample_now)


@pytest.fixture()
def state(sample_now: dt.datetime) -> TrackerState:
    return TrackerState.default(sample_now)


@pytest.fixture()
def tracker(state: TrackerState, clock: FakeClock) -> DayTracker:
    return DayTracker(state, clock=clock)


@pytest.fixture()
def state_path() -> Generator[Path, None, None]:
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "config" / "mdt8.json"


@pytest.fixture()
def settings(state_path: Path) -> Settings:
    return Settings(state_file=state_path, timezone="UTC")
