from __future__ import annotations

import datetime as dt

from mdt8.schemas import TrackedDay, TrackerState
from mdt8.services import DayTracker

UTC = dt.timezone.utc


def test_same_day_is_current(tracker: DayTracker, sample_now: dt.datetime) -> None:
    later_that_day = sample_now.replace(hour=23, minute=59, second=59)
    assert tracker.is_current_day(later_that_day)
    assert not tracker.roll_day_if_needed(later_that_day)
    assert tracker.state.prior_days == []
    assert tracker.state.tracking_date == sample_now


def test_rollover_commits_active_session_into_old_day() -> None:
    day_d = dt.datetime(2024, 3, 14, 8, 0, tzinfo=UTC)
    now = dt.datetime(2024, 3, 15, 0, 0, 30, tzinfo=UTC)
    state = TrackerState(
        tracking_date=day_d,
        completed_today_seconds=1800,
        current_session_start=now - dt.timedelta(seconds=60),
    )
    tracker = DayTracker(state, clock=lambda: now)

    assert tracker.roll_day_if_needed(now)

    assert state.prior_days == [TrackedDay(year=2024, ordinal=74, completed_seconds=1860)]
    assert state.tracking_date == now
    assert state.completed_today_seconds == 0
    assert state.current_session_start is None
    assert not tracker.is_session_active()


def test_rollover_is_idempotent_for_same_now(tracker: DayTracker, sample_now: dt.datetime) -> None:
    tracker.state.completed_today_seconds = 900
    tomorrow = sample_now + dt.timedelta(days=1)

    assert tracker.roll_day_if_needed(tomorrow)
    snapshot = tracker.state.model_copy(deep=True)
    assert not tracker.roll_day_if_needed(tomorrow)
    assert tracker.state == snapshot
    assert len(tracker.state.prior_days) == 1


def test_gap_of_several_days_produces_single_entry(tracker: DayTracker, sample_now: dt.datetime) -> None:
    tracker.state.completed_today_seconds = 42
    a_week_later = sample_now + dt.timedelta(days=7)

    assert tracker.roll_day_if_needed(a_week_later)

    assert tracker.state.prior_days == [TrackedDay(year=2024, ordinal=74, completed_seconds=42)]
    assert tracker.state.tracking_date == a_week_later


def test_rollover_across_new_year() -> None:
    state = TrackerState(tracking_date=dt.datetime(2023, 12, 31, 21, 0, tzinfo=UTC), completed_today_seconds=5)
    tracker = DayTracker(state)
    new_year = dt.datetime(2024, 1, 1, 7, 0, tzinfo=UTC)

    assert tracker.roll_day_if_needed(new_year)
    assert state.prior_days[-1] == TrackedDay(year=2023, ordinal=365, completed_seconds=5)


def test_same_ordinal_in_different_year_rolls() -> None:
    state = TrackerState(tracking_date=dt.datetime(2023, 3, 15, 9, 0, tzinfo=UTC))
    tracker = DayTracker(state)
    next_year = dt.datetime(2024, 3, 14, 9, 0, tzinfo=UTC)

    assert next_year.timetuple().tm_yday == state.tracking_date.timetuple().tm_yday
    assert not tracker.is_current_day(next_year)
    assert tracker.roll_day_if_needed(next_year)


def test_day_comparison_uses_the_current_offset() -> None:
    tracked = dt.datetime(2024, 3, 14, 23, 30, tzinfo=UTC)
    tracker = DayTracker(TrackerState(tracking_date=tracked))
    berlin_summer = dt.timezone(dt.timedelta(hours=2))

    # 01:45 at +02:00 on the 15th is 23:45 UTC on the 14th; in local terms the
    # tracked timestamp is already the 15th as well.
    now = dt.datetime(2024, 3, 15, 1, 45, tzinfo=berlin_summer)
    assert tracker.is_current_day(now)
    assert not tracker.roll_day_if_needed(now)


def test_rollover_without_session_keeps_history_order(tracker: DayTracker, sample_now: dt.datetime) -> None:
    for offset, minutes in enumerate([10, 20, 30], start=1):
        tracker.adjust(minutes)
        tracker.roll_day_if_needed(sample_now + dt.timedelta(days=offset))

    assert [day.completed_seconds for day in tracker.state.prior_days] == [600, 1200, 1800]
    assert [day.ordinal for day in tracker.state.prior_days] == [74, 75, 76]
    assert tracker.state.completed_today_seconds == 0
