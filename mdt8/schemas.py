from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _require_aware(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("timestamps must carry a UTC offset")
    return value


class TrackedDay(BaseModel):
    """A finished day in the history. Never changed once recorded."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    year: int
    ordinal: int = Field(ge=1, le=366)
    completed_seconds: int = Field(ge=0)


class TrackerState(BaseModel):
    """The live record persisted between invocations."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    goal_minutes: int = Field(default=30, ge=0)
    tracking_date: dt.datetime
    completed_today_seconds: int = Field(default=0, ge=0)
    current_session_start: Optional[dt.datetime] = None
    prior_days: List[TrackedDay] = Field(default_factory=list)

    @field_validator("tracking_date")
    @classmethod
    def _aware_tracking_date(cls, value: dt.datetime) -> dt.datetime:
        return _require_aware(value)

    @field_validator("current_session_start")
    @classmethod
    def _aware_session_start(cls, value: Optional[dt.datetime]) -> Optional[dt.datetime]:
        if value is None:
            return None
        return _require_aware(value)

    @classmethod
    def default(cls, now: dt.datetime, goal_minutes: int = 30) -> "TrackerState":
        return cls(goal_minutes=goal_minutes, tracking_date=now)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


__all__ = ["TrackedDay", "TrackerState"]
