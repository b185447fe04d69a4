# periods.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass(frozen=True)
class Period:
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class PeriodPair:
    current: Period
    previous: Period


def build_periods(
    days: int,
    now: Optional[datetime] = None,
) -> PeriodPair:
    """
    Resolve the current window ending now and the previous window of the
    same length immediately before it.

    days: window length, in fixed 24h units (no DST adjustment)
    now: end of the current window (default: current UTC instant;
         naive values are taken as UTC)

    Returns:
        PeriodPair with previous.end == current.start
    """
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise ValueError(f"days must be a positive integer, got {days!r}")

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        # aware arithmetic is wall-clock; do it on UTC instants
        now = now.astimezone(timezone.utc)

    span = timedelta(days=days)

    current_start = now - span
    previous_end = current_start
    previous_start = previous_end - span

    return PeriodPair(
        current=Period(start=current_start, end=now),
        previous=Period(start=previous_start, end=previous_end),
    )
