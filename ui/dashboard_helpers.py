import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from domain.models import DEFAULT_PERIOD_DAYS, TechniqueField, TrainingSession
from domain.periods import Period, PeriodPair, build_periods
from domain.stats import AggregateStats, calculate_stats, compute_stat_deltas
from domain.techniques import RankedTechnique, calculate_top_techniques
from infrastructure.session_cache import PeriodKind, SessionCache

logger = logging.getLogger(__name__)

FetchSessions = Callable[[datetime, datetime], List[TrainingSession]]


@dataclass(frozen=True)
class DashboardMetrics:
    days: int
    periods: PeriodPair
    current: AggregateStats
    previous: AggregateStats
    top_attacks: List[RankedTechnique]
    top_defenses: List[RankedTechnique]
    deltas: Dict[str, float]


class DaysSelector:
    """Currently chosen comparison window, in days."""

    def __init__(self, days: int = DEFAULT_PERIOD_DAYS) -> None:
        self._days = DEFAULT_PERIOD_DAYS
        self.set(days)

    @property
    def value(self) -> int:
        return self._days

    def set(self, days: int) -> None:
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise ValueError(f"days must be a positive integer, got {days!r}")
        self._days = days


def load_period_sessions(
    fetch: FetchSessions,
    periods: PeriodPair,
    days: int,
    cache: Optional[SessionCache] = None,
) -> Tuple[List[TrainingSession], List[TrainingSession]]:
    """
    Fetch (current, previous) sessions, both windows in parallel.

    Results are cached under the days value the request was made for.
    Fetch errors propagate unchanged.
    """
    windows: Dict[PeriodKind, Period] = {
        PeriodKind.CURRENT: periods.current,
        PeriodKind.PREVIOUS: periods.previous,
    }

    results: Dict[PeriodKind, List[TrainingSession]] = {}
    missing: List[PeriodKind] = []

    for kind in windows:
        cached = cache.get(kind, days) if cache is not None else None
        if cached is not None:
            logger.debug("Cache hit for %s/%s", kind.value, days)
            results[kind] = cached
        else:
            missing.append(kind)

    if missing:
        with ThreadPoolExecutor(max_workers=len(missing)) as pool:
            futures = {
                kind: pool.submit(fetch, windows[kind].start, windows[kind].end)
                for kind in missing
            }
            for kind, future in futures.items():
                sessions = future.result()
                results[kind] = sessions
                if cache is not None:
                    cache.put(kind, days, sessions)

    return results[PeriodKind.CURRENT], results[PeriodKind.PREVIOUS]


def build_dashboard_metrics(
    days: int,
    periods: PeriodPair,
    current_sessions: List[TrainingSession],
    previous_sessions: List[TrainingSession],
) -> DashboardMetrics:
    current = calculate_stats(current_sessions)
    previous = calculate_stats(previous_sessions)

    return DashboardMetrics(
        days=days,
        periods=periods,
        current=current,
        previous=previous,
        top_attacks=calculate_top_techniques(current_sessions, TechniqueField.ATTACKS),
        top_defenses=calculate_top_techniques(current_sessions, TechniqueField.DEFENSES),
        deltas=compute_stat_deltas(current, previous),
    )


def load_dashboard(
    fetch: FetchSessions,
    days: int,
    cache: Optional[SessionCache] = None,
    now: Optional[datetime] = None,
) -> DashboardMetrics:
    periods = build_periods(days, now)
    current_sessions, previous_sessions = load_period_sessions(
        fetch, periods, days, cache
    )
    return build_dashboard_metrics(days, periods, current_sessions, previous_sessions)
