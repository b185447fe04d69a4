# stats.py

from dataclasses import dataclass, fields
from typing import Dict, Final, Iterable, List

from domain.models import TrainingSession


@dataclass(frozen=True)
class AggregateStats:
    total_sessions: int = 0
    total_hours: float = 0.0
    total_rounds: int = 0

    total_subs: int = 0
    total_taps: int = 0
    total_sweeps: int = 0
    total_takedowns: int = 0
    total_passes: int = 0
    total_escapes: int = 0

    total_cardio: int = 0
    total_intensity: int = 0

    # --- derived ---
    avg_duration: float = 0.0
    sub_rate: float = 0.0
    defense_index: float = 0.0
    avg_cardio: float = 0.0
    avg_intensity: float = 0.0


# Counters that add up across concatenated session lists.
SUMMED_FIELDS: Final[List[str]] = [
    "total_sessions",
    "total_hours",
    "total_rounds",
    "total_subs",
    "total_taps",
    "total_sweeps",
    "total_takedowns",
    "total_passes",
    "total_escapes",
    "total_cardio",
    "total_intensity",
]


def calculate_stats(sessions: Iterable[TrainingSession]) -> AggregateStats:
    """
    Fold training sessions into period totals and derived ratios.
    """
    totals = dict.fromkeys(SUMMED_FIELDS, 0)

    for s in sessions:
        totals["total_sessions"] += 1
        totals["total_hours"] += s.duration_minutes / 60
        totals["total_rounds"] += s.total_rounds
        totals["total_subs"] += s.submissions
        totals["total_taps"] += s.taps
        totals["total_sweeps"] += s.sweeps
        totals["total_takedowns"] += s.takedowns
        totals["total_passes"] += s.guard_passes
        totals["total_escapes"] += s.escapes
        totals["total_cardio"] += s.cardio_rating
        totals["total_intensity"] += s.intensity_rating

    n = totals["total_sessions"]

    avg_duration = (totals["total_hours"] * 60) / n if n > 0 else 0
    sub_rate = (
        totals["total_subs"] / totals["total_rounds"]
        if totals["total_rounds"] > 0 else 0
    )
    # No taps: fall back to the raw escape count, not 0.
    defense_index = (
        totals["total_escapes"] / totals["total_taps"]
        if totals["total_taps"] > 0 else totals["total_escapes"]
    )
    avg_cardio = totals["total_cardio"] / n if n > 0 else 0
    avg_intensity = totals["total_intensity"] / n if n > 0 else 0

    return AggregateStats(
        **totals,
        avg_duration=avg_duration,
        sub_rate=sub_rate,
        defense_index=defense_index,
        avg_cardio=avg_cardio,
        avg_intensity=avg_intensity,
    )


def compute_stat_deltas(
    current: AggregateStats,
    previous: AggregateStats,
) -> Dict[str, float]:
    """
    Period-over-period change (current - previous) for every metric.
    """
    return {
        f.name: getattr(current, f.name) - getattr(previous, f.name)
        for f in fields(AggregateStats)
    }
