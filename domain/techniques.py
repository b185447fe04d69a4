# techniques.py

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List

from domain.models import TechniqueField, TrainingSession, techniques_for

TOP_TECHNIQUES_LIMIT = 3


@dataclass(frozen=True)
class RankedTechnique:
    name: str
    count: int
    percentage: float


def count_techniques(
    sessions: Iterable[TrainingSession],
    which: TechniqueField,
) -> Counter:
    """
    Count technique occurrences by name, in first-seen order.

    Names are compared exactly (no case folding or trimming); entries with
    an empty name are skipped.
    """
    return Counter(
        tech.name
        for s in sessions
        for tech in techniques_for(s, which)
        if tech.name
    )


def calculate_top_techniques(
    sessions: Iterable[TrainingSession],
    which: TechniqueField,
    limit: int = TOP_TECHNIQUES_LIMIT,
) -> List[RankedTechnique]:
    """
    Rank the most frequent techniques for one side of the mat.

    Percentages are relative to the most frequent technique, so the
    first entry is always 100.
    """
    counts = count_techniques(sessions, which)
    if not counts:
        return []

    max_count = max(counts.values())

    # most_common() keeps first-seen order among ties
    ranked = counts.most_common(limit)

    return [
        RankedTechnique(
            name=name,
            count=count,
            percentage=count / max_count * 100,
        )
        for name, count in ranked
    ]
