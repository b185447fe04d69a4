import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Final, Generic, List, Optional, TypeVar


# ---------------------------------------------------------------------
# Dashboard period options (days)
# ---------------------------------------------------------------------

PERIOD_OPTIONS: Final[List[int]] = [7, 14, 30, 45, 60, 90, 180, 365]

DEFAULT_PERIOD_DAYS: Final[int] = 7


# ---------------------------------------------------------------------
# Class / training types
# ---------------------------------------------------------------------

CLASS_TYPES: Final[Dict[str, str]] = {
    "GI": "Gi",
    "NO_GI": "No-Gi",
}

TRAINING_TYPES: Final[Dict[str, str]] = {
    "REGULAR": "Regular class",
    "OPEN_MAT": "Open mat",
    "COMPETITION": "Competition",
    "SEMINAR": "Seminar",
    "DRILL": "Drill",
}


# ---------------------------------------------------------------------
# Session counters (API name -> attribute name)
# ---------------------------------------------------------------------

COUNTER_FIELDS: Final[Dict[str, str]] = {
    "totalRounds": "total_rounds",
    "totalRolls": "total_rolls",
    "submissions": "submissions",
    "taps": "taps",
    "sweeps": "sweeps",
    "takedowns": "takedowns",
    "guardPasses": "guard_passes",
    "escapes": "escapes",
    "cardioRating": "cardio_rating",
    "intensityRating": "intensity_rating",
}


_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp. Values without an offset are taken as UTC.
    """
    # fromisoformat() before 3.11 does not accept a trailing "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    # nor fractions other than 3 or 6 digits (Java sends nanoseconds)
    value = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _techniques_from_api(items: Any) -> List["Technique"]:
    if not isinstance(items, list):
        return []
    return [Technique.from_api(it) for it in items if isinstance(it, dict)]


@dataclass(frozen=True)
class Technique:
    id: Any
    name: str
    alternative_name: Optional[str] = None
    type: Optional[str] = None
    target: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Technique":
        return cls(
            id=payload.get("id"),
            name=payload.get("name") or "",
            alternative_name=payload.get("alternativeName"),
            type=payload.get("type"),
            target=payload.get("target"),
        )


@dataclass(frozen=True)
class TrainingSession:
    id: Any
    session_date: datetime
    duration_minutes: int

    total_rounds: int = 0
    total_rolls: int = 0

    submissions: int = 0
    taps: int = 0
    sweeps: int = 0
    takedowns: int = 0
    guard_passes: int = 0
    escapes: int = 0

    cardio_rating: int = 0
    intensity_rating: int = 0

    submission_techniques: List[Technique] = field(default_factory=list)
    submission_techniques_allowed: List[Technique] = field(default_factory=list)

    # Display-only fields
    techniques: List[Technique] = field(default_factory=list)
    class_type: Optional[str] = None
    training_type: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "TrainingSession":
        """
        Normalize one API training record.

        Missing or null counters become 0 and missing technique lists become
        empty, so reducers can rely on fully populated numeric fields.
        durationMinutes is required.
        """
        duration = payload.get("durationMinutes")
        if duration is None:
            raise ValueError(
                f"Training {payload.get('id')!r} has no durationMinutes"
            )

        counters = {
            attr: int(payload.get(api_name) or 0)
            for api_name, attr in COUNTER_FIELDS.items()
        }

        return cls(
            id=payload.get("id"),
            session_date=parse_timestamp(payload["sessionDate"]),
            duration_minutes=int(duration),
            submission_techniques=_techniques_from_api(
                payload.get("submissionTechniques")
            ),
            submission_techniques_allowed=_techniques_from_api(
                payload.get("submissionTechniquesAllowed")
            ),
            techniques=_techniques_from_api(payload.get("technique")),
            class_type=payload.get("classType"),
            training_type=payload.get("trainingType"),
            description=payload.get("description"),
            **counters,
        )


class TechniqueField(Enum):
    ATTACKS = "attacks"      # moves the user applied
    DEFENSES = "defenses"    # moves applied against the user


def techniques_for(session: TrainingSession, which: TechniqueField) -> List[Technique]:
    if which is TechniqueField.ATTACKS:
        return session.submission_techniques
    if which is TechniqueField.DEFENSES:
        return session.submission_techniques_allowed
    raise ValueError(f"Unknown technique field: {which!r}")


T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @property
    def is_first(self) -> bool:
        return self.page <= 0

    @property
    def is_last(self) -> bool:
        return self.page >= self.total_pages - 1

    @classmethod
    def from_api(
        cls,
        payload: Dict[str, Any],
        parse_item: Callable[[Dict[str, Any]], T],
    ) -> "Page[T]":
        items = payload.get("content") or []
        content = [parse_item(it) for it in items]
        return cls(
            content=content,
            page=int(payload.get("number") or 0),
            size=int(payload.get("size") or len(content)),
            total_elements=int(payload.get("totalElements") or len(content)),
            total_pages=int(payload.get("totalPages") or (1 if content else 0)),
        )
