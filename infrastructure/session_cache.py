import threading
from enum import Enum
from typing import Dict, List, Optional, Tuple

from domain.models import TrainingSession


class PeriodKind(Enum):
    CURRENT = "current"
    PREVIOUS = "previous"


CacheKey = Tuple[PeriodKind, int]


class SessionCache:
    """
    Fetched dashboard sessions keyed by (period kind, days).

    Entries are only dropped through invalidate(); the caller decides
    when data is stale.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[CacheKey, List[TrainingSession]] = {}

    def get(self, kind: PeriodKind, days: int) -> Optional[List[TrainingSession]]:
        with self._lock:
            return self._entries.get((kind, days))

    def put(self, kind: PeriodKind, days: int, sessions: List[TrainingSession]) -> None:
        with self._lock:
            self._entries[(kind, days)] = list(sessions)

    def invalidate(self, days: Optional[int] = None) -> None:
        with self._lock:
            if days is None:
                self._entries.clear()
                return
            for kind in PeriodKind:
                self._entries.pop((kind, days), None)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
