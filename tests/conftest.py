import os
import sys
from typing import Any, Dict, List

# Add project root to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from domain.models import TrainingSession


def training_payload(**overrides: Any) -> Dict[str, Any]:
    """API-shaped training record with every counter at zero."""
    payload: Dict[str, Any] = {
        "id": 1,
        "classType": "GI",
        "trainingType": "REGULAR",
        "sessionDate": "2024-06-29T19:30:00",
        "durationMinutes": 60,
        "totalRounds": 0,
        "totalRolls": 0,
        "submissions": 0,
        "taps": 0,
        "sweeps": 0,
        "takedowns": 0,
        "guardPasses": 0,
        "escapes": 0,
        "cardioRating": 3,
        "intensityRating": 3,
        "technique": [],
        "submissionTechniques": [],
        "submissionTechniquesAllowed": [],
        "description": None,
    }
    payload.update(overrides)
    return payload


def make_session(**overrides: Any) -> TrainingSession:
    return TrainingSession.from_api(training_payload(**overrides))


def techs(*names: str) -> List[Dict[str, Any]]:
    return [{"id": i, "name": n} for i, n in enumerate(names, start=1)]


@pytest.fixture
def session_factory():
    """Helper fixture for building normalized sessions"""
    return make_session
