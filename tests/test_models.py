from datetime import datetime, timezone

import pytest

from conftest import training_payload, techs
from domain.models import (
    Page,
    Technique,
    TechniqueField,
    TrainingSession,
    parse_timestamp,
    techniques_for,
)


def test_from_api_maps_camel_case_fields():
    s = TrainingSession.from_api(
        training_payload(
            id=42,
            sessionDate="2024-06-29T19:30:00Z",
            durationMinutes=90,
            totalRounds=6,
            totalRolls=5,
            submissions=2,
            taps=1,
            sweeps=3,
            takedowns=1,
            guardPasses=4,
            escapes=2,
            cardioRating=4,
            intensityRating=5,
            technique=techs("Hip escape"),
            submissionTechniques=techs("Armbar"),
            submissionTechniquesAllowed=techs("Triangle"),
            description="Good rolls",
        )
    )

    assert s.id == 42
    assert s.session_date == datetime(2024, 6, 29, 19, 30, tzinfo=timezone.utc)
    assert s.duration_minutes == 90
    assert (s.total_rounds, s.total_rolls) == (6, 5)
    assert (s.submissions, s.taps, s.sweeps) == (2, 1, 3)
    assert (s.takedowns, s.guard_passes, s.escapes) == (1, 4, 2)
    assert (s.cardio_rating, s.intensity_rating) == (4, 5)
    assert [t.name for t in s.techniques] == ["Hip escape"]
    assert s.class_type == "GI"
    assert s.description == "Good rolls"


def test_missing_counters_and_lists_are_normalized():
    payload = {"id": 1, "sessionDate": "2024-06-29T10:00:00", "durationMinutes": 30}

    s = TrainingSession.from_api(payload)

    assert s.total_rounds == 0
    assert s.escapes == 0
    assert s.cardio_rating == 0
    assert s.submission_techniques == []
    assert s.submission_techniques_allowed == []


def test_non_mapping_technique_entries_are_skipped():
    s = TrainingSession.from_api(
        training_payload(submissionTechniques=[None, "Armbar", {"id": 1, "name": "Kimura"}])
    )

    assert s.submission_techniques == [Technique(id=1, name="Kimura")]


@pytest.mark.parametrize("duration", [None, "missing"])
def test_duration_is_required(duration):
    payload = training_payload()
    if duration == "missing":
        del payload["durationMinutes"]
    else:
        payload["durationMinutes"] = duration

    with pytest.raises(ValueError):
        TrainingSession.from_api(payload)


def test_zero_duration_is_accepted():
    s = TrainingSession.from_api(training_payload(durationMinutes=0))

    assert s.duration_minutes == 0


def test_parse_timestamp_keeps_offsets():
    parsed = parse_timestamp("2024-06-29T19:30:00-03:00")

    assert parsed == datetime(2024, 6, 29, 22, 30, tzinfo=timezone.utc)


def test_techniques_for_dispatches_on_field():
    s = TrainingSession.from_api(
        training_payload(
            submissionTechniques=techs("Armbar"),
            submissionTechniquesAllowed=techs("Triangle"),
        )
    )

    assert [t.name for t in techniques_for(s, TechniqueField.ATTACKS)] == ["Armbar"]
    assert [t.name for t in techniques_for(s, TechniqueField.DEFENSES)] == ["Triangle"]


def test_page_from_spring_envelope():
    payload = {
        "content": [training_payload(id=1), training_payload(id=2)],
        "number": 1,
        "size": 2,
        "totalElements": 5,
        "totalPages": 3,
    }

    page = Page.from_api(payload, TrainingSession.from_api)

    assert [s.id for s in page.content] == [1, 2]
    assert page.page == 1
    assert page.total_pages == 3
    assert not page.is_first
    assert not page.is_last


def test_empty_page():
    page = Page.from_api({"content": []}, TrainingSession.from_api)

    assert page.content == []
    assert page.is_first
    assert page.is_last


def test_parse_timestamp_truncates_nanoseconds():
    parsed = parse_timestamp("2024-06-29T19:30:00.123456789Z")

    assert parsed == datetime(2024, 6, 29, 19, 30, 0, 123456, tzinfo=timezone.utc)


def test_parse_timestamp_pads_short_fractions():
    parsed = parse_timestamp("2024-06-29T19:30:00.5")

    assert parsed.microsecond == 500000
    assert parsed.tzinfo == timezone.utc
