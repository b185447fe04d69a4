import pytest

from conftest import make_session
from domain.stats import SUMMED_FIELDS, AggregateStats, calculate_stats, compute_stat_deltas


def test_empty_input_is_all_zero():
    stats = calculate_stats([])

    assert stats == AggregateStats()
    assert stats.avg_duration == 0
    assert stats.sub_rate == 0
    assert stats.defense_index == 0
    assert stats.avg_cardio == 0
    assert stats.avg_intensity == 0


def test_two_session_totals_and_ratios():
    sessions = [
        make_session(submissions=2, taps=1, totalRounds=4, durationMinutes=60),
        make_session(submissions=1, taps=0, totalRounds=6, durationMinutes=90),
    ]

    stats = calculate_stats(sessions)

    assert stats.total_sessions == 2
    assert stats.total_subs == 3
    assert stats.total_taps == 1
    assert stats.total_rounds == 10
    assert stats.total_hours == pytest.approx(2.5)
    assert stats.sub_rate == pytest.approx(0.3)
    assert stats.defense_index == 0
    assert stats.avg_duration == pytest.approx(75)


def test_defense_index_falls_back_to_escapes_without_taps():
    stats = calculate_stats([make_session(taps=0, escapes=3)])

    assert stats.defense_index == 3


def test_defense_index_is_escapes_per_tap():
    stats = calculate_stats([make_session(taps=4, escapes=2)])

    assert stats.defense_index == pytest.approx(0.5)


def test_sub_rate_is_zero_without_rounds():
    stats = calculate_stats([make_session(submissions=5, totalRounds=0)])

    assert stats.sub_rate == 0


def test_null_counters_count_as_zero():
    s = make_session(
        totalRounds=None,
        submissions=None,
        taps=None,
        sweeps=None,
        takedowns=None,
        guardPasses=None,
        escapes=None,
        cardioRating=None,
        intensityRating=None,
    )

    stats = calculate_stats([s])

    assert stats.total_sessions == 1
    assert stats.total_hours == pytest.approx(1.0)
    assert stats.total_rounds == 0
    assert stats.total_escapes == 0
    assert stats.avg_cardio == 0


def test_rating_averages_and_combat_totals():
    sessions = [
        make_session(cardioRating=4, intensityRating=5, sweeps=2, takedowns=1, guardPasses=3),
        make_session(cardioRating=2, intensityRating=3, sweeps=1, takedowns=0, guardPasses=1),
    ]

    stats = calculate_stats(sessions)

    assert stats.avg_cardio == pytest.approx(3.0)
    assert stats.avg_intensity == pytest.approx(4.0)
    assert stats.total_sweeps == 3
    assert stats.total_takedowns == 1
    assert stats.total_passes == 4


def test_counters_are_additive_over_concatenation():
    a = [
        make_session(submissions=2, taps=1, totalRounds=5, escapes=1, durationMinutes=45),
        make_session(submissions=0, taps=2, totalRounds=3, escapes=4, durationMinutes=30),
    ]
    b = [make_session(submissions=3, taps=0, totalRounds=8, escapes=2, durationMinutes=120)]

    combined = calculate_stats(a + b)
    sa, sb = calculate_stats(a), calculate_stats(b)

    for name in SUMMED_FIELDS:
        assert getattr(combined, name) == pytest.approx(getattr(sa, name) + getattr(sb, name))

    # ratios come from the combined sums
    assert combined.sub_rate == pytest.approx(5 / 16)
    assert combined.defense_index == pytest.approx(7 / 3)


def test_order_does_not_matter():
    sessions = [
        make_session(submissions=1, totalRounds=2, durationMinutes=60),
        make_session(taps=3, escapes=1, durationMinutes=90),
        make_session(sweeps=2, totalRounds=6, durationMinutes=30),
    ]

    assert calculate_stats(sessions) == calculate_stats(list(reversed(sessions)))


def test_stat_deltas_are_current_minus_previous():
    current = calculate_stats([make_session(submissions=4, totalRounds=8), make_session()])
    previous = calculate_stats([make_session(submissions=1, totalRounds=4)])

    deltas = compute_stat_deltas(current, previous)

    assert deltas["total_sessions"] == 1
    assert deltas["total_subs"] == 3
    assert deltas["sub_rate"] == pytest.approx(0.5 - 0.25)
    assert set(deltas) >= set(SUMMED_FIELDS)
