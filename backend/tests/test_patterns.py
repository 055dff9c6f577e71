import pytest
from pydantic import ValidationError

from app.breathing.patterns import (
    FOUR_SEVEN_EIGHT,
    PATTERN_CATALOG,
    QUICK_BREATHING,
    SQUARE_BREATHING,
    BreathingPattern,
    BreathingPhase,
    InvalidPatternError,
    cycles_for_minutes,
    get_pattern,
)


def test_catalog_durations():
    assert [(p.inhale_seconds, p.hold_seconds, p.exhale_seconds, p.rest_seconds)
            for p in PATTERN_CATALOG.values()] == [(4, 4, 4, 4), (4, 7, 8, 0), (5, 2, 6, 2), (4, 4, 4, 0)]


def test_derived_values():
    assert SQUARE_BREATHING.cycle_seconds == 16
    assert FOUR_SEVEN_EIGHT.cycle_seconds == 19
    assert FOUR_SEVEN_EIGHT.active_phases == (BreathingPhase.INHALE, BreathingPhase.HOLD, BreathingPhase.EXHALE)
    assert QUICK_BREATHING.duration_of(BreathingPhase.REST) == 0


def test_negative_duration_rejected():
    with pytest.raises(ValidationError):
        BreathingPattern(name="bad", inhale_seconds=-1, hold_seconds=0, exhale_seconds=4, rest_seconds=0)


def test_all_zero_pattern_can_be_built_but_is_invalid():
    pattern = BreathingPattern(name="empty", inhale_seconds=0, hold_seconds=0, exhale_seconds=0, rest_seconds=0)

    assert pattern.is_valid() is False
    assert pattern.active_phases == ()


def test_pattern_is_immutable():
    with pytest.raises(ValidationError):
        SQUARE_BREATHING.inhale_seconds = 10


def test_get_pattern_normalizes_key():
    assert get_pattern(" Square ") is SQUARE_BREATHING
    assert get_pattern("4-7-8") is FOUR_SEVEN_EIGHT
    assert get_pattern("box") is None


def test_cycles_for_minutes():
    assert cycles_for_minutes(SQUARE_BREATHING, 5) == 18
    assert cycles_for_minutes(FOUR_SEVEN_EIGHT, 1) == 3
    # 한 사이클보다 짧아도 최소 1
    assert cycles_for_minutes(SQUARE_BREATHING, 0.1) == 1


def test_cycles_for_minutes_rejects_bad_input():
    empty = BreathingPattern(name="empty", inhale_seconds=0, hold_seconds=0, exhale_seconds=0, rest_seconds=0)

    with pytest.raises(InvalidPatternError):
        cycles_for_minutes(empty, 5)
    with pytest.raises(ValueError):
        cycles_for_minutes(SQUARE_BREATHING, 0)
