import random

import pytest

from app.breathing.environment import (
    DayNightCycle,
    EnvironmentSnapshot,
    GardenEnvironment,
    Weather,
    WeatherCycle,
)


def test_day_night_flips_every_period():
    cycle = DayNightCycle(period_seconds=3)

    assert [cycle.tick() for _ in range(7)] == [False, False, True, True, True, False, False]


def test_day_night_default_period_is_five_minutes():
    cycle = DayNightCycle()

    for _ in range(299):
        assert cycle.tick() is False
    assert cycle.tick() is True


def test_weather_changes_only_on_period_boundary():
    expected_rng = random.Random(7)
    cycle = WeatherCycle(period_seconds=2, rng=random.Random(7))

    assert cycle.weather == Weather.SUN
    for _ in range(5):
        assert cycle.tick() == cycle.weather
        drawn = cycle.tick()
        assert drawn == expected_rng.choice(list(Weather))


def test_weather_is_always_a_single_known_value():
    cycle = WeatherCycle(period_seconds=1, rng=random.Random(3))

    seen = {cycle.tick() for _ in range(200)}

    assert seen <= set(Weather)
    assert len(seen) == len(Weather)


@pytest.mark.parametrize("cls", [DayNightCycle, WeatherCycle])
def test_period_must_be_positive(cls):
    with pytest.raises(ValueError):
        cls(period_seconds=0)


def test_garden_environment_ticks_both_cycles():
    env = GardenEnvironment(
        day_night=DayNightCycle(period_seconds=2),
        weather=WeatherCycle(period_seconds=10, rng=random.Random(1)),
    )

    assert env.snapshot() == EnvironmentSnapshot(False, Weather.SUN)
    env.tick()
    snapshot = env.tick()

    assert snapshot.is_night is True
    assert snapshot.weather == Weather.SUN
