# 파일 위치: backend/app/breathing/environment.py
"""
마인드 가든 화면의 낮/밤, 날씨 순환.
호흡 머신과 같은 1초 tick 방식이며, 항상 하나의 값만 활성 상태입니다.
"""
import random
from enum import Enum
from typing import NamedTuple, Optional

DAY_NIGHT_PERIOD_SECONDS = 300  # 5분마다 낮/밤 전환
WEATHER_PERIOD_SECONDS = 30     # 30초마다 날씨 변경


class Weather(str, Enum):
    RAIN = "rain"
    SUN = "sun"
    RAINBOW = "rainbow"
    CLOUDS = "clouds"


class EnvironmentSnapshot(NamedTuple):
    is_night: bool
    weather: Weather


def _check_period(period_seconds: int) -> int:
    if period_seconds < 1:
        raise ValueError("period_seconds must be >= 1")
    return period_seconds


class DayNightCycle:
    """period_seconds 마다 is_night를 뒤집습니다."""

    def __init__(self, period_seconds: int = DAY_NIGHT_PERIOD_SECONDS, is_night: bool = False):
        self.period_seconds = _check_period(period_seconds)
        self.is_night = is_night
        self._elapsed = 0

    def tick(self) -> bool:
        self._elapsed += 1
        if self._elapsed >= self.period_seconds:
            self._elapsed = 0
            self.is_night = not self.is_night
        return self.is_night


class WeatherCycle:
    """
    period_seconds 마다 날씨를 균등 확률로 다시 뽑습니다.
    (같은 날씨가 다시 뽑힐 수 있음)

    Args:
        rng: 테스트에서 결과를 고정하려면 random.Random(seed)를 넘김
    """

    def __init__(
        self,
        period_seconds: int = WEATHER_PERIOD_SECONDS,
        rng: Optional[random.Random] = None,
        weather: Weather = Weather.SUN,
    ):
        self.period_seconds = _check_period(period_seconds)
        self.weather = weather
        self._rng = rng or random.Random()
        self._elapsed = 0

    def tick(self) -> Weather:
        self._elapsed += 1
        if self._elapsed >= self.period_seconds:
            self._elapsed = 0
            self.weather = self._rng.choice(list(Weather))
        return self.weather


class GardenEnvironment:
    def __init__(
        self,
        day_night: Optional[DayNightCycle] = None,
        weather: Optional[WeatherCycle] = None,
    ):
        self.day_night = day_night or DayNightCycle()
        self.weather = weather or WeatherCycle()

    def snapshot(self) -> EnvironmentSnapshot:
        return EnvironmentSnapshot(self.day_night.is_night, self.weather.weather)

    def tick(self) -> EnvironmentSnapshot:
        self.day_night.tick()
        self.weather.tick()
        return self.snapshot()
