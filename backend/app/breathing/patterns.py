# 파일 위치: backend/app/breathing/patterns.py
"""
호흡 패턴(BreathingPattern)과 기본 카탈로그.
"""
import math
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class BreathingPhase(str, Enum):
    """호흡 단계. 순서는 항상 INHALE → HOLD → EXHALE → REST 로 고정"""
    INHALE = "inhale"
    HOLD = "hold"
    EXHALE = "exhale"
    REST = "rest"


PHASE_ORDER: Tuple[BreathingPhase, ...] = (
    BreathingPhase.INHALE,
    BreathingPhase.HOLD,
    BreathingPhase.EXHALE,
    BreathingPhase.REST,
)


class InvalidPatternError(ValueError):
    """네 단계의 길이가 모두 0인 패턴으로 세션을 시작하려 할 때 발생"""

    def __init__(self, pattern_name: str):
        self.pattern_name = pattern_name
        super().__init__(f"Breathing pattern '{pattern_name}' has no phase with a non-zero duration")


class BreathingPattern(BaseModel):
    """
    하나의 호흡 기법을 정의하는 네 단계 길이(초).
    세션에 선택된 뒤에는 바뀌지 않습니다. (frozen)
    모든 길이가 0인 패턴도 생성은 가능하고, 머신의 start/reset에서 거부됩니다.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    inhale_seconds: int = Field(..., ge=0)
    hold_seconds: int = Field(..., ge=0)
    exhale_seconds: int = Field(..., ge=0)
    rest_seconds: int = Field(..., ge=0)
    description: str = ""

    def duration_of(self, phase: BreathingPhase) -> int:
        return {
            BreathingPhase.INHALE: self.inhale_seconds,
            BreathingPhase.HOLD: self.hold_seconds,
            BreathingPhase.EXHALE: self.exhale_seconds,
            BreathingPhase.REST: self.rest_seconds,
        }[phase]

    @property
    def cycle_seconds(self) -> int:
        return sum(self.duration_of(p) for p in PHASE_ORDER)

    @property
    def active_phases(self) -> Tuple[BreathingPhase, ...]:
        """길이가 0인 단계는 건너뜀"""
        return tuple(p for p in PHASE_ORDER if self.duration_of(p) > 0)

    def is_valid(self) -> bool:
        return bool(self.active_phases)


def cycles_for_minutes(pattern: BreathingPattern, minutes: float) -> int:
    """
    주어진 시간(분) 안에 들어가는 전체 사이클 수. 최소 1.
    (리소스 플레이어: floor(duration * 60 / cycleSeconds))
    """
    if not pattern.is_valid():
        raise InvalidPatternError(pattern.name)
    if minutes <= 0:
        raise ValueError("minutes must be > 0")
    return max(1, math.floor(minutes * 60 / pattern.cycle_seconds))


# --- 기본 카탈로그 ---

SQUARE_BREATHING = BreathingPattern(
    name="Square Breathing",
    inhale_seconds=4,
    hold_seconds=4,
    exhale_seconds=4,
    rest_seconds=4,
    description="A calming technique that helps reduce stress and improve focus",
)

FOUR_SEVEN_EIGHT = BreathingPattern(
    name="4-7-8 Breathing",
    inhale_seconds=4,
    hold_seconds=7,
    exhale_seconds=8,
    rest_seconds=0,
    description="A relaxing pattern that can help with anxiety and sleep",
)

DEEP_CALM = BreathingPattern(
    name="Deep Calm",
    inhale_seconds=5,
    hold_seconds=2,
    exhale_seconds=6,
    rest_seconds=2,
    description="A gentle pattern for deep relaxation and stress relief",
)

# 퀵 위젯용 (쉼 없이 4-4-4)
QUICK_BREATHING = BreathingPattern(
    name="Quick Breathing",
    inhale_seconds=4,
    hold_seconds=4,
    exhale_seconds=4,
    rest_seconds=0,
    description="A short box-style pattern for a quick reset",
)

PATTERN_CATALOG: Dict[str, BreathingPattern] = {
    "square": SQUARE_BREATHING,
    "4-7-8": FOUR_SEVEN_EIGHT,
    "deep-calm": DEEP_CALM,
    "quick": QUICK_BREATHING,
}


def get_pattern(key: str) -> Optional[BreathingPattern]:
    return PATTERN_CATALOG.get(key.strip().lower())


def list_patterns() -> List[Tuple[str, BreathingPattern]]:
    return list(PATTERN_CATALOG.items())
