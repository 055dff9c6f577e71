# 파일 위치: backend/app/breathing/machine.py
"""
호흡 단계 상태 머신.

상태 전이는 SessionState -> SessionState 순수 함수(start_state, tick, pause, ...)로
구현되어 있고, BreathingPhaseMachine은 UI 뷰 하나당 하나씩 만드는 얇은 래퍼입니다.
1초 타이머(러너, 테스트 등)가 tick()을 호출할 때마다 정확히 1초가 흐른 것으로 봅니다.
"""
import logging
from typing import NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.breathing.patterns import (
    PHASE_ORDER,
    BreathingPattern,
    BreathingPhase,
    InvalidPatternError,
)
from app.schemas.breathing import SessionSummary

logger = logging.getLogger(__name__)

PHASE_INSTRUCTIONS = {
    BreathingPhase.INHALE: "Breathe in slowly...",
    BreathingPhase.HOLD: "Hold your breath...",
    BreathingPhase.EXHALE: "Breathe out gently...",
    BreathingPhase.REST: "Rest...",
}


class SessionState(BaseModel):
    """진행 중인 세션의 스냅샷 (불변)"""
    model_config = ConfigDict(frozen=True)

    pattern: BreathingPattern
    phase: BreathingPhase
    seconds_remaining: int
    completed_cycles: int = 0
    is_running: bool = False
    target_cycles: Optional[int] = None


class SessionProgress(NamedTuple):
    completed_cycles: int
    total_elapsed_seconds: int


def first_phase(pattern: BreathingPattern) -> BreathingPhase:
    phases = pattern.active_phases
    if not phases:
        raise InvalidPatternError(pattern.name)
    return phases[0]


def next_phase(pattern: BreathingPattern, phase: BreathingPhase) -> Tuple[BreathingPhase, bool]:
    """
    고정 순서에서 다음으로 길이가 0이 아닌 단계.
    두 번째 값은 순서의 끝을 넘어 처음으로 돌아갔는지(= 사이클 완료) 여부.
    """
    index = PHASE_ORDER.index(phase)
    for step in range(1, len(PHASE_ORDER) + 1):
        candidate = PHASE_ORDER[(index + step) % len(PHASE_ORDER)]
        if pattern.duration_of(candidate) > 0:
            return candidate, index + step >= len(PHASE_ORDER)
    raise InvalidPatternError(pattern.name)


def start_state(
    pattern: BreathingPattern,
    running: bool = True,
    target_cycles: Optional[int] = None,
) -> SessionState:
    if target_cycles is not None and target_cycles < 1:
        raise ValueError("target_cycles must be >= 1")
    phase = first_phase(pattern)
    return SessionState(
        pattern=pattern,
        phase=phase,
        seconds_remaining=pattern.duration_of(phase),
        completed_cycles=0,
        is_running=running,
        target_cycles=target_cycles,
    )


def tick(state: SessionState) -> SessionState:
    """1초 진행. 멈춘 상태면 그대로 반환"""
    if not state.is_running:
        return state

    remaining = state.seconds_remaining - 1
    if remaining > 0:
        return state.model_copy(update={"seconds_remaining": remaining})

    phase, wrapped = next_phase(state.pattern, state.phase)
    cycles = state.completed_cycles + 1 if wrapped else state.completed_cycles
    running = True
    if wrapped and state.target_cycles is not None and cycles >= state.target_cycles:
        running = False

    return state.model_copy(update={
        "phase": phase,
        "seconds_remaining": state.pattern.duration_of(phase),
        "completed_cycles": cycles,
        "is_running": running,
    })


def pause(state: SessionState) -> SessionState:
    return state.model_copy(update={"is_running": False})


def resume(state: SessionState) -> SessionState:
    return state.model_copy(update={"is_running": True})


def elapsed_in_cycle(state: SessionState) -> int:
    pattern = state.pattern
    index = PHASE_ORDER.index(state.phase)
    before = sum(pattern.duration_of(p) for p in PHASE_ORDER[:index])
    return before + pattern.duration_of(state.phase) - state.seconds_remaining


def summarize(state: SessionState) -> SessionProgress:
    total = state.completed_cycles * state.pattern.cycle_seconds + elapsed_in_cycle(state)
    return SessionProgress(state.completed_cycles, total)


class BreathingPhaseMachine:
    """
    호흡 세션 하나를 진행시키는 상태 머신.

    Args:
        pattern: 처음 선택된 패턴 (모든 단계가 0이면 InvalidPatternError)

    stop()은 일시정지입니다. 단계/남은 시간/사이클 수를 그대로 두고
    resume()으로 이어갈 수 있습니다. 처음부터 다시 하려면 reset()을 호출합니다.
    """

    def __init__(self, pattern: BreathingPattern):
        self._state = start_state(pattern, running=False)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pattern(self) -> BreathingPattern:
        return self._state.pattern

    @property
    def phase(self) -> BreathingPhase:
        return self._state.phase

    @property
    def seconds_remaining(self) -> int:
        return self._state.seconds_remaining

    @property
    def completed_cycles(self) -> int:
        return self._state.completed_cycles

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def target_reached(self) -> bool:
        target = self._state.target_cycles
        return target is not None and self._state.completed_cycles >= target

    @property
    def instruction(self) -> str:
        return PHASE_INSTRUCTIONS[self._state.phase]

    @property
    def progress_percent(self) -> float:
        """현재 단계에서 지나간 비율 (0 ~ 100)"""
        total = self.pattern.duration_of(self._state.phase)
        return (total - self._state.seconds_remaining) / total * 100

    def start(
        self,
        pattern: Optional[BreathingPattern] = None,
        target_cycles: Optional[int] = None,
    ) -> SessionState:
        if pattern is None:
            pattern = self.pattern
        # 검증이 끝난 뒤에만 상태를 교체
        self._state = start_state(pattern, running=True, target_cycles=target_cycles)
        logger.info(
            "Breathing session started: pattern=%s target_cycles=%s",
            self.pattern.name,
            target_cycles,
        )
        return self._state

    def tick(self) -> SessionState:
        before = self._state
        self._state = tick(before)
        if self._state.completed_cycles != before.completed_cycles:
            logger.debug("Cycle %d completed (%s)", self._state.completed_cycles, self.pattern.name)
            if before.is_running and not self._state.is_running:
                logger.info("Target of %d cycles reached", self._state.target_cycles)
        return self._state

    def stop(self) -> SessionState:
        if self._state.is_running:
            logger.info("Breathing session paused at cycle %d", self._state.completed_cycles)
        self._state = pause(self._state)
        return self._state

    def resume(self) -> SessionState:
        if self.target_reached:
            # 목표를 채운 세션은 reset/start로만 다시 시작
            return self._state
        self._state = resume(self._state)
        return self._state

    def reset(self, pattern: Optional[BreathingPattern] = None) -> SessionState:
        if pattern is None:
            pattern = self.pattern
        self._state = start_state(pattern, running=False)
        logger.info("Breathing session reset: pattern=%s", self.pattern.name)
        return self._state

    def select_pattern(self, pattern: BreathingPattern) -> SessionState:
        """패턴을 바꾸면 진행 중인 상태는 모두 초기화"""
        return self.reset(pattern)

    def summarize(self) -> SessionProgress:
        return summarize(self._state)

    def to_summary(
        self,
        stress_level_before: Optional[int] = None,
        stress_level_after: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> SessionSummary:
        progress = self.summarize()
        return SessionSummary(
            pattern_name=self.pattern.name,
            total_duration_seconds=progress.total_elapsed_seconds,
            completed_cycles=progress.completed_cycles,
            completed=self.target_reached,
            stress_level_before=stress_level_before,
            stress_level_after=stress_level_after,
            notes=notes,
        )
