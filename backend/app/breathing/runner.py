# 파일 위치: backend/app/breathing/runner.py
"""
1초마다 BreathingPhaseMachine.tick()을 호출하는 스케줄러.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from app.breathing.machine import BreathingPhaseMachine, SessionProgress, SessionState
from app.breathing.patterns import cycles_for_minutes, get_pattern
from app.breathing.recorder import InMemorySessionRecorder, SessionRecorder
from app.schemas.breathing import BreathingSessionRead

logger = logging.getLogger(__name__)


def start_timed_session(machine: BreathingPhaseMachine, minutes: float) -> int:
    """
    분 단위 길이를 사이클 목표로 바꿔 세션을 시작합니다.
    (남는 초는 버림, 최소 1사이클)
    """
    target = cycles_for_minutes(machine.pattern, minutes)
    machine.start(target_cycles=target)
    return target


async def run_breathing_session(
    machine: BreathingPhaseMachine,
    *,
    on_tick: Optional[Callable[[SessionState], None]] = None,
    interval_seconds: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> SessionProgress:
    """
    머신이 멈출 때까지(목표 사이클 도달 또는 stop() 호출) tick을 돌립니다.
    머신은 호출 전에 start()된 상태여야 합니다.

    Args:
        on_tick: 매 tick 이후 새 상태를 받는 콜백 (UI 갱신 등)
        sleep: 테스트에서 실제로 기다리지 않도록 바꿔 끼울 수 있음
    """
    try:
        while machine.is_running:
            await sleep(interval_seconds)
            state = machine.tick()
            if on_tick:
                on_tick(state)
    except asyncio.CancelledError:
        # 타이머가 취소되면 세션은 일시정지 상태로 남김
        machine.stop()
        raise
    return machine.summarize()


async def run_and_record(
    machine: BreathingPhaseMachine,
    recorder: SessionRecorder,
    *,
    stress_level_before: Optional[int] = None,
    stress_level_after: Optional[int] = None,
    notes: Optional[str] = None,
    **run_kwargs,
) -> BreathingSessionRead:
    """세션을 끝까지 돌린 뒤 요약을 recorder에 넘김"""
    await run_breathing_session(machine, **run_kwargs)
    summary = machine.to_summary(
        stress_level_before=stress_level_before,
        stress_level_after=stress_level_after,
        notes=notes,
    )
    return await recorder.record_session(summary)


def _print_state(state: SessionState):
    print(f"[cycle {state.completed_cycles}] {state.phase.value}: {state.seconds_remaining}s")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    machine = BreathingPhaseMachine(get_pattern("square"))
    start_timed_session(machine, minutes=1)
    record = asyncio.run(run_and_record(machine, InMemorySessionRecorder(), on_tick=_print_state))
    print(f"\nBreathing exercise complete! {record.completed_cycles} cycles, {record.total_duration_seconds}s")
