# backend/app/api/endpoints/breathing.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import get_current_user_id, get_session_recorder
from app.breathing.patterns import BreathingPattern, get_pattern, list_patterns
from app.breathing.recorder import SessionRecorder
from app.crud import breathing_sessions as breathing_crud
from app.schemas.breathing import (
    BreathingPatternRead,
    BreathingSessionRead,
    BreathingSessionStats,
    SessionSummary,
)

router = APIRouter()


def _pattern_read(key: str, pattern: BreathingPattern) -> BreathingPatternRead:
    return BreathingPatternRead(
        key=key,
        cycle_seconds=pattern.cycle_seconds,
        **pattern.model_dump(),
    )


# --------------------------------------------------------------------------
# GET /api/v1/breathing/patterns
# 설명: 선택 가능한 호흡 패턴 카탈로그
# --------------------------------------------------------------------------
@router.get("/patterns", response_model=List[BreathingPatternRead])
async def read_patterns():
    return [_pattern_read(key, p) for key, p in list_patterns()]


@router.get("/patterns/{key}", response_model=BreathingPatternRead)
async def read_pattern(key: str):
    pattern = get_pattern(key)
    if pattern is None:
        raise HTTPException(status_code=404, detail="Pattern not found")
    return _pattern_read(key.strip().lower(), pattern)


# --------------------------------------------------------------------------
# POST /api/v1/breathing/sessions
# 설명: 끝난 세션의 요약을 저장 (SessionRecorder)
# --------------------------------------------------------------------------
@router.post("/sessions", response_model=BreathingSessionRead, status_code=status.HTTP_201_CREATED)
async def record_session(
    summary: SessionSummary,
    recorder: SessionRecorder = Depends(get_session_recorder),
):
    return await recorder.record_session(summary)


# READ ALL
@router.get("/sessions", response_model=List[BreathingSessionRead])
async def read_sessions(
    pattern_name: Optional[str] = None,
    limit: int = Query(50, ge=1, le=breathing_crud.MAX_LIST_LIMIT),
    user_id: str = Depends(get_current_user_id),
):
    return await breathing_crud.get_breathing_sessions(user_id, pattern_name=pattern_name, limit=limit)


# STATS (/{session_id} 보다 먼저 등록해야 함)
@router.get("/sessions/stats", response_model=BreathingSessionStats)
async def read_stats(user_id: str = Depends(get_current_user_id)):
    return await breathing_crud.get_breathing_stats(user_id)


# READ ONE
@router.get("/sessions/{session_id}", response_model=BreathingSessionRead)
async def read_session(session_id: str, user_id: str = Depends(get_current_user_id)):
    session = await breathing_crud.get_breathing_session(user_id, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# DELETE
@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, user_id: str = Depends(get_current_user_id)):
    deleted = await breathing_crud.delete_breathing_session(user_id, session_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Session not found")
    return None
