# backend/app/crud/breathing_sessions.py

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException

from app.db.mongo import get_db
from app.models.breathing import BreathingSessionInDB
from app.schemas.breathing import (
    BreathingSessionRead,
    BreathingSessionStats,
    SessionSummary,
)

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 1000


def get_breathing_sessions_collection():
    """
    Motor DB 핸들에서 breathing_sessions 컬렉션을 가져옵니다.
    """
    return get_db()["breathing_sessions"]


def serialize_breathing_session(doc) -> BreathingSessionRead:
    """
    Mongo document(dict) -> BreathingSessionRead
    핵심: id는 반드시 str로 변환
    """
    record = BreathingSessionInDB.model_validate({
        **doc,
        "_id": str(doc["_id"]),
        "created_at": _ensure_aware_utc(doc["created_at"]),
    })
    return BreathingSessionRead(**record.model_dump())


def _safe_object_id(session_id: str) -> ObjectId:
    try:
        return ObjectId(session_id)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail="Invalid session_id")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_aware_utc(dt: datetime) -> datetime:
    """
    tz_aware 없이 연결된 클라이언트나 예전 문서는 naive datetime(UTC)을 돌려주므로
    tzinfo를 붙여서 비교/직렬화.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# CREATE
async def create_breathing_session(user_id: str, summary: SessionSummary) -> BreathingSessionRead:
    col = get_breathing_sessions_collection()

    doc = {
        "user_id": user_id,
        "pattern_name": summary.pattern_name,
        "total_duration_seconds": summary.total_duration_seconds,
        "duration_minutes": round(summary.total_duration_seconds / 60, 1),
        "completed_cycles": summary.completed_cycles,
        "completed": summary.completed,
        "stress_level_before": summary.stress_level_before,
        "stress_level_after": summary.stress_level_after,
        "notes": summary.notes,
        "created_at": _utcnow(),
    }

    result = await col.insert_one(doc)
    created = await col.find_one({"_id": result.inserted_id})
    if not created:
        raise HTTPException(status_code=500, detail="Failed to record breathing session")

    logger.info(
        "Breathing session recorded: user=%s pattern=%s cycles=%d",
        user_id,
        summary.pattern_name,
        summary.completed_cycles,
    )
    return serialize_breathing_session(created)


# READ ALL (user 기준, 최신순)
async def get_breathing_sessions(
    user_id: str,
    pattern_name: Optional[str] = None,
    limit: int = 50,
) -> List[BreathingSessionRead]:
    col = get_breathing_sessions_collection()

    query = {"user_id": user_id}
    if pattern_name:
        query["pattern_name"] = pattern_name

    safe_limit = max(1, min(limit, MAX_LIST_LIMIT))
    cursor = col.find(query).sort("created_at", -1).limit(safe_limit)
    docs = await cursor.to_list(length=safe_limit)
    return [serialize_breathing_session(d) for d in docs]


# READ ONE (다른 유저 세션은 없는 것으로 취급)
async def get_breathing_session(user_id: str, session_id: str) -> Optional[BreathingSessionRead]:
    col = get_breathing_sessions_collection()
    oid = _safe_object_id(session_id)

    doc = await col.find_one({"_id": oid, "user_id": user_id})
    if not doc:
        return None
    return serialize_breathing_session(doc)


# DELETE
async def delete_breathing_session(user_id: str, session_id: str) -> bool:
    col = get_breathing_sessions_collection()
    oid = _safe_object_id(session_id)

    res = await col.delete_one({"_id": oid, "user_id": user_id})
    return res.deleted_count == 1


# STATS
async def get_breathing_stats(user_id: str, today: Optional[date] = None) -> BreathingSessionStats:
    col = get_breathing_sessions_collection()
    docs = await col.find({"user_id": user_id}).to_list(length=None)
    return compute_breathing_stats(docs, today or _utcnow().date())


def compute_breathing_stats(docs: Iterable[dict], today: date) -> BreathingSessionStats:
    """
    세션 문서 목록 -> 통계
    - 평균 스트레스 감소량: 전/후 평가가 모두 있는 세션만 대상
    - current_streak: 오늘(없으면 어제)부터 거꾸로 연속된 일수
    """
    total_sessions = 0
    total_seconds = 0
    reductions = []
    days = set()

    for d in docs:
        total_sessions += 1
        total_seconds += d.get("total_duration_seconds", 0)

        before = d.get("stress_level_before")
        after = d.get("stress_level_after")
        if before is not None and after is not None:
            reductions.append(before - after)

        created_at = d.get("created_at")
        if created_at is not None:
            days.add(_ensure_aware_utc(created_at).date())

    average = round(sum(reductions) / len(reductions), 2) if reductions else None

    return BreathingSessionStats(
        total_sessions=total_sessions,
        total_minutes=round(total_seconds / 60, 1),
        average_stress_reduction=average,
        longest_streak=_longest_streak(days),
        current_streak=_current_streak(days, today),
    )


def _longest_streak(days: set) -> int:
    longest = 0
    for day in days:
        # 연속 구간의 시작일에서만 센다
        if day - timedelta(days=1) in days:
            continue
        length = 1
        while day + timedelta(days=length) in days:
            length += 1
        longest = max(longest, length)
    return longest


def _current_streak(days: set, today: date) -> int:
    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak
