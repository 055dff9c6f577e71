# 파일 위치: backend/app/breathing/recorder.py
"""
세션 요약을 받아 저장하는 쪽(SessionRecorder).
머신은 아무것도 저장하지 않고, 세션이 끝나면 호스트가 요약을 여기로 넘깁니다.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Protocol

from app.crud import breathing_sessions as breathing_crud
from app.schemas.breathing import BreathingSessionRead, SessionSummary

logger = logging.getLogger(__name__)


class SessionRecorder(Protocol):
    async def record_session(self, summary: SessionSummary) -> BreathingSessionRead:
        ...


class MongoSessionRecorder:
    """사용자 한 명의 세션을 breathing_sessions 컬렉션에 저장"""

    def __init__(self, user_id: str):
        self.user_id = user_id

    async def record_session(self, summary: SessionSummary) -> BreathingSessionRead:
        return await breathing_crud.create_breathing_session(self.user_id, summary)


class InMemorySessionRecorder:
    """DB 없이 돌리는 로컬 데모/러너용"""

    def __init__(self, user_id: str = "local"):
        self.user_id = user_id
        self.sessions: List[BreathingSessionRead] = []

    async def record_session(self, summary: SessionSummary) -> BreathingSessionRead:
        record = BreathingSessionRead(
            id=uuid.uuid4().hex,
            user_id=self.user_id,
            duration_minutes=round(summary.total_duration_seconds / 60, 1),
            created_at=datetime.now(timezone.utc),
            **summary.model_dump(),
        )
        self.sessions.append(record)
        logger.info("Breathing session kept in memory: %s (%d cycles)", record.pattern_name, record.completed_cycles)
        return record
