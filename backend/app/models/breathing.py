# 파일 위치: backend/app/models/breathing.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

class BreathingSessionInDB(BaseModel):
    """
    MongoDB의 'breathing_sessions' 컬렉션에 저장되는 완전한 형태의 데이터 모델입니다.
    세션 요약(SessionSummary)의 모든 필드 + 소유자/생성 시각을 포함합니다.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(..., alias="_id") # MongoDB의 '_id'를 'id'로 매핑
    user_id: str

    pattern_name: str
    total_duration_seconds: int # 초 단위
    duration_minutes: float # 통계/목록 표시용 (소수 1자리)
    completed_cycles: int = 0
    completed: bool = False # 목표 사이클 도달 여부

    stress_level_before: Optional[int] = None
    stress_level_after: Optional[int] = None
    notes: Optional[str] = None

    created_at: datetime
