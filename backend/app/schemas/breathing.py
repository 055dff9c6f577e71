# 파일 위치: backend/app/schemas/breathing.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# 스트레스/기분 평가 척도 (1 = 매우 편안, 6 = 매우 힘듦)
RATING_MIN = 1
RATING_MAX = 6


def _strip_to_none(v):
    """
    Optional[str] 입력에서:
    - None은 그대로
    - "   " -> None
    - 그 외는 strip된 문자열
    """
    if v is None:
        return None
    if not isinstance(v, str):
        return v
    s = v.strip()
    return s or None


# --- API 요청(Request) 스키마 ---

class SessionSummary(BaseModel):
    """
    [요청] POST /api/v1/breathing/sessions
    호흡 세션이 끝났을 때 클라이언트(또는 세션 러너)가 보내는 요약입니다.
    머신의 마지막 상태에서 만들어지며, 한 번 만들어진 뒤에는 바뀌지 않습니다.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    pattern_name: str = Field(..., min_length=1)
    total_duration_seconds: int = Field(..., ge=0)
    completed_cycles: int = Field(..., ge=0)
    completed: bool = False  # 목표 사이클 도달 여부
    stress_level_before: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)
    stress_level_after: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("notes", mode="before")
    @classmethod
    def validate_notes(cls, v):
        return _strip_to_none(v)

    @model_validator(mode="after")
    def check_completed_has_cycles(self):
        if self.completed and self.completed_cycles == 0:
            raise ValueError("completed session must have at least one cycle")
        return self

    @property
    def stress_reduction(self) -> Optional[int]:
        if self.stress_level_before is None or self.stress_level_after is None:
            return None
        return self.stress_level_before - self.stress_level_after


# --- API 응답(Response) 스키마 ---

class BreathingPatternRead(BaseModel):
    """
    [응답] GET /api/v1/breathing/patterns
    """
    key: str
    name: str
    inhale_seconds: int
    hold_seconds: int
    exhale_seconds: int
    rest_seconds: int
    cycle_seconds: int
    description: str


class BreathingSessionRead(BaseModel):
    """
    [응답] 저장된 호흡 세션을 반환할 때의 데이터 구조입니다.
    (예: POST /sessions 성공 시, GET /sessions)
    """
    id: str
    user_id: str
    pattern_name: str
    total_duration_seconds: int
    duration_minutes: float
    completed_cycles: int
    completed: bool
    stress_level_before: Optional[int] = None
    stress_level_after: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {
        "from_attributes": True
    }


class BreathingSessionStats(BaseModel):
    """
    [응답] GET /api/v1/breathing/sessions/stats
    streak는 UTC 기준으로 세션이 하루 이상 있었던 연속 일수입니다.
    """
    total_sessions: int = 0
    total_minutes: float = 0.0
    average_stress_reduction: Optional[float] = None
    longest_streak: int = 0
    current_streak: int = 0
