# backend/app/api/endpoints/health.py
from typing import Optional, Tuple

from fastapi import APIRouter

from app.breathing.patterns import PATTERN_CATALOG
from app.core.config import settings
from app.db.mongo import get_db

router = APIRouter(tags=["Health"])


async def _ping_mongo() -> Tuple[bool, Optional[str]]:
    try:
        await get_db().command("ping")
    except Exception as e:
        return False, str(e)
    return True, None


@router.get("/health")
async def health_check():
    """
    [운영] 헬스 체크
    Mongo에 붙지 못해도 호흡 머신/패턴 카탈로그는 동작하므로 503이 아니라 degraded로 응답합니다.
    """
    mongo_ok, mongo_error = await _ping_mongo()

    return {
        "status": "ok" if mongo_ok else "degraded",
        "environment": settings.ENVIRONMENT,
        "mongo": mongo_ok,
        "mongo_error": mongo_error,
        "patterns": len(PATTERN_CATALOG),
    }
