from datetime import datetime, timedelta, timezone
from jose import jwt
from typing import Any, Optional, Union

from app.core.config import settings

def create_access_token(subject: Union[str, Any], expires_minutes: Optional[int] = None) -> str:
    """
    Access Token 생성
    실제 발급은 외부 인증 서비스가 담당하고, 이 함수는 같은 형식의 토큰을
    로컬 개발/테스트에서 만들 때 사용합니다.
    """
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {"exp": expire, "sub": str(subject), "type": "access"}
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt

def decode_access_token(token: str) -> dict:
    """
    서명/만료 검증 후 payload 반환. 실패 시 jose.JWTError.
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
