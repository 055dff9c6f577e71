from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from app.breathing.recorder import MongoSessionRecorder, SessionRecorder
from app.core.security import decode_access_token

# FastAPI가 스와거 문서에서 토큰 입력창을 보여주게 함
# (토큰 발급은 외부 인증 서비스)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

async def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    """
    JWT 토큰을 검증하고 user_id (sub)를 반환합니다.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
        user_id: str = payload.get("sub")

        if user_id is None:
            raise credentials_exception

        return user_id

    except JWTError:
        raise credentials_exception

async def get_session_recorder(user_id: str = Depends(get_current_user_id)) -> SessionRecorder:
    """
    로그인한 사용자 기준으로 세션을 저장하는 recorder
    """
    return MongoSessionRecorder(user_id)
