# main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from app.api.endpoints import breathing, health  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.db.mongo import connect_to_mongo, close_mongo_connection  # noqa: E402

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

logger.info("Running in %s mode", settings.ENVIRONMENT)


# [수명 주기 관리] DB 연결 및 해제
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup 로직
    await connect_to_mongo()
    yield
    # Shutdown 로직
    await close_mongo_connection()

app = FastAPI(title="Mind Garden Breathing Backend", lifespan=lifespan)

# --- 미들웨어 설정 ---

# CORS: 프론트엔드(SPA) 접근 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def read_root():
    return {"message": "Backend is running!"}

app.include_router(health.router)

# 호흡 운동 API
app.include_router(breathing.router, prefix="/api/v1/breathing", tags=["breathing"])


def run(host: str = "127.0.0.1", port: int = 8000):
    """`mind-garden-api` 콘솔 스크립트 / `python -m app.main` 진입점"""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
