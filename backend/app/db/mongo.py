# backend/app/db/mongo.py
import logging

from motor.motor_asyncio import AsyncIOMotorClient
from app.core.config import settings

logger = logging.getLogger(__name__)

client: AsyncIOMotorClient | None = None
db = None

async def connect_to_mongo():
    global client, db
    client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
    db = client[settings.MONGO_DB_NAME]
    logger.info("MongoDB Connected! (db=%s)", settings.MONGO_DB_NAME)

async def close_mongo_connection():
    global client, db
    if client:
        client.close()
        client = None
        db = None
        logger.info("MongoDB Connection Closed!")

def get_db():
    """
    현재 연결된 DB 핸들을 반환합니다.
    lifespan에서 connect_to_mongo()가 호출되기 전이라면 RuntimeError.
    """
    if db is None:
        raise RuntimeError("MongoDB is not connected")
    return db
