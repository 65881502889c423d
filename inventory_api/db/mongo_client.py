from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from inventory_api.core.config import get_settings
from loguru import logger

_client: AsyncIOMotorClient | None = None

async def connect_to_mongo() -> None:
    global _client
    if _client:
        logger.debug("MongoDB connection already established.")
        return
    settings = get_settings()
    timeout_ms = int(settings.STORAGE_TIMEOUT_SECONDS * 1000)
    _client = AsyncIOMotorClient(settings.MONGO_URI, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
    logger.info(f"Mongo connected to database '{settings.MONGO_DB_NAME}'")

async def close_mongo_connection() -> None:
    global _client
    if _client:
        _client.close()
        _client = None
        logger.info("Mongo connection closed")

def get_database() -> AsyncIOMotorDatabase:
    if _client is None:
        raise RuntimeError("Call connect_to_mongo() first")
    return _client[get_settings().MONGO_DB_NAME]
