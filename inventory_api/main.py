import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from prometheus_fastapi_instrumentator import Instrumentator

from inventory_api.api import api_router
from inventory_api.api.errors import register_exception_handlers
from inventory_api.api.v1.endpoints.products import get_product_repository
from inventory_api.core.config import get_settings
from inventory_api.core.keepalive import start_keepalive, stop_keepalive
from inventory_api.core.logging_config import setup_logging
from inventory_api.db.mongo_client import connect_to_mongo, close_mongo_connection

setup_logging()

app = FastAPI(title="Inventory API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
Instrumentator().instrument(app).expose(app)
register_exception_handlers(app)

@app.on_event("startup")
async def on_startup():
    await connect_to_mongo()
    await get_product_repository().migrate_legacy()
    start_keepalive()
    logger.info("API started")

@app.on_event("shutdown")
async def on_shutdown():
    await stop_keepalive()
    await close_mongo_connection()
    logger.info("API stopped")

app.include_router(api_router)


def run():
    settings = get_settings()
    uvicorn.run("inventory_api.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)


if __name__ == "__main__":
    run()
