import asyncio

import httpx
from loguru import logger

from inventory_api.core.config import get_settings

_task: asyncio.Task | None = None


async def ping_forever(url: str, interval: float, client: httpx.AsyncClient) -> None:
    """GET ``url`` every ``interval`` seconds so an idle host is not put to sleep."""
    while True:
        await asyncio.sleep(interval)
        try:
            res = await client.get(url)
            logger.debug(f"keep-alive ping {url} -> {res.status_code}")
        except Exception as e:
            logger.opt(exception=e).warning(f"keep-alive ping to {url} failed: {e}")


async def _run(url: str, interval: float) -> None:
    async with httpx.AsyncClient(timeout=10.0) as client:
        await ping_forever(url, interval, client)


def start_keepalive() -> None:
    global _task
    settings = get_settings()
    if _task is not None or not settings.KEEPALIVE_URL:
        return
    _task = asyncio.create_task(_run(settings.KEEPALIVE_URL, settings.KEEPALIVE_INTERVAL_SECONDS))
    logger.info(f"keep-alive started for {settings.KEEPALIVE_URL} every {settings.KEEPALIVE_INTERVAL_SECONDS}s")


async def stop_keepalive() -> None:
    global _task
    if _task is None:
        return
    _task.cancel()
    try:
        await _task
    except asyncio.CancelledError:
        pass
    _task = None
    logger.info("keep-alive stopped")
