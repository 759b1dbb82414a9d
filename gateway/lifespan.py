from contextlib import asynccontextmanager
import aiohttp
from fastapi import FastAPI
from loguru import logger

from gateway.cache import PresenceCache


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")

    app.state.http_session = aiohttp.ClientSession()
    logger.info("HTTP session created")

    app.state.presence_cache = PresenceCache()
    logger.info(f"Presence cache ready (ttl={app.state.presence_cache.ttl_ms}ms)")

    logger.info("Application ready")

    yield

    logger.info("Shutdown signal received...")
    await app.state.http_session.close()
    logger.info("HTTP session closed")
    logger.info("Graceful shutdown complete")
