from fastapi import FastAPI

from gateway.lifespan import lifespan
from gateway.exceptions import register_exception_handlers
from gateway.dependencies import limiter
from gateway.api import health, presence, calls, queue, duty_query
from logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Reception Gateway",
    version="1.0.0",
    lifespan=lifespan
)

app.state.limiter = limiter

# CORS headers are set by gateway.envelope on every response, including errors
register_exception_handlers(app)

app.include_router(health.router, tags=["Health"])
app.include_router(presence.router, tags=["Presence"])
app.include_router(calls.router, tags=["Calls"])
app.include_router(queue.router, tags=["Queue"])
app.include_router(duty_query.router, tags=["Duty Query"])
