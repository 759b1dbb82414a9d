import os

from fastapi import APIRouter

from gateway.config import ENV, OPENAI_API_KEY_VAR, XON_API_KEY_VAR

router = APIRouter()


@router.get("/")
async def root():
    return {
        "service": "Reception Gateway - X-on and AI orchestration",
        "version": "1.0",
        "status": "operational",
        "endpoints": {
            "health": "/health",
            "presence": "/xon-proxy",
            "calls": "/xon-calls",
            "queue": "/xon-queue-live",
            "duty_query": "/generate-duty-query"
        },
        "documentation": "/docs"
    }


@router.get("/health")
async def health():
    credentials = {
        "telephony": bool(os.getenv(XON_API_KEY_VAR)),
        "ai": bool(os.getenv(OPENAI_API_KEY_VAR)),
    }
    return {
        "status": "healthy" if all(credentials.values()) else "degraded",
        "service": "reception-gateway",
        "env": ENV,
        "credentials": credentials
    }
