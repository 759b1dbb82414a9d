"""Local entry point: `python app.py` serves the gateway with uvicorn."""
import asyncio
import os

import uvicorn
from dotenv import load_dotenv
from loguru import logger

load_dotenv()

from gateway.config import XON_BASE_URL, validate_backend_startup
from gateway.main import app


def run() -> None:
    # Missing credentials only warn; each endpoint reports them per request
    asyncio.run(validate_backend_startup())

    port = int(os.getenv("PORT", 8000))
    logger.info(f"Reception gateway listening on :{port}, proxying {XON_BASE_URL}")
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
