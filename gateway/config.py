import os
from typing import List, Tuple
from loguru import logger

ENV = os.getenv("ENV", "local")

XON_BASE_URL = os.getenv("XON_BASE_URL", "https://platform.x-onweb.com/api/v1").rstrip("/")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")

TRANSCRIPTION_MODEL = os.getenv("TRANSCRIPTION_MODEL", "whisper-1")
SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gpt-4o-mini")
SUMMARY_TEMPERATURE = float(os.getenv("SUMMARY_TEMPERATURE", "0.7"))
SUMMARY_MAX_TOKENS = int(os.getenv("SUMMARY_MAX_TOKENS", "500"))

USERS_PAGE_SIZE = int(os.getenv("USERS_PAGE_SIZE", "100"))
PAGINATION_MAX_PAGES = int(os.getenv("PAGINATION_MAX_PAGES", "50"))

PRESENCE_CACHE_TTL_MS = 5000

DUTY_QUERY_RATE_LIMIT = os.getenv("DUTY_QUERY_RATE_LIMIT", "30/minute")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in ["true", "1", "yes"]

XON_API_KEY_VAR = "XON_API_KEY"
OPENAI_API_KEY_VAR = "OPENAI_API_KEY"

# Credentials are checked per request; startup only reports what is missing
CREDENTIAL_ENV_VARS = [XON_API_KEY_VAR, OPENAI_API_KEY_VAR]


def validate_env_vars(required_vars: List[str]) -> Tuple[bool, List[str]]:
    missing = [var for var in required_vars if not os.getenv(var)]
    return len(missing) == 0, missing


async def validate_backend_startup() -> None:
    logger.info("Validating gateway environment...")

    all_present, missing = validate_env_vars(CREDENTIAL_ENV_VARS)
    if all_present:
        logger.info("✓ Upstream credentials present")
    else:
        logger.warning(
            f"Missing credentials: {', '.join(missing)} - dependent endpoints will return configuration errors"
        )

    if PAGINATION_MAX_PAGES < 1:
        raise RuntimeError("PAGINATION_MAX_PAGES must be at least 1")

    logger.info(f"X-on base URL: {XON_BASE_URL}")
    logger.info(f"Pagination bound: {PAGINATION_MAX_PAGES} pages, presence TTL: {PRESENCE_CACHE_TTL_MS}ms")
    logger.info("Gateway validation complete - ready to start")
