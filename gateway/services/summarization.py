from typing import Any, Dict

from loguru import logger

from gateway.config import SUMMARY_MAX_TOKENS, SUMMARY_MODEL, SUMMARY_TEMPERATURE
from gateway.constants import Stage
from gateway.exceptions import UnexpectedResponseError
from gateway.prompts import DUTY_QUERY_SYSTEM_PROMPT, build_duty_query_user_prompt

CHAT_COMPLETIONS_PATH = "/chat/completions"


class Summarizer:
    """Turns a call transcript into a duty doctor query via chat completions."""

    def __init__(
        self,
        client,
        model: str = SUMMARY_MODEL,
        temperature: float = SUMMARY_TEMPERATURE,
        max_tokens: int = SUMMARY_MAX_TOKENS,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_payload(self, transcript: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": DUTY_QUERY_SYSTEM_PROMPT},
                {"role": "user", "content": build_duty_query_user_prompt(transcript)},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def summarize(self, transcript: str) -> str:
        result = await self.client.post_json(CHAT_COMPLETIONS_PATH, self.build_payload(transcript), Stage.SUMMARIZING)

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str):
            raise UnexpectedResponseError(Stage.SUMMARIZING, "Completion response did not include message content")

        logger.info("Query generated successfully")
        return content
