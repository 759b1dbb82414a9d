"""
Whisper speech-to-text over the OpenAI audio API.
"""

import aiohttp
from loguru import logger

from gateway.config import TRANSCRIPTION_MODEL
from gateway.constants import Stage
from gateway.exceptions import UnexpectedResponseError

TRANSCRIPTIONS_PATH = "/audio/transcriptions"
DEFAULT_AUDIO_FILENAME = "audio.mp3"


def build_transcription_form(audio: bytes, filename: str, model: str) -> aiohttp.FormData:
    form = aiohttp.FormData()
    form.add_field("file", audio, filename=filename, content_type="application/octet-stream")
    form.add_field("model", model)
    return form


class Transcriber:
    def __init__(self, client, model: str = TRANSCRIPTION_MODEL):
        self.client = client
        self.model = model

    async def transcribe(self, audio: bytes, filename: str = DEFAULT_AUDIO_FILENAME) -> str:
        """
        Upload audio bytes as multipart and return the plain transcript text.

        Raises UpstreamError (stage=transcribing) on non-2xx and
        UnexpectedResponseError when the provider omits `text`.
        """
        logger.info(f"Transcribing {len(audio)} bytes with {self.model}")
        form = build_transcription_form(audio, filename, self.model)
        result = await self.client.post_form(TRANSCRIPTIONS_PATH, form, Stage.TRANSCRIBING)

        text = result.get("text") if isinstance(result, dict) else None
        if not isinstance(text, str):
            raise UnexpectedResponseError(Stage.TRANSCRIBING, "Transcription response did not include text")

        logger.info(f"Transcription completed, length: {len(text)}")
        return text
