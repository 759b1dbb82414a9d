"""
Recording-to-duty-query pipeline.

Runs as an explicit state machine:

    RESOLVING -> DOWNLOADING -> TRANSCRIBING -> SUMMARIZING -> DONE

Each state handler reads what the previous state produced and sets the next
state. A handler failure raises the stage's typed error and ends the run;
later stages never start and nothing is retried.
"""

import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from loguru import logger

from gateway.constants import PipelineState, Stage
from gateway.services.recordings import RecordingResolver
from gateway.services.summarization import Summarizer
from gateway.services.transcription import Transcriber


@dataclass(frozen=True)
class PipelineResult:
    call_id: str
    transcript: str
    duty_query: str


@dataclass
class PipelineRun:
    """Mutable state of one pipeline run."""
    call_id: str
    state: PipelineState = PipelineState.RESOLVING
    audio_url: Optional[str] = None
    audio: Optional[bytes] = None
    transcript: Optional[str] = None
    duty_query: Optional[str] = None
    # (state, elapsed ms) for each completed state
    timings: List[Tuple[PipelineState, float]] = field(default_factory=list)


class DutyQueryPipeline:
    def __init__(
        self,
        telephony,
        resolver: Optional[RecordingResolver] = None,
        transcriber: Optional[Transcriber] = None,
        summarizer: Optional[Summarizer] = None,
        ai=None,
    ):
        self.telephony = telephony
        self.resolver = resolver or RecordingResolver(telephony)
        self.transcriber = transcriber or Transcriber(ai)
        self.summarizer = summarizer or Summarizer(ai)
        self._handlers: Dict[PipelineState, Callable[[PipelineRun], Awaitable[None]]] = {
            PipelineState.RESOLVING: self._resolve,
            PipelineState.DOWNLOADING: self._download,
            PipelineState.TRANSCRIBING: self._transcribe,
            PipelineState.SUMMARIZING: self._summarize,
        }

    async def run(self, call_id: str) -> PipelineResult:
        run = PipelineRun(call_id=str(call_id))
        logger.info(f"Processing call: {run.call_id}")

        while run.state is not PipelineState.DONE:
            current = run.state
            started = time.perf_counter()
            try:
                await self._handlers[current](run)
            except Exception as e:
                logger.error(f"Call {run.call_id} failed in {current.value}: {type(e).__name__}: {e}")
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000
            run.timings.append((current, elapsed_ms))
            logger.debug(f"Call {run.call_id}: {current.value} -> {run.state.value} ({elapsed_ms:.0f}ms)")

        total_ms = sum(ms for _, ms in run.timings)
        logger.info(f"Duty query ready for call {run.call_id} ({total_ms:.0f}ms total)")
        return PipelineResult(call_id=run.call_id, transcript=run.transcript, duty_query=run.duty_query)

    async def _resolve(self, run: PipelineRun) -> None:
        run.audio_url = await self.resolver.resolve(run.call_id)
        run.state = PipelineState.DOWNLOADING

    async def _download(self, run: PipelineRun) -> None:
        run.audio = await self.telephony.get_bytes(run.audio_url, Stage.DOWNLOADING)
        logger.info(f"Audio downloaded, size: {len(run.audio)}")
        run.state = PipelineState.TRANSCRIBING

    async def _transcribe(self, run: PipelineRun) -> None:
        run.transcript = await self.transcriber.transcribe(run.audio)
        run.audio = None
        run.state = PipelineState.SUMMARIZING

    async def _summarize(self, run: PipelineRun) -> None:
        run.duty_query = await self.summarizer.summarize(run.transcript)
        run.state = PipelineState.DONE
