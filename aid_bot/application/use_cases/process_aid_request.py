# aid_bot/application/use_cases/process_aid_request.py
from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import Any

from aid_bot.application.ports.telemetry_port import TelemetryPort
from aid_bot.application.use_cases.assemble_response import AssembleResponse
from aid_bot.application.use_cases.reprioritize_request import ReprioritizeRequest
from aid_bot.application.use_cases.retrieve_support_chunks import RetrieveSupportChunks
from aid_bot.application.use_cases.synthesize_answer import SynthesizeAnswer
from aid_bot.domain.errors import (
    AssemblyError,
    DomainError,
    ExternalServiceError,
    LLMError,
    TranslationError,
    VectorStoreError,
)
from aid_bot.domain.models import AidRequest, AidResponse
from aid_bot.domain.services.validation import MAX_CONTENT_TOKENS, count_tokens, validate_request
from aid_bot.domain.types import Result

logger = logging.getLogger(__name__)

FAILED_TO_GENERATE = "Failed to generate response"


class PipelineStage(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    REPRIORITIZED = "reprioritized"
    RETRIEVED = "retrieved"
    SYNTHESIZED = "synthesized"
    ASSEMBLED = "assembled"
    RESPONDED = "responded"
    FAILED = "failed"


class ProcessAidRequest:
    """
    Sequence validation -> reprioritization -> retrieval -> synthesis -> assembly.

    Strictly linear: a stage runs only if the previous one succeeded, and the
    first failure ends the request. Blocking port calls are awaited through
    worker threads, so the event loop only suspends at external calls.
    No retries.
    """

    def __init__(
        self,
        reprioritize: ReprioritizeRequest,
        retrieve: RetrieveSupportChunks,
        synthesize: SynthesizeAnswer,
        assemble: AssembleResponse,
        telemetry: TelemetryPort | None = None,
        timeout_s: float | None = None,
        max_tokens: int = MAX_CONTENT_TOKENS,
    ) -> None:
        self.reprioritize = reprioritize
        self.retrieve = retrieve
        self.synthesize = synthesize
        self.assemble = assemble
        self.telemetry = telemetry
        self.timeout_s = timeout_s
        self.max_tokens = max_tokens

    async def execute(self, req: AidRequest) -> Result[AidResponse, DomainError]:
        # RECEIVED -> VALIDATED (pure, before any paid call)
        validated = validate_request(req, self.max_tokens)
        if not validated.ok:
            return self._fail(PipelineStage.RECEIVED, validated.error)
        content = validated.value or ""
        logger.debug("Aid request validated (%d tokens)", count_tokens(content))

        # VALIDATED -> REPRIORITIZED
        prioritized = await self._offload(
            PipelineStage.REPRIORITIZED, LLMError, self.reprioritize.execute, content
        )
        if not prioritized.ok:
            return self._fail(PipelineStage.VALIDATED, prioritized.error)
        question = prioritized.value or ""

        # REPRIORITIZED -> RETRIEVED
        retrieved = await self._offload(
            PipelineStage.RETRIEVED, VectorStoreError, self.retrieve.execute, question
        )
        if not retrieved.ok:
            return self._fail(PipelineStage.REPRIORITIZED, retrieved.error)
        chunks = retrieved.value or []
        logger.debug("Retrieved %d support chunks", len(chunks))

        # RETRIEVED -> SYNTHESIZED
        answered = await self._offload(
            PipelineStage.SYNTHESIZED, LLMError, self.synthesize.execute, chunks, question
        )
        if not answered.ok:
            return self._fail(PipelineStage.RETRIEVED, answered.error)
        answer = answered.value or ""

        # SYNTHESIZED -> ASSEMBLED (translation is the only external call here)
        if req.language:
            assembled = await self._offload(
                PipelineStage.ASSEMBLED,
                TranslationError,
                self.assemble.execute,
                answer,
                req.language,
            )
        else:
            assembled = self.assemble.execute(answer, None)
        if not assembled.ok:
            return self._fail(PipelineStage.SYNTHESIZED, assembled.error)

        # ASSEMBLED -> RESPONDED
        if not assembled.value:
            return self._fail(PipelineStage.ASSEMBLED, AssemblyError(FAILED_TO_GENERATE))

        self._count(PipelineStage.RESPONDED, "ok")
        return Result.success(AidResponse(response=assembled.value))

    async def _offload(
        self,
        stage: PipelineStage,
        timeout_error: type[ExternalServiceError],
        fn: Callable[..., Result[Any, DomainError]],
        *args: Any,
    ) -> Result[Any, DomainError]:
        started = time.perf_counter()
        try:
            call = asyncio.to_thread(fn, *args)
            if self.timeout_s:
                return await asyncio.wait_for(call, timeout=self.timeout_s)
            return await call
        except TimeoutError:
            # the worker thread is left to finish; its result is discarded
            return Result.failure(
                timeout_error(f"{stage.value} step timed out after {self.timeout_s}s")
            )
        finally:
            if self.telemetry is not None:
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                self.telemetry.observe(
                    "aid_bot.stage.latency_ms", elapsed_ms, {"stage": stage.value}
                )

    def _fail(
        self, stage: PipelineStage, error: DomainError | None
    ) -> Result[AidResponse, DomainError]:
        err = error or AssemblyError(FAILED_TO_GENERATE)
        if isinstance(err, ExternalServiceError):
            logger.error("Aid request failed after %s: %s: %s", stage.value, type(err).__name__, err)
        else:
            logger.info("Aid request rejected after %s: %s", stage.value, err)
        self._count(stage, PipelineStage.FAILED.value, error_type=type(err).__name__)
        return Result.failure(err)

    def _count(self, stage: PipelineStage, status: str, error_type: str | None = None) -> None:
        if self.telemetry is None:
            return
        tags = {"stage": stage.value, "status": status}
        if error_type:
            tags["error_type"] = error_type
        self.telemetry.incr("aid_bot.requests.total", tags)
