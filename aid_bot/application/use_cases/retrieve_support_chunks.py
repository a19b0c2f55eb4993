from __future__ import annotations

from typing import Protocol

from aid_bot.domain.errors import DomainError, ExternalServiceError, NoMatchError, VectorStoreError
from aid_bot.domain.models import DocumentChunk
from aid_bot.domain.types import Result


class SupportIndex(Protocol):
    def query(self, text: str) -> list[DocumentChunk]: ...


class RetrieveSupportChunks:
    def __init__(self, index: SupportIndex) -> None:
        self.index = index

    def execute(self, text: str) -> Result[list[DocumentChunk], DomainError]:
        try:
            chunks = list(self.index.query(text))
        except ExternalServiceError as ex:
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            return Result.failure(VectorStoreError(f"similarity search failed: {ex}"))

        # Empty retrieval is terminal: never answer without grounding
        if not chunks:
            return Result.failure(NoMatchError())
        return Result.success(chunks)
