from __future__ import annotations

from collections.abc import Sequence

from aid_bot.application.ports.llm_port import LLMPort
from aid_bot.domain.errors import DomainError, LLMError, NoMatchError
from aid_bot.domain.models import DocumentChunk
from aid_bot.domain.services.formatting import strip_leading_artifact
from aid_bot.domain.types import Result

QA_TEMPLATE = (
    "Use the following pieces of context to answer the question at the end. "
    "If you don't know the answer, just say that you don't know, "
    "don't try to make up an answer.\n\n"
    "{context}\n\n"
    "Question: {question}\n"
    "Helpful Answer:"
)


def build_context(chunks: Sequence[DocumentChunk]) -> str:
    return "\n\n".join(c.text for c in chunks if c.text.strip())


class SynthesizeAnswer:
    """Answer the reprioritized question from the retrieved chunks only.

    All chunks are stuffed into a single prompt, in retrieval order.
    """

    def __init__(self, llm: LLMPort, template: str = QA_TEMPLATE) -> None:
        self.llm = llm
        self.template = template

    def execute(
        self, chunks: Sequence[DocumentChunk], question: str
    ) -> Result[str, DomainError]:
        context = build_context(chunks)
        if not context:
            return Result.failure(NoMatchError())

        try:
            raw = self.llm.complete(self.template, {"context": context, "question": question})
        except LLMError as ex:
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            return Result.failure(LLMError(f"answer synthesis failed: {ex}"))
        return Result.success(strip_leading_artifact(raw))
