from __future__ import annotations

from aid_bot.application.ports.llm_port import LLMPort
from aid_bot.domain.errors import DomainError, LLMError
from aid_bot.domain.services.formatting import strip_leading_artifact
from aid_bot.domain.types import Result

REPRIORITIZE_TEMPLATE = (
    "Determine which of the sentences in the text require immediate attention "
    "and re-arrange them accordingly.\n"
    "Text: {text}\n"
    "Answer:"
)


class ReprioritizeRequest:
    """Ask the LLM to reorder the request text by urgency.

    What counts as urgent is left entirely to the model; the output is
    only normalized, never re-ranked.
    """

    def __init__(self, llm: LLMPort, template: str = REPRIORITIZE_TEMPLATE) -> None:
        self.llm = llm
        self.template = template

    def execute(self, content: str) -> Result[str, DomainError]:
        try:
            raw = self.llm.complete(self.template, {"text": content})
        except LLMError as ex:
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            return Result.failure(LLMError(f"reprioritization failed: {ex}"))
        return Result.success(strip_leading_artifact(raw))
