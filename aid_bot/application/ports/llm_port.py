from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str


@dataclass(frozen=True)
class LLMResponse:
    text: str
    finish_reason: str = "stop"
    usage_tokens: int | None = None


class LLMPort(Protocol):
    def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.0, max_tokens: int = 512
    ) -> LLMResponse: ...

    def complete(self, prompt: str, variables: dict[str, str] | None = None) -> str:
        """Render ``prompt`` with ``variables`` and return the model text.

        Adapters that subclass the port get this for free; it sends the
        rendered prompt as a single user message.
        """
        rendered = prompt.format(**variables) if variables else prompt
        response = self.chat([ChatMessage(role="user", content=rendered)])
        return response.text
