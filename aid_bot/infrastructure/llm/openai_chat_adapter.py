from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any, cast

from aid_bot.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from aid_bot.domain.errors import LLMError


@dataclass
class OpenAIChatAdapter(LLMPort):
    """Chat completions against OpenAI or any OpenAI-compatible server."""

    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: str | None = None  # e.g. "http://localhost:8000/v1" for vLLM
    temperature: float = 0.0
    max_tokens: int = 512

    def __post_init__(self) -> None:
        # Defer import of OpenAI to chat() to avoid hard dependency in tests
        self._client: Any | None = None

    def _ensure_client(self) -> Any:
        if self._client is None:
            module = import_module("openai")
            kwargs: dict[str, Any] = {"api_key": self.api_key or None}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            self._client = module.OpenAI(**kwargs)
        return self._client

    def chat(
        self,
        messages: Sequence[ChatMessage],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        try:
            client = self._ensure_client()
            payload: Any = [{"role": m.role, "content": m.content} for m in messages]
            resp: Any = client.chat.completions.create(
                model=self.model,
                messages=cast(Any, payload),
                temperature=self.temperature if temperature is None else temperature,
                max_tokens=self.max_tokens if max_tokens is None else max_tokens,
            )
            choice = resp.choices[0]
            usage = getattr(resp, "usage", None)
            return LLMResponse(
                text=choice.message.content or "",
                finish_reason=choice.finish_reason or "stop",
                usage_tokens=getattr(usage, "total_tokens", None),
            )
        except Exception as ex:  # noqa: BLE001
            # Translate external errors to domain-specific errors
            raise LLMError(f"LLM communication failed: {ex}") from ex
