from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any

import numpy as np

from aid_bot.application.ports.embedding_port import EmbeddingPort
from aid_bot.domain.errors import EmbeddingError


def _normalize(rows: list[list[float]]) -> list[list[float]]:
    arr = np.asarray(rows, dtype=np.float32)
    norms = np.linalg.norm(arr, axis=1, keepdims=True)
    norms[norms == 0.0] = 1.0
    return (arr / norms).tolist()


@dataclass
class OpenAIEmbeddingAdapter(EmbeddingPort):
    """Hosted embeddings through the OpenAI SDK, L2-normalized like the local adapter."""

    api_key: str = ""
    model: str = "text-embedding-3-small"
    base_url: str | None = None
    batch_size: int = 512

    def __post_init__(self) -> None:
        self._client: Any | None = None

    def _ensure_client(self) -> Any:
        if self._client is None:
            module = import_module("openai")
            kwargs: dict[str, Any] = {"api_key": self.api_key or None}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            self._client = module.OpenAI(**kwargs)
        return self._client

    def _embed(self, batch: Sequence[str]) -> list[list[float]]:
        try:
            resp: Any = self._ensure_client().embeddings.create(model=self.model, input=list(batch))
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"OpenAI embeddings failed: {ex}") from ex
        return [list(item.embedding) for item in resp.data]

    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            vectors.extend(self._embed(texts[start : start + self.batch_size]))
        return _normalize(vectors) if vectors else []

    def embed_query(self, text: str) -> list[float]:
        return _normalize(self._embed([text]))[0]
