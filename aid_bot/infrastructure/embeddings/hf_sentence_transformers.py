from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from importlib import import_module
from typing import Any

from aid_bot.application.ports.embedding_port import EmbeddingPort
from aid_bot.domain.errors import EmbeddingError


@dataclass
class HFEmbeddingAdapter(EmbeddingPort):
    """Local Sentence-Transformers embeddings, L2-normalized."""

    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"  # switch to "cuda" when available
    local_files_only: bool = False  # support offline deployments
    batch_size: int = 32
    _model: Any | None = field(default=None, init=False, repr=False)

    def _ensure_model(self) -> Any:
        if self._model is not None:
            return self._model
        try:
            st_module = import_module("sentence_transformers")
            self._model = st_module.SentenceTransformer(
                self.model_name,
                device=self.device,
                local_files_only=self.local_files_only,
            )
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(
                f"Failed to load embedding model '{self.model_name}': {ex}"
            ) from ex
        return self._model

    def embed_texts(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        model = self._ensure_model()
        try:
            raw = model.encode(
                list(texts),
                batch_size=self.batch_size,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"Embedding texts failed: {ex}") from ex
        return [[float(x) for x in vec] for vec in raw]

    def embed_query(self, text: str) -> list[float]:
        model = self._ensure_model()
        try:
            raw = model.encode(
                text,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as ex:  # noqa: BLE001
            raise EmbeddingError(f"Embedding query failed: {ex}") from ex
        return [float(x) for x in raw]
