from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from importlib import import_module
from typing import Any, cast

from aid_bot.application.ports.vector_store_port import DocumentChunk, VectorStorePort
from aid_bot.domain.errors import VectorStoreError


@dataclass
class FaissVectorStoreAdapter(VectorStorePort):
    """In-memory FAISS inner-product index over L2-normalized vectors (cosine).

    Written once at startup, then sealed; search is safe to call from
    several worker threads because a sealed index is never modified.
    """

    collection: str = "support"
    index: Any | None = field(default=None, init=False)
    chunks: dict[int, DocumentChunk] = field(default_factory=dict, init=False)
    known_ids: set[str] = field(default_factory=set, init=False)
    next_idx: int = field(default=0, init=False)
    sealed: bool = field(default=False, init=False)

    def _require_modules(self) -> tuple[Any, Any]:
        try:
            np = import_module("numpy")
            faiss = import_module("faiss")
        except Exception as ex:  # pragma: no cover
            raise VectorStoreError(
                "faiss-cpu and numpy are required for FaissVectorStoreAdapter"
            ) from ex
        return cast(Any, np), cast(Any, faiss)

    def ensure_collection(self, name: str, dim: int) -> None:
        if self.sealed:
            raise VectorStoreError(f"Collection '{self.collection}' is sealed.")
        self.collection = name
        try:
            _np, faiss = self._require_modules()
            self.index = faiss.IndexFlatIP(dim)
        except VectorStoreError:
            raise  # Re-raise domain errors
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Failed to create FAISS index: {ex}") from ex

    def upsert(
        self,
        ids: Sequence[str],
        vectors: Sequence[Sequence[float]],
        chunks: Sequence[DocumentChunk],
    ) -> None:
        if self.sealed:
            raise VectorStoreError(f"Collection '{self.collection}' is sealed.")
        if self.index is None:
            raise VectorStoreError("Collection not initialized. Call ensure_collection first.")
        if not len(ids) == len(vectors) == len(chunks):
            raise VectorStoreError("ids, vectors and chunks must have the same length")
        duplicates = self.known_ids.intersection(ids)
        if duplicates or len(set(ids)) != len(ids):
            raise VectorStoreError(f"duplicate chunk ids: {sorted(duplicates) or list(ids)}")
        try:
            np, faiss = self._require_modules()
            arr = np.array(vectors, dtype=np.float32)
            faiss.normalize_L2(arr)
            base = self.next_idx
            self.index.add(arr)
            for i in range(arr.shape[0]):
                self.chunks[base + i] = chunks[i]
            self.next_idx += arr.shape[0]
            self.known_ids.update(ids)
        except VectorStoreError:
            raise  # Re-raise domain errors
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Upsert failed: {ex}") from ex

    def seal(self) -> None:
        self.sealed = True

    def count(self) -> int:
        return self.next_idx

    def search(self, query_vector: Sequence[float], top_k: int = 4) -> list[DocumentChunk]:
        if self.index is None or self.next_idx == 0:
            return []
        try:
            np, faiss = self._require_modules()
            q = np.array([query_vector], dtype=np.float32)
            faiss.normalize_L2(q)
            scores, idxs = self.index.search(q, min(top_k, self.next_idx))
            out: list[DocumentChunk] = []
            for score, idx in zip(scores[0], idxs[0], strict=False):
                if int(idx) == -1:
                    continue
                chunk = self.chunks[int(idx)]
                out.append(
                    DocumentChunk(
                        document_id=chunk.document_id,
                        text=chunk.text,
                        position=chunk.position,
                        score=float(score),
                    )
                )
            return out
        except Exception as ex:  # noqa: BLE001
            raise VectorStoreError(f"Search failed: {ex}") from ex
