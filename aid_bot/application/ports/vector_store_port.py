from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from aid_bot.domain.models import DocumentChunk

__all__ = ["DocumentChunk", "VectorStorePort"]


@runtime_checkable
class VectorStorePort(Protocol):
    def ensure_collection(self, name: str, dim: int) -> None: ...

    def upsert(
        self,
        ids: Sequence[str],
        vectors: Sequence[Sequence[float]],
        chunks: Sequence[DocumentChunk],
    ) -> None: ...

    def search(self, query_vector: Sequence[float], top_k: int = 4) -> list[DocumentChunk]: ...

    def seal(self) -> None:
        """Reject any further writes; the index is read-only afterwards."""
        ...

    def count(self) -> int: ...
