# aid_bot/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SupportDocument:
    """A support document loaded from the corpus directory.

    - source_id: path of the file relative to the corpus root
    - text:      full document text
    """

    source_id: str
    text: str


@dataclass(frozen=True)
class DocumentChunk:
    """
    Retrievable slice of a SupportDocument.

    - document_id: source_id of the owning document
    - text:        chunk text as embedded
    - position:    zero-based index of the chunk within its document
    - score:       similarity to the query when returned by the index (None at build time)
    """

    document_id: str
    text: str
    position: int
    score: float | None = None

    @property
    def chunk_id(self) -> str:
        return f"{self.document_id}::chunk::{self.position}"


@dataclass(frozen=True)
class LanguageEntry:
    code: str
    display_name: str


@dataclass(frozen=True)
class AidRequest:
    """One incoming aid request. content is validated later, so it may be None here."""

    content: str | None
    language: str | None = None


@dataclass(frozen=True)
class AidResponse:
    response: str
