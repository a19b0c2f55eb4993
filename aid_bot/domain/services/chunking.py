from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..models import DocumentChunk, SupportDocument

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


@dataclass(frozen=True)
class ChunkingParams:
    target_chars: int = 1000
    overlap_chars: int = 200
    max_overhang: int = 200

    def __post_init__(self) -> None:
        if self.target_chars <= 0:
            raise ValueError("target_chars must be > 0")
        if not 0 <= self.overlap_chars < self.target_chars:
            raise ValueError("overlap_chars must be >= 0 and < target_chars")
        if self.max_overhang < 0:
            raise ValueError("max_overhang must be >= 0")


def split_into_paragraphs(text: str) -> list[str]:
    """Blank lines separate paragraphs."""
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def split_into_sentences(paragraph: str) -> list[str]:
    paragraph = " ".join(paragraph.split())
    if not paragraph:
        return []
    return [s.strip() for s in _SENTENCE_END.split(paragraph) if s.strip()]


def _hard_split(sentence: str, size: int) -> list[str]:
    # a single sentence longer than the hard limit is cut into fixed windows
    return [sentence[i : i + size] for i in range(0, len(sentence), size)]


def _overlap_tail(text: str, overlap_chars: int) -> str:
    if overlap_chars <= 0:
        return ""
    tail = text[-overlap_chars:]
    if len(tail) < len(text) and " " in tail:
        # start the tail on a word boundary
        tail = tail.split(" ", 1)[1]
    return tail.strip()


def pack_sentences(sentences: Sequence[str], p: ChunkingParams) -> list[str]:
    """Greedily pack sentences into chunks of about target_chars.

    A chunk may overshoot the target by at most max_overhang when that keeps a
    sentence whole. Each new chunk starts with the tail of the previous one.
    """
    hard_limit = p.target_chars + p.max_overhang
    pieces: list[str] = []
    for s in sentences:
        pieces.extend(_hard_split(s, hard_limit) if len(s) > hard_limit else [s])

    chunks: list[str] = []
    curr: list[str] = []
    curr_len = 0
    fresh = 0  # pieces in curr that are not overlap carried from the last chunk

    for piece in pieces:
        added = len(piece) + (1 if curr else 0)
        if curr_len + added <= p.target_chars or (
            fresh and curr_len + added <= hard_limit
        ):
            curr.append(piece)
            curr_len += added
            fresh += 1
            continue

        if fresh:
            text = " ".join(curr)
            chunks.append(text)
            tail = _overlap_tail(text, p.overlap_chars)
            curr = [tail] if tail else []
            curr_len = len(tail)
        else:
            curr, curr_len = [], 0

        added = len(piece) + (1 if curr else 0)
        if curr_len + added > hard_limit:
            curr, curr_len = [], 0
            added = len(piece)
        curr.append(piece)
        curr_len += added
        fresh = 1

    if fresh:
        chunks.append(" ".join(curr))
    return chunks


def chunk_text(text: str, params: ChunkingParams | None = None) -> list[str]:
    p = params or ChunkingParams()
    sentences: list[str] = []
    for para in split_into_paragraphs(text):
        sentences.extend(split_into_sentences(para))
    return pack_sentences(sentences, p)


def chunk_document(
    document: SupportDocument, params: ChunkingParams | None = None
) -> list[DocumentChunk]:
    """Deterministic split of one document; positions are 0..n-1 in reading order."""
    return [
        DocumentChunk(document_id=document.source_id, text=text, position=i)
        for i, text in enumerate(chunk_text(document.text, params))
    ]
