from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IndexCorpusRequest:
    corpus_dir: str  # directory of support documents, scanned recursively
    extensions: tuple[str, ...] = (".txt",)
    collection: str = "support"
    target_chars: int = 1000
    overlap_chars: int = 200
    max_overhang: int = 200


@dataclass(frozen=True)
class IndexReport:
    corpus_dir: str
    documents: int
    chunks: int
    dim: int
    skipped: list[str] = field(default_factory=list)
