# aid_bot/application/use_cases/index_corpus.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from aid_bot.application.dto.index_dto import IndexCorpusRequest, IndexReport
from aid_bot.application.ports.document_loader_port import DocumentLoaderPort
from aid_bot.application.ports.embedding_port import EmbeddingPort
from aid_bot.application.ports.vector_store_port import VectorStorePort
from aid_bot.domain.errors import CorpusError, DocumentError
from aid_bot.domain.models import DocumentChunk, SupportDocument
from aid_bot.domain.services.chunking import ChunkingParams, chunk_document

logger = logging.getLogger(__name__)


class CorpusIndex:
    """Read-only similarity index over the support corpus.

    Built once by IndexCorpus and shared by all requests; nothing here
    mutates the underlying store.
    """

    def __init__(
        self,
        embedding: EmbeddingPort,
        vector_store: VectorStorePort,
        report: IndexReport,
        top_k: int = 4,
    ) -> None:
        if top_k < 1:
            raise ValueError("top_k must be >= 1")
        self._embedding = embedding
        self._vector_store = vector_store
        self.report = report
        self.top_k = top_k

    @property
    def chunk_count(self) -> int:
        return self._vector_store.count()

    def query(self, text: str) -> list[DocumentChunk]:
        """Nearest chunks first; empty when the index holds nothing."""
        if self._vector_store.count() == 0:
            return []
        q_vec = self._embedding.embed_query(text)
        return self._vector_store.search(q_vec, self.top_k)


class IndexCorpus:
    """Load, chunk, embed and index the support corpus at startup.

    Any failure is fatal: the service must not accept requests without a
    usable index.
    """

    def __init__(
        self,
        loaders: Mapping[str, DocumentLoaderPort],
        embedding: EmbeddingPort,
        vector_store: VectorStorePort,
        top_k: int = 4,
    ) -> None:
        self.loaders = {ext.lower(): loader for ext, loader in loaders.items()}
        self.embedding = embedding
        self.vector_store = vector_store
        self.top_k = top_k

    def discover(self, req: IndexCorpusRequest) -> list[Path]:
        root = Path(req.corpus_dir)
        if not root.is_dir():
            raise CorpusError(f"corpus directory '{req.corpus_dir}' does not exist")
        wanted = {ext.lower() for ext in req.extensions} & set(self.loaders)
        try:
            files = sorted(
                p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in wanted
            )
        except OSError as ex:
            raise CorpusError(f"corpus directory '{req.corpus_dir}' unreadable: {ex}") from ex
        if not files:
            raise CorpusError(
                f"corpus directory '{req.corpus_dir}' has no documents "
                f"with extensions {sorted(wanted)}"
            )
        return files

    def load(self, req: IndexCorpusRequest) -> tuple[list[SupportDocument], list[str]]:
        root = Path(req.corpus_dir)
        documents: list[SupportDocument] = []
        skipped: list[str] = []
        for path in self.discover(req):
            source_id = path.relative_to(root).as_posix()
            loader = self.loaders[path.suffix.lower()]
            try:
                payload = loader.load(str(path))
            except DocumentError as ex:
                raise CorpusError(f"failed to load '{source_id}': {ex}") from ex
            if not payload.text.strip():
                logger.warning("Skipping empty support document %s", source_id)
                skipped.append(source_id)
                continue
            documents.append(SupportDocument(source_id=source_id, text=payload.text))
        return documents, skipped

    def execute(self, req: IndexCorpusRequest) -> CorpusIndex:
        # 1) Load every document
        documents, skipped = self.load(req)

        # 2) Chunk (pure domain)
        params = ChunkingParams(
            target_chars=req.target_chars,
            overlap_chars=req.overlap_chars,
            max_overhang=req.max_overhang,
        )
        chunks: list[DocumentChunk] = []
        for doc in documents:
            chunks.extend(chunk_document(doc, params))
        if not chunks:
            raise CorpusError(f"corpus directory '{req.corpus_dir}' produced no chunks")

        # 3) Embed all chunks
        vectors = self.embedding.embed_texts([c.text for c in chunks])
        if len(vectors) != len(chunks):
            raise CorpusError(
                f"embedding returned {len(vectors)} vectors for {len(chunks)} chunks"
            )

        # 4) Build and seal the index
        dim = len(vectors[0])
        self.vector_store.ensure_collection(req.collection, dim=dim)
        self.vector_store.upsert(
            ids=[c.chunk_id for c in chunks], vectors=vectors, chunks=chunks
        )
        self.vector_store.seal()

        report = IndexReport(
            corpus_dir=req.corpus_dir,
            documents=len(documents),
            chunks=len(chunks),
            dim=dim,
            skipped=skipped,
        )
        logger.info(
            "Indexed %d support documents into %d chunks (dim=%d) from %s",
            report.documents,
            report.chunks,
            report.dim,
            req.corpus_dir,
        )
        return CorpusIndex(self.embedding, self.vector_store, report, top_k=self.top_k)
