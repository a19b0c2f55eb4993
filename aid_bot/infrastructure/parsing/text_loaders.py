from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from aid_bot.application.ports.document_loader_port import DocumentLoaderPort, DocumentPayload
from aid_bot.domain.errors import DocumentError


@dataclass
class PlainTextLoaderAdapter(DocumentLoaderPort):
    """Loads .txt and .md support documents as UTF-8."""

    encoding: str = "utf-8"

    def load(self, path: str) -> DocumentPayload:  # type: ignore[override]
        try:
            with open(path, encoding=self.encoding) as f:
                text = f.read().strip()
        except (OSError, UnicodeDecodeError) as ex:
            raise DocumentError(f"TXT load failed: {ex}") from ex
        return DocumentPayload(text=text, title=Path(path).stem, source_path=path)


@dataclass
class PDFTextExtractorAdapter(DocumentLoaderPort):
    def load(self, path: str) -> DocumentPayload:  # type: ignore[override]
        from pypdf import PdfReader

        try:
            reader = PdfReader(path)
            pages = [p.extract_text() or "" for p in reader.pages]
            text = "\n\n".join(pages).strip()
            title = reader.metadata.title if getattr(reader, "metadata", None) else None
        except Exception as ex:  # noqa: BLE001
            raise DocumentError(f"PDF parse failed: {ex}") from ex
        return DocumentPayload(text=text, title=title or Path(path).stem, source_path=path)
