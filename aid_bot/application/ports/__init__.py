"""Application ports package.

Re-exports every port so use cases and adapters can import from one place.
"""

from aid_bot.application.ports.document_loader_port import DocumentLoaderPort, DocumentPayload
from aid_bot.application.ports.embedding_port import EmbeddingPort
from aid_bot.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from aid_bot.application.ports.telemetry_port import TelemetryPort
from aid_bot.application.ports.translation_port import TranslationPort
from aid_bot.application.ports.vector_store_port import VectorStorePort

__all__ = [
    "DocumentLoaderPort",
    "DocumentPayload",
    "EmbeddingPort",
    "LLMPort",
    "ChatMessage",
    "LLMResponse",
    "TelemetryPort",
    "TranslationPort",
    "VectorStorePort",
]
