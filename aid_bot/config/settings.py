"""Application settings with environment-driven configuration.

This is the ONLY place where environment variables are read. All other
layers receive settings via the composition root.
"""

import os
from dataclasses import dataclass, field


def _csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class AppSettings:
    """Settings loaded from environment variables (and a .env file at startup).

    Backend switches:
    - embedding_backend: "sentence-transformers" | "openai"
    - translation_backend: "google" | "llm"
    """

    # ===== HTTP Server =====
    api_host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "3000")))
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _csv(os.getenv("CORS_ORIGINS", "*"))
    )

    # ===== Corpus / Indexing =====
    corpus_dir: str = field(default_factory=lambda: os.getenv("CORPUS_DIR", "support"))
    corpus_extensions: tuple[str, ...] = field(
        default_factory=lambda: _csv(os.getenv("CORPUS_EXTENSIONS", ".txt"))
    )
    chunk_target_chars: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_TARGET_CHARS", "1000"))
    )
    chunk_overlap_chars: int = field(
        default_factory=lambda: int(os.getenv("CHUNK_OVERLAP_CHARS", "200"))
    )
    retrieval_top_k: int = field(default_factory=lambda: int(os.getenv("RETRIEVAL_TOP_K", "4")))

    # ===== LLM Configuration =====
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    llm_base_url: str = field(default_factory=lambda: os.getenv("LLM_BASE_URL", ""))
    # Empty = api.openai.com; any OpenAI-compatible server (vLLM etc.) works
    llm_model: str = field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    llm_temperature: float = field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0"))
    )
    llm_max_tokens: int = field(default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "512")))

    # ===== Embedding Configuration =====
    embedding_backend: str = field(
        default_factory=lambda: os.getenv("EMBEDDING_BACKEND", "sentence-transformers").lower()
    )
    embedding_model: str = field(
        default_factory=lambda: os.getenv(
            "EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2"
        )
    )
    embedding_device: str = field(default_factory=lambda: os.getenv("EMBEDDING_DEVICE", "cpu"))
    openai_embedding_model: str = field(
        default_factory=lambda: os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small")
    )

    # ===== Translation =====
    translation_backend: str = field(
        default_factory=lambda: os.getenv("TRANSLATION_BACKEND", "google").lower()
    )
    source_language: str = field(default_factory=lambda: os.getenv("SOURCE_LANGUAGE", "en"))

    # ===== Pipeline =====
    external_call_timeout_s: float = field(
        default_factory=lambda: float(os.getenv("EXTERNAL_CALL_TIMEOUT_S", "60"))
    )
    # 0 disables the per-call timeout

    # ===== Logging / Telemetry =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    telemetry_enabled: bool = field(default_factory=lambda: _flag("TELEMETRY_ENABLED"))
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export
    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )
