"""Domain errors for the aid request pipeline.

Client-caused failures (validation, no match, invalid language) carry the
exact message returned to the caller. External failures are wrapped so the
HTTP layer never sees SDK exception types.
"""


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Request content is missing, empty or too long."""


class NoMatchError(DomainError):
    """Retrieval returned no support-document chunks."""

    def __init__(self, message: str = "No similar documents found") -> None:
        super().__init__(message)


class InvalidLanguageError(DomainError):
    """Requested translation language is not in the catalog."""

    def __init__(self, code: str, message: str = "Invalid language") -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class CorpusError(DomainError):
    """Corpus directory missing, unreadable or yielding no chunks."""


class AssemblyError(DomainError):
    """Pipeline reached the end without a payload."""


class ExternalServiceError(DomainError):
    """An external collaborator failed or timed out."""


class LLMError(ExternalServiceError):
    """LLM backend failed or is misconfigured."""


class EmbeddingError(ExternalServiceError):
    """Embedding backend failed or is misconfigured."""


class VectorStoreError(ExternalServiceError):
    """Similarity index failed or is misconfigured."""


class TranslationError(ExternalServiceError):
    """Translation backend failed or is misconfigured."""


class DocumentError(DomainError):
    """A single corpus document could not be loaded."""
