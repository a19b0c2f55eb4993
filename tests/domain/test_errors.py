"""Tests for the domain error taxonomy and Result."""

import pytest

from aid_bot.domain.errors import (
    AssemblyError,
    DomainError,
    EmbeddingError,
    ExternalServiceError,
    InvalidLanguageError,
    LLMError,
    NoMatchError,
    TranslationError,
    ValidationError,
    VectorStoreError,
)
from aid_bot.domain.types import Result


def test_client_errors_carry_http_messages():
    assert str(NoMatchError()) == "No similar documents found"
    err = InvalidLanguageError("xx")
    assert str(err) == "Invalid language"
    assert err.code == "xx"


@pytest.mark.parametrize("cls", [LLMError, EmbeddingError, VectorStoreError, TranslationError])
def test_external_errors_share_a_base(cls):
    err = cls("boom")
    assert isinstance(err, ExternalServiceError)
    assert isinstance(err, DomainError)


def test_local_errors_are_not_external():
    for err in (ValidationError("x"), NoMatchError(), InvalidLanguageError("x"), AssemblyError("x")):
        assert not isinstance(err, ExternalServiceError)


def test_result_unwrap():
    assert Result.success(3).unwrap() == 3
    with pytest.raises(NoMatchError):
        Result.failure(NoMatchError()).unwrap()
