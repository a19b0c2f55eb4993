"""Request validation.

Pure and synchronous: runs before any model call so that oversized or empty
requests never cost an external invocation.
"""

from __future__ import annotations

import re

from ..errors import ValidationError
from ..models import AidRequest
from ..types import Result

MAX_CONTENT_TOKENS = 200

MISSING_CONTENT = "Missing body content"
CONTENT_TOO_LONG = "Body content too long"

_TOKEN = re.compile(r"\S+")


def count_tokens(text: str) -> int:
    """Number of whitespace-delimited tokens in text."""
    return len(_TOKEN.findall(text))


def validate_request(
    request: AidRequest, max_tokens: int = MAX_CONTENT_TOKENS
) -> Result[str, ValidationError]:
    content = request.content
    if content is None or not content.strip():
        return Result.failure(ValidationError(MISSING_CONTENT))
    if count_tokens(content) > max_tokens:
        return Result.failure(ValidationError(CONTENT_TOO_LONG))
    return Result.success(content)
