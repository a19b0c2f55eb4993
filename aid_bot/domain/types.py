from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Tagged success/failure value returned by every pipeline stage."""

    ok: bool
    value: T | None = None
    error: E | None = None

    @staticmethod
    def success(v: T) -> "Result[T, E]":
        return Result(ok=True, value=v)

    @staticmethod
    def failure(e: E) -> "Result[T, E]":
        return Result(ok=False, error=e)

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if not self.ok:
            assert self.error is not None
            raise self.error
        return self.value  # type: ignore[return-value]


Vector = list[float]
