from typing import Protocol, runtime_checkable


@runtime_checkable
class TranslationPort(Protocol):
    def translate(self, text: str, target_code: str) -> str:
        """Translate text into the language identified by a catalog code."""
        ...
