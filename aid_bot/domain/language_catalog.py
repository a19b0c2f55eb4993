from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .models import LanguageEntry


class LanguageCatalog:
    """Immutable code -> display name table used to validate translation requests.

    Lookups are exact and case-sensitive: "es" resolves, "ES" does not.
    """

    def __init__(self, languages: Mapping[str, str]) -> None:
        self._languages: Mapping[str, str] = MappingProxyType(dict(languages))

    def is_supported(self, code: str) -> bool:
        return code in self._languages

    def display_name(self, code: str) -> str | None:
        return self._languages.get(code)

    def entries(self) -> Iterator[LanguageEntry]:
        for code, name in self._languages.items():
            yield LanguageEntry(code=code, display_name=name)

    def __len__(self) -> int:
        return len(self._languages)

    def __contains__(self, code: object) -> bool:
        return code in self._languages
