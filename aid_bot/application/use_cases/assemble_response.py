from __future__ import annotations

from aid_bot.application.ports.translation_port import TranslationPort
from aid_bot.domain.errors import DomainError, InvalidLanguageError, TranslationError
from aid_bot.domain.language_catalog import LanguageCatalog
from aid_bot.domain.services.formatting import compose_bilingual
from aid_bot.domain.types import Result


class AssembleResponse:
    """Pass the answer through, or pair it with its translation.

    An unsupported code fails before the translator is touched, and a failed
    translation is an error rather than a silent untranslated answer.
    """

    def __init__(
        self,
        catalog: LanguageCatalog,
        translator: TranslationPort,
        source_language: str = "en",
    ) -> None:
        self.catalog = catalog
        self.translator = translator
        self.source_language = source_language

    @property
    def source_label(self) -> str:
        return self.catalog.display_name(self.source_language) or "English"

    def execute(self, answer: str, language: str | None = None) -> Result[str, DomainError]:
        if not language:
            return Result.success(answer)

        target_label = self.catalog.display_name(language)
        if target_label is None:
            return Result.failure(InvalidLanguageError(language))

        try:
            translation = self.translator.translate(answer, language)
        except TranslationError as ex:
            return Result.failure(ex)
        except Exception as ex:  # noqa: BLE001
            return Result.failure(TranslationError(f"translation to '{language}' failed: {ex}"))

        return Result.success(
            compose_bilingual(answer, translation, target_label, source_label=self.source_label)
        )
