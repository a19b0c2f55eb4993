from __future__ import annotations

from dataclasses import dataclass

from aid_bot.application.ports.llm_port import LLMPort
from aid_bot.application.ports.translation_port import TranslationPort
from aid_bot.domain.errors import LLMError, TranslationError
from aid_bot.domain.language_catalog import LanguageCatalog
from aid_bot.domain.services.formatting import strip_leading_artifact

TRANSLATE_TEMPLATE = (
    "Translate the following text into {language}. "
    "Reply with the translation only.\n"
    "Text: {text}\n"
    "Translation:"
)


@dataclass
class LLMTranslationAdapter(TranslationPort):
    """Translation through the same LLM that answers requests."""

    llm: LLMPort
    catalog: LanguageCatalog
    template: str = TRANSLATE_TEMPLATE

    def translate(self, text: str, target_code: str) -> str:
        language = self.catalog.display_name(target_code) or target_code
        try:
            raw = self.llm.complete(self.template, {"language": language, "text": text})
        except LLMError as ex:
            raise TranslationError(f"LLM translation to '{target_code}' failed: {ex}") from ex
        return strip_leading_artifact(raw)
