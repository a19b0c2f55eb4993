"""Google Translate through deep-translator.

Catalog codes follow the older Google table; a few differ from what the
current endpoint accepts and are mapped here.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module

from aid_bot.application.ports.translation_port import TranslationPort
from aid_bot.domain.errors import TranslationError

PROVIDER_CODES = {
    "zh-cn": "zh-CN",
    "zh-tw": "zh-TW",
    "ma": "pa",
}


def provider_code(code: str) -> str:
    return PROVIDER_CODES.get(code, code)


@dataclass
class GoogleTranslateAdapter(TranslationPort):
    """Stateless across calls: GoogleTranslator keeps the text being translated
    on the instance, so every call builds its own (construction does no I/O).
    """

    source: str = "auto"

    def translate(self, text: str, target_code: str) -> str:
        try:
            module = import_module("deep_translator")
            translator = module.GoogleTranslator(
                source=self.source, target=provider_code(target_code)
            )
            translated = translator.translate(text)
        except Exception as ex:  # noqa: BLE001
            raise TranslationError(f"Google translation to '{target_code}' failed: {ex}") from ex
        if translated is None:
            raise TranslationError(f"Google translation to '{target_code}' returned nothing")
        return str(translated)
