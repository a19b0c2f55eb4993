"""Tests for the individual pipeline stages."""

from collections.abc import Sequence

from aid_bot.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from aid_bot.application.use_cases.assemble_response import AssembleResponse
from aid_bot.application.use_cases.reprioritize_request import (
    REPRIORITIZE_TEMPLATE,
    ReprioritizeRequest,
)
from aid_bot.application.use_cases.retrieve_support_chunks import RetrieveSupportChunks
from aid_bot.application.use_cases.synthesize_answer import (
    SynthesizeAnswer,
    build_context,
)
from aid_bot.domain.errors import (
    EmbeddingError,
    InvalidLanguageError,
    LLMError,
    NoMatchError,
    TranslationError,
    VectorStoreError,
)
from aid_bot.domain.language_catalog import LanguageCatalog
from aid_bot.domain.models import DocumentChunk


class FakeLLM(LLMPort):
    def __init__(self, response: str = "\n\nanswer", fail: Exception | None = None) -> None:
        self.response = response
        self.fail = fail
        self.prompts: list[str] = []

    def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.0, max_tokens: int = 512
    ) -> LLMResponse:
        self.prompts.append(messages[-1].content)
        if self.fail is not None:
            raise self.fail
        return LLMResponse(text=self.response)


class FakeIndex:
    def __init__(self, chunks=None, fail: Exception | None = None) -> None:
        self.chunks = chunks or []
        self.fail = fail
        self.queries: list[str] = []

    def query(self, text: str) -> list[DocumentChunk]:
        self.queries.append(text)
        if self.fail is not None:
            raise self.fail
        return self.chunks


class FakeTranslator:
    def __init__(self, fail: Exception | None = None) -> None:
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def translate(self, text: str, target_code: str) -> str:
        self.calls.append((text, target_code))
        if self.fail is not None:
            raise self.fail
        return f"[{target_code}] {text}"


def chunk(text: str, pos: int = 0) -> DocumentChunk:
    return DocumentChunk(document_id="guide.txt", text=text, position=pos)


CATALOG = LanguageCatalog({"en": "English", "es": "Spanish", "fr": "French"})


class TestReprioritizeRequest:
    def test_prompt_embeds_text_and_output_is_stripped(self) -> None:
        llm = FakeLLM(response="\n\nI am trapped. My phone is low.")
        result = ReprioritizeRequest(llm).execute("My phone is low. I am trapped.")

        assert result.ok
        assert result.value == "I am trapped. My phone is low."
        assert llm.prompts == [
            REPRIORITIZE_TEMPLATE.format(text="My phone is low. I am trapped.")
        ]
        assert llm.prompts[0].startswith("Determine which of the sentences")
        assert llm.prompts[0].endswith("Answer:")

    def test_llm_error_passes_through(self) -> None:
        err = LLMError("quota")
        result = ReprioritizeRequest(FakeLLM(fail=err)).execute("help")
        assert result.error is err

    def test_unexpected_exception_is_wrapped(self) -> None:
        result = ReprioritizeRequest(FakeLLM(fail=ConnectionError("down"))).execute("help")
        assert isinstance(result.error, LLMError)
        assert "down" in str(result.error)


class TestRetrieveSupportChunks:
    def test_returns_chunks_in_index_order(self) -> None:
        chunks = [chunk("a", 0), chunk("b", 1)]
        index = FakeIndex(chunks)
        result = RetrieveSupportChunks(index).execute("question")

        assert result.ok
        assert result.value == chunks
        assert index.queries == ["question"]

    def test_empty_retrieval_is_no_match(self) -> None:
        result = RetrieveSupportChunks(FakeIndex([])).execute("question")
        assert isinstance(result.error, NoMatchError)
        assert str(result.error) == "No similar documents found"

    def test_embedding_error_passes_through(self) -> None:
        err = EmbeddingError("model gone")
        result = RetrieveSupportChunks(FakeIndex(fail=err)).execute("q")
        assert result.error is err

    def test_unexpected_exception_is_vector_store_error(self) -> None:
        result = RetrieveSupportChunks(FakeIndex(fail=RuntimeError("x"))).execute("q")
        assert isinstance(result.error, VectorStoreError)


class TestSynthesizeAnswer:
    def test_context_is_stuffed_in_retrieval_order(self) -> None:
        llm = FakeLLM(response="\nBoil water first.")
        result = SynthesizeAnswer(llm).execute(
            [chunk("Boil water.", 0), chunk("Seek shelter.", 1)], "No clean water"
        )

        assert result.ok
        assert result.value == "Boil water first."
        prompt = llm.prompts[0]
        assert "Boil water.\n\nSeek shelter." in prompt
        assert "Question: No clean water\nHelpful Answer:" in prompt

    def test_no_chunks_never_calls_llm(self) -> None:
        llm = FakeLLM()
        result = SynthesizeAnswer(llm).execute([], "q")

        assert isinstance(result.error, NoMatchError)
        assert llm.prompts == []

    def test_blank_chunks_give_empty_context(self) -> None:
        assert build_context([chunk("  "), chunk("\n")]) == ""

    def test_llm_failure(self) -> None:
        result = SynthesizeAnswer(FakeLLM(fail=TimeoutError())).execute([chunk("x")], "q")
        assert isinstance(result.error, LLMError)


class TestAssembleResponse:
    def test_no_language_returns_answer_unchanged(self) -> None:
        translator = FakeTranslator()
        for language in (None, ""):
            result = AssembleResponse(CATALOG, translator).execute("Stay safe.", language)
            assert result.value == "Stay safe."
        assert translator.calls == []

    def test_bilingual_layout(self) -> None:
        translator = FakeTranslator()
        result = AssembleResponse(CATALOG, translator).execute("Stay safe.", "es")

        assert result.ok
        assert result.value == "English: Stay safe. \nSpanish: [es] Stay safe."
        assert translator.calls == [("Stay safe.", "es")]

    def test_invalid_language_never_reaches_translator(self) -> None:
        translator = FakeTranslator()
        result = AssembleResponse(CATALOG, translator).execute("Stay safe.", "xx")

        assert isinstance(result.error, InvalidLanguageError)
        assert str(result.error) == "Invalid language"
        assert result.error.code == "xx"
        assert translator.calls == []

    def test_language_codes_are_case_sensitive(self) -> None:
        result = AssembleResponse(CATALOG, FakeTranslator()).execute("a", "ES")
        assert isinstance(result.error, InvalidLanguageError)

    def test_translation_failure_is_an_error(self) -> None:
        result = AssembleResponse(CATALOG, FakeTranslator(fail=ValueError("429"))).execute(
            "a", "fr"
        )
        assert isinstance(result.error, TranslationError)

    def test_source_label_falls_back_to_english(self) -> None:
        assembler = AssembleResponse(LanguageCatalog({"es": "Spanish"}), FakeTranslator())
        assert assembler.source_label == "English"
