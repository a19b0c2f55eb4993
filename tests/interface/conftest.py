"""Fakes for the HTTP and CLI tests: a fully wired container with no network."""

from collections.abc import Sequence

import pytest

from aid_bot.application.dto.index_dto import IndexReport
from aid_bot.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse
from aid_bot.application.use_cases.index_corpus import CorpusIndex
from aid_bot.config.composition import Container, build_catalog, build_pipeline
from aid_bot.config.settings import AppSettings
from aid_bot.domain.errors import LLMError, TranslationError
from aid_bot.domain.models import DocumentChunk


class FakeLLM(LLMPort):
    def __init__(self) -> None:
        self.prompts: list[str] = []
        self.fail = False

    def chat(
        self, messages: Sequence[ChatMessage], temperature: float = 0.0, max_tokens: int = 512
    ) -> LLMResponse:
        prompt = messages[-1].content
        self.prompts.append(prompt)
        if self.fail:
            raise LLMError("upstream 503")
        if "Helpful Answer:" in prompt:
            return LLMResponse(text="\n\nGo to the nearest shelter.")
        return LLMResponse(text="\nMy roof collapsed. I have no food.")


class FakeEmbedding:
    def embed_texts(self, texts):
        return [[1.0, 0.0] for _ in texts]

    def embed_query(self, text):
        return [1.0, 0.0]


class FakeVectorStore:
    def __init__(self, chunks: list[DocumentChunk]) -> None:
        self.chunks = chunks

    def ensure_collection(self, name, dim):
        pass

    def upsert(self, ids, vectors, chunks):
        pass

    def seal(self):
        pass

    def search(self, query_vector, top_k=4):
        return self.chunks[:top_k]

    def count(self):
        return len(self.chunks)


class FakeTranslator:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.fail = False

    def translate(self, text: str, target_code: str) -> str:
        self.calls.append((text, target_code))
        if self.fail:
            raise TranslationError("quota exceeded")
        return "Vaya al refugio más cercano."


class Fakes:
    def __init__(self, chunks: list[DocumentChunk]) -> None:
        self.llm = FakeLLM()
        self.translator = FakeTranslator()
        self.store = FakeVectorStore(chunks)


SHELTER_CHUNKS = [
    DocumentChunk(document_id="shelter.txt", text="Shelters are open at every school.", position=0),
]


@pytest.fixture
def fakes() -> Fakes:
    return Fakes(list(SHELTER_CHUNKS))


@pytest.fixture
def container(fakes: Fakes) -> Container:
    settings = AppSettings(cors_origins=("*",), external_call_timeout_s=5)
    catalog = build_catalog()
    index = CorpusIndex(
        FakeEmbedding(),
        fakes.store,
        IndexReport(corpus_dir="support", documents=1, chunks=len(fakes.store.chunks), dim=2),
    )
    return Container(
        settings=settings,
        catalog=catalog,
        index=index,
        pipeline=build_pipeline(
            settings, index=index, catalog=catalog, llm=fakes.llm, translator=fakes.translator
        ),
        telemetry=None,
    )
