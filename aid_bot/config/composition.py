"""Composition root: the single place where adapters are chosen and wired."""

from __future__ import annotations

from dataclasses import dataclass

from aid_bot.application.dto.index_dto import IndexCorpusRequest
from aid_bot.application.ports.document_loader_port import DocumentLoaderPort
from aid_bot.application.ports.embedding_port import EmbeddingPort
from aid_bot.application.ports.llm_port import LLMPort
from aid_bot.application.ports.telemetry_port import TelemetryPort
from aid_bot.application.ports.translation_port import TranslationPort
from aid_bot.application.ports.vector_store_port import VectorStorePort
from aid_bot.application.use_cases.assemble_response import AssembleResponse
from aid_bot.application.use_cases.index_corpus import CorpusIndex, IndexCorpus
from aid_bot.application.use_cases.process_aid_request import ProcessAidRequest
from aid_bot.application.use_cases.reprioritize_request import ReprioritizeRequest
from aid_bot.application.use_cases.retrieve_support_chunks import (
    RetrieveSupportChunks,
    SupportIndex,
)
from aid_bot.application.use_cases.synthesize_answer import SynthesizeAnswer
from aid_bot.config.languages import DEFAULT_LANGUAGES
from aid_bot.config.settings import AppSettings
from aid_bot.domain.language_catalog import LanguageCatalog
from aid_bot.infrastructure.embeddings.hf_sentence_transformers import HFEmbeddingAdapter
from aid_bot.infrastructure.embeddings.openai_embeddings import OpenAIEmbeddingAdapter
from aid_bot.infrastructure.llm.openai_chat_adapter import OpenAIChatAdapter
from aid_bot.infrastructure.parsing.text_loaders import (
    PDFTextExtractorAdapter,
    PlainTextLoaderAdapter,
)
from aid_bot.infrastructure.telemetry.otel_adapter import (
    NoopTelemetry,
    OpenTelemetryAdapter,
    OtelConfig,
)
from aid_bot.infrastructure.translation.google_translate_adapter import GoogleTranslateAdapter
from aid_bot.infrastructure.translation.llm_translation_adapter import LLMTranslationAdapter
from aid_bot.infrastructure.vectorstore.faiss_vector_store import FaissVectorStoreAdapter


def build_llm(settings: AppSettings) -> LLMPort:
    return OpenAIChatAdapter(
        api_key=settings.openai_api_key,
        model=settings.llm_model,
        base_url=settings.llm_base_url or None,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )


def build_embedding(settings: AppSettings) -> EmbeddingPort:
    if settings.embedding_backend == "openai":
        return OpenAIEmbeddingAdapter(
            api_key=settings.openai_api_key,
            model=settings.openai_embedding_model,
            base_url=settings.llm_base_url or None,
        )
    if settings.embedding_backend == "sentence-transformers":
        return HFEmbeddingAdapter(
            model_name=settings.embedding_model,
            device=settings.embedding_device,
        )
    raise ValueError(f"Unknown EMBEDDING_BACKEND '{settings.embedding_backend}'")


def build_vector_store(settings: AppSettings) -> VectorStorePort:
    return FaissVectorStoreAdapter()


def build_document_loaders(settings: AppSettings) -> dict[str, DocumentLoaderPort]:
    text_loader = PlainTextLoaderAdapter()
    return {
        ".txt": text_loader,
        ".md": text_loader,
        ".pdf": PDFTextExtractorAdapter(),
    }


def build_catalog() -> LanguageCatalog:
    return LanguageCatalog(DEFAULT_LANGUAGES)


def build_translator(
    settings: AppSettings, llm: LLMPort, catalog: LanguageCatalog
) -> TranslationPort:
    if settings.translation_backend == "llm":
        return LLMTranslationAdapter(llm=llm, catalog=catalog)
    if settings.translation_backend == "google":
        return GoogleTranslateAdapter()
    raise ValueError(f"Unknown TRANSLATION_BACKEND '{settings.translation_backend}'")


def build_telemetry(settings: AppSettings) -> TelemetryPort:
    if not settings.telemetry_enabled:
        return NoopTelemetry()
    return OpenTelemetryAdapter(
        OtelConfig(
            service_name="aid-bot",
            otlp_endpoint=settings.otlp_endpoint or None,
            environment=settings.telemetry_environment,
        )
    )


def build_index_request(settings: AppSettings, corpus_dir: str | None = None) -> IndexCorpusRequest:
    return IndexCorpusRequest(
        corpus_dir=corpus_dir or settings.corpus_dir,
        extensions=settings.corpus_extensions,
        target_chars=settings.chunk_target_chars,
        overlap_chars=settings.chunk_overlap_chars,
    )


def build_index_use_case(settings: AppSettings) -> IndexCorpus:
    return IndexCorpus(
        loaders=build_document_loaders(settings),
        embedding=build_embedding(settings),
        vector_store=build_vector_store(settings),
        top_k=settings.retrieval_top_k,
    )


def build_pipeline(
    settings: AppSettings,
    index: SupportIndex,
    catalog: LanguageCatalog,
    llm: LLMPort,
    translator: TranslationPort,
    telemetry: TelemetryPort | None = None,
) -> ProcessAidRequest:
    return ProcessAidRequest(
        reprioritize=ReprioritizeRequest(llm),
        retrieve=RetrieveSupportChunks(index),
        synthesize=SynthesizeAnswer(llm),
        assemble=AssembleResponse(catalog, translator, source_language=settings.source_language),
        telemetry=telemetry,
        timeout_s=settings.external_call_timeout_s or None,
    )


@dataclass
class Container:
    """Everything built once before the service accepts traffic."""

    settings: AppSettings
    catalog: LanguageCatalog
    index: CorpusIndex
    pipeline: ProcessAidRequest
    telemetry: TelemetryPort


def build_container(settings: AppSettings | None = None) -> Container:
    """Index the corpus and wire the pipeline. Raises CorpusError on an unusable corpus."""
    settings = settings or AppSettings()
    catalog = build_catalog()
    index = build_index_use_case(settings).execute(build_index_request(settings))
    llm = build_llm(settings)
    telemetry = build_telemetry(settings)
    pipeline = build_pipeline(
        settings,
        index=index,
        catalog=catalog,
        llm=llm,
        translator=build_translator(settings, llm, catalog),
        telemetry=telemetry,
    )
    return Container(
        settings=settings,
        catalog=catalog,
        index=index,
        pipeline=pipeline,
        telemetry=telemetry,
    )
