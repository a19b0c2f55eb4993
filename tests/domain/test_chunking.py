import pytest

from aid_bot.domain.models import SupportDocument
from aid_bot.domain.services.chunking import (
    ChunkingParams,
    chunk_document,
    chunk_text,
    pack_sentences,
    split_into_paragraphs,
    split_into_sentences,
)


def test_paragraph_and_sentence_split():
    text = "First sentence. Second one!\n\nThird? Yes."
    assert split_into_paragraphs(text) == ["First sentence. Second one!", "Third? Yes."]
    assert split_into_sentences("First sentence. Second one! Third?") == [
        "First sentence.",
        "Second one!",
        "Third?",
    ]


def test_short_text_is_one_chunk():
    assert chunk_text("Boil water before drinking. Keep it covered.") == [
        "Boil water before drinking. Keep it covered."
    ]


def test_empty_text_has_no_chunks():
    assert chunk_text("   \n\n ") == []


def test_pack_respects_target_and_overlap():
    sents = ["word"] * 50
    p = ChunkingParams(target_chars=20, overlap_chars=5, max_overhang=0)
    chunks = pack_sentences(sents, p)

    assert len(chunks) >= 2
    assert all(len(c) <= 20 for c in chunks)
    # next chunk starts with the tail of the previous one
    assert chunks[1].startswith("word")
    assert chunks[0].endswith("word")


def test_overlong_sentence_is_split_not_dropped():
    long_sentence = "x" * 250
    p = ChunkingParams(target_chars=100, overlap_chars=0, max_overhang=0)
    chunks = pack_sentences([long_sentence], p)

    assert "".join(chunks) == long_sentence
    assert all(len(c) <= 100 for c in chunks)


def test_chunk_document_is_deterministic_and_positioned():
    doc = SupportDocument(
        source_id="shelter.txt",
        text=" ".join(f"Sentence number {i}." for i in range(200)),
    )
    p = ChunkingParams(target_chars=200, overlap_chars=40)

    first = chunk_document(doc, p)
    second = chunk_document(doc, p)

    assert first == second
    assert [c.position for c in first] == list(range(len(first)))
    assert {c.document_id for c in first} == {"shelter.txt"}
    assert first[0].chunk_id == "shelter.txt::chunk::0"


def test_invalid_params_rejected():
    with pytest.raises(ValueError):
        ChunkingParams(target_chars=10, overlap_chars=10)
    with pytest.raises(ValueError):
        ChunkingParams(target_chars=0)
