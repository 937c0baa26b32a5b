"""Unit tests for the chunker module."""

from __future__ import annotations

import pytest

from rag_ingest.ingestion.chunker import Chunker

PROSE = (
    "Pinecone stores vectors.\n\n"
    "Each chunk is embedded separately. The splitter prefers paragraph breaks, "
    "then line breaks, then sentences, then words.\n"
    "Only as a last resort does it cut inside a word.\n\n"
    + "A much longer paragraph follows here. " * 30
    + "\n\nsupercalifragilisticexpialidocious" * 3
)

# No repeated sentences, so every chunk occurs once in the text.
NUMBERED = "\n\n".join(
    " ".join(f"Sentence {p}-{i} covers item {i * 7 % 13}." for i in range(8)) for p in range(6)
)


def test_splits_long_text() -> None:
    """A text longer than the limit should be split."""
    chunks = Chunker(max_chunk_size=256).split("word " * 500)
    assert len(chunks) > 1


def test_short_text_yields_one_chunk() -> None:
    text = "A short document."
    chunks = Chunker(max_chunk_size=1000).split(text)
    assert len(chunks) == 1
    assert chunks[0].text == text
    assert chunks[0].location["start_index"] == 0
    assert chunks[0].location["end_index"] == len(text)


def test_empty_text_yields_no_chunks() -> None:
    assert Chunker(max_chunk_size=1000).split("") == []


@pytest.mark.parametrize("size", [10, 37, 100, 256])
def test_every_chunk_within_limit(size: int) -> None:
    for chunk in Chunker(max_chunk_size=size).split(PROSE):
        assert len(chunk.text) <= size


@pytest.mark.parametrize("size", [10, 37, 100, 256, 5000])
def test_concatenation_reproduces_text(size: int) -> None:
    """Without overlap, no character is dropped or duplicated."""
    chunks = Chunker(max_chunk_size=size).split(PROSE)
    assert "".join(c.text for c in chunks) == PROSE


def test_offsets_reassemble_text_with_overlap() -> None:
    """With overlap, chunks map onto the text and leave no gaps."""
    chunks = Chunker(max_chunk_size=120, chunk_overlap=30).split(NUMBERED)
    assert len(chunks) > 1
    assert chunks[0].start_index == 0
    assert chunks[-1].end_index == len(NUMBERED)

    rebuilt = ""
    for chunk in chunks:
        assert len(chunk.text) <= 120
        assert NUMBERED[chunk.start_index : chunk.end_index] == chunk.text
        assert chunk.start_index <= len(rebuilt)
        rebuilt += chunk.text[len(rebuilt) - chunk.start_index :]
    assert rebuilt == NUMBERED


def test_paragraph_breaks_survive_overlap() -> None:
    chunks = Chunker(max_chunk_size=120, chunk_overlap=30).split(NUMBERED)
    covered = set()
    for chunk in chunks:
        covered.update(range(chunk.start_index, chunk.end_index))
    assert covered == set(range(len(NUMBERED)))


@pytest.mark.parametrize(
    ("text", "size", "overlap", "starts"),
    [
        ("gamma. gamma. ", 12, 10, [0, 7]),
        ("gamma. " * 6, 20, 10, [0, 7, 14, 21, 28]),
    ],
)
def test_offsets_of_repeated_text(text: str, size: int, overlap: int, starts: list[int]) -> None:
    """Identical chunks get the position they were cut from, not an earlier copy."""
    chunks = Chunker(max_chunk_size=size, chunk_overlap=overlap).split(text)
    assert [c.start_index for c in chunks] == starts
    for chunk in chunks:
        assert text[chunk.start_index : chunk.end_index] == chunk.text


def test_prefers_paragraph_boundaries() -> None:
    text = "alpha beta gamma.\n\ndelta epsilon zeta."
    chunks = Chunker(max_chunk_size=25).split(text)
    assert [c.text for c in chunks] == ["alpha beta gamma.\n\n", "delta epsilon zeta."]


def test_hard_cut_for_unbroken_text() -> None:
    chunks = Chunker(max_chunk_size=1000).split("x" * 2500)
    assert [len(c.text) for c in chunks] == [1000, 1000, 500]


def test_line_span_metadata() -> None:
    text = "line one\nline two\n\nline four\nline five"
    chunks = Chunker(max_chunk_size=20).split(text)
    assert chunks[0].location["lines"] == {"from": 1, "to": 3}
    assert chunks[-1].location["lines"]["to"] == 5


def test_overlap_gte_chunk_size_raises() -> None:
    with pytest.raises(ValueError, match="chunk_overlap.*must be"):
        Chunker(max_chunk_size=100, chunk_overlap=100)
