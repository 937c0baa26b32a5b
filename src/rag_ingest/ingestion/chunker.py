"""Text chunking strategies."""

from __future__ import annotations

from typing import Sequence

from langchain_text_splitters import RecursiveCharacterTextSplitter

from rag_ingest.models import Chunk

DEFAULT_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", ". ", " ", "")


class Chunker:
    """Split document text into bounded chunks along natural boundaries.

    Separators are tried in order (paragraph, line, sentence, word, then a
    hard character cut) and the largest one that keeps pieces within
    *max_chunk_size* wins.  Separators stay attached to the piece they end
    and whitespace is never stripped, so no text is lost: without overlap
    the chunk texts concatenate back to the original.

    Parameters
    ----------
    max_chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of characters repeated between consecutive chunks.
    separators:
        Split boundaries in priority order.
    """

    def __init__(
        self,
        max_chunk_size: int = 1000,
        chunk_overlap: int = 0,
        separators: Sequence[str] = DEFAULT_SEPARATORS,
    ) -> None:
        if max_chunk_size <= 0:
            raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
        if chunk_overlap >= max_chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be < max_chunk_size ({max_chunk_size})"
            )
        self.max_chunk_size = max_chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=max_chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            separators=list(separators),
            keep_separator="end",
            strip_whitespace=False,
        )

    def split(self, text: str) -> list[Chunk]:
        """Return the ordered chunks of *text* with their location metadata."""
        chunks: list[Chunk] = []
        prev_start, prev_end = -1, 0
        for piece in self._splitter.split_text(text):
            start = text.find(piece, self._search_from(prev_start, prev_end, len(piece)))
            if start < 0:
                raise RuntimeError(f"chunk {len(chunks)} not found in source text")
            end = start + len(piece)
            chunks.append(
                Chunk(
                    text=piece,
                    location={
                        "start_index": start,
                        "end_index": end,
                        "lines": {
                            "from": text.count("\n", 0, start) + 1,
                            "to": text.count("\n", 0, max(end - 1, start)) + 1,
                        },
                    },
                )
            )
            prev_start, prev_end = start, end
        return chunks

    def _search_from(self, prev_start: int, prev_end: int, length: int) -> int:
        # A chunk starts after the previous one, repeats at most
        # chunk_overlap of its characters and always ends past it.
        return max(prev_start + 1, prev_end - min(self.chunk_overlap, length - 1))
