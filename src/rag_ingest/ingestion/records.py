"""Vector record assembly."""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence
from uuid import uuid4

from rag_ingest.errors import LengthMismatch
from rag_ingest.models import Chunk, VectorRecord


def new_record_id() -> str:
    """Return a random 128-bit identifier drawn from the OS CSPRNG."""
    return uuid4().hex


def _flatten(value: Any) -> Any:
    """Coerce a metadata value to something every backend accepts."""
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def build_records(
    chunks: Sequence[Chunk],
    vectors: Sequence[Sequence[float]],
    source_metadata: Mapping[str, Any] | None = None,
) -> list[VectorRecord]:
    """Zip ``chunks[i]`` with ``vectors[i]`` into upsert-ready records.

    Each record gets a fresh random id.  Metadata is the flattened
    *source_metadata* plus ``loc`` (the chunk location as a JSON string,
    since stores such as Pinecone reject nested objects) and ``text``
    (the raw chunk content, needed for display at query time).
    """
    if len(chunks) != len(vectors):
        raise LengthMismatch(f"{len(chunks)} chunks but {len(vectors)} vectors")

    base = {k: _flatten(v) for k, v in (source_metadata or {}).items() if v is not None}
    return [
        VectorRecord(
            id=new_record_id(),
            values=list(vector),
            metadata={**base, "loc": json.dumps(chunk.location), "text": chunk.text},
        )
        for chunk, vector in zip(chunks, vectors)
    ]
