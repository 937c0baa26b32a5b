"""Chroma implementation of the vector-index abstraction.

Collections play the role of indexes.  Chroma infers the vector dimension
from the first insert, so the configured dimension is only recorded in the
collection metadata.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import chromadb

from rag_ingest.index.base import VectorIndexService
from rag_ingest.models import IndexDescriptor, VectorRecord

logger = logging.getLogger(__name__)

_METRIC_MAP = {
    "cosine": "cosine",
    "euclidean": "l2",
    "dotproduct": "ip",
}


class ChromaIndexService(VectorIndexService):
    """Chroma-backed index service.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built client; when given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8000,
        *,
        client: Any | None = None,
    ) -> None:
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)

    # -- VectorIndexService overrides -----------------------------------------

    def list_indexes(self) -> set[str]:
        # chromadb>=0.6 returns names, older releases return Collection objects.
        return {c if isinstance(c, str) else c.name for c in self._client.list_collections()}

    def create_index(self, descriptor: IndexDescriptor) -> None:
        space = _METRIC_MAP.get(descriptor.metric)
        if space is None:
            raise ValueError(f"Unsupported metric for Chroma: {descriptor.metric!r}")
        self._client.create_collection(
            name=descriptor.name,
            metadata={"hnsw:space": space, "dimension": descriptor.dimension},
        )
        logger.info("Created Chroma collection '%s' (space=%s)", descriptor.name, space)

    def upsert(self, index_name: str, records: Sequence[VectorRecord]) -> None:
        collection = self._client.get_collection(index_name)
        collection.upsert(
            ids=[r.id for r in records],
            embeddings=[r.values for r in records],
            documents=[r.metadata.get("text", "") for r in records],
            metadatas=[
                {k: v for k, v in r.metadata.items() if k != "text" and isinstance(v, (str, int, float, bool))}
                for r in records
            ],
        )
