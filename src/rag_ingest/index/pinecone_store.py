"""Pinecone implementation of the vector-index abstraction."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pinecone import Pinecone, ServerlessSpec

from rag_ingest.index.base import VectorIndexService
from rag_ingest.models import IndexDescriptor, VectorRecord

logger = logging.getLogger(__name__)


class PineconeIndexService(VectorIndexService):
    """Pinecone serverless index service.

    Parameters
    ----------
    api_key:
        Pinecone API key, passed through untouched.
    client:
        Pre-built ``Pinecone`` client; when given, *api_key* is ignored.
    """

    def __init__(self, api_key: str = "", *, client: Any | None = None) -> None:
        self._client = client if client is not None else Pinecone(api_key=api_key)
        self._indexes: dict[str, Any] = {}

    def list_indexes(self) -> set[str]:
        return set(self._client.list_indexes().names())

    def create_index(self, descriptor: IndexDescriptor) -> None:
        self._client.create_index(
            name=descriptor.name,
            dimension=descriptor.dimension,
            metric=descriptor.metric,
            spec=ServerlessSpec(cloud=descriptor.cloud, region=descriptor.region),
        )
        logger.info(
            "Requested Pinecone index '%s' (dim=%d, metric=%s, %s/%s)",
            descriptor.name,
            descriptor.dimension,
            descriptor.metric,
            descriptor.cloud,
            descriptor.region,
        )

    def upsert(self, index_name: str, records: Sequence[VectorRecord]) -> None:
        index = self._indexes.get(index_name)
        if index is None:
            index = self._indexes[index_name] = self._client.Index(index_name)
        index.upsert(vectors=[r.model_dump() for r in records])
