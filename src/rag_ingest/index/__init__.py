"""
Index — provisioning of and batched upload to the remote vector index.

Public surface
--------------
- :class:`VectorIndexService` / :class:`IndexHandle` — abstract backend.
- :class:`IndexProvisioner` — idempotent check-then-create.
- :class:`BatchUploader` — sequential, fail-fast batch upserts.
- :class:`PineconeIndexService` — default Pinecone backend.
- :class:`ChromaIndexService` — Chroma backend.
- :func:`get_index_service` — backend factory driven by settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rag_ingest.index.base import IndexHandle, VectorIndexService
from rag_ingest.index.provisioner import IndexProvisioner, ProvisioningState
from rag_ingest.index.uploader import BatchUploader, upload_records

if TYPE_CHECKING:
    from rag_ingest.config import Settings

__all__ = [
    "BatchUploader",
    "ChromaIndexService",
    "IndexHandle",
    "IndexProvisioner",
    "PineconeIndexService",
    "ProvisioningState",
    "VectorIndexService",
    "get_index_service",
    "upload_records",
]


def get_index_service(settings: Settings) -> VectorIndexService:
    """Build the backend selected by ``settings.vector_backend``."""
    if settings.vector_backend == "chroma":
        from rag_ingest.index.chroma_store import ChromaIndexService

        return ChromaIndexService(host=settings.chroma_host, port=settings.chroma_port)

    from rag_ingest.index.pinecone_store import PineconeIndexService

    return PineconeIndexService(api_key=settings.pinecone_api_key)


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends to avoid pulling in their SDKs at import time."""
    if name == "ChromaIndexService":
        from rag_ingest.index.chroma_store import ChromaIndexService

        return ChromaIndexService
    if name == "PineconeIndexService":
        from rag_ingest.index.pinecone_store import PineconeIndexService

        return PineconeIndexService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
