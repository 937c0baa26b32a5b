"""End-to-end ingestion run: load → provision → chunk → embed → build → upload.

Usage::

    from rag_ingest.config import load_settings
    from rag_ingest.pipeline import run_ingestion

    report = run_ingestion(load_settings())
    print(report)

Every network call is made sequentially: one document's chunks per
embedding request and one batch per upsert.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from rag_ingest.index import IndexProvisioner, get_index_service
from rag_ingest.index.uploader import BatchUploader
from rag_ingest.ingestion.chunker import Chunker
from rag_ingest.ingestion.embedder import Embedder, get_embedding_provider
from rag_ingest.ingestion.loader import load_documents
from rag_ingest.ingestion.records import build_records
from rag_ingest.models import IndexDescriptor, UploadReport, VectorRecord

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from rag_ingest.config import Settings
    from rag_ingest.index.base import VectorIndexService

logger = logging.getLogger(__name__)


def descriptor_from_settings(settings: Settings) -> IndexDescriptor:
    """Return the fixed index schema for this deployment."""
    return IndexDescriptor(
        name=settings.pinecone_index,
        dimension=settings.vector_dimension,
        metric=settings.index_metric,
        cloud=settings.pinecone_cloud,
        region=settings.pinecone_region,
    )


class IngestionPipeline:
    """Wire the components of one ingestion run together.

    Parameters
    ----------
    settings:
        Immutable run configuration.
    provider:
        Embedding provider; built from *settings* when *None*.
    index_service:
        Vector index backend; built from *settings* when *None*.
    sleep:
        Forwarded to :class:`IndexProvisioner`.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        provider: Embeddings | None = None,
        index_service: VectorIndexService | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings
        self.chunker = Chunker(settings.chunk_size, settings.chunk_overlap)
        self.embedder = Embedder(
            provider if provider is not None else get_embedding_provider(settings),
            settings.vector_dimension,
        )
        self.index_service = index_service if index_service is not None else get_index_service(settings)
        self.provisioner = IndexProvisioner(
            self.index_service, settings.provisioning_timeout, sleep=sleep
        )
        self.uploader = BatchUploader(settings.batch_size)

    # -- stages ---------------------------------------------------------------

    def load(self) -> list[Document]:
        return load_documents(
            self.settings.data_dir,
            extensions=self.settings.file_extensions,
            recursive=self.settings.recursive_scan,
        )

    def embed_documents(self, documents: list[Document]) -> list[VectorRecord]:
        """Chunk, embed and build records for each document in turn."""
        records: list[VectorRecord] = []
        for doc in documents:
            chunks = self.chunker.split(doc.page_content)
            if not chunks:
                logger.info("Skipping %s: no content", doc.metadata.get("source", "<unknown>"))
                continue
            vectors = self.embedder.embed([c.text for c in chunks])
            records.extend(build_records(chunks, vectors, doc.metadata))
            logger.info(
                "Embedded %s: %d chunks", doc.metadata.get("source", "<unknown>"), len(chunks)
            )
        logger.info("Built %d vector records from %d documents", len(records), len(documents))
        return records

    # -- public API -----------------------------------------------------------

    def run(self) -> UploadReport:
        documents = self.load()
        handle = self.provisioner.ensure_index(descriptor_from_settings(self.settings))
        records = self.embed_documents(documents)
        return self.uploader.upload(handle, records)


def run_ingestion(settings: Settings, **kwargs) -> UploadReport:
    """Build an :class:`IngestionPipeline` and run it to completion."""
    return IngestionPipeline(settings, **kwargs).run()
