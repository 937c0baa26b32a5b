"""
Ingestion — document loading, chunking, embedding, and record assembly.

Everything here runs before the vector index is touched: raw files become
LangChain ``Document`` objects, are split into :class:`~rag_ingest.models.Chunk`
objects, embedded, and zipped into :class:`~rag_ingest.models.VectorRecord`
objects ready for upload.
"""

from rag_ingest.ingestion.chunker import Chunker
from rag_ingest.ingestion.embedder import Embedder, get_embedding_provider
from rag_ingest.ingestion.loader import load_documents
from rag_ingest.ingestion.records import build_records

__all__ = [
    "Chunker",
    "Embedder",
    "build_records",
    "get_embedding_provider",
    "load_documents",
]
