"""
rag-ingest — load local documents, chunk and embed them, and upload the
vectors to a remote index provisioned on first use.
"""

from rag_ingest.config import Settings, load_settings
from rag_ingest.models import Chunk, IndexDescriptor, UploadReport, VectorRecord
from rag_ingest.pipeline import IngestionPipeline, run_ingestion

__all__ = [
    "Chunk",
    "IndexDescriptor",
    "IngestionPipeline",
    "Settings",
    "UploadReport",
    "VectorRecord",
    "load_settings",
    "run_ingestion",
]

__version__ = "0.1.0"
