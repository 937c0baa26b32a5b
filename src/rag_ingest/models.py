"""Domain models flowing through the chunk → embed → upload pipeline."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """A contiguous slice of a document's text plus its position.

    Attributes
    ----------
    text:
        The chunk content, exactly as it appears in the source text.
    location:
        ``{"start_index", "end_index", "lines": {"from", "to"}}``:
        character offsets (end exclusive) and 1-based inclusive line span.
    """

    text: str
    location: dict[str, Any] = Field(default_factory=dict)

    @property
    def start_index(self) -> int:
        return self.location["start_index"]

    @property
    def end_index(self) -> int:
        return self.location["end_index"]


class VectorRecord(BaseModel):
    """One ``(id, values, metadata)`` entry ready to be upserted."""

    id: str
    values: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)


class IndexDescriptor(BaseModel):
    """Fixed schema of the remote index.

    ``dimension`` must match the embedder's output dimension for the whole
    lifetime of the index; upserts with any other length are rejected.
    """

    name: str
    dimension: int = Field(gt=0)
    metric: Literal["cosine", "euclidean", "dotproduct"] = "cosine"
    cloud: str = "aws"
    region: str = "us-east-1"


class BatchProgress(BaseModel):
    """Progress entry recorded after each successful batch upsert."""

    sequence: int
    size: int
    elapsed_seconds: float
    uploaded: int
    total: int

    @property
    def percent(self) -> float:
        return (self.uploaded / self.total * 100) if self.total else 100.0


class UploadReport(BaseModel):
    """Outcome of :meth:`~rag_ingest.index.uploader.BatchUploader.upload`."""

    uploaded: int = 0
    total_records: int = 0
    total_batches: int = 0
    success: bool = False
    batches: list[BatchProgress] = Field(default_factory=list)

    def __str__(self) -> str:  # noqa: D105
        return (
            f"uploaded={self.uploaded}, batches={self.total_batches}, "
            f"success={str(self.success).lower()}"
        )
