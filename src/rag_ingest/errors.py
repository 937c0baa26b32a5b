"""Error taxonomy for the ingestion run.

Every fatal condition derives from :class:`IngestError` so the CLI can log
it and exit non-zero.  :class:`LoadError` is the only non-fatal category:
the document source catches it, logs a warning, and skips the file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rag_ingest.models import UploadReport


class IngestError(Exception):
    """Base exception for ingestion failures."""


class ConfigError(IngestError):
    """Missing or invalid startup configuration."""


class LoadError(IngestError):
    """A single source file could not be read."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Could not load {path}: {message}")


class EmbeddingFailure(IngestError):
    """The embedding provider call failed or returned unusable vectors.

    Attributes
    ----------
    reason:
        One of ``authentication``, ``rate_limit``, ``malformed_input``,
        ``network``, ``provider``, ``count`` or ``dimension``.
    """

    def __init__(self, message: str, reason: str = "provider") -> None:
        self.reason = reason
        super().__init__(f"Embedding failed ({reason}): {message}")


class ProvisioningFailure(IngestError):
    """Listing or creating the target index failed."""

    def __init__(self, index_name: str, message: str) -> None:
        self.index_name = index_name
        super().__init__(f"Provisioning of index '{index_name}' failed: {message}")


class UploadFailure(IngestError):
    """A batch upsert failed; remaining batches were not attempted.

    Attributes
    ----------
    report:
        Partial :class:`~rag_ingest.models.UploadReport` covering the
        batches that completed before the failure.
    failed_batch:
        1-based sequence number of the batch that failed.
    """

    def __init__(self, report: UploadReport, failed_batch: int, message: str) -> None:
        self.report = report
        self.failed_batch = failed_batch
        super().__init__(
            f"Batch {failed_batch}/{report.total_batches} failed after "
            f"{report.uploaded} vectors were uploaded: {message}"
        )


class LengthMismatch(IngestError):
    """Chunks and vectors differ in length (internal defect)."""
