"""Sequential, fail-fast batch upload of vector records."""

from __future__ import annotations

import logging
import math
import time
from typing import Iterator, Sequence

from rag_ingest.errors import UploadFailure
from rag_ingest.index.base import IndexHandle
from rag_ingest.models import BatchProgress, UploadReport, VectorRecord

logger = logging.getLogger(__name__)


def iter_batches(records: Sequence[VectorRecord], size: int) -> Iterator[Sequence[VectorRecord]]:
    """Yield consecutive slices of *records* of at most *size* items."""
    for i in range(0, len(records), size):
        yield records[i : i + size]


class BatchUploader:
    """Upsert records in fixed-size batches, one request at a time.

    Batches are neither deduplicated nor retried.  The first failing
    upsert aborts the run with :class:`UploadFailure`; batches already
    sent stay uploaded.

    Parameters
    ----------
    batch_size:
        Maximum number of records per upsert call.
    """

    def __init__(self, batch_size: int = 100) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size

    def upload(self, handle: IndexHandle, records: Sequence[VectorRecord]) -> UploadReport:
        """Upload *records* to *handle* and return the final report.

        Raises
        ------
        UploadFailure
            Carrying the partial report when a batch upsert fails.
        """
        total = len(records)
        report = UploadReport(
            total_records=total,
            total_batches=math.ceil(total / self.batch_size),
        )

        logger.info("Starting upload to index '%s'...", handle.name)
        logger.info(
            "Total vectors: %d, batch size: %d, expected batches: %d",
            total,
            self.batch_size,
            report.total_batches,
        )

        for seq, batch in enumerate(iter_batches(records, self.batch_size), 1):
            logger.info(
                "Uploading batch %d/%d (%d vectors)...", seq, report.total_batches, len(batch)
            )
            t0 = time.monotonic()
            try:
                handle.upsert(batch)
            except Exception as exc:
                logger.error("Batch %d/%d failed: %s", seq, report.total_batches, exc)
                raise UploadFailure(report, seq, str(exc)) from exc
            elapsed = time.monotonic() - t0

            report.uploaded += len(batch)
            progress = BatchProgress(
                sequence=seq,
                size=len(batch),
                elapsed_seconds=elapsed,
                uploaded=report.uploaded,
                total=total,
            )
            report.batches.append(progress)
            logger.info("Batch %d/%d complete in %.2fs", seq, report.total_batches, elapsed)
            logger.info("Progress: %d/%d vectors (%.2f%%)", report.uploaded, total, progress.percent)

        report.success = True
        logger.info("Upload complete! %d vectors uploaded to '%s'", report.uploaded, handle.name)
        return report


def upload_records(
    handle: IndexHandle,
    records: Sequence[VectorRecord],
    batch_size: int = 100,
) -> UploadReport:
    """Convenience wrapper around :meth:`BatchUploader.upload`."""
    return BatchUploader(batch_size).upload(handle, records)
