"""Command-line entry point.

Run
---
    rag-ingest --data-dir ./data
    python -m rag_ingest --index my-index --batch-size 50

Credentials and the remaining settings come from the environment or a
local ``.env`` file (see :class:`~rag_ingest.config.Settings`).
"""

from __future__ import annotations

import argparse
import logging
import sys

from rag_ingest.config import load_settings
from rag_ingest.errors import IngestError
from rag_ingest.pipeline import run_ingestion

logger = logging.getLogger("rag_ingest")

LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rag-ingest",
        description="Chunk local documents, embed them, and upload the vectors to an index.",
    )
    parser.add_argument("--data-dir", help="Directory with source documents (DATA_DIR)")
    parser.add_argument("--index", help="Target index name (PINECONE_INDEX)")
    parser.add_argument("--batch-size", type=int, help="Records per upsert call (BATCH_SIZE)")
    parser.add_argument(
        "--recursive",
        action="store_true",
        default=None,
        help="Scan sub-directories too (RECURSIVE_SCAN)",
    )
    parser.add_argument("--log-level", help="Logging level (LOG_LEVEL)")
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    mapping = {
        "data_dir": args.data_dir,
        "pinecone_index": args.index,
        "batch_size": args.batch_size,
        "recursive_scan": args.recursive,
        "log_level": args.log_level,
    }
    return {k: v for k, v in mapping.items() if v is not None}


def main(argv: list[str] | None = None) -> int:
    """Run one ingestion and return the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        settings = load_settings(**_overrides(args))
        logging.getLogger().setLevel(settings.log_level)
        report = run_ingestion(settings)
    except IngestError as exc:
        logger.error("Ingestion failed: %s", exc)
        return 1
    except Exception:
        logger.exception("Ingestion failed with an unexpected error")
        return 1

    logger.info("Done: %s", report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
