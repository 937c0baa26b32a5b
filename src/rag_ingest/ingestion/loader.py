"""Document source — reads text files from a local directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from langchain_community.document_loaders import TextLoader
from langchain_core.documents import Document

from rag_ingest.errors import ConfigError, LoadError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".txt")


def load_file(path: str | Path) -> list[Document]:
    """Load a single UTF-8 text file.

    Raises
    ------
    LoadError
        If the file cannot be read or decoded.
    """
    try:
        return TextLoader(str(path), encoding="utf-8").load()
    except (RuntimeError, OSError) as exc:
        cause = exc.__cause__ or exc
        raise LoadError(str(path), str(cause)) from exc


def iter_documents(
    path: str | Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    recursive: bool = False,
) -> Iterator[Document]:
    """Yield a :class:`Document` for every readable file under *path*.

    Parameters
    ----------
    path:
        Directory containing source documents.
    extensions:
        Recognised file suffixes (case-insensitive).  Other files are skipped.
    recursive:
        Descend into sub-directories when ``True``.
    """
    root = Path(path)
    if not root.is_dir():
        raise ConfigError(f"Data directory not found: {root}")

    allowed = {ext.lower() for ext in extensions}
    candidates = root.rglob("*") if recursive else root.glob("*")
    for fpath in sorted(candidates):
        if not fpath.is_file():
            continue
        if fpath.suffix.lower() not in allowed:
            logger.debug("Skipping %s: unsupported extension", fpath)
            continue
        try:
            docs = load_file(fpath)
        except LoadError as exc:
            logger.warning("Skipping %s", exc)
            continue
        yield from docs


def load_documents(
    path: str | Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    recursive: bool = False,
) -> list[Document]:
    """Load every supported document from *path* into a list."""
    documents = list(iter_documents(path, extensions=extensions, recursive=recursive))
    logger.info("Loaded %d documents from %s", len(documents), path)
    return documents
