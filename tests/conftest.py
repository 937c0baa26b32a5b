"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import hashlib
from typing import Sequence

import pytest
from langchain_core.embeddings import Embeddings

from rag_ingest.index.base import VectorIndexService
from rag_ingest.models import IndexDescriptor, VectorRecord

DIM = 8


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────


def hash_vector(text: str, dim: int = DIM) -> list[float]:
    """Deterministic vector derived from the SHA-256 of *text*."""
    digest = hashlib.sha256(text.encode()).digest()
    return [b / 255 for b in digest[:dim]]


class HashEmbeddings(Embeddings):
    """Offline provider returning :func:`hash_vector` for each text."""

    def __init__(self, dim: int = DIM) -> None:
        self.dim = dim
        self.calls: list[list[str]] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [hash_vector(t, self.dim) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return hash_vector(text, self.dim)


class FakeIndexService(VectorIndexService):
    """In-memory index service recording every call.

    Parameters
    ----------
    existing:
        Index names reported by :meth:`list_indexes` from the start.
    fail_on_upsert:
        1-based upsert call number that raises ``RuntimeError``.
    """

    def __init__(
        self,
        existing: set[str] | None = None,
        *,
        fail_on_upsert: int | None = None,
        create_error: Exception | None = None,
        list_error: Exception | None = None,
    ) -> None:
        self.existing: set[str] = set(existing or ())
        self.fail_on_upsert = fail_on_upsert
        self.create_error = create_error
        self.list_error = list_error
        self.created: list[IndexDescriptor] = []
        self.upserts: list[tuple[str, list[VectorRecord]]] = []
        self.upsert_attempts = 0

    def list_indexes(self) -> set[str]:
        if self.list_error is not None:
            raise self.list_error
        return set(self.existing)

    def create_index(self, descriptor: IndexDescriptor) -> None:
        if self.create_error is not None:
            raise self.create_error
        self.created.append(descriptor)
        self.existing.add(descriptor.name)

    def upsert(self, index_name: str, records: Sequence[VectorRecord]) -> None:
        self.upsert_attempts += 1
        if self.upsert_attempts == self.fail_on_upsert:
            raise RuntimeError("upsert rejected")
        self.upserts.append((index_name, list(records)))


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def hash_embeddings() -> HashEmbeddings:
    return HashEmbeddings()


@pytest.fixture()
def fake_index_service() -> FakeIndexService:
    return FakeIndexService()


@pytest.fixture()
def no_sleep() -> list[float]:
    """Stand-in for ``time.sleep``; the list collects requested durations."""
    return []
