"""Abstract base class for vector-index backends.

Adding a new backend (Weaviate, Qdrant …) only requires subclassing
:class:`VectorIndexService` and implementing the three abstract methods.
The provisioner and uploader are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from rag_ingest.models import IndexDescriptor, VectorRecord


class VectorIndexService(ABC):
    """Backend-agnostic remote index interface."""

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def list_indexes(self) -> set[str]:
        """Return the names of every index that already exists remotely."""
        ...

    @abstractmethod
    def create_index(self, descriptor: IndexDescriptor) -> None:
        """Create an index with the fixed schema in *descriptor*.

        Errors if the name already exists or the schema is invalid.
        """
        ...

    @abstractmethod
    def upsert(self, index_name: str, records: Sequence[VectorRecord]) -> None:
        """Insert or update *records* in *index_name* as one request.

        No partial-batch success is assumed: either the call returns or it
        raises.
        """
        ...

    # -- helpers --------------------------------------------------------------

    def index(self, name: str) -> IndexHandle:
        """Return a handle bound to the index called *name*."""
        return IndexHandle(name=name, service=self)


class IndexHandle:
    """A named index on a :class:`VectorIndexService`, ready for upserts."""

    def __init__(self, name: str, service: VectorIndexService) -> None:
        self.name = name
        self._service = service

    def upsert(self, records: Sequence[VectorRecord]) -> None:
        self._service.upsert(self.name, records)

    def __repr__(self) -> str:  # noqa: D105
        return f"IndexHandle(name={self.name!r}, service={type(self._service).__name__})"
