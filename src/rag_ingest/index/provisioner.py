"""Idempotent check-then-create provisioning of the target index."""

from __future__ import annotations

import enum
import logging
import time
from typing import Callable

from rag_ingest.errors import ProvisioningFailure
from rag_ingest.index.base import IndexHandle, VectorIndexService
from rag_ingest.models import IndexDescriptor

logger = logging.getLogger(__name__)


class ProvisioningState(str, enum.Enum):
    NOT_CHECKED = "not_checked"
    CHECKING = "checking"
    EXISTS = "exists"
    CREATING = "creating"
    READY = "ready"
    FAILED = "failed"


class IndexProvisioner:
    """Make sure the index described by a descriptor exists before uploading.

    Readiness after creation is not polled: the provisioner blocks for a
    fixed *timeout_seconds* and then treats the index as ready.

    Parameters
    ----------
    service:
        Backend used to list and create indexes.
    timeout_seconds:
        Blocking wait after a create request.
    sleep:
        Sleep function, injectable so tests do not actually wait.
    """

    def __init__(
        self,
        service: VectorIndexService,
        timeout_seconds: float = 80.0,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._service = service
        self.timeout_seconds = timeout_seconds
        self._sleep = sleep
        self.state = ProvisioningState.NOT_CHECKED

    def ensure_index(self, descriptor: IndexDescriptor) -> IndexHandle:
        """Return a handle to *descriptor*'s index, creating it if absent.

        Safe to call on every run: an index that already exists is never
        re-created.

        Raises
        ------
        ProvisioningFailure
            If listing or creating indexes fails.  Not retried.
        """
        self.state = ProvisioningState.CHECKING
        try:
            existing = self._service.list_indexes()
        except Exception as exc:
            self.state = ProvisioningState.FAILED
            raise ProvisioningFailure(descriptor.name, f"could not list indexes: {exc}") from exc

        if descriptor.name in existing:
            self.state = ProvisioningState.EXISTS
            logger.info("The index '%s' already exists", descriptor.name)
            return self._service.index(descriptor.name)

        self.state = ProvisioningState.CREATING
        try:
            self._service.create_index(descriptor)
        except Exception as exc:
            self.state = ProvisioningState.FAILED
            raise ProvisioningFailure(descriptor.name, f"create request failed: {exc}") from exc

        logger.info(
            "Creating '%s'... waiting %.0fs for it to finish initializing",
            descriptor.name,
            self.timeout_seconds,
        )
        self._sleep(self.timeout_seconds)
        self.state = ProvisioningState.READY
        logger.info("Index '%s' is ready", descriptor.name)
        return self._service.index(descriptor.name)
