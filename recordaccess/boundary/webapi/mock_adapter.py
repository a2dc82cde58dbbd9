"""
Development mock adapter.

Stands in for the remote store when no live client is available (local
development, UI work without an org). It is a stub, not a simulator:
lists are always empty and writes echo the input back under a fresh id.
Every operation sleeps for a fixed delay so loading states still show.

Dependencies: asyncio, recordaccess.models
System role: Record adapter for development without a live backend
"""

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any

from recordaccess.models.record import FieldKind, Record, RecordQuery

logger = logging.getLogger(__name__)

DEFAULT_MOCK_DELAY_SECONDS = 0.3


class MockIdSequence:
    """Millisecond-timestamp ids, bumped so no two are ever equal."""

    def __init__(self) -> None:
        self._last = 0

    def next_id(self) -> str:
        self._last = max(int(time.time() * 1000), self._last + 1)
        return str(self._last)


_process_ids = MockIdSequence()


class MockRecordAdapter:
    """Record adapter that never leaves the process."""

    name = "mock"

    def __init__(
        self,
        delay_seconds: float = DEFAULT_MOCK_DELAY_SECONDS,
        ids: MockIdSequence | None = None,
    ) -> None:
        """
        Initialize mock adapter.

        Args:
            delay_seconds: Artificial latency for every operation
            ids: Id source; defaults to one sequence shared by the process
        """
        self.delay_seconds = delay_seconds
        self._ids = ids or _process_ids

    async def _simulate_latency(self) -> None:
        await asyncio.sleep(self.delay_seconds)

    def _echo(self, fields: Mapping[str, Any]) -> Record:
        return {**fields, "id": self._ids.next_id()}

    async def get(self, collection: str, query: RecordQuery) -> list[Record]:
        await self._simulate_latency()
        return []

    async def retrieve(
        self, collection: str, record_id: str, select: list[str] | None = None
    ) -> Record | None:
        await self._simulate_latency()
        return None

    async def create(
        self,
        collection: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record:
        await self._simulate_latency()
        record = self._echo(fields)
        logger.debug(f"{__name__}:create - mock {collection} record {record['id']}")
        return record

    async def update(
        self,
        collection: str,
        record_id: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record:
        await self._simulate_latency()
        return self._echo(fields)

    async def delete(self, collection: str, record_id: str) -> None:
        await self._simulate_latency()
