"""
Record adapter interface.

Both the live Web API adapter and the development mock implement this
shape, so RecordService can dispatch to either per call.

Dependencies: recordaccess.models
System role: Adapter contract for record access
"""

from collections.abc import Mapping
from typing import Any, Protocol

from recordaccess.models.record import FieldKind, Record, RecordQuery


class RecordAdapter(Protocol):
    """Interchangeable implementation of the record operations."""

    name: str

    async def get(self, collection: str, query: RecordQuery) -> list[Record]: ...

    async def retrieve(
        self, collection: str, record_id: str, select: list[str] | None = None
    ) -> Record | None: ...

    async def create(
        self,
        collection: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record: ...

    async def update(
        self,
        collection: str,
        record_id: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record | None: ...

    async def delete(self, collection: str, record_id: str) -> None: ...
