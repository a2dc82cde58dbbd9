"""
Record access facade.

Single entry point feature code uses to read and write records. Each call
asks the adapter selector for the adapter to use right now (live Web API
or development mock), dispatches once, and re-raises any failure with the
operation and collection attached. Nothing is retried and a failed live
call is never answered from the mock.

Dependencies: recordaccess.boundary.webapi, recordaccess.core, recordaccess.observability
System role: Record CRUD orchestration
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

import httpx

from recordaccess.boundary.webapi import (
    AdapterSelector,
    FixedAdapterSelector,
    RecordAdapter,
    get_adapter_selector,
)
from recordaccess.core.exceptions import RecordAccessError, RemoteOperationFailed
from recordaccess.models.record import FieldKind, Record, RecordQuery
from recordaccess.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

T = TypeVar("T")

IDENTITY_FIELD = "id"


def identity_alias(collection: str) -> str:
    """Collection-specific primary key name, e.g. 'proto_workorderid'."""
    return f"{collection}id"


class RecordService:
    """
    Record access facade.

    Provides get, retrieve, create, update and delete against whichever
    adapter the selector returns for the call.
    """

    def __init__(
        self,
        selector: AdapterSelector | None = None,
        adapter: RecordAdapter | None = None,
    ) -> None:
        """
        Initialize record service.

        Args:
            selector: Adapter selector consulted on every call
                (created from settings if None)
            adapter: Pre-selected adapter; shorthand for a FixedAdapterSelector
        """
        if adapter is not None:
            selector = FixedAdapterSelector(adapter)
        self._selector = selector or get_adapter_selector()

    @property
    def selector(self) -> AdapterSelector:
        return self._selector

    async def _dispatch(
        self,
        operation: str,
        collection: str,
        call: Callable[[RecordAdapter], Awaitable[T]],
    ) -> T:
        adapter = self._selector.select()
        logger.debug(f"{__name__}:{operation} - {collection} via {adapter.name} adapter")
        try:
            return await call(adapter)
        except RecordAccessError as e:
            e.with_context(operation, collection)
            log_exception_with_context(
                logger, f"Record {operation} failed", e,
                operation=operation, collection=collection, adapter=adapter.name,
            )
            raise
        except httpx.HTTPError as e:
            log_exception_with_context(
                logger, f"Record {operation} failed", e,
                operation=operation, collection=collection, adapter=adapter.name,
            )
            raise RemoteOperationFailed(
                f"{operation} on {collection} failed: {type(e).__name__}: {e}",
                details={"operation": operation, "collection": collection},
            ) from e
        except Exception as e:
            e.add_note(f"during record {operation} on {collection} ({adapter.name} adapter)")
            raise

    async def get(
        self,
        collection: str,
        filter: str | None = None,
        select: list[str] | None = None,
        order_by: str | None = None,
    ) -> list[Record]:
        """
        List records.

        Args:
            collection: Collection logical name
            filter: OData $filter expression, e.g. "statuscode eq 1"
            select: Fields to return, sent comma-joined as $select
            order_by: OData $orderby expression, e.g. "createdon desc"

        Returns:
            list[Record]: Matching records (always empty from the mock)
        """
        query = RecordQuery(filter=filter, select=select, order_by=order_by)
        return await self._dispatch("get", collection, lambda adapter: adapter.get(collection, query))

    async def retrieve(
        self,
        collection: str,
        record_id: str,
        select: list[str] | None = None,
    ) -> Record | None:
        """
        Read one record by identity.

        Returns:
            Record | None: The record, or None if the store does not have it
        """
        return await self._dispatch(
            "retrieve", collection, lambda adapter: adapter.retrieve(collection, record_id, select)
        )

    async def create(
        self,
        collection: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record:
        """
        Create a record.

        Args:
            collection: Collection logical name
            fields: Field values; reference values are bound to their targets
            kinds: Optional declared field kinds (inferred from values otherwise)

        Returns:
            Record: Store response, including the new identity

        Raises:
            MetadataUnavailable: If a reference target cannot be resolved
            RemoteOperationFailed: If the store rejects the create
        """
        return await self._dispatch(
            "create", collection, lambda adapter: adapter.create(collection, fields, kinds)
        )

    async def update(
        self,
        collection: str,
        record_id: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record | None:
        """
        Update a record.

        The identity addresses the record out-of-band: 'id' and the
        collection's '<collection>id' key are dropped from the fields.

        Args:
            collection: Collection logical name
            record_id: Identity of the record (braces allowed)
            fields: Field values to change
            kinds: Optional declared field kinds

        Returns:
            Record | None: Adapter response
        """
        excluded = {IDENTITY_FIELD, identity_alias(collection)}
        changes = {name: value for name, value in fields.items() if name not in excluded}
        return await self._dispatch(
            "update", collection, lambda adapter: adapter.update(collection, record_id, changes, kinds)
        )

    async def delete(self, collection: str, record_id: str) -> None:
        """Delete a record by identity."""
        await self._dispatch("delete", collection, lambda adapter: adapter.delete(collection, record_id))
