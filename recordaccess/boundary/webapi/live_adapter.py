"""
Live Web API adapter.

Maps each record operation 1:1 onto the Web API client. Outgoing field
maps are encoded by FieldEncoder so reference fields become bind entries.

Callers name collections by logical name ('proto_workorder'), but the
HTTP Web API addresses records by entity set name ('proto_workorders').
Every operation therefore resolves its own collection through the
metadata resolver before the request. That lookup is the one extra
round trip an operation may make; production wiring wraps the resolver
in CachingMetadataResolver so it is paid once per collection. An
unresolvable collection fails the operation with MetadataUnavailable
before anything is sent to the store.

Dependencies: recordaccess.boundary.webapi, recordaccess.models
System role: Record adapter backed by the remote store
"""

import logging
from collections.abc import Mapping
from typing import Any

from recordaccess.boundary.webapi.client import WebApiClient
from recordaccess.boundary.webapi.field_encoder import DEFAULT_BIND_SUFFIX, FieldEncoder
from recordaccess.boundary.webapi.metadata_resolver import MetadataResolver
from recordaccess.models.record import FieldKind, Record, RecordQuery
from recordaccess.observability.log_utils import summarize_fields

logger = logging.getLogger(__name__)


class LiveRecordAdapter:
    """Record adapter that talks to the remote entity store."""

    name = "live"

    def __init__(
        self,
        client: WebApiClient,
        resolver: MetadataResolver,
        bind_suffix: str = DEFAULT_BIND_SUFFIX,
    ) -> None:
        """
        Initialize live adapter.

        Args:
            client: Web API client
            resolver: Entity set name resolver (shared with the encoder)
            bind_suffix: Bind key suffix for reference fields
        """
        self.client = client
        self._resolver = resolver
        self._encoder = FieldEncoder(resolver, bind_suffix)

    @property
    def encoder(self) -> FieldEncoder:
        return self._encoder

    async def get(self, collection: str, query: RecordQuery) -> list[Record]:
        entity_set = await self._resolver.resolve(collection)
        logger.debug(f"{__name__}:get - GET {entity_set}?{query.to_query_string()}")
        return await self.client.retrieve_multiple(entity_set, query.to_params())

    async def retrieve(
        self, collection: str, record_id: str, select: list[str] | None = None
    ) -> Record | None:
        entity_set = await self._resolver.resolve(collection)
        params = RecordQuery(select=select).to_params()
        return await self.client.retrieve(entity_set, record_id, params)

    async def create(
        self,
        collection: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record:
        payload = await self._encoder.build_payload(fields, kinds)
        entity_set = await self._resolver.resolve(collection)
        logger.debug(f"{__name__}:create - POST {entity_set}: {summarize_fields(payload)}")
        created = await self.client.create(entity_set, payload)
        created.setdefault("entityType", collection)
        return created

    async def update(
        self,
        collection: str,
        record_id: str,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record:
        payload = await self._encoder.build_payload(fields, kinds)
        entity_set = await self._resolver.resolve(collection)
        logger.debug(f"{__name__}:update - PATCH {entity_set}({record_id}): {summarize_fields(payload)}")
        await self.client.update(entity_set, record_id, payload)
        return {"id": record_id, "entityType": collection}

    async def delete(self, collection: str, record_id: str) -> None:
        entity_set = await self._resolver.resolve(collection)
        await self.client.delete(entity_set, record_id)
