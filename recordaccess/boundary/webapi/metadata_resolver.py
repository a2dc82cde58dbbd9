"""
Collection metadata resolution.

Translates a collection's logical name (e.g. 'systemuser') into the plural
entity set name the Web API uses in URLs and bind paths ('systemusers').
Names are never guessed: an unresolved collection is a MetadataUnavailable
error for the operation that needed it.

Dependencies: httpx, recordaccess.core.exceptions
System role: Entity metadata lookup for reference encoding and routing
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol
from urllib.parse import quote

import httpx

from recordaccess.core.exceptions import MetadataUnavailable, RemoteOperationFailed

if TYPE_CHECKING:
    from recordaccess.boundary.webapi.client import WebApiClient

logger = logging.getLogger(__name__)


def odata_string_literal(value: str) -> str:
    """
    Body of a quoted OData string literal for use in a URL path.

    Single quotes are doubled, then anything that is not path-safe
    ('/', '?', '#', spaces) is percent-encoded.
    """
    return quote(value.replace("'", "''"), safe="'")


class MetadataResolver(Protocol):
    """Anything that can map a logical collection name to its entity set name."""

    async def resolve(self, collection_name: str) -> str: ...


class WebApiMetadataResolver:
    """
    Resolves entity set names through the store's EntityDefinitions endpoint.

    Every call is a fresh round trip; wrap in CachingMetadataResolver to
    pay it once per collection.
    """

    def __init__(self, client: "WebApiClient") -> None:
        """
        Initialize resolver.

        Args:
            client: Live Web API client used for metadata requests
        """
        self._client = client

    async def resolve(self, collection_name: str) -> str:
        """
        Look up the entity set name for a collection.

        Args:
            collection_name: Logical (singular) collection name

        Returns:
            str: Entity set name

        Raises:
            MetadataUnavailable: On transport failure, unknown collection,
                or a response without EntitySetName
        """
        path = f"EntityDefinitions(LogicalName='{odata_string_literal(collection_name)}')"
        try:
            body = await self._client.get_json(path, params={"$select": "EntitySetName"})
        except RemoteOperationFailed as e:
            raise MetadataUnavailable(
                collection_name, reason=e.message, details={"status_code": e.status_code}
            ) from e
        except httpx.HTTPError as e:
            raise MetadataUnavailable(collection_name, reason=type(e).__name__) from e

        entity_set = (body or {}).get("EntitySetName")
        if not entity_set:
            raise MetadataUnavailable(collection_name, reason="EntitySetName missing from response")

        logger.debug(f"{__name__}:resolve - {collection_name} -> {entity_set}")
        return entity_set


class CachingMetadataResolver:
    """
    Memoizing front for another resolver.

    Entity set names do not change for the lifetime of a store, so entries
    are never invalidated. Failures are not cached.
    """

    def __init__(self, inner: MetadataResolver) -> None:
        self._inner = inner
        self._cache: dict[str, str] = {}

    async def resolve(self, collection_name: str) -> str:
        cached = self._cache.get(collection_name)
        if cached is not None:
            return cached
        entity_set = await self._inner.resolve(collection_name)
        self._cache[collection_name] = entity_set
        return entity_set

    def clear(self) -> None:
        self._cache.clear()


class StaticMetadataResolver:
    """Resolves from a fixed mapping; unknown collections raise MetadataUnavailable."""

    def __init__(self, entity_sets: Mapping[str, str]) -> None:
        self._entity_sets = dict(entity_sets)

    async def resolve(self, collection_name: str) -> str:
        try:
            return self._entity_sets[collection_name]
        except KeyError:
            raise MetadataUnavailable(collection_name, reason="unknown collection") from None
