"""
Record adapter selection.

RecordService asks an AdapterSelector for an adapter on every call.
ClientPresenceSelector picks the live adapter while a Web API client is
present and the mock adapter otherwise, so availability can change
between calls. FixedAdapterSelector always returns the same adapter.

Depends on WEBAPI_BACKEND ('auto', 'live', 'mock') via get_adapter_selector.

Dependencies: recordaccess.boundary.webapi, recordaccess.configs
System role: Live/mock adapter instantiation and per-call selection
"""

import logging
from collections.abc import Callable
from typing import Protocol

from recordaccess.boundary.webapi.base import RecordAdapter
from recordaccess.boundary.webapi.client import WebApiClient
from recordaccess.boundary.webapi.live_adapter import LiveRecordAdapter
from recordaccess.boundary.webapi.metadata_resolver import (
    CachingMetadataResolver,
    MetadataResolver,
    WebApiMetadataResolver,
)
from recordaccess.boundary.webapi.mock_adapter import MockRecordAdapter
from recordaccess.configs import get_settings
from recordaccess.configs.webapi import WebApiSettings

logger = logging.getLogger(__name__)


class AdapterSelector(Protocol):
    def select(self) -> RecordAdapter: ...


class FixedAdapterSelector:
    """Always returns one pre-selected adapter."""

    def __init__(self, adapter: RecordAdapter) -> None:
        self._adapter = adapter

    def select(self) -> RecordAdapter:
        return self._adapter


class WebApiClientHolder:
    """
    Slot for the live Web API client.

    An empty slot means the live backend is absent. Hosts and test
    harnesses set or clear `client` to switch backends between calls.
    """

    def __init__(self, client: WebApiClient | None = None) -> None:
        self.client = client

    def __call__(self) -> WebApiClient | None:
        return self.client


class ClientPresenceSelector:
    """
    Live adapter while a client is present, mock adapter otherwise.

    Presence is checked on every select(). The live adapter is rebuilt
    only when the provided client instance changes.
    """

    def __init__(
        self,
        client_provider: Callable[[], WebApiClient | None],
        mock_adapter: RecordAdapter,
        live_adapter_factory: Callable[[WebApiClient], RecordAdapter],
    ) -> None:
        """
        Initialize selector.

        Args:
            client_provider: Returns the current live client or None
            mock_adapter: Adapter used while no client is present
            live_adapter_factory: Builds a live adapter around a client
        """
        self._client_provider = client_provider
        self._mock_adapter = mock_adapter
        self._live_adapter_factory = live_adapter_factory
        self._client: WebApiClient | None = None
        self._live_adapter: RecordAdapter | None = None

    def select(self) -> RecordAdapter:
        client = self._client_provider()
        if client is None:
            return self._mock_adapter
        if client is not self._client or self._live_adapter is None:
            self._client = client
            self._live_adapter = self._live_adapter_factory(client)
        return self._live_adapter


def build_metadata_resolver(client: WebApiClient, settings: WebApiSettings) -> MetadataResolver:
    resolver: MetadataResolver = WebApiMetadataResolver(client)
    if settings.metadata_cache:
        resolver = CachingMetadataResolver(resolver)
    return resolver


def build_live_adapter(client: WebApiClient, settings: WebApiSettings) -> LiveRecordAdapter:
    return LiveRecordAdapter(
        client=client,
        resolver=build_metadata_resolver(client, settings),
        bind_suffix=settings.bind_suffix,
    )


def get_adapter_selector(
    settings: WebApiSettings | None = None,
    holder: WebApiClientHolder | None = None,
) -> AdapterSelector:
    """
    Factory function to get an adapter selector based on configuration.

    Args:
        settings: Web API settings (defaults to get_settings().webapi)
        holder: Client slot for 'auto' mode; filled from settings when a
            base URL is configured and the slot is empty

    Returns:
        AdapterSelector: Selector for RecordService

    Raises:
        BackendUnavailable: If WEBAPI_BACKEND=live without WEBAPI_BASE_URL
    """
    settings = settings or get_settings().webapi
    mode = settings.backend

    if mode == "mock":
        logger.info(f"{__name__}:get_adapter_selector - Using mock record adapter (development mode)")
        return FixedAdapterSelector(MockRecordAdapter(delay_seconds=settings.mock_delay_seconds))

    if mode == "live":
        logger.info(f"{__name__}:get_adapter_selector - Using live record adapter ({settings.service_root})")
        return FixedAdapterSelector(build_live_adapter(WebApiClient.from_settings(settings), settings))

    holder = holder or WebApiClientHolder()
    if holder.client is None and settings.service_root:
        holder.client = WebApiClient.from_settings(settings)
    logger.info(
        f"{__name__}:get_adapter_selector - Auto selection, live client "
        f"{'present' if holder.client is not None else 'absent'}"
    )
    return ClientPresenceSelector(
        client_provider=holder,
        mock_adapter=MockRecordAdapter(delay_seconds=settings.mock_delay_seconds),
        live_adapter_factory=lambda client: build_live_adapter(client, settings),
    )
