"""
Entity Web API boundary layer.

Provides the live Web API client and adapter, the development mock
adapter, field encoding for reference fields and metadata resolution.

Dependencies: httpx
System role: Record store adapters for the RecordService facade
"""

from recordaccess.boundary.webapi.adapter_factory import (
    AdapterSelector,
    ClientPresenceSelector,
    FixedAdapterSelector,
    WebApiClientHolder,
    build_live_adapter,
    get_adapter_selector,
)
from recordaccess.boundary.webapi.base import RecordAdapter
from recordaccess.boundary.webapi.client import WebApiClient
from recordaccess.boundary.webapi.field_encoder import (
    DEFAULT_BIND_SUFFIX,
    FieldEncoder,
    bind_path,
)
from recordaccess.boundary.webapi.live_adapter import LiveRecordAdapter
from recordaccess.boundary.webapi.metadata_resolver import (
    CachingMetadataResolver,
    MetadataResolver,
    StaticMetadataResolver,
    WebApiMetadataResolver,
)
from recordaccess.boundary.webapi.mock_adapter import MockRecordAdapter

__all__ = [
    "AdapterSelector",
    "CachingMetadataResolver",
    "ClientPresenceSelector",
    "DEFAULT_BIND_SUFFIX",
    "FieldEncoder",
    "FixedAdapterSelector",
    "LiveRecordAdapter",
    "MetadataResolver",
    "MockRecordAdapter",
    "RecordAdapter",
    "StaticMetadataResolver",
    "WebApiClient",
    "WebApiClientHolder",
    "WebApiMetadataResolver",
    "bind_path",
    "build_live_adapter",
    "get_adapter_selector",
]
