"""
Shared test fixtures and configuration for entire test suite.

Provides: metadata resolvers, zero-latency mock adapter, Web API clients
wired to httpx.MockTransport with request capture
Dependencies: pytest, httpx
System role: Test infrastructure and fixture management
"""

from collections.abc import Callable

import httpx
import pytest

from recordaccess.boundary.webapi.client import WebApiClient
from recordaccess.boundary.webapi.metadata_resolver import StaticMetadataResolver
from recordaccess.boundary.webapi.mock_adapter import MockRecordAdapter
from recordaccess.configs import get_settings

SERVICE_ROOT = "https://org.example.com/api/data/v9.2/"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def entity_sets() -> dict[str, str]:
    """Logical collection name -> entity set name."""
    return {
        "widgets": "widgets",
        "users": "systemusers",
        "account": "accounts",
        "annotation": "annotations",
        "proto_project": "proto_projects",
        "proto_workorder": "proto_workorders",
        "proto_workordersubstatus": "proto_workordersubstatuses",
        "proto_activitymimeattachment": "proto_activitymimeattachments",
    }


@pytest.fixture
def static_resolver(entity_sets: dict[str, str]) -> StaticMetadataResolver:
    """Provide resolver backed by the entity_sets mapping."""
    return StaticMetadataResolver(entity_sets)


@pytest.fixture
def fast_mock_adapter() -> MockRecordAdapter:
    """Provide mock adapter without artificial latency."""
    return MockRecordAdapter(delay_seconds=0)


@pytest.fixture
def captured_requests() -> list[httpx.Request]:
    """Requests seen by clients built with make_webapi_client."""
    return []


@pytest.fixture
def make_webapi_client(captured_requests: list[httpx.Request]) -> Callable[[Handler], WebApiClient]:
    """Build WebApiClient instances whose transport is a recording MockTransport."""

    def _make(handler: Handler) -> WebApiClient:
        def _record(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            return handler(request)

        return WebApiClient(
            SERVICE_ROOT,
            access_token="test-token",
            transport=httpx.MockTransport(_record),
        )

    return _make
