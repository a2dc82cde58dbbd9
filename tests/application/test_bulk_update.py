"""
Test suite for BulkUpdater.

Tests settle-all semantics: every target is attempted, failures are isolated
to their own outcome, and outcomes come back in target order.

System role: Verification of best-effort fan-out updates
"""

import asyncio
import json
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from recordaccess.application.services.bulk_update import BulkUpdater
from recordaccess.application.services.record_service import RecordService
from recordaccess.boundary.webapi.client import WebApiClient
from recordaccess.boundary.webapi.live_adapter import LiveRecordAdapter
from recordaccess.boundary.webapi.metadata_resolver import StaticMetadataResolver
from recordaccess.core.exceptions import RemoteOperationFailed
from recordaccess.models.bulk import BulkTarget
from recordaccess.models.record import FieldKind, Reference


@pytest.fixture
def mock_records() -> MagicMock:
    """Provide RecordService double."""
    records = MagicMock(spec=RecordService)
    records.update = AsyncMock(side_effect=lambda collection, record_id, fields, kinds: {"id": record_id})
    return records


@pytest.fixture
def bulk_updater(mock_records: MagicMock) -> BulkUpdater:
    return BulkUpdater(mock_records)


class TestApplyToMany:
    """Test suite for BulkUpdater.apply_to_many()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failing_id", ["wo-1", "wo-2", "wo-4"], ids=["first", "middle", "last"])
    async def test_one_failure_should_not_affect_other_targets(
        self, bulk_updater: BulkUpdater, mock_records: MagicMock, failing_id: str
    ) -> None:
        # Arrange
        async def _update(collection, record_id, fields, kinds):
            if record_id == failing_id:
                raise RemoteOperationFailed("denied", status_code=403)
            return {"id": record_id}

        mock_records.update.side_effect = _update
        targets = [("proto_workorder", f"wo-{i}") for i in range(1, 5)]

        # Act
        outcomes = await bulk_updater.apply_to_many(targets, {"statuscode": 2})

        # Assert
        assert len(outcomes) == 4
        assert [o.target.record_id for o in outcomes] == ["wo-1", "wo-2", "wo-3", "wo-4"]
        failed = [o for o in outcomes if not o.succeeded]
        assert len(failed) == 1
        assert failed[0].target.record_id == failing_id
        assert all(o.result == {"id": o.target.record_id} for o in outcomes if o.succeeded)
        assert isinstance(failed[0].error, RemoteOperationFailed)
        assert "denied" in failed[0].error_message
        assert mock_records.update.await_count == 4

    @pytest.mark.asyncio
    async def test_outcomes_should_follow_target_order_not_completion_order(
        self, bulk_updater: BulkUpdater, mock_records: MagicMock
    ) -> None:
        delays = {"a": 0.03, "b": 0.0, "c": 0.01}

        async def _update(collection, record_id, fields, kinds):
            await asyncio.sleep(delays[record_id])
            return {"id": record_id}

        mock_records.update.side_effect = _update

        outcomes = await bulk_updater.apply_to_many(
            [BulkTarget(collection="widgets", record_id=r) for r in ("a", "b", "c")], {"title": "z"}
        )

        assert [o.result for o in outcomes] == [{"id": "a"}, {"id": "b"}, {"id": "c"}]
        assert all(o.succeeded for o in outcomes)

    @pytest.mark.asyncio
    async def test_empty_targets_should_return_empty_list(
        self, bulk_updater: BulkUpdater, mock_records: MagicMock
    ) -> None:
        assert await bulk_updater.apply_to_many([], {"title": "z"}) == []
        mock_records.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_errors_should_be_captured_per_target(
        self, bulk_updater: BulkUpdater, mock_records: MagicMock
    ) -> None:
        mock_records.update.side_effect = ValueError("bad value")

        outcomes = await bulk_updater.apply_to_many([("widgets", "a"), ("widgets", "b")], {"x": 1})

        assert [o.succeeded for o in outcomes] == [False, False]
        assert outcomes[0].error_message == "bad value"

    @pytest.mark.asyncio
    async def test_error_should_not_be_serialized(
        self, bulk_updater: BulkUpdater, mock_records: MagicMock
    ) -> None:
        mock_records.update.side_effect = ValueError("bad value")

        outcomes = await bulk_updater.apply_to_many([("widgets", "a")], {"x": 1})

        assert "error" not in outcomes[0].model_dump()


class TestBindReference:
    """Test suite for BulkUpdater.bind_reference()."""

    @pytest.mark.asyncio
    async def test_bind_reference_should_send_lookup_field(
        self, bulk_updater: BulkUpdater, mock_records: MagicMock
    ) -> None:
        project = Reference(id="{p-1}", entity_type="proto_project")

        await bulk_updater.bind_reference([("proto_workorder", "wo-1")], "proto_project", project)

        collection, record_id, fields, kinds = mock_records.update.await_args.args
        assert (collection, record_id) == ("proto_workorder", "wo-1")
        assert fields == {"proto_project": [project]}
        assert kinds == {"proto_project": FieldKind.LOOKUP}

    @pytest.mark.asyncio
    async def test_bind_reference_should_patch_every_selected_row(
        self,
        make_webapi_client: Callable[..., WebApiClient],
        captured_requests: list[httpx.Request],
        static_resolver: StaticMetadataResolver,
    ) -> None:
        # Arrange
        def _store(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("(wo-2)"):
                return httpx.Response(404, json={"error": {"message": "Does Not Exist"}})
            return httpx.Response(204)

        records = RecordService(adapter=LiveRecordAdapter(make_webapi_client(_store), static_resolver))
        updater = BulkUpdater(records)

        # Act
        outcomes = await updater.bind_reference(
            [("proto_workorder", "{wo-1}"), ("proto_workorder", "{wo-2}"), ("proto_workorder", "{wo-3}")],
            "proto_project",
            {"id": "{p-1}", "entityType": "proto_project"},
        )

        # Assert
        assert [o.succeeded for o in outcomes] == [True, False, True]
        assert outcomes[1].error.status_code == 404
        assert len(captured_requests) == 3
        for request in captured_requests:
            assert request.method == "PATCH"
            assert json.loads(request.content) == {"proto_project@bind": "/proto_projects(p-1)"}
