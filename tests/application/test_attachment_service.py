"""
Test suite for AttachmentService.

Tests note creation bound to a parent, base64 file encoding, clearing the
document on replace without a file, and listing notes newest first.

System role: Verification of attachment workflows
"""

import base64
import json
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from recordaccess.application.services.attachment_service import (
    NOTE_COLLECTION,
    NOTE_LIST_FIELDS,
    AttachmentService,
    parent_field,
)
from recordaccess.application.services.record_service import RecordService
from recordaccess.boundary.webapi.client import WebApiClient
from recordaccess.boundary.webapi.live_adapter import LiveRecordAdapter
from recordaccess.boundary.webapi.metadata_resolver import StaticMetadataResolver
from recordaccess.models.attachment import AttachmentUpload
from recordaccess.models.record import FieldKind, Reference

PARENT = "proto_activitymimeattachment"


@pytest.fixture
def mock_records() -> MagicMock:
    """Provide RecordService double."""
    records = MagicMock(spec=RecordService)
    records.create = AsyncMock(return_value={"id": "note-1"})
    records.update = AsyncMock(return_value={"id": "note-1"})
    records.get = AsyncMock(return_value=[])
    records.delete = AsyncMock(return_value=None)
    return records


@pytest.fixture
def attachment_service(mock_records: MagicMock) -> AttachmentService:
    return AttachmentService(mock_records)


class TestUpload:
    """Test suite for AttachmentService.upload()."""

    @pytest.mark.asyncio
    async def test_upload_with_file_should_encode_document(
        self, attachment_service: AttachmentService, mock_records: MagicMock
    ) -> None:
        # Arrange
        upload = AttachmentUpload(
            subject="  Invoice ", note_text="March", content=b"%PDF-1.7", filename="inv.pdf"
        )

        # Act
        await attachment_service.upload(PARENT, "{att-1}", upload)

        # Assert
        collection, fields = mock_records.create.await_args.args
        assert collection == NOTE_COLLECTION
        assert fields["subject"] == "Invoice"
        assert fields["notetext"] == "March"
        assert fields["documentbody"] == base64.b64encode(b"%PDF-1.7").decode("ascii")
        assert fields["filename"] == "inv.pdf"
        assert fields["mimetype"] == "application/pdf"
        assert fields[parent_field(PARENT)] == [Reference(id="{att-1}", entity_type=PARENT)]
        assert mock_records.create.await_args.kwargs["kinds"] == {
            parent_field(PARENT): FieldKind.LOOKUP
        }

    @pytest.mark.asyncio
    async def test_upload_without_file_should_omit_document_fields(
        self, attachment_service: AttachmentService, mock_records: MagicMock
    ) -> None:
        await attachment_service.upload(PARENT, "att-1", AttachmentUpload(subject="Call notes"))

        _, fields = mock_records.create.await_args.args
        assert "documentbody" not in fields
        assert "filename" not in fields

    @pytest.mark.asyncio
    async def test_upload_should_post_bound_note(
        self,
        make_webapi_client: Callable[..., WebApiClient],
        captured_requests: list[httpx.Request],
        static_resolver: StaticMetadataResolver,
    ) -> None:
        client = make_webapi_client(
            lambda request: httpx.Response(
                204, headers={"OData-EntityId": "https://org.example.com/api/data/v9.2/annotations(n-1)"}
            )
        )
        service = AttachmentService(RecordService(adapter=LiveRecordAdapter(client, static_resolver)))

        result = await service.upload(
            PARENT,
            "{att-1}",
            AttachmentUpload(subject="s", content=b"hi", filename="a.txt", mime_type="text/plain"),
        )

        assert result["id"] == "n-1"
        assert captured_requests[0].url.path == "/api/data/v9.2/annotations"
        assert json.loads(captured_requests[0].content) == {
            "subject": "s",
            "notetext": "",
            "objectid_proto_activitymimeattachment@bind": "/proto_activitymimeattachments(att-1)",
            "documentbody": "aGk=",
            "filename": "a.txt",
            "mimetype": "text/plain",
        }


class TestReplaceFile:
    """Test suite for AttachmentService.replace_file()."""

    @pytest.mark.asyncio
    async def test_replace_without_file_should_clear_document(
        self, attachment_service: AttachmentService, mock_records: MagicMock
    ) -> None:
        await attachment_service.replace_file("note-1", AttachmentUpload(subject="s", note_text="t"))

        collection, note_id, fields = mock_records.update.await_args.args
        assert (collection, note_id) == (NOTE_COLLECTION, "note-1")
        assert fields == {
            "subject": "s",
            "notetext": "t",
            "documentbody": "",
            "filename": "",
            "mimetype": "",
        }

    @pytest.mark.asyncio
    async def test_replace_with_file_should_send_new_document(
        self, attachment_service: AttachmentService, mock_records: MagicMock
    ) -> None:
        upload = AttachmentUpload(content=b"abc", filename="b.png", mime_type="image/png")

        await attachment_service.replace_file("note-1", upload)

        _, _, fields = mock_records.update.await_args.args
        assert fields["documentbody"] == "YWJj"
        assert fields["mimetype"] == "image/png"


class TestListAndDelete:
    """Test suite for list_notes() and delete_note()."""

    @pytest.mark.asyncio
    async def test_list_notes_should_filter_by_parent_newest_first(
        self, attachment_service: AttachmentService, mock_records: MagicMock
    ) -> None:
        await attachment_service.list_notes("{att-1}")

        mock_records.get.assert_awaited_once_with(
            NOTE_COLLECTION,
            filter="_objectid_value eq att-1",
            select=NOTE_LIST_FIELDS,
            order_by="createdon desc",
        )

    @pytest.mark.asyncio
    async def test_delete_note_should_delete_annotation(
        self, attachment_service: AttachmentService, mock_records: MagicMock
    ) -> None:
        await attachment_service.delete_note("note-1")

        mock_records.delete.assert_awaited_once_with(NOTE_COLLECTION, "note-1")
