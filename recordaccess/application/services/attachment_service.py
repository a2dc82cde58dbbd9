"""
Attachment (note) service.

Stores files as note records bound to a parent record: the file travels
base64-encoded in 'documentbody' next to its filename and MIME type, and
the parent is referenced through the polymorphic 'objectid_<collection>'
field. No business checks happen here; callers decide whether, say, a
missing file is acceptable.

Dependencies: recordaccess.application.services.record_service, recordaccess.models
System role: Attachment upload and listing
"""

import logging

from recordaccess.application.services.record_service import RecordService
from recordaccess.models.attachment import AttachmentUpload
from recordaccess.models.record import FieldKind, Record, Reference, strip_braces

logger = logging.getLogger(__name__)

NOTE_COLLECTION = "annotation"

NOTE_LIST_FIELDS = [
    "annotationid",
    "subject",
    "notetext",
    "filename",
    "mimetype",
    "createdon",
    "modifiedon",
    "_objectid_value",
    "_createdby_value",
]


def parent_field(parent_collection: str) -> str:
    """Reference field that binds a note to a parent of the given collection."""
    return f"objectid_{parent_collection}"


class AttachmentService:
    """Create, replace and list notes attached to a record."""

    def __init__(self, records: RecordService) -> None:
        self.records = records

    async def upload(
        self,
        parent_collection: str,
        parent_id: str,
        upload: AttachmentUpload,
    ) -> Record:
        """
        Create a note bound to a parent record.

        Args:
            parent_collection: Logical name of the parent collection
            parent_id: Parent identity
            upload: Note text and optional file

        Returns:
            Record: Store response for the new note
        """
        link = parent_field(parent_collection)
        fields = {
            "subject": upload.subject.strip(),
            "notetext": upload.note_text.strip(),
            link: [Reference(id=parent_id, entity_type=parent_collection)],
        }
        if upload.has_file:
            fields.update(upload.document_fields())

        logger.info(
            f"{__name__}:upload - Attaching note to {parent_collection}({strip_braces(parent_id)}), "
            f"file={'yes' if upload.has_file else 'no'}"
        )
        return await self.records.create(NOTE_COLLECTION, fields, kinds={link: FieldKind.LOOKUP})

    async def replace_file(self, note_id: str, upload: AttachmentUpload) -> Record | None:
        """
        Update a note's text and file.

        An upload without a file clears the stored document.
        """
        fields = {
            "subject": upload.subject.strip(),
            "notetext": upload.note_text.strip(),
            **upload.document_fields(),
        }
        return await self.records.update(NOTE_COLLECTION, note_id, fields)

    async def list_notes(self, parent_id: str) -> list[Record]:
        """Notes attached to a parent record, newest first."""
        return await self.records.get(
            NOTE_COLLECTION,
            filter=f"_objectid_value eq {strip_braces(parent_id)}",
            select=NOTE_LIST_FIELDS,
            order_by="createdon desc",
        )

    async def delete_note(self, note_id: str) -> None:
        await self.records.delete(NOTE_COLLECTION, note_id)
