from recordaccess.models.attachment import AttachmentUpload
from recordaccess.models.bulk import BulkOutcome, BulkTarget
from recordaccess.models.record import (
    FieldKind,
    Record,
    RecordQuery,
    Reference,
    strip_braces,
)

__all__ = [
    "AttachmentUpload",
    "BulkOutcome",
    "BulkTarget",
    "FieldKind",
    "Record",
    "RecordQuery",
    "Reference",
    "strip_braces",
]
