"""
Application services.

Orchestrates record access for feature code: the RecordService facade and
the workflows built on it.
"""

from recordaccess.application.services.attachment_service import AttachmentService
from recordaccess.application.services.bulk_update import BulkUpdater
from recordaccess.application.services.record_copy import RecordCopier
from recordaccess.application.services.record_service import RecordService

__all__ = [
    "AttachmentService",
    "BulkUpdater",
    "RecordCopier",
    "RecordService",
]
