"""
Dependency injection container.

Factory functions that wire services to the configured adapter selector.

Dependencies: recordaccess.configs, recordaccess.application, recordaccess.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from recordaccess.application.services import (
    AttachmentService,
    BulkUpdater,
    RecordCopier,
    RecordService,
)
from recordaccess.boundary.webapi import get_adapter_selector
from recordaccess.configs import get_settings


@lru_cache
def get_record_service() -> RecordService:
    """
    Get the process-wide record service.

    Returns:
        RecordService: Facade bound to the WEBAPI_BACKEND selection
    """
    return RecordService(selector=get_adapter_selector(get_settings().webapi))


def get_bulk_updater() -> BulkUpdater:
    return BulkUpdater(get_record_service())


def get_record_copier() -> RecordCopier:
    return RecordCopier(get_record_service())


def get_attachment_service() -> AttachmentService:
    return AttachmentService(get_record_service())
