"""
Copy-to-new-record workflow.

Creates a new record carrying selected field values of a source record
(typically the form the user is looking at). Reference fields are bound to
the same targets as the source; empty fields are left out.

Dependencies: recordaccess.application.services.record_service
System role: Record duplication for "copy" buttons
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from recordaccess.application.services.record_service import RecordService
from recordaccess.models.record import FieldKind, Record

logger = logging.getLogger(__name__)


class RecordCopier:
    """Creates records from fields of an existing one."""

    def __init__(self, records: RecordService) -> None:
        self.records = records

    async def copy_record(
        self,
        collection: str,
        source: Mapping[str, Any],
        field_names: Iterable[str],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> Record:
        """
        Create a new record in `collection` from fields of `source`.

        Args:
            collection: Collection to create the copy in
            source: Field values of the record being copied
            field_names: Fields to carry over; names absent from source are skipped
            kinds: Declared kinds for the copied fields

        Returns:
            Record: Store response for the new record
        """
        fields = {name: source[name] for name in field_names if name in source}
        logger.info(f"{__name__}:copy_record - Copying {len(fields)} fields into new {collection}")
        return await self.records.create(collection, fields, kinds)
