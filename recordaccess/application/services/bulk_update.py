"""
Bulk fan-out updates.

Applies one set of field changes to many records at once, e.g. pointing
every selected work order in a grid at the parent's project. Updates run
concurrently and independently: a failing record never stops, skips or
rolls back another. Callers get one outcome per target and decide for
themselves whether partial success is acceptable.

Dependencies: asyncio, recordaccess.application.services.record_service
System role: Best-effort multi-record update orchestration
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from recordaccess.application.services.record_service import RecordService
from recordaccess.models.bulk import BulkOutcome, BulkTarget
from recordaccess.models.record import FieldKind, Reference
from recordaccess.observability.log_utils import log_with_context, summarize_fields

logger = logging.getLogger(__name__)


class BulkUpdater:
    """Settle-all fan-out of updates through the RecordService facade."""

    def __init__(self, records: RecordService) -> None:
        """
        Initialize bulk updater.

        Args:
            records: Facade used for each per-target update
        """
        self.records = records

    async def _update_one(
        self,
        target: BulkTarget,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None,
    ) -> BulkOutcome:
        try:
            result = await self.records.update(target.collection, target.record_id, fields, kinds)
        except Exception as e:
            logger.warning(
                f"{__name__}:apply_to_many - {target.collection}({target.record_id}) failed: {e}"
            )
            return BulkOutcome(target=target, succeeded=False, error=e)
        return BulkOutcome(target=target, succeeded=True, result=result)

    async def apply_to_many(
        self,
        targets: Iterable[BulkTarget | tuple[str, str]],
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> list[BulkOutcome]:
        """
        Update every target with the same fields.

        Args:
            targets: BulkTarget or (collection, record_id) pairs
            fields: Field changes applied to each target
            kinds: Optional declared field kinds

        Returns:
            list[BulkOutcome]: One outcome per target, in target order,
                returned after every update has settled
        """
        resolved = [
            target if isinstance(target, BulkTarget)
            else BulkTarget(collection=target[0], record_id=target[1])
            for target in targets
        ]
        outcomes = await asyncio.gather(
            *(self._update_one(target, fields, kinds) for target in resolved)
        )
        failed = [outcome.target.record_id for outcome in outcomes if not outcome.succeeded]
        log_with_context(
            logger,
            logging.WARNING if failed else logging.INFO,
            f"{__name__}:apply_to_many - {len(outcomes) - len(failed)}/{len(outcomes)} updates succeeded",
            fields=summarize_fields(fields),
            failed_ids=failed,
        )
        return list(outcomes)

    async def bind_reference(
        self,
        targets: Iterable[BulkTarget | tuple[str, str]],
        field_name: str,
        reference: Reference | Mapping[str, Any],
    ) -> list[BulkOutcome]:
        """
        Point one reference field of many records at the same target.

        Args:
            targets: Records to update
            field_name: Reference field to rebind, e.g. 'proto_project'
            reference: Shared target record

        Returns:
            list[BulkOutcome]: Per-target outcomes
        """
        return await self.apply_to_many(
            targets,
            {field_name: [reference]},
            kinds={field_name: FieldKind.LOOKUP},
        )
