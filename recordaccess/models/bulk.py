"""
Bulk update models.

Targets and settled per-target outcomes for best-effort fan-out updates.

Dependencies: pydantic
System role: Bulk update contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BulkTarget(BaseModel):
    """One record addressed by a bulk update."""

    model_config = ConfigDict(frozen=True)

    collection: str = Field(description="Logical name of the record's collection")
    record_id: str = Field(description="Identity of the record to update")


class BulkOutcome(BaseModel):
    """Settled result of updating a single target."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    target: BulkTarget
    succeeded: bool
    result: dict[str, Any] | None = None
    error: BaseException | None = Field(default=None, exclude=True)

    @property
    def error_message(self) -> str | None:
        return str(self.error) if self.error is not None else None
