"""
Record domain models.

Field kinds, reference values and list queries exchanged between feature
code and the record access layer.

Dependencies: pydantic
System role: Record access data contracts
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Record = dict[str, Any]


class FieldKind(str, Enum):
    """Attribute type of a record field, as reported by the store."""

    SCALAR = "scalar"
    LOOKUP = "lookup"
    CUSTOMER = "customer"
    OWNER = "owner"

    @property
    def is_reference(self) -> bool:
        """Lookup, customer and owner attributes all point at another record."""
        return self is not FieldKind.SCALAR


def strip_braces(identity: str) -> str:
    """Normalize an identity by removing '{' and '}' characters."""
    return identity.replace("{", "").replace("}", "")


class Reference(BaseModel):
    """Pointer to exactly one record in another collection."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(description="Target identity, braces allowed")
    entity_type: str = Field(
        alias="entityType",
        description="Logical name of the target collection",
    )
    name: str | None = Field(default=None, description="Display name of the target")

    @property
    def normalized_id(self) -> str:
        return strip_braces(self.id)

    @classmethod
    def coerce(cls, value: Any) -> "Reference | None":
        """
        Interpret a value as a reference if it has the reference shape.

        Accepts Reference instances and mappings with 'id' plus
        'entityType' (or 'entity_type') keys.

        Returns:
            Reference | None: Parsed reference, or None for anything else
        """
        if isinstance(value, Reference):
            return value
        if isinstance(value, Mapping) and "id" in value:
            if "entityType" in value or "entity_type" in value:
                return cls.model_validate(dict(value))
        return None


class RecordQuery(BaseModel):
    """OData list query; unset parts are left out of the query string."""

    filter: str | None = None
    select: list[str] | None = None
    order_by: str | None = None

    def to_params(self) -> dict[str, str]:
        """
        Build query parameters in $filter, $select, $orderby order.

        Returns:
            dict[str, str]: Only the parameters that were supplied
        """
        params: dict[str, str] = {}
        if self.filter:
            params["$filter"] = self.filter
        if self.select:
            params["$select"] = ",".join(self.select)
        if self.order_by:
            params["$orderby"] = self.order_by
        return params

    def to_query_string(self) -> str:
        """
        Render as 'key=value&...' without a leading '?', unencoded.

        For log lines only; requests pass to_params() to the HTTP client,
        which encodes the values.
        """
        return "&".join(f"{key}={value}" for key, value in self.to_params().items())
