"""
Field encoding for create/update payloads.

Scalar fields pass through by name. Reference fields (lookup, customer,
owner) are rewritten as a bind entry:

    {"owner@bind": "/systemusers(0a1b...)"}

which tells the store to point the field at that record. Only the first
reference of a multi-valued field is bound; the rest are ignored.

Dependencies: recordaccess.boundary.webapi.metadata_resolver, recordaccess.models
System role: Outgoing payload construction for the live backend
"""

from collections.abc import Mapping, Sequence
from typing import Any

from recordaccess.boundary.webapi.metadata_resolver import MetadataResolver
from recordaccess.models.record import FieldKind, Reference, strip_braces

DEFAULT_BIND_SUFFIX = "@bind"


def bind_path(entity_set: str, identity: str) -> str:
    """Relative path addressing one record: '/{entity_set}({identity})'."""
    return f"/{entity_set}({strip_braces(identity)})"


def first_reference(value: Any) -> Reference | None:
    """
    Return the reference a field value points at, if it holds one.

    A single reference counts as a one-element sequence. For a sequence,
    only element 0 is considered.
    """
    single = Reference.coerce(value)
    if single is not None:
        return single
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and value:
        return Reference.coerce(value[0])
    return None


def infer_kind(value: Any) -> FieldKind:
    """Kind for a field with no declared kind: lookup when it holds a reference."""
    return FieldKind.LOOKUP if first_reference(value) is not None else FieldKind.SCALAR


class FieldEncoder:
    """
    Builds operation payloads from plain field maps.

    Payload construction is all-or-nothing: entries are collected into a
    fresh dict that is only returned once every field has been encoded.
    """

    def __init__(self, resolver: MetadataResolver, bind_suffix: str = DEFAULT_BIND_SUFFIX) -> None:
        """
        Initialize encoder.

        Args:
            resolver: Resolves reference targets to entity set names
            bind_suffix: Suffix appended to a field name to form its bind key
        """
        self._resolver = resolver
        self._bind_suffix = bind_suffix

    @property
    def bind_suffix(self) -> str:
        return self._bind_suffix

    def bind_key(self, field_name: str) -> str:
        return f"{field_name}{self._bind_suffix}"

    async def encode_field(self, field_name: str, raw_value: Any, kind: FieldKind) -> dict[str, Any]:
        """
        Encode one field into zero or one payload entries.

        Args:
            field_name: Field logical name
            raw_value: Current value (scalar, reference, list of references, or None)
            kind: Declared attribute kind

        Returns:
            dict: {bind_key: path}, {field_name: raw_value}, or {} for None

        Raises:
            MetadataUnavailable: If the reference target cannot be resolved
        """
        if kind.is_reference:
            reference = first_reference(raw_value)
            if reference is not None:
                entity_set = await self._resolver.resolve(reference.entity_type)
                return {self.bind_key(field_name): bind_path(entity_set, reference.id)}

        if raw_value is not None:
            return {field_name: raw_value}
        return {}

    async def build_payload(
        self,
        fields: Mapping[str, Any],
        kinds: Mapping[str, FieldKind] | None = None,
    ) -> dict[str, Any]:
        """
        Encode a whole field map.

        Args:
            fields: Field name -> raw value
            kinds: Declared kinds; fields without one are inferred from their value

        Returns:
            dict: Operation payload

        Raises:
            MetadataUnavailable: If any reference fails to resolve (no partial payload)
        """
        kinds = kinds or {}
        payload: dict[str, Any] = {}
        for field_name, raw_value in fields.items():
            kind = kinds.get(field_name) or infer_kind(raw_value)
            payload.update(await self.encode_field(field_name, raw_value, FieldKind(kind)))
        return payload
