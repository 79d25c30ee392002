"""MongoDB document mapper with identifier and BSON type handling."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any
from uuid import UUID

from bson.decimal128 import Decimal128

from .codec import IdentifierCodec
from .model import STORE_ID_FIELD, IdType, ModelIdSpec


def _serialize_value(value: Any) -> Any:
    """Convert Python types to BSON-safe types."""
    if isinstance(value, Decimal):
        return Decimal128(str(value))
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Mapping):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_serialize_value(v) for v in value]
    return value


def _deserialize_value(value: Any) -> Any:
    """Convert BSON types back to Python types."""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, dict):
        return {k: _deserialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_deserialize_value(v) for v in value]
    return value


class MongoDocumentMapper:
    """
    Property values <-> MongoDB document for one registered model.

    The id property is *not* written by :meth:`to_doc`; the connector sets
    ``_id`` after id policy resolution. :meth:`from_doc` maps ``_id`` back to
    the id property in its application form. Properties stored as
    ``ObjectId`` are encoded on the way in and decoded on the way out.
    """

    def __init__(
        self,
        id_spec: ModelIdSpec,
        codec: IdentifierCodec | None = None,
    ) -> None:
        self._spec = id_spec
        self._codec = codec or IdentifierCodec()

    def to_doc(self, data: Mapping[str, Any]) -> dict[str, Any]:
        doc: dict[str, Any] = {}
        for key, value in data.items():
            if self._spec.is_id(key) or key == STORE_ID_FIELD:
                continue
            if key in self._spec.object_id_properties:
                doc[key] = self._encode_object_id(key, value)
            else:
                doc[key] = _serialize_value(value)
        return doc

    def from_doc(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for key, value in doc.items():
            if key == STORE_ID_FIELD:
                data[self._spec.id_property] = self._codec.decode_from_store(
                    value, self._spec.declared_type
                )
            elif key in self._spec.object_id_properties:
                data[key] = self._codec.decode_from_store(value, IdType.OBJECT_ID)
            else:
                data[key] = _deserialize_value(value)
        return data

    def _encode_object_id(self, key: str, value: Any) -> Any:
        ctx = {"model_name": self._spec.model_name, "property_name": key}
        if isinstance(value, list | tuple):
            return self._codec.encode_many(value, IdType.OBJECT_ID, **ctx)
        return self._codec.encode_for_store(value, IdType.OBJECT_ID, **ctx)
