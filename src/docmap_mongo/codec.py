"""Conversion of application id values <-> MongoDB identity values."""

from __future__ import annotations

import re
from typing import Any

from bson import ObjectId

from .exceptions import InvalidObjectIdFormatError
from .model import IdType

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")
_INTEGER_PATTERN = re.compile(r"^-?\d+$")
_DECIMAL_PATTERN = re.compile(r"^-?\d+\.\d+$")


def is_object_id_string(value: Any) -> bool:
    """Return ``True`` for exactly 24 lowercase hexadecimal characters."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


class IdentifierCodec:
    """Stateless, bidirectional coercion of identifier values.

    Encoding is driven by the declared type only, never by the runtime shape
    of the value:

    * ``OBJECT_ID`` accepts an ``ObjectId``, a canonical hex string, or
      ``None`` (the store generates one). Anything else is rejected.
    * ``NUMBER`` turns numeric strings into ``int`` / ``float``.
    * ``STRING`` and ``ANY`` pass values through, so numeric strings stay
      strings.

    Decoding turns ``ObjectId`` into its hex string and leaves everything
    else alone. It never raises.
    """

    def encode_for_store(
        self,
        value: Any,
        declared_type: IdType,
        *,
        model_name: str | None = None,
        property_name: str | None = None,
    ) -> Any:
        if declared_type is IdType.OBJECT_ID:
            return self._encode_object_id(
                value, model_name=model_name, property_name=property_name
            )
        if declared_type is IdType.NUMBER:
            return self._encode_number(value)
        return value

    def encode_many(
        self,
        values: Any,
        declared_type: IdType,
        *,
        model_name: str | None = None,
        property_name: str | None = None,
    ) -> list[Any]:
        """Encode each element; a failing element fails the whole list."""
        return [
            self.encode_for_store(
                v, declared_type, model_name=model_name, property_name=property_name
            )
            for v in values
        ]

    def decode_from_store(
        self,
        value: Any,
        declared_type: IdType | None = None,  # noqa: ARG002
    ) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        if isinstance(value, list):
            return [self.decode_from_store(v) for v in value]
        return value

    @staticmethod
    def _encode_object_id(
        value: Any,
        *,
        model_name: str | None,
        property_name: str | None,
    ) -> ObjectId | None:
        if value is None or isinstance(value, ObjectId):
            return value
        if is_object_id_string(value):
            return ObjectId(value)
        raise InvalidObjectIdFormatError(
            value, model_name=model_name, property_name=property_name
        )

    @staticmethod
    def _encode_number(value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if _INTEGER_PATTERN.fullmatch(text):
            return int(text)
        if _DECIMAL_PATTERN.fullmatch(text):
            return float(text)
        return value
