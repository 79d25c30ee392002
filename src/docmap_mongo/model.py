"""Model definitions and the per-model id specification derived from them."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

from bson import ObjectId
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

DEFAULT_ID_PROPERTY = "id"
STORE_ID_FIELD = "_id"


class IdType(str, Enum):
    """Store-relevant classification of a declared property type."""

    OBJECT_ID = "ObjectId"
    STRING = "string"
    NUMBER = "number"
    ANY = "any"


class IdKind(str, Enum):
    """Who assigns a model's id value."""

    NATIVE_GENERATED = "native_generated"
    OPAQUE_GENERATED = "opaque_generated"
    USER_SUPPLIED = "user_supplied"


_TYPE_NAMES: dict[str, IdType] = {
    "objectid": IdType.OBJECT_ID,
    "string": IdType.STRING,
    "str": IdType.STRING,
    "number": IdType.NUMBER,
    "int": IdType.NUMBER,
    "integer": IdType.NUMBER,
    "float": IdType.NUMBER,
}


def classify_type(declared: Any) -> IdType:
    """Map a declared property type (class or name) to an :class:`IdType`."""
    if declared is None:
        return IdType.ANY
    if isinstance(declared, IdType):
        return declared
    if isinstance(declared, str):
        return _TYPE_NAMES.get(declared.strip().lower(), IdType.ANY)
    if declared is ObjectId:
        return IdType.OBJECT_ID
    if declared is str:
        return IdType.STRING
    # bool is an int subclass but never a numeric id
    if declared is bool:
        return IdType.ANY
    if isinstance(declared, type) and issubclass(declared, int | float | Decimal):
        return IdType.NUMBER
    return IdType.ANY


class PropertyDefinition(BaseModel):
    """One property of a registered model.

    Accepts a bare type as shorthand (``str``, ``int``, ``"number"``) or a
    mapping ``{type, id, generated, store_data_type}``. The store data type
    may also be given as ``storeDataType`` or ``{"mongodb": {"dataType": ...}}``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: Any = None
    id: bool = False
    generated: bool = False
    store_data_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("store_data_type", "storeDataType"),
    )

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data
        if not isinstance(data, Mapping):
            return {"type": data}
        data = dict(data)
        mongodb = data.pop("mongodb", None)
        if (
            isinstance(mongodb, Mapping)
            and "dataType" in mongodb
            and "store_data_type" not in data
            and "storeDataType" not in data
        ):
            data["store_data_type"] = mongodb["dataType"]
        return data

    @property
    def data_type(self) -> IdType:
        """Type as stored; an explicit store data type wins over ``type``."""
        if self.store_data_type is not None:
            return classify_type(self.store_data_type)
        return classify_type(self.type)


class ModelDefinition(BaseModel):
    """Registration input for one model."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    properties: dict[str, PropertyDefinition] = Field(default_factory=dict)
    force_id: bool | None = None
    collection: str | None = None


class ModelIdSpec(BaseModel):
    """Immutable id configuration of a registered model.

    Computed once at registration; every connector operation reads it and
    none writes it.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str
    collection: str
    id_property: str = DEFAULT_ID_PROPERTY
    id_kind: IdKind
    declared_type: IdType
    force_id: bool = False
    implicit_id: bool = False
    object_id_properties: frozenset[str] = frozenset()

    def is_id(self, name: str) -> bool:
        return name == self.id_property

    def store_field(self, name: str) -> str:
        """Field name used in stored documents for property *name*."""
        return STORE_ID_FIELD if self.is_id(name) else name

    def type_of(self, name: str) -> IdType | None:
        """Identifier type governing *name*, or ``None`` for plain properties."""
        if self.is_id(name):
            return self.declared_type
        if name in self.object_id_properties:
            return IdType.OBJECT_ID
        return None
