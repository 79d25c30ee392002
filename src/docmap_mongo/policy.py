"""Id regimes per model and their enforcement on create."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from docmap_core.exceptions import (
    AutogeneratedIdConflictError,
    MissingRequiredIdError,
    ModelRegistrationError,
)

from .codec import IdentifierCodec
from .model import (
    DEFAULT_ID_PROPERTY,
    IdKind,
    IdType,
    ModelDefinition,
    ModelIdSpec,
)


class IdSource(str, Enum):
    """Where the id of a document being created comes from."""

    STORE = "store"
    GENERATOR = "generator"
    CLIENT = "client"


@dataclass(frozen=True)
class ResolvedId:
    """Outcome of id policy resolution for one create call.

    ``value`` is already encoded for the store and is only set when
    ``source`` is ``CLIENT``.
    """

    source: IdSource
    value: Any = None

    @property
    def deferred(self) -> bool:
        return self.source is not IdSource.CLIENT


class IdPolicyResolver:
    """Derive a model's :class:`ModelIdSpec` and enforce it on create."""

    def __init__(self, codec: IdentifierCodec | None = None) -> None:
        self._codec = codec or IdentifierCodec()

    def derive(self, definition: ModelDefinition) -> ModelIdSpec:
        """Compute the id specification of *definition* (registration time)."""
        id_props = [
            (name, prop) for name, prop in definition.properties.items() if prop.id
        ]
        if len(id_props) > 1:
            names = ", ".join(name for name, _ in id_props)
            raise ModelRegistrationError(
                f"Model {definition.name!r} declares more than one id property: "
                f"{names}"
            )
        object_id_props = frozenset(
            name
            for name, prop in definition.properties.items()
            if not prop.id and prop.data_type is IdType.OBJECT_ID
        )
        collection = definition.collection or definition.name

        if not id_props:
            if DEFAULT_ID_PROPERTY in definition.properties:
                raise ModelRegistrationError(
                    f"Model {definition.name!r} declares an {DEFAULT_ID_PROPERTY!r} "
                    "property that is not marked as the id"
                )
            return ModelIdSpec(
                model_name=definition.name,
                collection=collection,
                id_property=DEFAULT_ID_PROPERTY,
                id_kind=IdKind.NATIVE_GENERATED,
                declared_type=IdType.OBJECT_ID,
                force_id=_effective_force_id(definition.force_id, generated=True),
                implicit_id=True,
                object_id_properties=object_id_props,
            )

        name, prop = id_props[0]
        declared = prop.data_type
        if not prop.generated:
            kind = IdKind.USER_SUPPLIED
        elif declared is IdType.OBJECT_ID:
            kind = IdKind.NATIVE_GENERATED
        else:
            kind = IdKind.OPAQUE_GENERATED

        force_id = _effective_force_id(definition.force_id, generated=prop.generated)
        if force_id and kind is IdKind.USER_SUPPLIED:
            raise ModelRegistrationError(
                f"Model {definition.name!r} sets force_id but its id {name!r} "
                "is not generated"
            )
        return ModelIdSpec(
            model_name=definition.name,
            collection=collection,
            id_property=name,
            id_kind=kind,
            declared_type=declared,
            force_id=force_id,
            object_id_properties=object_id_props,
        )

    def resolve(self, spec: ModelIdSpec, supplied: Any) -> ResolvedId:
        """Check *supplied* (``None`` when absent) against the model's policy."""
        absent = supplied is None

        if spec.id_kind is IdKind.NATIVE_GENERATED:
            if not absent:
                raise AutogeneratedIdConflictError(
                    spec.model_name, spec.id_property, supplied
                )
            return ResolvedId(IdSource.STORE)

        if spec.id_kind is IdKind.OPAQUE_GENERATED:
            if absent:
                return ResolvedId(IdSource.GENERATOR)
            if spec.force_id:
                raise AutogeneratedIdConflictError(
                    spec.model_name, spec.id_property, supplied
                )
            return ResolvedId(IdSource.CLIENT, self._encode(spec, supplied))

        if absent:
            raise MissingRequiredIdError(spec.model_name, spec.id_property)
        return ResolvedId(IdSource.CLIENT, self._encode(spec, supplied))

    def _encode(self, spec: ModelIdSpec, value: Any) -> Any:
        return self._codec.encode_for_store(
            value,
            spec.declared_type,
            model_name=spec.model_name,
            property_name=spec.id_property,
        )


def _effective_force_id(force_id: bool | None, *, generated: bool) -> bool:
    # Unset means "force when generated".
    if force_id is None:
        return generated
    return force_id
