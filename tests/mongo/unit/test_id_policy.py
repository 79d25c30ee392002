"""Unit tests for IdPolicyResolver: derivation and enforcement."""

from __future__ import annotations

import pytest
from bson import ObjectId

from docmap_core.exceptions import (
    AutogeneratedIdConflictError,
    MissingRequiredIdError,
    ModelRegistrationError,
)
from docmap_mongo.exceptions import InvalidObjectIdFormatError
from docmap_mongo.model import IdKind, IdType, ModelDefinition
from docmap_mongo.policy import IdPolicyResolver, IdSource

HEX = "7cd2ad46ffc580ba45d3cb1f"


@pytest.fixture
def resolver() -> IdPolicyResolver:
    return IdPolicyResolver()


def _definition(name: str, properties: dict, **kwargs) -> ModelDefinition:
    return ModelDefinition(name=name, properties=properties, **kwargs)


class TestDerive:
    def test_implicit_id(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(_definition("Person", {"name": str}))
        assert spec.id_property == "id"
        assert spec.id_kind is IdKind.NATIVE_GENERATED
        assert spec.declared_type is IdType.OBJECT_ID
        assert spec.implicit_id
        assert spec.force_id
        assert spec.collection == "Person"

    def test_opaque_generated(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition("Account", {"seq": {"id": True, "generated": True}})
        )
        assert spec.id_property == "seq"
        assert spec.id_kind is IdKind.OPAQUE_GENERATED
        assert spec.declared_type is IdType.ANY
        assert spec.force_id

    def test_generated_object_id_is_native(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition(
                "Note",
                {"id": {"type": "ObjectId", "id": True, "generated": True}},
            )
        )
        assert spec.id_kind is IdKind.NATIVE_GENERATED
        assert not spec.implicit_id

    def test_user_supplied_object_id(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition(
                "Book",
                {"id": {"type": str, "id": True, "storeDataType": "ObjectId"}},
            )
        )
        assert spec.id_kind is IdKind.USER_SUPPLIED
        assert spec.declared_type is IdType.OBJECT_ID
        assert not spec.force_id

    def test_explicit_force_id_false(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition(
                "Tag",
                {"code": {"type": str, "id": True, "generated": True}},
                force_id=False,
            )
        )
        assert spec.id_kind is IdKind.OPAQUE_GENERATED
        assert not spec.force_id

    def test_collection_override(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(_definition("Person", {}, collection="people"))
        assert spec.collection == "people"

    def test_object_id_properties_collected(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition(
                "Book",
                {
                    "author_id": {"type": str, "storeDataType": "ObjectId"},
                    "title": str,
                },
            )
        )
        assert spec.object_id_properties == frozenset({"author_id"})
        assert spec.type_of("author_id") is IdType.OBJECT_ID
        assert spec.type_of("title") is None

    def test_two_id_properties_rejected(self, resolver: IdPolicyResolver) -> None:
        with pytest.raises(ModelRegistrationError, match="more than one id"):
            resolver.derive(
                _definition("Bad", {"a": {"id": True}, "b": {"id": True}})
            )

    def test_plain_id_property_rejected(self, resolver: IdPolicyResolver) -> None:
        with pytest.raises(ModelRegistrationError, match="not marked as the id"):
            resolver.derive(_definition("Bad", {"id": str}))

    def test_force_id_on_user_supplied_rejected(
        self, resolver: IdPolicyResolver
    ) -> None:
        with pytest.raises(ModelRegistrationError, match="force_id"):
            resolver.derive(
                _definition("Bad", {"seq": {"type": int, "id": True}}, force_id=True)
            )


class TestResolve:
    def test_native_absent_defers_to_store(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(_definition("Person", {}))
        resolved = resolver.resolve(spec, None)
        assert resolved.source is IdSource.STORE
        assert resolved.deferred

    def test_native_present_conflicts(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(_definition("Person", {}))
        with pytest.raises(AutogeneratedIdConflictError) as exc_info:
            resolver.resolve(spec, HEX)
        assert exc_info.value.property_name == "id"

    def test_native_conflicts_even_without_force_id(
        self, resolver: IdPolicyResolver
    ) -> None:
        spec = resolver.derive(_definition("Person", {}, force_id=False))
        with pytest.raises(AutogeneratedIdConflictError):
            resolver.resolve(spec, HEX)

    def test_opaque_absent_defers_to_generator(
        self, resolver: IdPolicyResolver
    ) -> None:
        spec = resolver.derive(
            _definition("Account", {"seq": {"id": True, "generated": True}})
        )
        resolved = resolver.resolve(spec, None)
        assert resolved.source is IdSource.GENERATOR
        assert resolved.value is None

    def test_opaque_present_with_force_id(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition("Account", {"seq": {"id": True, "generated": True}})
        )
        with pytest.raises(AutogeneratedIdConflictError, match="seq"):
            resolver.resolve(spec, 42)

    def test_opaque_present_without_force_id(
        self, resolver: IdPolicyResolver
    ) -> None:
        spec = resolver.derive(
            _definition(
                "Tag",
                {"code": {"type": str, "id": True, "generated": True}},
                force_id=False,
            )
        )
        resolved = resolver.resolve(spec, "red")
        assert resolved.source is IdSource.CLIENT
        assert resolved.value == "red"
        assert not resolved.deferred

    def test_user_supplied_absent(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition("Customer", {"seq": {"type": int, "id": True}})
        )
        with pytest.raises(MissingRequiredIdError, match="seq"):
            resolver.resolve(spec, None)

    def test_user_supplied_number_encoded(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition("Customer", {"seq": {"type": int, "id": True}})
        )
        assert resolver.resolve(spec, "7").value == 7

    def test_user_supplied_object_id_encoded(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition(
                "Book",
                {"id": {"type": str, "id": True, "storeDataType": "ObjectId"}},
            )
        )
        assert resolver.resolve(spec, HEX).value == ObjectId(HEX)

    def test_user_supplied_object_id_invalid(self, resolver: IdPolicyResolver) -> None:
        spec = resolver.derive(
            _definition(
                "Book",
                {"id": {"type": str, "id": True, "storeDataType": "ObjectId"}},
            )
        )
        with pytest.raises(InvalidObjectIdFormatError):
            resolver.resolve(spec, 3)
