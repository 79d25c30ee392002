"""Registry of model name -> ModelIdSpec, written at start-up only."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from docmap_core.exceptions import ModelNotRegisteredError, ModelRegistrationError

from .model import ModelDefinition, ModelIdSpec
from .policy import IdPolicyResolver

logger = logging.getLogger("docmap.registry")


class ModelRegistry:
    """Registry of id specifications keyed by model name.

    Specs are derived once, when a model is registered, and never change.
    Call :meth:`freeze` once start-up is complete; afterwards the registry
    is read-only and safe to share between concurrent operations.

    Usage::

        registry = ModelRegistry()
        registry.define("Book", {"id": {"type": str, "id": True,
                                        "store_data_type": "ObjectId"},
                                 "title": str})
        registry.freeze()

        spec = registry.get("Book")
    """

    def __init__(self, resolver: IdPolicyResolver | None = None) -> None:
        self._resolver = resolver or IdPolicyResolver()
        self._specs: dict[str, ModelIdSpec] = {}
        self._frozen = False

    def register(self, definition: ModelDefinition) -> ModelIdSpec:
        """Derive and store the id specification of *definition*."""
        if self._frozen:
            raise ModelRegistrationError(
                f"Registry is frozen; cannot register {definition.name!r}"
            )
        if definition.name in self._specs:
            raise ModelRegistrationError(
                f"Model {definition.name!r} is already registered"
            )
        spec = self._resolver.derive(definition)
        self._specs[definition.name] = spec
        logger.debug(
            "Registered model %s (id=%s, kind=%s, type=%s)",
            spec.model_name,
            spec.id_property,
            spec.id_kind.value,
            spec.declared_type.value,
        )
        return spec

    def define(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        *,
        force_id: bool | None = None,
        collection: str | None = None,
    ) -> ModelIdSpec:
        """Validate a raw model declaration and register it."""
        try:
            definition = ModelDefinition(
                name=name,
                properties=dict(properties or {}),
                force_id=force_id,
                collection=collection,
            )
        except PydanticValidationError as e:
            raise ModelRegistrationError(
                f"Invalid definition for model {name!r}: {e}"
            ) from e
        return self.register(definition)

    def get(self, name: str) -> ModelIdSpec:
        """Return the spec of *name*; raises if it was never registered."""
        try:
            return self._specs[name]
        except KeyError:
            raise ModelNotRegisteredError(name) from None

    def freeze(self) -> None:
        """Disallow further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def specs(self) -> Mapping[str, ModelIdSpec]:
        """Read-only view of every registered spec."""
        return MappingProxyType(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)
