"""Exception hierarchy shared by every docmap package."""

from __future__ import annotations

from typing import Any


class DocmapError(Exception):
    """Root exception for the entire docmap toolkit."""


class ValidationError(DocmapError):
    """Raised when caller-supplied data violates a model's declared rules."""


class IdentifierError(ValidationError):
    """Base class for id policy and id format violations.

    All identifier errors are detected before any document store call and are
    never retried.
    """

    def __init__(
        self,
        message: str,
        *,
        model_name: str | None = None,
        property_name: str | None = None,
        value: object = None,
    ) -> None:
        self.message = message
        self.model_name = model_name
        self.property_name = property_name
        self.value = value
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "model": self.model_name,
            "property": self.property_name,
        }


class AutogeneratedIdConflictError(IdentifierError):
    """A value was supplied for an id the store (or a generator) must assign."""

    def __init__(
        self,
        model_name: str | None = None,
        property_name: str | None = None,
        value: object = None,
    ) -> None:
        super().__init__(
            f"Cannot specify value for autogenerated id: {property_name}",
            model_name=model_name,
            property_name=property_name,
            value=value,
        )


class MissingRequiredIdError(IdentifierError):
    """No value was supplied for an id that is not generated."""

    def __init__(
        self,
        model_name: str | None = None,
        property_name: str | None = None,
    ) -> None:
        super().__init__(
            f"Value is required for non-autogenerated id: {property_name}",
            model_name=model_name,
            property_name=property_name,
        )


class ModelRegistrationError(DocmapError):
    """Raised when a model definition cannot be registered."""


class ModelNotRegisteredError(DocmapError):
    """Raised when an operation names a model that was never registered."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        super().__init__(f"Model {model_name!r} is not registered")


class InfrastructureError(DocmapError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""
