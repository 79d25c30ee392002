"""docmap-core — foundation shared by the docmap packages.

Zero infrastructure dependencies: the exception hierarchy and the opaque id
generator protocol.
"""

from __future__ import annotations

from .exceptions import (
    AutogeneratedIdConflictError,
    DocmapError,
    IdentifierError,
    InfrastructureError,
    MissingRequiredIdError,
    ModelNotRegisteredError,
    ModelRegistrationError,
    PersistenceError,
    ValidationError,
)
from .id_generator import IIDGenerator, UUID4Generator

__all__ = [
    # Exceptions
    "DocmapError",
    "ValidationError",
    "IdentifierError",
    "AutogeneratedIdConflictError",
    "MissingRequiredIdError",
    "ModelRegistrationError",
    "ModelNotRegisteredError",
    "InfrastructureError",
    "PersistenceError",
    # Id generation
    "IIDGenerator",
    "UUID4Generator",
]
