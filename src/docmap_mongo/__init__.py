"""MongoDB id mapping and query translation for docmap.

Registers models, derives their id policy, converts identifiers between
application and store form, and runs create / find / destroy through Motor.
"""

from __future__ import annotations

from .codec import OBJECT_ID_PATTERN, IdentifierCodec, is_object_id_string
from .connection import MongoConnectionManager
from .connector import MongoConnector
from .exceptions import (
    InvalidObjectIdFormatError,
    MongoConnectionError,
    MongoPersistenceError,
    MongoQueryError,
    TransportError,
)
from .model import (
    DEFAULT_ID_PROPERTY,
    STORE_ID_FIELD,
    IdKind,
    IdType,
    ModelDefinition,
    ModelIdSpec,
    PropertyDefinition,
    classify_type,
)
from .model_mapper import MongoDocumentMapper
from .policy import IdPolicyResolver, IdSource, ResolvedId
from .query_builder import MongoQueryBuilder
from .registry import ModelRegistry
from .sequence import MongoSequenceGenerator

__all__ = [
    # Facade
    "MongoConnector",
    "MongoConnectionManager",
    # Model metadata
    "DEFAULT_ID_PROPERTY",
    "STORE_ID_FIELD",
    "IdKind",
    "IdType",
    "ModelDefinition",
    "ModelIdSpec",
    "PropertyDefinition",
    "classify_type",
    "ModelRegistry",
    # Id handling
    "OBJECT_ID_PATTERN",
    "IdentifierCodec",
    "is_object_id_string",
    "IdPolicyResolver",
    "IdSource",
    "ResolvedId",
    "MongoSequenceGenerator",
    # Mapping and queries
    "MongoDocumentMapper",
    "MongoQueryBuilder",
    # Exceptions
    "MongoPersistenceError",
    "MongoConnectionError",
    "MongoQueryError",
    "InvalidObjectIdFormatError",
    "TransportError",
]
