"""MongoDB persistence exceptions."""

from __future__ import annotations

from pymongo.errors import PyMongoError

from docmap_core.exceptions import IdentifierError, PersistenceError

# Driver failures reach callers unchanged; this alias only names them.
TransportError = PyMongoError


class MongoPersistenceError(PersistenceError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when connection to MongoDB fails."""


class MongoQueryError(MongoPersistenceError):
    """Raised when a query or compilation fails."""


class InvalidObjectIdFormatError(IdentifierError):
    """A value is neither an ObjectId nor a 24-character lowercase hex string."""

    def __init__(
        self,
        value: object,
        *,
        model_name: str | None = None,
        property_name: str | None = None,
    ) -> None:
        super().__init__(
            f"Invalid ObjectId string: {value!r}",
            model_name=model_name,
            property_name=property_name,
            value=value,
        )
