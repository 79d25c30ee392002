import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class IIDGenerator(Protocol):
    """
    Protocol for opaque id generation strategies.

    Used for ids declared ``generated`` whose type is not the document
    store's native identifier (numeric sequences, UUID strings, snowflakes).
    """

    async def next_id(self, model_name: str) -> object:
        """Generates the next unique identifier for *model_name*."""
        ...


class UUID4Generator:
    """
    Default generator for string-typed ids using UUIDv4.
    Zero external dependencies.
    """

    async def next_id(self, model_name: str) -> str:  # noqa: ARG002
        """Returns a string representation of a random UUIDv4."""
        return str(uuid.uuid4())
