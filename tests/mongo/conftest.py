"""Test configuration for the MongoDB connector."""

import pytest

from docmap_mongo import MongoConnectionManager, MongoConnector


@pytest.fixture
async def mongo_connection():
    """Connection manager backed by an in-memory Motor-compatible client."""
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")

    connection = MongoConnectionManager(
        url="mongodb://mock:27017", database="test_db"
    )
    connection._client = AsyncMongoMockClient(default_database_name="test_db")
    return connection


@pytest.fixture
def connector(mongo_connection):
    """Connector with the models used across the connector tests."""
    conn = MongoConnector(mongo_connection)
    # Numeric id the caller must supply
    conn.define(
        "Customer",
        {"seq": {"type": int, "id": True}, "name": str, "email": str, "age": int},
    )
    # Opaque generated id; no declared type
    conn.define(
        "Account",
        {"seq": {"id": True, "generated": True}, "name": str, "email": str},
    )
    # No id declared; the store assigns an ObjectId
    conn.define("Person", {"name": str, "age": int})
    # Client-supplied ObjectId stored natively
    conn.define(
        "Book",
        {
            "id": {"type": str, "id": True, "store_data_type": "ObjectId"},
            "title": str,
            "author_id": {"type": str, "mongodb": {"dataType": "ObjectId"}},
        },
    )
    # Generated string id that tolerates a client value
    conn.define(
        "Tag",
        {"code": {"type": str, "id": True, "generated": True}, "label": str},
        force_id=False,
    )
    conn.registry.freeze()
    return conn
