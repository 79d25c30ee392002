"""
Create, find and destroy for registered models.

Every operation runs the same synchronous core (id policy -> identifier
codec -> query translation) and then makes exactly one awaited driver call.
Policy and codec errors are raised before the driver is touched. Driver
errors (:data:`~docmap_mongo.exceptions.TransportError`) propagate
unchanged; nothing is retried here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pymongo import ReturnDocument

from docmap_core.id_generator import IIDGenerator, UUID4Generator
from docmap_specifications.parser import WhereParser
from docmap_specifications.query_options import QueryOptions

from .codec import IdentifierCodec
from .model import STORE_ID_FIELD, IdType, ModelIdSpec
from .model_mapper import MongoDocumentMapper
from .policy import IdPolicyResolver, IdSource
from .query_builder import MongoQueryBuilder
from .registry import ModelRegistry
from .sequence import MongoSequenceGenerator

if TYPE_CHECKING:
    from .connection import MongoConnectionManager

logger = logging.getLogger("docmap.mongo.connector")


class MongoConnector:
    """Persist registered models to MongoDB collections.

    Usage::

        connector = MongoConnector(connection, database="app")
        connector.define("Book", {"id": {"type": str, "id": True,
                                         "store_data_type": "ObjectId"},
                                  "title": str})
        connector.registry.freeze()

        book = await connector.create("Book", {"id": hex_id, "title": "Jungle"})
        book_id = book["id"]
        assert await connector.find_by_id("Book", book_id) == book
        books = await connector.find("Book", {"where": {"id": {"inq": [book_id]}}})
        await connector.destroy_by_id("Book", book_id)   # {"count": 1}

    Args:
        connection: Shared connection manager (owns the Motor client).
        registry: Model registry; a fresh one is created when omitted.
        database: Database name; falls back to the connection's default.
        codec: Identifier codec shared by policy, mapping and queries.
        id_generators: Per-model generators for opaque generated ids.
        sequence_collection: Collection holding numeric id counters.
    """

    def __init__(
        self,
        connection: MongoConnectionManager,
        *,
        registry: ModelRegistry | None = None,
        database: str | None = None,
        codec: IdentifierCodec | None = None,
        id_generators: Mapping[str, IIDGenerator] | None = None,
        sequence_collection: str | None = None,
    ) -> None:
        self._connection = connection
        self._database = database
        self._codec = codec or IdentifierCodec()
        self._resolver = IdPolicyResolver(self._codec)
        self._registry = registry or ModelRegistry(self._resolver)
        self._query_builder = MongoQueryBuilder(self._codec)
        self._parser = WhereParser()
        self._id_generators = dict(id_generators or {})
        self._sequence = MongoSequenceGenerator(
            connection, database=database, collection=sequence_collection
        )
        self._uuid_generator = UUID4Generator()

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    def define(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        *,
        force_id: bool | None = None,
        collection: str | None = None,
    ) -> ModelIdSpec:
        """Register a model; see :meth:`ModelRegistry.define`."""
        return self._registry.define(
            name, properties, force_id=force_id, collection=collection
        )

    # -- plumbing ------------------------------------------------------------

    def _collection(self, spec: ModelIdSpec) -> Any:
        return self._connection.database(self._database).get_collection(
            spec.collection
        )

    def _mapper(self, spec: ModelIdSpec) -> MongoDocumentMapper:
        return MongoDocumentMapper(spec, self._codec)

    def _generator_for(self, spec: ModelIdSpec) -> IIDGenerator:
        generator = self._id_generators.get(spec.model_name)
        if generator is not None:
            return generator
        if spec.declared_type is IdType.STRING:
            return self._uuid_generator
        return self._sequence

    def _encode_id(self, spec: ModelIdSpec, value: Any) -> Any:
        return self._codec.encode_for_store(
            value,
            spec.declared_type,
            model_name=spec.model_name,
            property_name=spec.id_property,
        )

    def _match(
        self, spec: ModelIdSpec, where: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        return self._query_builder.build_match(self._parser.parse(where), spec)

    def _build_pipeline(
        self, spec: ModelIdSpec, options: QueryOptions
    ) -> list[dict[str, Any]]:
        pipeline: list[dict[str, Any]] = [
            {"$match": self._query_builder.build_match(options.specification, spec)}
        ]
        sort_list = self._query_builder.build_sort(options.order_by, spec)
        if sort_list:
            pipeline.append({"$sort": dict(sort_list)})
        if options.skip:
            pipeline.append({"$skip": options.skip})
        if options.limit is not None:
            pipeline.append({"$limit": options.limit})
        proj = self._query_builder.build_project(options.fields, spec)
        if proj:
            pipeline.append({"$project": proj})
        return pipeline

    # -- operations ----------------------------------------------------------

    async def create(self, model: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Insert one document and return it with the id in application form.

        A ``_id`` key in *data* is taken as the supplied id when the id
        property itself is absent, so it goes through the same policy check.
        """
        spec = self._registry.get(model)
        values = dict(data)
        supplied = values.pop(spec.id_property, None)
        if STORE_ID_FIELD in values:
            store_value = values.pop(STORE_ID_FIELD)
            if supplied is None:
                supplied = store_value
        resolved = self._resolver.resolve(spec, supplied)
        mapper = self._mapper(spec)
        doc = mapper.to_doc(values)

        id_value = resolved.value
        if resolved.source is IdSource.GENERATOR:
            generated = await self._generator_for(spec).next_id(spec.model_name)
            id_value = self._encode_id(spec, generated)
        if id_value is not None:
            doc[STORE_ID_FIELD] = id_value

        result = await self._collection(spec).insert_one(doc)
        created = mapper.from_doc({**doc, STORE_ID_FIELD: result.inserted_id})
        logger.debug(
            "Created %s document %s=%r (%s)",
            model,
            spec.id_property,
            created[spec.id_property],
            resolved.source.value,
        )
        return created

    async def find_by_id(self, model: str, entity_id: Any) -> dict[str, Any] | None:
        """Load one document by id; ``None`` when it does not exist."""
        spec = self._registry.get(model)
        doc = await self._collection(spec).find_one(
            {STORE_ID_FIELD: self._encode_id(spec, entity_id)}
        )
        if doc is None:
            return None
        return self._mapper(spec).from_doc(doc)

    async def find(
        self,
        model: str,
        filter_: Mapping[str, Any] | QueryOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Return documents matching a loopback-style filter, decoded."""
        spec = self._registry.get(model)
        options = (
            filter_
            if isinstance(filter_, QueryOptions)
            else QueryOptions.from_filter(filter_, parser=self._parser)
        )
        pipeline = self._build_pipeline(spec, options)
        mapper = self._mapper(spec)
        cursor = self._collection(spec).aggregate(pipeline)
        return [mapper.from_doc(doc) async for doc in cursor]

    async def count(self, model: str, where: Mapping[str, Any] | None = None) -> int:
        spec = self._registry.get(model)
        match = self._match(spec, where)
        return int(await self._collection(spec).count_documents(match))

    async def exists(self, model: str, entity_id: Any) -> bool:
        spec = self._registry.get(model)
        doc = await self._collection(spec).find_one(
            {STORE_ID_FIELD: self._encode_id(spec, entity_id)},
            {STORE_ID_FIELD: 1},
        )
        return doc is not None

    async def update_attributes(
        self, model: str, entity_id: Any, data: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        """Set *data* on one document and return it; ``None`` if missing.

        The id itself is never rewritten and id policy is not consulted.
        """
        spec = self._registry.get(model)
        values = dict(data)
        values.pop(spec.id_property, None)
        mapper = self._mapper(spec)
        doc = mapper.to_doc(values)
        if not doc:
            return await self.find_by_id(model, entity_id)
        updated = await self._collection(spec).find_one_and_update(
            {STORE_ID_FIELD: self._encode_id(spec, entity_id)},
            {"$set": doc},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            return None
        return mapper.from_doc(updated)

    async def destroy_by_id(self, model: str, entity_id: Any) -> dict[str, int]:
        spec = self._registry.get(model)
        result = await self._collection(spec).delete_one(
            {STORE_ID_FIELD: self._encode_id(spec, entity_id)}
        )
        logger.debug(
            "Deleted %d %s document(s) with %s=%r",
            result.deleted_count,
            model,
            spec.id_property,
            entity_id,
        )
        return {"count": result.deleted_count}

    async def destroy_all(
        self, model: str, where: Mapping[str, Any] | None = None
    ) -> dict[str, int]:
        spec = self._registry.get(model)
        match = self._match(spec, where)
        result = await self._collection(spec).delete_many(match)
        logger.debug("Deleted %d %s document(s)", result.deleted_count, model)
        return {"count": result.deleted_count}
