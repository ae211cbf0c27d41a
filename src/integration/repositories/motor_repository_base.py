"""Common behaviour of the Motor repositories of the task manager."""

import logging
import time
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Optional, TypeVar

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from neuroglia.data.infrastructure.mongo import MotorRepository
from neuroglia.serialization.json import JsonSerializer

from application.settings import app_settings

if TYPE_CHECKING:
    from neuroglia.mediation import Mediator

log = logging.getLogger(__name__)

TEntity = TypeVar("TEntity")

SCHEMA_VERSION_FIELD = "schema_version"
SCHEMA_VERSIONS_COLLECTION = "schemaVersions"


def now_in_seconds() -> int:
    """Return the seconds elapsed since midnight, January 1, 1970 UTC."""
    return int(time.time())


def parse_version(version: Any) -> tuple[int, ...]:
    """Return the numeric parts of a dotted version, so "0.10.0" is after "0.6.0"."""
    return tuple(int(part) if part.isdigit() else 0 for part in str(version).split("."))


class MotorRepositoryBase(MotorRepository[TEntity, str]):
    """Base class of the repositories that store the models in a MongoDB collection.

    The stored documents use ``_id`` for the identifier of the model and are
    tagged with the schema version they follow. The documents are read and
    written through the raw collection, the models keep their own JSON form.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        database_name: str,
        collection_name: str,
        serializer: JsonSerializer,
        entity_type: Optional[type[TEntity]] = None,
        mediator: Optional["Mediator"] = None,
        schema_version: Optional[str] = None,
        clock: Callable[[], int] = now_in_seconds,
    ):
        super().__init__(client, database_name, collection_name, serializer, entity_type, mediator)
        self.schema_version = schema_version or app_settings.schema_version
        self.clock = clock

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._client[self._database_name]

    def now(self) -> int:
        return self.clock()

    @staticmethod
    def to_model_document(document: dict[str, Any]) -> dict[str, Any]:
        """Convert a stored document to the document used by the models."""
        document = dict(document)
        document.pop(SCHEMA_VERSION_FIELD, None)
        _id = document.pop("_id", None)
        if _id is not None:
            document["id"] = str(_id)
        return document

    def needs_migration_query(self) -> dict[str, Any]:
        """Return the filter of the documents that are not tagged with the current schema.

        The versions are compared as numbers by ``is_older_schema``, the filter
        only discards the documents that are already up to date.
        """
        return {SCHEMA_VERSION_FIELD: {"$ne": self.schema_version}}

    def is_older_schema(self, version: Any) -> bool:
        """Check if a document tagged with ``version`` must be migrated to the current schema."""
        return version is None or parse_version(version) < parse_version(self.schema_version)

    async def migrate_each_document(self, migrate: Callable[[dict[str, Any]], Awaitable[Mapping[str, Any]]]) -> int:
        """Rewrite, one at a time, the documents that follow an older schema.

        Each pending document is passed to ``migrate``, that returns the update
        to apply. The update always tags the document with the current schema,
        so the loop ends when no document remains to be migrated. A document
        tagged with a newer schema is left as is.

        Returns:
            The number of migrated documents.
        """
        migrated = 0
        query = self.needs_migration_query()
        newer: list[Any] = []
        while True:
            pending = {"$and": [query, {"_id": {"$nin": newer}}]} if newer else query
            document = await self.collection.find_one(pending)
            if document is None:
                break

            version = document.get(SCHEMA_VERSION_FIELD)
            if not self.is_older_schema(version):
                log.warning(f"The {self.collection_name} document '{document['_id']}' follows the schema {version}, newer than {self.schema_version}")
                newer.append(document["_id"])
                continue

            update = dict(await migrate(document))
            update.setdefault("$set", {})[SCHEMA_VERSION_FIELD] = self.schema_version
            result = await self.collection.update_one({"_id": document["_id"]}, update)
            if result.matched_count == 1:
                migrated += 1
            log.debug(f"Migrated {self.collection_name} document '{document['_id']}' to {self.schema_version}")

        await self.database[SCHEMA_VERSIONS_COLLECTION].update_one(
            {"_id": self.collection_name},
            {"$set": {"version": self.schema_version, "_lastUpdateTs": self.now()}},
            upsert=True,
        )
        if migrated:
            log.info(f"Migrated {migrated} {self.collection_name} documents to the schema {self.schema_version}")
        return migrated
