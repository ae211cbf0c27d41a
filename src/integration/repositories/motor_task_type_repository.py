"""MongoDB repository for the task types."""

import logging
from typing import Any, Mapping

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from domain.exceptions import ConflictError, NotFoundError, SerializationError
from domain.models import TaskType, TaskTypesPage
from domain.repositories import TaskTypeRepository
from integration.query import retrieve_page
from integration.repositories.motor_repository_base import SCHEMA_VERSION_FIELD, MotorRepositoryBase

log = logging.getLogger(__name__)

TASK_TYPES_COLLECTION = "taskTypes"

UPDATABLE_TASK_TYPE_FIELDS = (
    "name",
    "description",
    "keywords",
    "norms",
    "attributes",
    "transactions",
    "callbacks",
)


def migrate_transactions(transactions: Any) -> dict[str, Any]:
    """Convert the transactions of a task type from the list to the label map.

    A transaction ``{"label": "cancel", "description": "...", "attributes":
    [{"name": "reason", "description": "...", "type": "string"}]}`` becomes
    ``{"cancel": {"description": "...", "properties": {"reason":
    {"description": "...", "type": "string"}}}}``. Empty values are omitted.
    """
    if isinstance(transactions, dict):
        return transactions

    migrated: dict[str, Any] = {}
    for transaction in transactions or []:
        if not isinstance(transaction, dict) or not transaction.get("label"):
            continue

        definition: dict[str, Any] = {}
        if transaction.get("description"):
            definition["description"] = transaction["description"]

        properties: dict[str, Any] = {}
        for attribute in transaction.get("attributes") or []:
            if not isinstance(attribute, dict) or not attribute.get("name"):
                continue
            properties[attribute["name"]] = {key: attribute[key] for key in ("description", "type") if attribute.get(key)}
        if properties:
            definition["properties"] = properties

        migrated[transaction["label"]] = definition
    return migrated


class MotorTaskTypeRepository(MotorRepositoryBase[TaskType], TaskTypeRepository):
    """Stores each task type as a document of the ``taskTypes`` collection."""

    def _task_type_to_document(self, task_type: TaskType) -> dict[str, Any]:
        document = task_type.to_dict()
        if document is None:
            raise SerializationError(f"The task type '{task_type.id}' cannot be converted to a document", "bad_taskType")
        return document

    def _document_to_task_type(self, document: dict[str, Any]) -> TaskType:
        return TaskType.from_dict(self.to_model_document(document))

    async def search_task_type(self, task_type_id: str) -> TaskType:
        document = await self.collection.find_one({"_id": task_type_id})
        if document is None:
            raise NotFoundError(f"Task type '{task_type_id}' not found")
        return self._document_to_task_type(document)

    async def store_task_type(self, task_type: TaskType) -> TaskType:
        document = self._task_type_to_document(task_type)
        task_type_id = document.pop("id", None) or str(ObjectId())
        now = self.now()
        document.setdefault("_creationTs", now)
        document.setdefault("_lastUpdateTs", now)
        document["_id"] = task_type_id
        document[SCHEMA_VERSION_FIELD] = self.schema_version

        try:
            await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise ConflictError(f"A task type with the identifier '{task_type_id}' already exists") from e

        log.debug(f"Stored task type '{task_type_id}'")
        return self._document_to_task_type(document)

    async def update_task_type(self, task_type: TaskType) -> None:
        document = self._task_type_to_document(task_type)
        task_type_id = document.pop("id", None)
        if task_type_id is None:
            raise NotFoundError("Cannot update a task type without identifier")

        to_set = {name: document[name] for name in UPDATABLE_TASK_TYPE_FIELDS if name in document}
        to_set["_lastUpdateTs"] = document.get("_lastUpdateTs") or self.now()
        to_set[SCHEMA_VERSION_FIELD] = self.schema_version
        update: dict[str, Any] = {"$set": to_set}
        to_unset = {name: "" for name in UPDATABLE_TASK_TYPE_FIELDS if name not in document}
        if to_unset:
            update["$unset"] = to_unset

        result = await self.collection.update_one({"_id": task_type_id}, update)
        if result.matched_count != 1:
            raise NotFoundError(f"Task type '{task_type_id}' not found")

    async def delete_task_type(self, task_type_id: str) -> None:
        result = await self.collection.delete_one({"_id": task_type_id})
        if result.deleted_count != 1:
            raise NotFoundError(f"Task type '{task_type_id}' not found")

    async def retrieve_task_types_page(self, query: Mapping[str, Any], sort: Mapping[str, int] | None, offset: int, limit: int) -> TaskTypesPage:
        return await retrieve_page(self.collection, query, sort, offset, limit, TaskTypesPage, self._document_to_task_type)

    async def migrate_documents_to_current_version(self) -> int:
        return await self.migrate_each_document(self._migrate_task_type)

    async def _migrate_task_type(self, document: dict[str, Any]) -> dict[str, Any]:
        now = self.now()
        to_set: dict[str, Any] = {"transactions": migrate_transactions(document.get("transactions"))}
        if "_creationTs" not in document:
            to_set["_creationTs"] = now
        if "_lastUpdateTs" not in document:
            to_set["_lastUpdateTs"] = now
        return {"$set": to_set}

