"""MongoDB repository for the tasks and their embedded transactions and messages."""

import logging
import uuid
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient
from neuroglia.serialization.json import JsonSerializer
from pymongo.errors import DuplicateKeyError

from domain.exceptions import ConflictError, NotFoundError, SerializationError
from domain.models import Message, MessagesPage, Task, TaskTransaction, TaskTransactionsPage, TasksPage
from domain.repositories import TaskRepository
from integration.query import MESSAGES_INDEX, TRANSACTIONS_INDEX, retrieve_page, retrieve_unwound_page
from integration.repositories.motor_repository_base import SCHEMA_VERSION_FIELD, MotorRepositoryBase, now_in_seconds

if TYPE_CHECKING:
    from neuroglia.mediation import Mediator

log = logging.getLogger(__name__)

TASKS_COLLECTION = "tasks"

TRANSACTIONS_UNWIND = [("transactions", TRANSACTIONS_INDEX)]
MESSAGES_UNWIND = [("transactions", TRANSACTIONS_INDEX), ("transactions.messages", MESSAGES_INDEX)]

# Fields a task update may set or remove, the transactions are only appended
UPDATABLE_TASK_FIELDS = (
    "appId",
    "requesterId",
    "communityId",
    "taskTypeId",
    "goal",
    "norms",
    "attributes",
    "closeTs",
)

# Attributes that older schemas stored at the root of the task
TASK_FIELDS_MOVED_TO_ATTRIBUTES = ("startTs", "endTs", "deadlineTs")


def new_marker() -> str:
    return uuid.uuid4().hex


class MotorTaskRepository(MotorRepositoryBase[Task], TaskRepository):
    """Stores each task as a document of the ``tasks`` collection.

    Transactions are appended in two steps: the transaction is pushed with a
    unique marker as identifier, and then the marker is replaced by the
    position that the transaction got in the array. Two concurrent appends
    over the same task never get the same identifier.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        database_name: str,
        collection_name: str,
        serializer: JsonSerializer,
        entity_type: Optional[type[Task]] = Task,
        mediator: Optional["Mediator"] = None,
        schema_version: Optional[str] = None,
        clock: Callable[[], int] = now_in_seconds,
        marker_factory: Callable[[], str] = new_marker,
    ):
        super().__init__(client, database_name, collection_name, serializer, entity_type, mediator, schema_version, clock)
        self.marker_factory = marker_factory

    def _task_to_document(self, task: Task) -> dict[str, Any]:
        document = task.to_dict()
        if document is None:
            raise SerializationError(f"The task '{task.id}' cannot be converted to a document", "bad_task")
        return document

    def _document_to_task(self, document: dict[str, Any]) -> Task:
        return Task.from_dict(self.to_model_document(document))

    async def search_task(self, task_id: str) -> Task:
        document = await self.collection.find_one({"_id": task_id})
        if document is None:
            raise NotFoundError(f"Task '{task_id}' not found")
        return self._document_to_task(document)

    async def store_task(self, task: Task) -> Task:
        document = self._task_to_document(task)
        task_id = document.pop("id", None) or str(ObjectId())
        now = self.now()
        document["_creationTs"] = now
        document["_lastUpdateTs"] = now
        transactions = document.get("transactions")
        if transactions:
            for index, transaction in enumerate(transactions):
                transaction["id"] = str(index)
                transaction["taskId"] = task_id
                transaction.setdefault("_creationTs", now)
                transaction.setdefault("_lastUpdateTs", now)
        document["_id"] = task_id
        document[SCHEMA_VERSION_FIELD] = self.schema_version

        try:
            await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise ConflictError(f"A task with the identifier '{task_id}' already exists") from e

        log.debug(f"Stored task '{task_id}'")
        return self._document_to_task(document)

    async def update_task(self, task: Task) -> None:
        document = self._task_to_document(task)
        task_id = document.pop("id", None)
        if task_id is None:
            raise NotFoundError("Cannot update a task without identifier")

        to_set = {name: document[name] for name in UPDATABLE_TASK_FIELDS if name in document}
        to_set["_lastUpdateTs"] = document.get("_lastUpdateTs") or self.now()
        to_set[SCHEMA_VERSION_FIELD] = self.schema_version
        update: dict[str, Any] = {"$set": to_set}
        to_unset = {name: "" for name in UPDATABLE_TASK_FIELDS if name not in document}
        if to_unset:
            update["$unset"] = to_unset

        result = await self.collection.update_one({"_id": task_id}, update)
        if result.matched_count != 1:
            raise NotFoundError(f"Task '{task_id}' not found")

    async def delete_task(self, task_id: str) -> None:
        result = await self.collection.delete_one({"_id": task_id})
        if result.deleted_count != 1:
            raise NotFoundError(f"Task '{task_id}' not found")

    async def delete_all_tasks_with_requester(self, requester_id: str) -> list[str]:
        query = {"requesterId": requester_id}
        task_ids = [str(document["_id"]) for document in await self.collection.find(query, {"_id": 1}).to_list(length=None)]
        if task_ids:
            result = await self.collection.delete_many({"_id": {"$in": task_ids}})
            log.debug(f"Deleted {result.deleted_count} tasks requested by '{requester_id}'")
        return task_ids

    async def delete_all_messages_with_receiver(self, receiver_id: str) -> int:
        result = await self.collection.update_many(
            {"transactions.messages.receiverId": receiver_id},
            {
                "$pull": {"transactions.$[].messages": {"receiverId": receiver_id}},
                "$max": {"_lastUpdateTs": self.now()},
            },
        )
        log.debug(f"Removed the messages received by '{receiver_id}' from {result.modified_count} tasks")
        return result.modified_count

    async def retrieve_tasks_page(self, query: Mapping[str, Any], sort: Mapping[str, int] | None, offset: int, limit: int) -> TasksPage:
        return await retrieve_page(self.collection, query, sort, offset, limit, TasksPage, self._document_to_task)

    async def add_transaction_into_task(self, task_id: str, transaction: TaskTransaction) -> TaskTransaction:
        document = transaction.to_dict()
        if document is None:
            raise SerializationError("The transaction cannot be converted to a document", "bad_transaction")

        now = self.now()
        marker = self.marker_factory()
        document["id"] = marker
        document["taskId"] = task_id
        document["_creationTs"] = now
        document["_lastUpdateTs"] = now

        result = await self.collection.update_one(
            {"_id": task_id},
            {"$push": {"transactions": document}, "$max": {"_lastUpdateTs": now}},
        )
        if result.matched_count != 1:
            raise NotFoundError(f"Task '{task_id}' not found")

        positions = await self.collection.aggregate(
            [
                {"$match": {"_id": task_id}},
                {"$project": {"index": {"$indexOfArray": ["$transactions.id", marker]}}},
            ]
        ).to_list(length=None)
        if not positions or positions[0].get("index", -1) < 0:
            raise NotFoundError(f"The transaction added into the task '{task_id}' is not stored")

        transaction_id = str(positions[0]["index"])
        result = await self.collection.update_one(
            {"_id": task_id, "transactions.id": marker},
            {"$set": {"transactions.$[transaction].id": transaction_id}},
            array_filters=[{"transaction.id": marker}],
        )
        if result.matched_count != 1:
            raise NotFoundError(f"The transaction added into the task '{task_id}' is not stored")

        document["id"] = transaction_id
        log.debug(f"Added transaction '{transaction_id}' into task '{task_id}'")
        return TaskTransaction.from_dict(document)

    async def add_message_into_transaction(self, task_id: str, transaction_id: str, message: Message) -> Message:
        document = message.to_dict()
        if document is None:
            raise SerializationError("The message cannot be converted to a document", "bad_message")

        query = {"_id": task_id, "transactions.id": transaction_id}
        # A transaction stored without messages needs the array before pushing into it
        await self.collection.update_one(
            query,
            {"$set": {"transactions.$[transaction].messages": []}},
            array_filters=[{"transaction.id": transaction_id, "transaction.messages": None}],
        )

        now = self.now()
        result = await self.collection.update_one(
            query,
            {
                "$push": {"transactions.$[transaction].messages": document},
                "$max": {"_lastUpdateTs": now, "transactions.$[transaction]._lastUpdateTs": now},
            },
            array_filters=[{"transaction.id": transaction_id}],
        )
        if result.matched_count != 1:
            raise NotFoundError(f"Transaction '{transaction_id}' of the task '{task_id}' not found")

        log.debug(f"Added message into transaction '{transaction_id}' of task '{task_id}'")
        return Message.from_dict(document)

    async def retrieve_task_transactions_page(self, query: Mapping[str, Any], sort: Mapping[str, int], offset: int, limit: int) -> TaskTransactionsPage:
        return await retrieve_unwound_page(self.collection, query, sort, offset, limit, TRANSACTIONS_UNWIND, TaskTransactionsPage, TaskTransaction.from_dict)

    async def retrieve_messages_page(self, query: Mapping[str, Any], sort: Mapping[str, int], offset: int, limit: int) -> MessagesPage:
        return await retrieve_unwound_page(self.collection, query, sort, offset, limit, MESSAGES_UNWIND, MessagesPage, Message.from_dict)

    async def migrate_documents_to_current_version(self) -> int:
        return await self.migrate_each_document(self._migrate_task)

    async def _migrate_task(self, document: dict[str, Any]) -> dict[str, Any]:
        """Move the time stamps that older tasks stored at the root into the attributes."""
        to_set: dict[str, Any] = {}
        to_unset: dict[str, str] = {}
        attributes = document.get("attributes")
        attributes = dict(attributes) if isinstance(attributes, dict) else {}
        for name in TASK_FIELDS_MOVED_TO_ATTRIBUTES:
            if name in document:
                if document[name] is not None:
                    attributes[name] = document[name]
                to_unset[name] = ""
        if to_unset:
            to_set["attributes"] = attributes

        if "_creationTs" not in document:
            to_set["_creationTs"] = self.now()
        if "_lastUpdateTs" not in document:
            to_set["_lastUpdateTs"] = document.get("_creationTs", to_set.get("_creationTs"))

        update: dict[str, Any] = {"$set": to_set}
        if to_unset:
            update["$unset"] = to_unset
        return update

