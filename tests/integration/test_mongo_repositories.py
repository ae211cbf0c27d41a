"""Integration tests of the repositories against a MongoDB server.

Run with ``MONGO_CONNECTION_STRING`` pointing to a server, for example
``MONGO_CONNECTION_STRING=mongodb://localhost:27017 pytest -m integration``.
"""

import asyncio
import os

import pytest
from motor.core import AgnosticDatabase
from neuroglia.serialization.json import JsonSerializer

from domain.exceptions import NotFoundError
from domain.models import Task, TaskType
from integration.query import create_messages_page_sort, create_task_transactions_page_query, create_task_transactions_page_sort, create_tasks_page_query
from integration.repositories import MotorTaskRepository, MotorTaskTypeRepository
from tests.fixtures.factories import MessageFactory, TaskFactory, TaskTransactionFactory

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(os.getenv("MONGO_CONNECTION_STRING") is None, reason="MONGO_CONNECTION_STRING is not defined"),
]


def create_task_repository(mongo_db: AgnosticDatabase) -> MotorTaskRepository:
    return MotorTaskRepository(mongo_db.client, mongo_db.name, "tasks", JsonSerializer(), Task, schema_version="0.6.0")


def create_task_type_repository(mongo_db: AgnosticDatabase) -> MotorTaskTypeRepository:
    return MotorTaskTypeRepository(mongo_db.client, mongo_db.name, "taskTypes", JsonSerializer(), TaskType, schema_version="0.6.0")


class TestMongoTaskRepository:
    @pytest.mark.asyncio
    async def test_sequential_appends_get_consecutive_identifiers(self, mongo_db: AgnosticDatabase) -> None:
        repository = create_task_repository(mongo_db)
        task = await repository.store_task(TaskFactory.create())

        ids = [(await repository.add_transaction_into_task(task.id, TaskTransactionFactory.create())).id for _ in range(3)]

        assert ids == ["0", "1", "2"]
        stored = await repository.search_task(task.id)
        assert [transaction.id for transaction in stored.transactions or []] == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_concurrent_appends_get_distinct_identifiers(self, mongo_db: AgnosticDatabase) -> None:
        repository = create_task_repository(mongo_db)
        task = await repository.store_task(TaskFactory.create())

        added = await asyncio.gather(*(repository.add_transaction_into_task(task.id, TaskTransactionFactory.create()) for _ in range(5)))

        assert sorted(transaction.id for transaction in added) == ["0", "1", "2", "3", "4"]

    @pytest.mark.asyncio
    async def test_message_into_transaction_without_messages(self, mongo_db: AgnosticDatabase) -> None:
        repository = create_task_repository(mongo_db)
        task = await repository.store_task(TaskFactory.create())
        transaction = await repository.add_transaction_into_task(task.id, TaskTransactionFactory.create())

        await repository.add_message_into_transaction(task.id, transaction.id, MessageFactory.create())
        await repository.add_message_into_transaction(task.id, transaction.id, MessageFactory.create(label="TaskSelectionNotification"))

        stored = await repository.search_task(task.id)
        assert stored.transactions is not None
        assert [message.label for message in stored.transactions[0].messages or []] == ["TaskVolunteerNotification", "TaskSelectionNotification"]
        with pytest.raises(NotFoundError):
            await repository.add_message_into_transaction(task.id, "7", MessageFactory.create())

    @pytest.mark.asyncio
    async def test_pages_over_tasks_transactions_and_messages(self, mongo_db: AgnosticDatabase) -> None:
        repository = create_task_repository(mongo_db)
        first = await repository.store_task(TaskFactory.create(task_id="task_1", app_id="app_1"))
        await repository.store_task(TaskFactory.create(task_id="task_2", app_id="app_2"))
        for label in ("cancel", "acceptVolunteer", "cancel"):
            transaction = await repository.add_transaction_into_task(first.id, TaskTransactionFactory.create(label=label))
            await repository.add_message_into_transaction(first.id, transaction.id, MessageFactory.create())

        tasks = await repository.retrieve_tasks_page(create_tasks_page_query(app_id="/^app_/"), {"_id": -1}, 0, 1)
        transactions = await repository.retrieve_task_transactions_page(
            create_task_transactions_page_query(label="cancel"), create_task_transactions_page_sort(["-id"]), 0, 10
        )
        messages = await repository.retrieve_messages_page({}, create_messages_page_sort([]), 1, 10)

        assert (tasks.total, [task.id for task in tasks.items or []]) == (2, ["task_2"])
        assert (transactions.total, [transaction.id for transaction in transactions.items or []]) == (2, ["2", "0"])
        assert messages.total == 3
        assert len(messages.items or []) == 2

    @pytest.mark.asyncio
    async def test_update_keeps_the_transactions_appended_meanwhile(self, mongo_db: AgnosticDatabase) -> None:
        repository = create_task_repository(mongo_db)
        task = await repository.store_task(TaskFactory.create())
        original = await repository.search_task(task.id)

        await repository.add_transaction_into_task(task.id, TaskTransactionFactory.create())
        original.goal.name = "Eat with friends"
        await repository.update_task(original)

        stored = await repository.search_task(task.id)
        assert stored.goal.name == "Eat with friends"
        assert [transaction.id for transaction in stored.transactions or []] == ["0"]

    @pytest.mark.asyncio
    async def test_delete_the_data_of_a_profile(self, mongo_db: AgnosticDatabase) -> None:
        repository = create_task_repository(mongo_db)
        await repository.store_task(TaskFactory.create(task_id="task_1", requester_id="user_1"))
        other = await repository.store_task(TaskFactory.create(task_id="task_2", requester_id="user_2"))
        transaction = await repository.add_transaction_into_task(other.id, TaskTransactionFactory.create())
        await repository.add_message_into_transaction(other.id, transaction.id, MessageFactory.create(receiver_id="user_1"))
        await repository.add_message_into_transaction(other.id, transaction.id, MessageFactory.create(receiver_id="user_3"))

        assert await repository.delete_all_tasks_with_requester("user_1") == ["task_1"]
        assert await repository.delete_all_messages_with_receiver("user_1") == 1

        with pytest.raises(NotFoundError):
            await repository.search_task("task_1")
        stored = await repository.search_task("task_2")
        assert [message.receiver_id for message in stored.transactions[0].messages or []] == ["user_3"]

    @pytest.mark.asyncio
    async def test_newer_schema_is_not_migrated(self, mongo_db: AgnosticDatabase) -> None:
        await mongo_db["tasks"].insert_one({"_id": "new_task", "goal": {"name": "Eat"}, "schema_version": "0.10.0"})

        assert await create_task_repository(mongo_db).migrate_documents_to_current_version() == 0

        stored = await mongo_db["tasks"].find_one({"_id": "new_task"})
        assert stored["schema_version"] == "0.10.0"

    @pytest.mark.asyncio
    async def test_migrate_old_tasks(self, mongo_db: AgnosticDatabase) -> None:
        await mongo_db["tasks"].insert_one({"_id": "old_task", "goal": {"name": "Eat"}, "startTs": 10, "deadlineTs": 5})
        repository = create_task_repository(mongo_db)

        assert await repository.migrate_documents_to_current_version() == 1
        assert await repository.migrate_documents_to_current_version() == 0

        task = await repository.search_task("old_task")
        assert task.attributes == {"startTs": 10, "deadlineTs": 5}
        assert task.creation_ts is not None
        version = await mongo_db["schemaVersions"].find_one({"_id": "tasks"})
        assert version is not None and version["version"] == "0.6.0"


class TestMongoTaskTypeRepository:
    @pytest.mark.asyncio
    async def test_migrate_transactions_list(self, mongo_db: AgnosticDatabase) -> None:
        await mongo_db["taskTypes"].insert_one({"_id": "old_type", "name": "Eat", "transactions": [{"label": "cancel"}]})
        repository = create_task_type_repository(mongo_db)

        assert await repository.migrate_documents_to_current_version() == 1

        task_type = await repository.search_task_type("old_type")
        assert task_type.transactions == {"cancel": {}}
