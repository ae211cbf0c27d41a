"""Tests for the MongoDB repository of the tasks, over a mocked Motor database."""

import asyncio
import copy
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
from neuroglia.serialization.json import JsonSerializer
from pymongo.errors import DuplicateKeyError

from domain.exceptions import ConflictError, NotFoundError, SerializationError
from domain.models import Task
from integration.query import TRANSACTIONS_INDEX
from integration.repositories import MotorTaskRepository
from tests.fixtures.factories import MessageFactory, TaskFactory, TaskTransactionFactory
from tests.fixtures.mixins import BaseTestCase

NOW = 1_700_000_000


def apply_update(document: dict[str, Any], update: dict[str, Any], array_filters: list[dict[str, Any]] | None = None) -> None:
    """Apply, over a stored document, the update operators used by the repository."""

    def targets_of(path: str) -> tuple[list[dict[str, Any]], str]:
        if not path.startswith("transactions.$[transaction]."):
            return [document], path
        conditions = [(key.split(".", 1)[1], expected) for array_filter in array_filters or [] for key, expected in array_filter.items()]
        transactions = [transaction for transaction in document.get("transactions", []) if all(transaction.get(key) == expected for key, expected in conditions)]
        return transactions, path.rsplit(".", 1)[-1]

    document.update(update.get("$set", {}))
    for name in update.get("$unset", {}):
        document.pop(name, None)
    for path, value in update.get("$push", {}).items():
        targets, field = targets_of(path)
        for target in targets:
            target.setdefault(field, []).append(value)
    for path, value in update.get("$max", {}).items():
        targets, field = targets_of(path)
        for target in targets:
            target[field] = max(target.get(field, value), value)


class UnserializableTask(Task):
    def to_dict(self) -> Any:  # type: ignore[override]
        return None


@pytest.mark.repository
class MotorTaskRepositoryTestCase(BaseTestCase):
    @pytest.fixture
    def tasks(self) -> MagicMock:
        return self.create_collection()

    @pytest.fixture
    def schema_versions(self) -> MagicMock:
        return self.create_collection()

    def create_repository(self, tasks: MagicMock, schema_versions: MagicMock, marker_factory: Callable[[], str] = lambda: "marker") -> MotorTaskRepository:
        client = self.create_client({"wenet": self.create_database({"tasks": tasks, "schemaVersions": schema_versions})})
        return MotorTaskRepository(client, "wenet", "tasks", JsonSerializer(), Task, schema_version="0.6.0", clock=lambda: NOW, marker_factory=marker_factory)

    @pytest.fixture
    def repository(self, tasks: MagicMock, schema_versions: MagicMock) -> MotorTaskRepository:
        return self.create_repository(tasks, schema_versions)


class TestSearchStoreDeleteTask(MotorTaskRepositoryTestCase):
    @pytest.mark.asyncio
    async def test_search_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.find_one = self.create_async_mock(return_value=TaskFactory.create_document(task_id="task_1"))

        task = await repository.search_task("task_1")

        tasks.find_one.assert_awaited_once_with({"_id": "task_1"})
        assert task.id == "task_1"
        assert task.goal.name == "Eat together"

    @pytest.mark.asyncio
    async def test_search_undefined_task(self, repository: MotorTaskRepository) -> None:
        with pytest.raises(NotFoundError):
            await repository.search_task("undefined")

    @pytest.mark.asyncio
    async def test_store_task_mints_the_identifier(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        stored = await repository.store_task(TaskFactory.create(creation_ts=1, last_update_ts=2))

        document: dict[str, Any] = tasks.insert_one.call_args.args[0]
        assert isinstance(document["_id"], str) and len(document["_id"]) == 24
        assert "id" not in document
        assert document["_creationTs"] == NOW
        assert document["_lastUpdateTs"] == NOW
        assert document["schema_version"] == "0.6.0"
        assert stored.id == document["_id"]
        assert stored.creation_ts == NOW

    @pytest.mark.asyncio
    async def test_store_task_with_transactions(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        task = TaskFactory.create(task_id="task_1", transactions=[TaskTransactionFactory.create(), TaskTransactionFactory.create(label="cancel")])

        stored = await repository.store_task(task)

        assert [(transaction.id, transaction.task_id) for transaction in stored.transactions] == [("0", "task_1"), ("1", "task_1")]
        assert tasks.insert_one.call_args.args[0]["_id"] == "task_1"

    @pytest.mark.asyncio
    async def test_store_duplicated_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.insert_one = self.create_async_mock(side_effect=DuplicateKeyError("E11000 duplicate key"))

        with pytest.raises(ConflictError) as error:
            await repository.store_task(TaskFactory.create(task_id="task_1"))

        assert error.value.error_code == "duplicated_id"

    @pytest.mark.asyncio
    async def test_store_unserializable_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        with pytest.raises(SerializationError):
            await repository.store_task(UnserializableTask())

        tasks.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(1))
        task = TaskFactory.create_stored(task_id="task_1", creation_ts=10, last_update_ts=20, close_ts=None)
        task.goal = None

        await repository.update_task(task)

        query, update = tasks.update_one.call_args.args
        assert query == {"_id": "task_1"}
        assert update["$set"]["_lastUpdateTs"] == 20
        assert update["$set"]["appId"] == "app_1"
        assert "_creationTs" not in update["$set"]
        assert "id" not in update["$set"]
        assert update["$unset"] == {"goal": "", "closeTs": ""}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("without_transactions", [False, True])
    async def test_update_keeps_the_transactions_appended_after_reading_the_task(self, repository: MotorTaskRepository, tasks: MagicMock, without_transactions: bool) -> None:
        stored = TaskFactory.create_document(task_id="task_1", transactions=[TaskTransactionFactory.create()])
        stored["transactions"][0]["id"] = "0"
        tasks.find_one = self.create_async_mock(side_effect=lambda query: copy.deepcopy(stored))

        async def update_one(query: dict[str, Any], update: dict[str, Any], **kwargs: Any) -> MagicMock:
            apply_update(stored, update)
            return self.create_update_result(1)

        tasks.update_one = self.create_async_mock(side_effect=update_one)
        task = await repository.search_task("task_1")
        stored["transactions"].append({"id": "1", "taskId": "task_1", "label": "refuseTask"})
        task.goal.name = "Eat with friends"
        if without_transactions:
            task.transactions = None

        await repository.update_task(task)

        update = tasks.update_one.call_args.args[1]
        assert "transactions" not in update["$set"]
        assert "transactions" not in update.get("$unset", {})
        assert [transaction["id"] for transaction in stored["transactions"]] == ["0", "1"]
        assert stored["goal"]["name"] == "Eat with friends"

    @pytest.mark.asyncio
    async def test_update_undefined_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(0))

        with pytest.raises(NotFoundError):
            await repository.update_task(TaskFactory.create_stored(task_id="undefined"))

    @pytest.mark.asyncio
    async def test_delete_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.delete_one = self.create_async_mock(return_value=self.create_delete_result(1))

        await repository.delete_task("task_1")

        tasks.delete_one.assert_awaited_once_with({"_id": "task_1"})

    @pytest.mark.asyncio
    async def test_delete_undefined_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.delete_one = self.create_async_mock(return_value=self.create_delete_result(0))

        with pytest.raises(NotFoundError):
            await repository.delete_task("undefined")

    @pytest.mark.asyncio
    async def test_tasks_page_items_are_tasks(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.count_documents = self.create_async_mock(return_value=1)
        tasks.find = MagicMock(return_value=self.create_cursor([TaskFactory.create_document(task_id="task_1")]))

        page = await repository.retrieve_tasks_page({}, None, 0, 10)

        assert page.to_dict()["tasks"][0]["id"] == "task_1"
        assert "schema_version" not in page.to_dict()["tasks"][0]


class TestAddTransactionIntoTask(MotorTaskRepositoryTestCase):
    @pytest.mark.asyncio
    async def test_transaction_gets_the_position_of_its_marker(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(1))
        tasks.aggregate = MagicMock(return_value=self.create_cursor([{"_id": "task_1", "index": 2}]))

        added = await repository.add_transaction_into_task("task_1", TaskTransactionFactory.create())

        assert added.id == "2"
        assert added.task_id == "task_1"
        assert added.creation_ts == NOW
        assert added.last_update_ts == NOW

        push_query, push = tasks.update_one.call_args_list[0].args
        assert push_query == {"_id": "task_1"}
        assert push["$push"]["transactions"]["id"] == "marker"
        assert push["$push"]["transactions"]["taskId"] == "task_1"
        assert push["$max"] == {"_lastUpdateTs": NOW}

        pipeline = tasks.aggregate.call_args.args[0]
        assert pipeline[1] == {"$project": {"index": {"$indexOfArray": ["$transactions.id", "marker"]}}}

        fix_call = tasks.update_one.call_args_list[1]
        assert fix_call.args == ({"_id": "task_1", "transactions.id": "marker"}, {"$set": {"transactions.$[transaction].id": "2"}})
        assert fix_call.kwargs == {"array_filters": [{"transaction.id": "marker"}]}

    @pytest.mark.asyncio
    async def test_undefined_task(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(0))
        tasks.aggregate = MagicMock()

        with pytest.raises(NotFoundError):
            await repository.add_transaction_into_task("undefined", TaskTransactionFactory.create())

        tasks.aggregate.assert_not_called()

    @pytest.mark.asyncio
    async def test_task_removed_before_reading_the_position(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(1))
        tasks.aggregate = MagicMock(return_value=self.create_cursor([]))

        with pytest.raises(NotFoundError):
            await repository.add_transaction_into_task("task_1", TaskTransactionFactory.create())

        assert tasks.update_one.await_count == 1

    @pytest.mark.asyncio
    async def test_marker_lost_before_assigning_the_identifier(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(side_effect=[self.create_update_result(1), self.create_update_result(0)])
        tasks.aggregate = MagicMock(return_value=self.create_cursor([{"index": 0}]))

        with pytest.raises(NotFoundError):
            await repository.add_transaction_into_task("task_1", TaskTransactionFactory.create())

    @pytest.mark.asyncio
    async def test_interleaved_appends_get_different_identifiers(self, tasks: MagicMock, schema_versions: MagicMock) -> None:
        markers = iter(["first", "second"])
        repository = self.create_repository(tasks, schema_versions, marker_factory=lambda: next(markers))
        stored_ids: list[str] = []
        pushed_before_reading: list[int] = []
        both_pushed = asyncio.Event()

        def index_of(pipeline: list[dict[str, Any]]) -> MagicMock:
            marker = pipeline[1]["$project"]["index"]["$indexOfArray"][1]

            async def to_list(length: int | None = None) -> list[dict[str, Any]]:
                await both_pushed.wait()
                pushed_before_reading.append(len(stored_ids))
                return [{"index": stored_ids.index(marker)}]

            cursor = MagicMock()
            cursor.to_list = to_list
            return cursor

        async def update_one(query: dict[str, Any], update: dict[str, Any], **kwargs: Any) -> MagicMock:
            if "$push" in update:
                stored_ids.append(update["$push"]["transactions"]["id"])
                if len(stored_ids) == 2:
                    both_pushed.set()
            else:
                marker = kwargs["array_filters"][0]["transaction.id"]
                stored_ids[stored_ids.index(marker)] = update["$set"]["transactions.$[transaction].id"]
            return self.create_update_result(1)

        tasks.update_one = self.create_async_mock(side_effect=update_one)
        tasks.aggregate = MagicMock(side_effect=index_of)

        first, second = await asyncio.wait_for(
            asyncio.gather(
                repository.add_transaction_into_task("task_1", TaskTransactionFactory.create()),
                repository.add_transaction_into_task("task_1", TaskTransactionFactory.create(label="refuseTask")),
            ),
            timeout=5,
        )

        assert pushed_before_reading == [2, 2]
        assert (first.id, second.id) == ("0", "1")
        assert stored_ids == ["0", "1"]


class TestAddMessageIntoTransaction(MotorTaskRepositoryTestCase):
    @pytest.mark.asyncio
    async def test_message_is_pushed_into_the_transaction(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(1))
        message = MessageFactory.create()

        added = await repository.add_message_into_transaction("task_1", "0", message)

        assert added == message
        init_call, push_call = tasks.update_one.call_args_list
        query = {"_id": "task_1", "transactions.id": "0"}
        assert init_call.args == (query, {"$set": {"transactions.$[transaction].messages": []}})
        assert init_call.kwargs == {"array_filters": [{"transaction.id": "0", "transaction.messages": None}]}
        assert push_call.args[0] == query
        assert push_call.args[1]["$push"] == {"transactions.$[transaction].messages": message.to_dict()}
        assert push_call.args[1]["$max"] == {"_lastUpdateTs": NOW, "transactions.$[transaction]._lastUpdateTs": NOW}
        assert push_call.kwargs == {"array_filters": [{"transaction.id": "0"}]}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("task_ts", "transaction_ts", "expected"), [(NOW + 100, NOW + 50, (NOW + 100, NOW + 50)), (NOW - 100, NOW - 50, (NOW, NOW))])
    async def test_message_never_moves_the_update_times_backwards(
        self, repository: MotorTaskRepository, tasks: MagicMock, task_ts: int, transaction_ts: int, expected: tuple[int, int]
    ) -> None:
        stored = {"_id": "task_1", "_lastUpdateTs": task_ts, "transactions": [{"id": "0", "_lastUpdateTs": transaction_ts, "messages": []}, {"id": "1", "_lastUpdateTs": 1}]}

        async def update_one(query: dict[str, Any], update: dict[str, Any], **kwargs: Any) -> MagicMock:
            if "$push" in update:
                apply_update(stored, update, kwargs["array_filters"])
            return self.create_update_result(1)

        tasks.update_one = self.create_async_mock(side_effect=update_one)

        await repository.add_message_into_transaction("task_1", "0", MessageFactory.create())

        transaction, other = stored["transactions"]
        assert (stored["_lastUpdateTs"], transaction["_lastUpdateTs"]) == expected
        assert len(transaction["messages"]) == 1
        assert other == {"id": "1", "_lastUpdateTs": 1}

    @pytest.mark.asyncio
    async def test_undefined_task_or_transaction(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(0))

        with pytest.raises(NotFoundError):
            await repository.add_message_into_transaction("task_1", "7", MessageFactory.create())


class TestUnwoundPages(MotorTaskRepositoryTestCase):
    @pytest.mark.asyncio
    async def test_transactions_page(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        unwound = {"_id": "task_1", "transactions": {"id": "0", "taskId": "task_1", "label": "cancel"}, TRANSACTIONS_INDEX: 0}
        tasks.aggregate = MagicMock(side_effect=[self.create_cursor([{"total": 1}]), self.create_cursor([unwound])])

        page = await repository.retrieve_task_transactions_page({}, {"_id": 1}, 0, 10)

        assert page.to_dict() == {"offset": 0, "total": 1, "transactions": [{"id": "0", "taskId": "task_1", "label": "cancel"}]}
        unwind_stage = tasks.aggregate.call_args_list[0].args[0][1]
        assert unwind_stage["$unwind"]["path"] == "$transactions"


class TestTaskMigration(MotorTaskRepositoryTestCase):
    @pytest.mark.asyncio
    async def test_time_stamps_move_into_the_attributes(self, repository: MotorTaskRepository, tasks: MagicMock, schema_versions: MagicMock) -> None:
        old_task = {"_id": "task_1", "goal": {"name": "Eat"}, "startTs": 10, "endTs": 20, "deadlineTs": 15, "attributes": {"where": "BCN"}, "_creationTs": 5, "_lastUpdateTs": 6}
        tasks.find_one = self.create_async_mock(side_effect=[old_task, None])
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(1))
        schema_versions.update_one = self.create_async_mock(return_value=self.create_update_result(1))

        migrated = await repository.migrate_documents_to_current_version()

        assert migrated == 1
        query, update = tasks.update_one.call_args.args
        assert query == {"_id": "task_1"}
        assert update["$set"] == {"attributes": {"where": "BCN", "startTs": 10, "endTs": 20, "deadlineTs": 15}, "schema_version": "0.6.0"}
        assert update["$unset"] == {"startTs": "", "endTs": "", "deadlineTs": ""}
        pending = tasks.find_one.call_args_list[0].args[0]
        assert pending == {"schema_version": {"$ne": "0.6.0"}}
        schema_versions.update_one.assert_awaited_once()
        assert schema_versions.update_one.call_args.args[0] == {"_id": "tasks"}
        assert schema_versions.update_one.call_args.kwargs == {"upsert": True}

    @pytest.mark.asyncio
    async def test_nothing_to_migrate(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        migrated = await repository.migrate_documents_to_current_version()

        assert migrated == 0
        tasks.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_older_schemas_are_migrated(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        newer = TaskFactory.create_document(task_id="task_1", schema_version="0.10.0")
        older = TaskFactory.create_document(task_id="task_2", schema_version="0.5.9")
        tasks.find_one = self.create_async_mock(side_effect=[newer, older, None])
        tasks.update_one = self.create_async_mock(return_value=self.create_update_result(1))

        migrated = await repository.migrate_documents_to_current_version()

        assert migrated == 1
        assert tasks.update_one.call_args.args[0] == {"_id": "task_2"}
        assert tasks.find_one.call_args.args[0] == {"$and": [{"schema_version": {"$ne": "0.6.0"}}, {"_id": {"$nin": ["task_1"]}}]}

    @pytest.mark.parametrize(
        ("version", "older"),
        [(None, True), ("0.5.0", True), ("0.5.10", True), ("0.6.0", False), ("0.10.0", False), ("1.0.0", False)],
    )
    def test_versions_are_compared_as_numbers(self, repository: MotorTaskRepository, version: str | None, older: bool) -> None:
        assert repository.is_older_schema(version) is older


class TestDeleteProfileData(MotorTaskRepositoryTestCase):
    @pytest.mark.asyncio
    async def test_delete_the_tasks_of_a_requester(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.find = MagicMock(return_value=self.create_cursor([{"_id": "task_1"}, {"_id": "task_2"}]))
        tasks.delete_many = self.create_async_mock(return_value=self.create_delete_result(2))

        deleted = await repository.delete_all_tasks_with_requester("user_1")

        assert deleted == ["task_1", "task_2"]
        assert tasks.find.call_args.args == ({"requesterId": "user_1"}, {"_id": 1})
        tasks.delete_many.assert_awaited_once_with({"_id": {"$in": ["task_1", "task_2"]}})

    @pytest.mark.asyncio
    async def test_requester_without_tasks(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.find = MagicMock(return_value=self.create_cursor([]))

        deleted = await repository.delete_all_tasks_with_requester("user_1")

        assert deleted == []
        tasks.delete_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_the_messages_of_a_receiver(self, repository: MotorTaskRepository, tasks: MagicMock) -> None:
        tasks.update_many = self.create_async_mock(return_value=self.create_update_result(3))

        modified = await repository.delete_all_messages_with_receiver("user_1")

        assert modified == 3
        query, update = tasks.update_many.call_args.args
        assert query == {"transactions.messages.receiverId": "user_1"}
        assert update == {"$pull": {"transactions.$[].messages": {"receiverId": "user_1"}}, "$max": {"_lastUpdateTs": NOW}}
