"""Tests for the conversion of order parameters into MongoDB sorts."""

import pytest

from domain.exceptions import ValidationError
from integration.query import (
    BAD_ORDER,
    MESSAGES_INDEX,
    TRANSACTIONS_INDEX,
    create_messages_page_sort,
    create_task_transactions_page_sort,
    create_task_types_page_sort,
    create_tasks_page_sort,
)


@pytest.mark.unit
class TestTasksPageSort:
    @pytest.mark.parametrize("order", [None, []])
    def test_without_order_uses_the_natural_order(self, order: list | None) -> None:
        assert create_tasks_page_sort(order) is None

    def test_directions(self) -> None:
        sort = create_tasks_page_sort(["-goalName", "+appId", "requesterId"])

        assert sort == {"goal.name": -1, "appId": 1, "requesterId": 1}
        assert list(sort) == ["goal.name", "appId", "requesterId"]

    @pytest.mark.parametrize(
        "aliases,path",
        [
            (["id", "_id"], "_id"),
            (["goalName", "goal.name"], "goal.name"),
            (["creationTs", "creation", "_creationTs"], "_creationTs"),
            (["updateTs", "update", "lastUpdateTs", "_lastUpdateTs"], "_lastUpdateTs"),
            (["closeTs", "close"], "closeTs"),
        ],
    )
    def test_aliases_sort_by_the_same_field(self, aliases: list[str], path: str) -> None:
        for alias in aliases:
            assert create_tasks_page_sort([f"-{alias}"]) == {path: -1}

    def test_repeated_key_keeps_the_last_direction(self) -> None:
        assert create_tasks_page_sort(["creation", "appId", "-creationTs"]) == {"appId": 1, "_creationTs": -1}

    @pytest.mark.parametrize("order,index", [(["unknown"], 0), (["appId", ""], 1), (["appId", "-"], 1), (["appId", "goal"], 1)])
    def test_unknown_keys_are_rejected(self, order: list[str], index: int) -> None:
        with pytest.raises(ValidationError) as error:
            create_tasks_page_sort(order)

        assert error.value.error_code == BAD_ORDER
        assert f"'{index}'" in error.value.message


@pytest.mark.unit
class TestTaskTypesPageSort:
    def test_sort(self) -> None:
        assert create_task_types_page_sort(["name", "-id"]) == {"name": 1, "_id": -1}

    def test_task_keys_are_not_valid(self) -> None:
        with pytest.raises(ValidationError) as error:
            create_task_types_page_sort(["goalName"])

        assert error.value.error_code == BAD_ORDER


@pytest.mark.unit
class TestTaskTransactionsPageSort:
    def test_default_sort_follows_the_creation_of_the_tasks(self) -> None:
        sort = create_task_transactions_page_sort(None)

        assert list(sort.items()) == [("_creationTs", 1), ("_id", 1), (TRANSACTIONS_INDEX, 1)]

    def test_explicit_sort_gets_the_tiebreakers(self) -> None:
        sort = create_task_transactions_page_sort(["-label", "taskCreationTs"])

        assert list(sort.items()) == [("transactions.label", -1), ("_creationTs", 1), ("_id", 1), (TRANSACTIONS_INDEX, 1)]

    def test_transaction_keys(self) -> None:
        assert create_task_transactions_page_sort(["-id", "taskId"]) == {TRANSACTIONS_INDEX: -1, "_id": 1}
        assert create_task_transactions_page_sort(["creationTs"])["transactions._creationTs"] == 1
        assert create_task_transactions_page_sort(["updateTs"])["transactions._lastUpdateTs"] == 1


@pytest.mark.unit
class TestMessagesPageSort:
    def test_default_sort(self) -> None:
        sort = create_messages_page_sort([])

        assert list(sort.items()) == [("_creationTs", 1), ("_id", 1), (TRANSACTIONS_INDEX, 1), (MESSAGES_INDEX, 1)]

    def test_message_and_transaction_keys(self) -> None:
        sort = create_messages_page_sort(["receiverId", "-transactionLabel", "-messagesIndex"])

        assert list(sort.items()) == [
            ("transactions.messages.receiverId", 1),
            ("transactions.label", -1),
            (MESSAGES_INDEX, -1),
            ("_id", 1),
            (TRANSACTIONS_INDEX, 1),
        ]

    def test_unknown_key(self) -> None:
        with pytest.raises(ValidationError) as error:
            create_messages_page_sort(["receiverId", "attributes"])

        assert error.value.error_code == BAD_ORDER
