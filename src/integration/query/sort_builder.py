"""Conversion of the ``order`` parameters into MongoDB sort documents.

Each order token names a sort key, optionally prefixed with ``+`` (ascending,
the default) or ``-`` (descending). The key is resolved through a fixed alias
table of the searched resource; any key outside of the table invalidates the
whole order.
"""

from typing import Mapping, Sequence

from domain.exceptions import ValidationError

BAD_ORDER = "bad_order"

TRANSACTIONS_INDEX = "transactionsIndex"
MESSAGES_INDEX = "messagesIndex"

ASCENDING = 1
DESCENDING = -1

TASK_SORT_ALIASES: dict[str, str] = {
    "id": "_id",
    "_id": "_id",
    "appId": "appId",
    "requesterId": "requesterId",
    "taskTypeId": "taskTypeId",
    "communityId": "communityId",
    "goalName": "goal.name",
    "goal.name": "goal.name",
    "goalDescription": "goal.description",
    "goal.description": "goal.description",
    "goalKeywords": "goal.keywords",
    "goal.keywords": "goal.keywords",
    "creationTs": "_creationTs",
    "creation": "_creationTs",
    "_creationTs": "_creationTs",
    "updateTs": "_lastUpdateTs",
    "update": "_lastUpdateTs",
    "lastUpdateTs": "_lastUpdateTs",
    "_lastUpdateTs": "_lastUpdateTs",
    "closeTs": "closeTs",
    "close": "closeTs",
}

TASK_TYPE_SORT_ALIASES: dict[str, str] = {
    "id": "_id",
    "_id": "_id",
    "name": "name",
    "description": "description",
    "keywords": "keywords",
}

# Task level keys usable when paging over the transactions or the messages.
_TASK_LEVEL_SORT_ALIASES: dict[str, str] = {
    "taskId": "_id",
    "appId": "appId",
    "requesterId": "requesterId",
    "taskTypeId": "taskTypeId",
    "communityId": "communityId",
    "goalName": "goal.name",
    "goal.name": "goal.name",
    "goalDescription": "goal.description",
    "goal.description": "goal.description",
    "goalKeywords": "goal.keywords",
    "goal.keywords": "goal.keywords",
    "taskCreationTs": "_creationTs",
    "taskCreation": "_creationTs",
    "taskUpdateTs": "_lastUpdateTs",
    "taskUpdate": "_lastUpdateTs",
    "closeTs": "closeTs",
    "close": "closeTs",
}

TASK_TRANSACTION_SORT_ALIASES: dict[str, str] = {
    **_TASK_LEVEL_SORT_ALIASES,
    "id": TRANSACTIONS_INDEX,
    "transactionId": TRANSACTIONS_INDEX,
    TRANSACTIONS_INDEX: TRANSACTIONS_INDEX,
    "label": "transactions.label",
    "actioneerId": "transactions.actioneerId",
    "creationTs": "transactions._creationTs",
    "creation": "transactions._creationTs",
    "_creationTs": "transactions._creationTs",
    "updateTs": "transactions._lastUpdateTs",
    "update": "transactions._lastUpdateTs",
    "_lastUpdateTs": "transactions._lastUpdateTs",
}

MESSAGE_SORT_ALIASES: dict[str, str] = {
    **_TASK_LEVEL_SORT_ALIASES,
    "transactionId": TRANSACTIONS_INDEX,
    TRANSACTIONS_INDEX: TRANSACTIONS_INDEX,
    "transactionLabel": "transactions.label",
    "actioneerId": "transactions.actioneerId",
    "transactionActioneerId": "transactions.actioneerId",
    "transactionCreationTs": "transactions._creationTs",
    "transactionCreation": "transactions._creationTs",
    "transactionUpdateTs": "transactions._lastUpdateTs",
    "transactionUpdate": "transactions._lastUpdateTs",
    "receiverId": "transactions.messages.receiverId",
    "label": "transactions.messages.label",
    MESSAGES_INDEX: MESSAGES_INDEX,
}


class SortSpecBuilder:
    """Resolves order tokens to a sort document using an alias table."""

    def __init__(self, aliases: Mapping[str, str]):
        self.aliases = aliases

    def build(self, order: Sequence[str] | None) -> dict[str, int] | None:
        """Return the sort document for the order, or ``None`` if there is no order.

        Raises:
            ValidationError: with the ``bad_order`` code if a token is empty
                or does not name a known sort key.
        """
        if not order:
            return None

        sort: dict[str, int] = {}
        for index, token in enumerate(order):
            direction = ASCENDING
            key = token.strip() if token is not None else ""
            if key.startswith("-"):
                direction = DESCENDING
                key = key[1:]
            elif key.startswith("+"):
                key = key[1:]

            path = self.aliases.get(key) if key else None
            if path is None:
                raise ValidationError(f"The order '{token}' at '{index}' is not valid", BAD_ORDER)

            # the last occurrence of a repeated key decides its place and direction
            sort.pop(path, None)
            sort[path] = direction

        return sort


class UnwoundSortSpecBuilder(SortSpecBuilder):
    """Sort builder for the pages over the elements of nested arrays.

    The flattened elements must always be sorted in a stable way, so the
    task identifier and the array positions are appended as tiebreakers, and
    an empty order falls back to the task creation order.
    """

    def __init__(self, aliases: Mapping[str, str], indexes: Sequence[str]):
        super().__init__(aliases)
        self.indexes = tuple(indexes)

    def default_sort(self) -> dict[str, int]:
        sort = {"_creationTs": ASCENDING, "_id": ASCENDING}
        for index in self.indexes:
            sort[index] = ASCENDING
        return sort

    def build(self, order: Sequence[str] | None) -> dict[str, int]:
        sort = super().build(order)
        if sort is None:
            return self.default_sort()

        for tiebreaker in ("_id", *self.indexes):
            if tiebreaker not in sort:
                sort[tiebreaker] = ASCENDING
        return sort


def create_tasks_page_sort(order: Sequence[str] | None) -> dict[str, int] | None:
    """Return the sort to apply when paging over the tasks."""
    return SortSpecBuilder(TASK_SORT_ALIASES).build(order)


def create_task_types_page_sort(order: Sequence[str] | None) -> dict[str, int] | None:
    """Return the sort to apply when paging over the task types."""
    return SortSpecBuilder(TASK_TYPE_SORT_ALIASES).build(order)


def create_task_transactions_page_sort(order: Sequence[str] | None) -> dict[str, int]:
    """Return the sort to apply when paging over the transactions of the tasks."""
    return UnwoundSortSpecBuilder(TASK_TRANSACTION_SORT_ALIASES, [TRANSACTIONS_INDEX]).build(order)


def create_messages_page_sort(order: Sequence[str] | None) -> dict[str, int]:
    """Return the sort to apply when paging over the messages of the transactions."""
    return UnwoundSortSpecBuilder(MESSAGE_SORT_ALIASES, [TRANSACTIONS_INDEX, MESSAGES_INDEX]).build(order)
