"""Filters used by the paginated searches of tasks, transactions, messages and task types.

The filters over transactions and messages are applied after unwinding the
nested arrays, so their fields are addressed with the dotted path of the
array that contains them (``transactions.label``,
``transactions.messages.receiverId``).
"""

from typing import Any, Sequence

from .query_builder import QueryBuilder


def _with_task_fields(
    builder: QueryBuilder,
    *,
    app_id: str | None,
    requester_id: str | None,
    task_type_id: str | None,
    goal_name: str | None,
    goal_description: str | None,
    goal_keywords: Sequence[str] | None,
    creation_from: int | None,
    creation_to: int | None,
    update_from: int | None,
    update_to: int | None,
    has_close_ts: bool | None,
    close_from: int | None,
    close_to: int | None,
) -> QueryBuilder:
    return (
        builder.with_equals_or_regex("appId", app_id)
        .with_equals_or_regex("requesterId", requester_id)
        .with_equals_or_regex("taskTypeId", task_type_id)
        .with_equals_or_regex("goal.name", goal_name)
        .with_equals_or_regex("goal.description", goal_description)
        .with_contains_equals_or_regex("goal.keywords", goal_keywords)
        .with_range("_creationTs", creation_from, creation_to)
        .with_range("_lastUpdateTs", update_from, update_to)
        .with_range("closeTs", close_from, close_to, exists=has_close_ts)
    )


def create_tasks_page_query(
    *,
    app_id: str | None = None,
    requester_id: str | None = None,
    task_type_id: str | None = None,
    goal_name: str | None = None,
    goal_description: str | None = None,
    goal_keywords: Sequence[str] | None = None,
    creation_from: int | None = None,
    creation_to: int | None = None,
    update_from: int | None = None,
    update_to: int | None = None,
    has_close_ts: bool | None = None,
    close_from: int | None = None,
    close_to: int | None = None,
) -> dict[str, Any]:
    """Return the filter to page over the tasks."""
    builder = _with_task_fields(
        QueryBuilder(),
        app_id=app_id,
        requester_id=requester_id,
        task_type_id=task_type_id,
        goal_name=goal_name,
        goal_description=goal_description,
        goal_keywords=goal_keywords,
        creation_from=creation_from,
        creation_to=creation_to,
        update_from=update_from,
        update_to=update_to,
        has_close_ts=has_close_ts,
        close_from=close_from,
        close_to=close_to,
    )
    return builder.build()


def create_task_transactions_page_query(
    *,
    app_id: str | None = None,
    requester_id: str | None = None,
    task_type_id: str | None = None,
    goal_name: str | None = None,
    goal_description: str | None = None,
    goal_keywords: Sequence[str] | None = None,
    task_creation_from: int | None = None,
    task_creation_to: int | None = None,
    task_update_from: int | None = None,
    task_update_to: int | None = None,
    has_close_ts: bool | None = None,
    close_from: int | None = None,
    close_to: int | None = None,
    task_id: str | None = None,
    label: str | None = None,
    actioneer_id: str | None = None,
    creation_from: int | None = None,
    creation_to: int | None = None,
    update_from: int | None = None,
    update_to: int | None = None,
) -> dict[str, Any]:
    """Return the filter to page over the transactions of the tasks."""
    builder = _with_task_fields(
        QueryBuilder(),
        app_id=app_id,
        requester_id=requester_id,
        task_type_id=task_type_id,
        goal_name=goal_name,
        goal_description=goal_description,
        goal_keywords=goal_keywords,
        creation_from=task_creation_from,
        creation_to=task_creation_to,
        update_from=task_update_from,
        update_to=task_update_to,
        has_close_ts=has_close_ts,
        close_from=close_from,
        close_to=close_to,
    )
    return (
        builder.with_equals_or_regex("_id", task_id)
        .with_equals_or_regex("transactions.label", label)
        .with_equals_or_regex("transactions.actioneerId", actioneer_id)
        .with_range("transactions._creationTs", creation_from, creation_to)
        .with_range("transactions._lastUpdateTs", update_from, update_to)
        .build()
    )


def create_messages_page_query(
    *,
    app_id: str | None = None,
    requester_id: str | None = None,
    task_type_id: str | None = None,
    goal_name: str | None = None,
    goal_description: str | None = None,
    goal_keywords: Sequence[str] | None = None,
    task_creation_from: int | None = None,
    task_creation_to: int | None = None,
    task_update_from: int | None = None,
    task_update_to: int | None = None,
    has_close_ts: bool | None = None,
    close_from: int | None = None,
    close_to: int | None = None,
    task_id: str | None = None,
    transaction_id: str | None = None,
    transaction_label: str | None = None,
    transaction_actioneer_id: str | None = None,
    transaction_creation_from: int | None = None,
    transaction_creation_to: int | None = None,
    transaction_update_from: int | None = None,
    transaction_update_to: int | None = None,
    receiver_id: str | None = None,
    label: str | None = None,
) -> dict[str, Any]:
    """Return the filter to page over the messages of the task transactions."""
    builder = _with_task_fields(
        QueryBuilder(),
        app_id=app_id,
        requester_id=requester_id,
        task_type_id=task_type_id,
        goal_name=goal_name,
        goal_description=goal_description,
        goal_keywords=goal_keywords,
        creation_from=task_creation_from,
        creation_to=task_creation_to,
        update_from=task_update_from,
        update_to=task_update_to,
        has_close_ts=has_close_ts,
        close_from=close_from,
        close_to=close_to,
    )
    return (
        builder.with_equals_or_regex("_id", task_id)
        .with_equals_or_regex("transactions.id", transaction_id)
        .with_equals_or_regex("transactions.label", transaction_label)
        .with_equals_or_regex("transactions.actioneerId", transaction_actioneer_id)
        .with_range("transactions._creationTs", transaction_creation_from, transaction_creation_to)
        .with_range("transactions._lastUpdateTs", transaction_update_from, transaction_update_to)
        .with_equals_or_regex("transactions.messages.receiverId", receiver_id)
        .with_equals_or_regex("transactions.messages.label", label)
        .build()
    )


def create_task_types_page_query(
    *,
    name: str | None = None,
    description: str | None = None,
    keywords: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Return the filter to page over the task types."""
    return (
        QueryBuilder()
        .with_equals_or_regex("name", name)
        .with_equals_or_regex("description", description)
        .with_contains_equals_or_regex("keywords", keywords)
        .build()
    )
