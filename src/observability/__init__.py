"""Observability utilities and metrics."""

from .metrics import (
    documents_migrated,
    task_messages_added,
    task_processing_time,
    task_transactions_added,
    task_types_created,
    task_types_deleted,
    task_types_updated,
    tasks_created,
    tasks_deleted,
    tasks_updated,
)

__all__ = [
    # Task metrics
    "tasks_created",
    "tasks_updated",
    "tasks_deleted",
    "task_transactions_added",
    "task_messages_added",
    "task_processing_time",
    # TaskType metrics
    "task_types_created",
    "task_types_updated",
    "task_types_deleted",
    # Migration metrics
    "documents_migrated",
]
