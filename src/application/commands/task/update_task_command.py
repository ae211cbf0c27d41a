"""Update and merge task commands with handlers.

Both commands keep the identifier, the creation time and the transactions
of the stored task: transactions can only be added through
``AddTransactionIntoTaskCommand``. A change that leaves the task as it is
stored is rejected.
"""

import logging
from abc import ABC, abstractmethod
import time
from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_processing_time, tasks_updated

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError, ValidationError
from domain.models import Task, merge_documents
from domain.models.documents import ensure_document
from domain.repositories import TaskRepository

log = logging.getLogger(__name__)

# Fields of the task that the commands never change
PROTECTED_FIELDS = ("id", "_creationTs", "_lastUpdateTs", "transactions")


@dataclass
class UpdateTaskCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to replace the values of a task."""

    task_id: str
    task: Any


@dataclass
class MergeTaskCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to change only the values of a task that are present in the request."""

    task_id: str
    task: Any


class TaskChangeHandlerBase(CommandHandlerBase, ABC):
    operation: str = "update"

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    @abstractmethod
    def changed_task(self, original: Task, values: dict[str, Any]) -> Task:
        """Return the task built from the stored one and the values of the request."""

    async def change_task(self, task_id: str, values: Any) -> OperationResult[dict[str, Any]]:
        start_time = time.time()
        add_span_attributes({"task.id": task_id, "task.operation": self.operation})

        try:
            original = await self.task_repository.search_task(task_id)
            values = {key: value for key, value in ensure_document(values, "task").items() if key not in PROTECTED_FIELDS}
            changed = self.changed_task(original, values)
            changed.id = original.id
            changed.creation_ts = original.creation_ts
            changed.last_update_ts = original.last_update_ts
            changed.transactions = original.transactions
            if changed.to_dict() == original.to_dict():
                raise ValidationError(
                    f"You can not {self.operation} the task '{task_id}', because the new values are equals to the current one",
                    f"task_to_{self.operation}_equal_to_original",
                )

            changed.last_update_ts = max(self.now(), original.last_update_ts or 0)
            await self.task_repository.update_task(changed)
        except TaskManagerError as e:
            return self.error_result(e, Task, task_id)

        tasks_updated.add(1, {"operation": self.operation})
        task_processing_time.record(self.elapsed_ms(start_time), {"operation": self.operation})
        log.debug(f"Task '{task_id}' {self.operation}d")
        return self.ok(changed.to_dict())


class UpdateTaskCommandHandler(
    TaskChangeHandlerBase,
    CommandHandler[UpdateTaskCommand, OperationResult[dict[str, Any]]],
):
    """Handle the full replacement of a task."""

    operation = "update"

    def changed_task(self, original: Task, values: dict[str, Any]) -> Task:
        return Task.from_dict(values)

    async def handle_async(self, request: UpdateTaskCommand) -> OperationResult[dict[str, Any]]:
        return await self.change_task(request.task_id, request.task)


class MergeTaskCommandHandler(
    TaskChangeHandlerBase,
    CommandHandler[MergeTaskCommand, OperationResult[dict[str, Any]]],
):
    """Handle the partial modification of a task."""

    operation = "merge"

    def changed_task(self, original: Task, values: dict[str, Any]) -> Task:
        return Task.from_dict(merge_documents(original.to_dict(), values))

    async def handle_async(self, request: MergeTaskCommand) -> OperationResult[dict[str, Any]]:
        return await self.change_task(request.task_id, request.task)
