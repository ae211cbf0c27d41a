"""Update and merge task type commands with handlers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_types_updated

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError, ValidationError
from domain.models import TaskType, merge_documents
from domain.models.documents import ensure_document
from domain.repositories import TaskTypeRepository

log = logging.getLogger(__name__)

PROTECTED_FIELDS = ("id", "_creationTs", "_lastUpdateTs")


@dataclass
class UpdateTaskTypeCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to replace the values of a task type."""

    task_type_id: str
    task_type: Any


@dataclass
class MergeTaskTypeCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to change only the values of a task type that are present in the request."""

    task_type_id: str
    task_type: Any


class TaskTypeChangeHandlerBase(CommandHandlerBase, ABC):
    operation: str = "update"

    def __init__(self, task_type_repository: TaskTypeRepository):
        super().__init__()
        self.task_type_repository = task_type_repository

    @abstractmethod
    def changed_task_type(self, original: TaskType, values: dict[str, Any]) -> TaskType:
        """Return the task type built from the stored one and the values of the request."""

    async def change_task_type(self, task_type_id: str, values: Any) -> OperationResult[dict[str, Any]]:
        add_span_attributes({"task_type.id": task_type_id, "task_type.operation": self.operation})

        try:
            original = await self.task_type_repository.search_task_type(task_type_id)
            values = {key: value for key, value in ensure_document(values, "taskType").items() if key not in PROTECTED_FIELDS}
            changed = self.changed_task_type(original, values)
            changed.id = original.id
            changed.creation_ts = original.creation_ts
            changed.last_update_ts = original.last_update_ts
            if changed.to_dict() == original.to_dict():
                raise ValidationError(
                    f"You can not {self.operation} the task type '{task_type_id}', because the new values are equals to the current one",
                    f"task_type_to_{self.operation}_equal_to_original",
                )

            changed.last_update_ts = max(self.now(), original.last_update_ts or 0)
            await self.task_type_repository.update_task_type(changed)
        except TaskManagerError as e:
            return self.error_result(e, TaskType, task_type_id)

        task_types_updated.add(1, {"operation": self.operation})
        log.debug(f"Task type '{task_type_id}' {self.operation}d")
        return self.ok(changed.to_dict())


class UpdateTaskTypeCommandHandler(
    TaskTypeChangeHandlerBase,
    CommandHandler[UpdateTaskTypeCommand, OperationResult[dict[str, Any]]],
):
    operation = "update"

    def changed_task_type(self, original: TaskType, values: dict[str, Any]) -> TaskType:
        return TaskType.from_dict(values)

    async def handle_async(self, request: UpdateTaskTypeCommand) -> OperationResult[dict[str, Any]]:
        return await self.change_task_type(request.task_type_id, request.task_type)


class MergeTaskTypeCommandHandler(
    TaskTypeChangeHandlerBase,
    CommandHandler[MergeTaskTypeCommand, OperationResult[dict[str, Any]]],
):
    operation = "merge"

    def changed_task_type(self, original: TaskType, values: dict[str, Any]) -> TaskType:
        return TaskType.from_dict(merge_documents(original.to_dict(), values))

    async def handle_async(self, request: MergeTaskTypeCommand) -> OperationResult[dict[str, Any]]:
        return await self.change_task_type(request.task_type_id, request.task_type)
