"""Create task type command with handler."""

import logging
from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_types_created

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError
from domain.models import TaskType
from domain.repositories import TaskTypeRepository

log = logging.getLogger(__name__)


@dataclass
class CreateTaskTypeCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to create a new task type from its wire representation."""

    task_type: Any


class CreateTaskTypeCommandHandler(
    CommandHandlerBase,
    CommandHandler[CreateTaskTypeCommand, OperationResult[dict[str, Any]]],
):
    def __init__(self, task_type_repository: TaskTypeRepository):
        super().__init__()
        self.task_type_repository = task_type_repository

    async def handle_async(self, request: CreateTaskTypeCommand) -> OperationResult[dict[str, Any]]:
        command = request
        task_type_id = command.task_type.get("id") if isinstance(command.task_type, dict) else None

        try:
            task_type = TaskType.from_dict(command.task_type)
            add_span_attributes({"task_type.name": task_type.name or "", "task_type.has_id": task_type.id is not None})
            stored = await self.task_type_repository.store_task_type(task_type)
        except TaskManagerError as e:
            return self.error_result(e, TaskType, task_type_id)

        task_types_created.add(1)
        log.info(f"Created task type '{stored.id}'")
        return self.created(stored.to_dict())
