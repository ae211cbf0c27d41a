"""Create task command with handler."""

import logging
import time
from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_processing_time, tasks_created

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError
from domain.models import Task
from domain.repositories import TaskRepository

log = logging.getLogger(__name__)


@dataclass
class CreateTaskCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to create a new task from its wire representation."""

    task: Any


class CreateTaskCommandHandler(
    CommandHandlerBase,
    CommandHandler[CreateTaskCommand, OperationResult[dict[str, Any]]],
):
    """Handle task creation."""

    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: CreateTaskCommand) -> OperationResult[dict[str, Any]]:
        command = request
        start_time = time.time()

        task_id = command.task.get("id") if isinstance(command.task, dict) else None
        try:
            task = Task.from_dict(command.task)
            add_span_attributes(
                {
                    "task.app_id": task.app_id or "",
                    "task.task_type_id": task.task_type_id or "",
                    "task.has_id": task.id is not None,
                }
            )
            stored = await self.task_repository.store_task(task)
        except TaskManagerError as e:
            return self.error_result(e, Task, task_id)

        tasks_created.add(1, {"has_task_type": bool(stored.task_type_id)})
        task_processing_time.record(self.elapsed_ms(start_time), {"operation": "create"})
        log.info(f"Created task '{stored.id}'")
        return self.created(stored.to_dict())
