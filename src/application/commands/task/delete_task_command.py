"""Delete task command with handler."""

import time
from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_processing_time, tasks_deleted

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError
from domain.models import Task
from domain.repositories import TaskRepository


@dataclass
class DeleteTaskCommand(Command[OperationResult]):
    """Command to delete an existing task, with its transactions and messages."""

    task_id: str


class DeleteTaskCommandHandler(CommandHandlerBase, CommandHandler[DeleteTaskCommand, OperationResult]):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: DeleteTaskCommand) -> OperationResult:
        command = request
        start_time = time.time()
        add_span_attributes({"task.id": command.task_id})

        try:
            await self.task_repository.delete_task(command.task_id)
        except TaskManagerError as e:
            return self.error_result(e, Task, command.task_id)

        tasks_deleted.add(1)
        task_processing_time.record(self.elapsed_ms(start_time), {"operation": "delete"})
        return self.no_content()
