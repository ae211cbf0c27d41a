"""Delete task type command with handler."""

from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from observability import task_types_deleted

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError
from domain.models import TaskType
from domain.repositories import TaskTypeRepository


@dataclass
class DeleteTaskTypeCommand(Command[OperationResult]):
    """Command to delete a task type. The tasks of the type are kept."""

    task_type_id: str


class DeleteTaskTypeCommandHandler(CommandHandlerBase, CommandHandler[DeleteTaskTypeCommand, OperationResult]):
    def __init__(self, task_type_repository: TaskTypeRepository):
        super().__init__()
        self.task_type_repository = task_type_repository

    async def handle_async(self, request: DeleteTaskTypeCommand) -> OperationResult:
        try:
            await self.task_type_repository.delete_task_type(request.task_type_id)
        except TaskManagerError as e:
            return self.error_result(e, TaskType, request.task_type_id)

        task_types_deleted.add(1)
        return self.no_content()
