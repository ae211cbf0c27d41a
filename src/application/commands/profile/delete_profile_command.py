"""Delete profile command with handler."""

import logging
import time
from dataclasses import dataclass

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_processing_time, tasks_deleted

from application.commands.command_handler_base import CommandHandlerBase
from domain.repositories import TaskRepository

log = logging.getLogger(__name__)


@dataclass
class DeleteProfileCommand(Command[OperationResult]):
    """Command to remove the information associated to a deleted profile.

    The tasks requested by the profile are deleted and the messages sent to it
    are removed from the transactions of the other tasks. The transactions done
    by the profile are kept, their identifiers are their positions in the task.
    """

    profile_id: str


class DeleteProfileCommandHandler(CommandHandlerBase, CommandHandler[DeleteProfileCommand, OperationResult]):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: DeleteProfileCommand) -> OperationResult:
        command = request
        start_time = time.time()
        add_span_attributes({"profile.id": command.profile_id})

        task_ids = await self.task_repository.delete_all_tasks_with_requester(command.profile_id)
        modified = await self.task_repository.delete_all_messages_with_receiver(command.profile_id)

        if task_ids:
            tasks_deleted.add(len(task_ids), {"reason": "profile_deleted"})
        log.info(f"Profile '{command.profile_id}' deleted: removed {len(task_ids)} tasks and its messages from {modified} tasks")
        add_span_attributes({"profile.deleted_tasks": len(task_ids), "profile.modified_tasks": modified})
        task_processing_time.record(self.elapsed_ms(start_time), {"operation": "delete_profile"})
        return self.no_content()
