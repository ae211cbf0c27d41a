"""Add message into transaction command with handler."""

import time
from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_messages_added, task_processing_time

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError
from domain.models import Message, TaskTransaction
from domain.repositories import TaskRepository


@dataclass
class AddMessageIntoTransactionCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to append a message to a transaction of a task."""

    task_id: str
    transaction_id: str
    message: Any


class AddMessageIntoTransactionCommandHandler(
    CommandHandlerBase,
    CommandHandler[AddMessageIntoTransactionCommand, OperationResult[dict[str, Any]]],
):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: AddMessageIntoTransactionCommand) -> OperationResult[dict[str, Any]]:
        command = request
        start_time = time.time()
        add_span_attributes({"task.id": command.task_id, "transaction.id": command.transaction_id})

        try:
            message = Message.from_dict(command.message)
            added = await self.task_repository.add_message_into_transaction(command.task_id, command.transaction_id, message)
        except TaskManagerError as e:
            return self.error_result(e, TaskTransaction, f"{command.task_id}/{command.transaction_id}")

        task_messages_added.add(1, {"label": added.label or "unknown"})
        task_processing_time.record(self.elapsed_ms(start_time), {"operation": "add_message"})
        return self.created(added.to_dict())
