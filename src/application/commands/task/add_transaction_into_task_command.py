"""Add transaction into task command with handler."""

import logging
import time
from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Command, CommandHandler
from neuroglia.observability.tracing import add_span_attributes
from observability import task_processing_time, task_transactions_added

from application.commands.command_handler_base import CommandHandlerBase
from domain.exceptions import TaskManagerError
from domain.models import Task, TaskTransaction
from domain.repositories import TaskRepository

log = logging.getLogger(__name__)


@dataclass
class AddTransactionIntoTaskCommand(Command[OperationResult[dict[str, Any]]]):
    """Command to append a transaction to a task.

    The identifier, the task identifier and the time stamps of the
    transaction are assigned when it is stored.
    """

    task_id: str
    transaction: Any


class AddTransactionIntoTaskCommandHandler(
    CommandHandlerBase,
    CommandHandler[AddTransactionIntoTaskCommand, OperationResult[dict[str, Any]]],
):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: AddTransactionIntoTaskCommand) -> OperationResult[dict[str, Any]]:
        command = request
        start_time = time.time()

        try:
            transaction = TaskTransaction.from_dict(command.transaction)
            transaction.messages = None
            add_span_attributes({"task.id": command.task_id, "transaction.label": transaction.label or ""})
            added = await self.task_repository.add_transaction_into_task(command.task_id, transaction)
        except TaskManagerError as e:
            return self.error_result(e, Task, command.task_id)

        task_transactions_added.add(1, {"label": added.label or "unknown"})
        task_processing_time.record(self.elapsed_ms(start_time), {"operation": "add_transaction"})
        log.debug(f"Added transaction '{added.id}' into task '{command.task_id}'")
        return self.created(added.to_dict())
