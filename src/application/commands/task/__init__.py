"""Task commands: CRUD of the tasks and append of their transactions and messages."""

from .add_message_into_transaction_command import AddMessageIntoTransactionCommand, AddMessageIntoTransactionCommandHandler
from .add_transaction_into_task_command import AddTransactionIntoTaskCommand, AddTransactionIntoTaskCommandHandler
from .create_task_command import CreateTaskCommand, CreateTaskCommandHandler
from .delete_task_command import DeleteTaskCommand, DeleteTaskCommandHandler
from .update_task_command import MergeTaskCommand, MergeTaskCommandHandler, UpdateTaskCommand, UpdateTaskCommandHandler

__all__ = [
    "CreateTaskCommand",
    "CreateTaskCommandHandler",
    "UpdateTaskCommand",
    "UpdateTaskCommandHandler",
    "MergeTaskCommand",
    "MergeTaskCommandHandler",
    "DeleteTaskCommand",
    "DeleteTaskCommandHandler",
    "AddTransactionIntoTaskCommand",
    "AddTransactionIntoTaskCommandHandler",
    "AddMessageIntoTransactionCommand",
    "AddMessageIntoTransactionCommandHandler",
]
