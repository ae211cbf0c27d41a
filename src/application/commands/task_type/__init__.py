"""Task type commands."""

from .create_task_type_command import CreateTaskTypeCommand, CreateTaskTypeCommandHandler
from .delete_task_type_command import DeleteTaskTypeCommand, DeleteTaskTypeCommandHandler
from .update_task_type_command import MergeTaskTypeCommand, MergeTaskTypeCommandHandler, UpdateTaskTypeCommand, UpdateTaskTypeCommandHandler

__all__ = [
    "CreateTaskTypeCommand",
    "CreateTaskTypeCommandHandler",
    "UpdateTaskTypeCommand",
    "UpdateTaskTypeCommandHandler",
    "MergeTaskTypeCommand",
    "MergeTaskTypeCommandHandler",
    "DeleteTaskTypeCommand",
    "DeleteTaskTypeCommandHandler",
]
