"""Application commands package.

This package organizes commands into semantic submodules by entity:
- task/: Task CRUD commands, and append of transactions and messages
- task_type/: TaskType CRUD commands
- profile/: Clean-up of the information of a deleted profile

All commands are re-exported here for Neuroglia framework auto-discovery.
"""

# Shared base class (stays in root)
from .command_handler_base import CommandHandlerBase

# Task commands
from .task import (
    AddMessageIntoTransactionCommand,
    AddMessageIntoTransactionCommandHandler,
    AddTransactionIntoTaskCommand,
    AddTransactionIntoTaskCommandHandler,
    CreateTaskCommand,
    CreateTaskCommandHandler,
    DeleteTaskCommand,
    DeleteTaskCommandHandler,
    MergeTaskCommand,
    MergeTaskCommandHandler,
    UpdateTaskCommand,
    UpdateTaskCommandHandler,
)

# TaskType commands
from .task_type import (
    CreateTaskTypeCommand,
    CreateTaskTypeCommandHandler,
    DeleteTaskTypeCommand,
    DeleteTaskTypeCommandHandler,
    MergeTaskTypeCommand,
    MergeTaskTypeCommandHandler,
    UpdateTaskTypeCommand,
    UpdateTaskTypeCommandHandler,
)

# Profile commands
from .profile import DeleteProfileCommand, DeleteProfileCommandHandler

__all__ = [
    "CommandHandlerBase",
    # Task
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
    # TaskType
    "CreateTaskTypeCommand",
    "CreateTaskTypeCommandHandler",
    "UpdateTaskTypeCommand",
    "UpdateTaskTypeCommandHandler",
    "MergeTaskTypeCommand",
    "MergeTaskTypeCommandHandler",
    "DeleteTaskTypeCommand",
    "DeleteTaskTypeCommandHandler",
    # Profile
    "DeleteProfileCommand",
    "DeleteProfileCommandHandler",
]
