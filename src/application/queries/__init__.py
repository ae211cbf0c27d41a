"""Application queries package.

Queries are organized by entity:
- task/: Tasks, and the pages of their transactions and messages
- task_type/: Task types
- help/: Information about the API implementation
"""

from .task import (
    GetMessagesPageQuery,
    GetMessagesPageQueryHandler,
    GetTaskByIdQuery,
    GetTaskByIdQueryHandler,
    GetTasksPageQuery,
    GetTasksPageQueryHandler,
    GetTaskTransactionsPageQuery,
    GetTaskTransactionsPageQueryHandler,
)
from .help import GetApiInfoQuery, GetApiInfoQueryHandler, GetVersionQuery, GetVersionQueryHandler
from .task_type import GetTaskTypeByIdQuery, GetTaskTypeByIdQueryHandler, GetTaskTypesPageQuery, GetTaskTypesPageQueryHandler

__all__ = [
    # Task
    "GetTaskByIdQuery",
    "GetTaskByIdQueryHandler",
    "GetTasksPageQuery",
    "GetTasksPageQueryHandler",
    "GetTaskTransactionsPageQuery",
    "GetTaskTransactionsPageQueryHandler",
    "GetMessagesPageQuery",
    "GetMessagesPageQueryHandler",
    # TaskType
    "GetTaskTypeByIdQuery",
    "GetTaskTypeByIdQueryHandler",
    "GetTaskTypesPageQuery",
    "GetTaskTypesPageQueryHandler",
    # Help
    "GetApiInfoQuery",
    "GetApiInfoQueryHandler",
    "GetVersionQuery",
    "GetVersionQueryHandler",
]
