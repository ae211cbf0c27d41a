"""Task queries."""

from .get_messages_page_query import GetMessagesPageQuery, GetMessagesPageQueryHandler
from .get_task_by_id_query import GetTaskByIdQuery, GetTaskByIdQueryHandler
from .get_task_transactions_page_query import GetTaskTransactionsPageQuery, GetTaskTransactionsPageQueryHandler
from .get_tasks_page_query import GetTasksPageQuery, GetTasksPageQueryHandler

__all__ = [
    "GetTaskByIdQuery",
    "GetTaskByIdQueryHandler",
    "GetTasksPageQuery",
    "GetTasksPageQueryHandler",
    "GetTaskTransactionsPageQuery",
    "GetTaskTransactionsPageQueryHandler",
    "GetMessagesPageQuery",
    "GetMessagesPageQueryHandler",
]
