"""Domain models of the task manager.

Plain dataclasses that serialize to (``to_dict``) and from (``from_dict``)
the camelCase documents used both on the wire and in MongoDB.
"""

from .documents import compact, merge_documents
from .page import MessagesPage, Page, TasksPage, TaskTransactionsPage, TaskTypesPage
from .task import Message, Task, TaskGoal, TaskTransaction
from .task_type import TaskType

__all__ = [
    "compact",
    "merge_documents",
    # Tasks
    "Task",
    "TaskGoal",
    "TaskTransaction",
    "Message",
    # Task types
    "TaskType",
    # Pages
    "Page",
    "TasksPage",
    "TaskTransactionsPage",
    "MessagesPage",
    "TaskTypesPage",
]
