"""Abstract repository for the tasks."""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from domain.models import Message, Task, TaskTransaction, TaskTransactionsPage, TasksPage, MessagesPage


class TaskRepository(ABC):
    """Persistence of the tasks, their transactions and their messages.

    The transactions and messages are stored embedded in the task, so they
    can only be appended through this repository. Every mutation of a task
    (including a message added to one of its transactions) updates the
    ``_lastUpdateTs`` of the task.

    Raises:
        NotFoundError: when the task (or transaction) to operate on does not exist
        ConflictError: when storing a task with an identifier already used
        SerializationError: when a task cannot be converted to a document
    """

    @abstractmethod
    async def search_task(self, task_id: str) -> Task:
        """Return the task associated to the identifier."""
        pass

    @abstractmethod
    async def store_task(self, task: Task) -> Task:
        """Store a new task and return it with its identifier and time stamps."""
        pass

    @abstractmethod
    async def update_task(self, task: Task) -> None:
        """Replace the stored values of a task, except its identifier and creation time."""
        pass

    @abstractmethod
    async def delete_task(self, task_id: str) -> None:
        """Remove a task."""
        pass

    @abstractmethod
    async def delete_all_tasks_with_requester(self, requester_id: str) -> list[str]:
        """Remove the tasks requested by a profile and return their identifiers."""
        pass

    @abstractmethod
    async def delete_all_messages_with_receiver(self, receiver_id: str) -> int:
        """Remove the messages sent to a profile and return how many tasks were modified."""
        pass

    @abstractmethod
    async def retrieve_tasks_page(self, query: Mapping[str, Any], sort: Mapping[str, int] | None, offset: int, limit: int) -> TasksPage:
        """Return the page of the tasks that match the query."""
        pass

    @abstractmethod
    async def add_transaction_into_task(self, task_id: str, transaction: TaskTransaction) -> TaskTransaction:
        """Append a transaction to a task and return it with its assigned identifier."""
        pass

    @abstractmethod
    async def add_message_into_transaction(self, task_id: str, transaction_id: str, message: Message) -> Message:
        """Append a message to a transaction of a task."""
        pass

    @abstractmethod
    async def retrieve_task_transactions_page(self, query: Mapping[str, Any], sort: Mapping[str, int], offset: int, limit: int) -> TaskTransactionsPage:
        """Return the page of the transactions, of any task, that match the query."""
        pass

    @abstractmethod
    async def retrieve_messages_page(self, query: Mapping[str, Any], sort: Mapping[str, int], offset: int, limit: int) -> MessagesPage:
        """Return the page of the messages, of any transaction, that match the query."""
        pass

    @abstractmethod
    async def migrate_documents_to_current_version(self) -> int:
        """Upgrade the stored tasks to the current schema and return how many were rewritten."""
        pass
