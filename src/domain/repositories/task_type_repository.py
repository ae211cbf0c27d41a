"""Abstract repository for the task types."""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from domain.models import TaskType, TaskTypesPage


class TaskTypeRepository(ABC):
    """Persistence of the task types.

    Unlike the tasks, a task type keeps the time stamps that it has when it
    is stored, and only the missing ones are set to the current time.
    """

    @abstractmethod
    async def search_task_type(self, task_type_id: str) -> TaskType:
        pass

    @abstractmethod
    async def store_task_type(self, task_type: TaskType) -> TaskType:
        pass

    @abstractmethod
    async def update_task_type(self, task_type: TaskType) -> None:
        pass

    @abstractmethod
    async def delete_task_type(self, task_type_id: str) -> None:
        pass

    @abstractmethod
    async def retrieve_task_types_page(self, query: Mapping[str, Any], sort: Mapping[str, int] | None, offset: int, limit: int) -> TaskTypesPage:
        pass

    @abstractmethod
    async def migrate_documents_to_current_version(self) -> int:
        """Upgrade the stored task types to the current schema and return how many were rewritten."""
        pass
