"""Get task by ID query with handler."""

from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from domain.exceptions import NotFoundError
from domain.models import Task
from domain.repositories import TaskRepository


@dataclass
class GetTaskByIdQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve a single task, with its transactions and messages."""

    task_id: str


class GetTaskByIdQueryHandler(QueryHandler[GetTaskByIdQuery, OperationResult[dict[str, Any]]]):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: GetTaskByIdQuery) -> OperationResult[dict[str, Any]]:
        try:
            task = await self.task_repository.search_task(request.task_id)
        except NotFoundError:
            return self.not_found(Task, request.task_id)

        return self.ok(task.to_dict())
