"""Get task type by ID query with handler."""

from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from domain.exceptions import NotFoundError
from domain.models import TaskType
from domain.repositories import TaskTypeRepository


@dataclass
class GetTaskTypeByIdQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve a single task type."""

    task_type_id: str


class GetTaskTypeByIdQueryHandler(QueryHandler[GetTaskTypeByIdQuery, OperationResult[dict[str, Any]]]):
    def __init__(self, task_type_repository: TaskTypeRepository):
        super().__init__()
        self.task_type_repository = task_type_repository

    async def handle_async(self, request: GetTaskTypeByIdQuery) -> OperationResult[dict[str, Any]]:
        try:
            task_type = await self.task_type_repository.search_task_type(request.task_type_id)
        except NotFoundError:
            return self.not_found(TaskType, request.task_type_id)

        return self.ok(task_type.to_dict())
