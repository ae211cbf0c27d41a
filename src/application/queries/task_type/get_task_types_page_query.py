"""Get task types page query with handler."""

from dataclasses import dataclass, field
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.queries.page_query_base import PageQueryHandlerBase, search_filters
from domain.exceptions import ValidationError
from domain.repositories import TaskTypeRepository
from integration.query import create_task_types_page_query, create_task_types_page_sort


@dataclass
class GetTaskTypesPageQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve a page of the task types that match some conditions."""

    name: str | None = None
    description: str | None = None
    keywords: list[str] | None = None
    order: list[str] = field(default_factory=list)
    offset: int = 0
    limit: int = 10


class GetTaskTypesPageQueryHandler(PageQueryHandlerBase, QueryHandler[GetTaskTypesPageQuery, OperationResult[dict[str, Any]]]):
    def __init__(self, task_type_repository: TaskTypeRepository):
        super().__init__()
        self.task_type_repository = task_type_repository

    async def handle_async(self, request: GetTaskTypesPageQuery) -> OperationResult[dict[str, Any]]:
        try:
            query = create_task_types_page_query(**search_filters(request))
            sort = create_task_types_page_sort(request.order)
        except ValidationError as e:
            return self.invalid_page_request(e)

        page = await self.task_type_repository.retrieve_task_types_page(query, sort, request.offset, request.limit)
        return self.ok(page.to_dict())
