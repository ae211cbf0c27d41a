"""Get tasks page query with handler."""

from dataclasses import dataclass, field
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.queries.page_query_base import PageQueryHandlerBase, search_filters
from domain.exceptions import ValidationError
from domain.repositories import TaskRepository
from integration.query import create_tasks_page_query, create_tasks_page_sort


@dataclass
class GetTasksPageQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve a page of the tasks that match some conditions.

    The string conditions match exactly, or as a regular expression when
    the value is enclosed between ``/``. Time ranges are inclusive.
    """

    app_id: str | None = None
    requester_id: str | None = None
    task_type_id: str | None = None
    goal_name: str | None = None
    goal_description: str | None = None
    goal_keywords: list[str] | None = None
    creation_from: int | None = None
    creation_to: int | None = None
    update_from: int | None = None
    update_to: int | None = None
    has_close_ts: bool | None = None
    """Whether the tasks have to be closed (True) or open (False)."""

    close_from: int | None = None
    close_to: int | None = None
    order: list[str] = field(default_factory=list)
    """Sort keys, optionally prefixed with '+' (ascending) or '-' (descending)."""

    offset: int = 0
    limit: int = 10


class GetTasksPageQueryHandler(PageQueryHandlerBase, QueryHandler[GetTasksPageQuery, OperationResult[dict[str, Any]]]):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: GetTasksPageQuery) -> OperationResult[dict[str, Any]]:
        try:
            query = create_tasks_page_query(**search_filters(request))
            sort = create_tasks_page_sort(request.order)
        except ValidationError as e:
            return self.invalid_page_request(e)

        page = await self.task_repository.retrieve_tasks_page(query, sort, request.offset, request.limit)
        return self.ok(page.to_dict())
