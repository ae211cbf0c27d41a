"""Get task transactions page query with handler."""

from dataclasses import dataclass, field
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.queries.page_query_base import PageQueryHandlerBase, search_filters
from domain.exceptions import ValidationError
from domain.repositories import TaskRepository
from integration.query import create_task_transactions_page_query, create_task_transactions_page_sort


@dataclass
class GetTaskTransactionsPageQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve a page of the transactions, of any task, that match some conditions.

    The ``task_*`` and goal conditions apply to the task that contains the
    transaction, and the others to the transaction itself.
    """

    app_id: str | None = None
    requester_id: str | None = None
    task_type_id: str | None = None
    goal_name: str | None = None
    goal_description: str | None = None
    goal_keywords: list[str] | None = None
    task_creation_from: int | None = None
    task_creation_to: int | None = None
    task_update_from: int | None = None
    task_update_to: int | None = None
    has_close_ts: bool | None = None
    close_from: int | None = None
    close_to: int | None = None
    task_id: str | None = None
    label: str | None = None
    actioneer_id: str | None = None
    creation_from: int | None = None
    creation_to: int | None = None
    update_from: int | None = None
    update_to: int | None = None
    order: list[str] = field(default_factory=list)
    offset: int = 0
    limit: int = 10


class GetTaskTransactionsPageQueryHandler(PageQueryHandlerBase, QueryHandler[GetTaskTransactionsPageQuery, OperationResult[dict[str, Any]]]):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: GetTaskTransactionsPageQuery) -> OperationResult[dict[str, Any]]:
        try:
            query = create_task_transactions_page_query(**search_filters(request))
            sort = create_task_transactions_page_sort(request.order)
        except ValidationError as e:
            return self.invalid_page_request(e)

        page = await self.task_repository.retrieve_task_transactions_page(query, sort, request.offset, request.limit)
        return self.ok(page.to_dict())
