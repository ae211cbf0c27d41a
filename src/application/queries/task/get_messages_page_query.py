"""Get messages page query with handler."""

from dataclasses import dataclass, field
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.queries.page_query_base import PageQueryHandlerBase, search_filters
from domain.exceptions import ValidationError
from domain.repositories import TaskRepository
from integration.query import create_messages_page_query, create_messages_page_sort


@dataclass
class GetMessagesPageQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve a page of the messages, of any task transaction, that match some conditions."""

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
    transaction_id: str | None = None
    transaction_label: str | None = None
    transaction_actioneer_id: str | None = None
    transaction_creation_from: int | None = None
    transaction_creation_to: int | None = None
    transaction_update_from: int | None = None
    transaction_update_to: int | None = None
    receiver_id: str | None = None
    label: str | None = None
    order: list[str] = field(default_factory=list)
    offset: int = 0
    limit: int = 10


class GetMessagesPageQueryHandler(PageQueryHandlerBase, QueryHandler[GetMessagesPageQuery, OperationResult[dict[str, Any]]]):
    def __init__(self, task_repository: TaskRepository):
        super().__init__()
        self.task_repository = task_repository

    async def handle_async(self, request: GetMessagesPageQuery) -> OperationResult[dict[str, Any]]:
        try:
            query = create_messages_page_query(**search_filters(request))
            sort = create_messages_page_sort(request.order)
        except ValidationError as e:
            return self.invalid_page_request(e)

        page = await self.task_repository.retrieve_messages_page(query, sort, request.offset, request.limit)
        return self.ok(page.to_dict())
