"""Messages API controller."""

from classy_fastapi.decorators import get
from fastapi import Query
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase

from api.dependencies import split_list, split_order
from application.queries import GetMessagesPageQuery


class MessagesController(ControllerBase):
    """Controller to search the messages sent by the transactions of the tasks."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @get("/")
    async def get_messages_page(
        self,
        app_id: str | None = Query(None, alias="appId"),
        requester_id: str | None = Query(None, alias="requesterId"),
        task_type_id: str | None = Query(None, alias="taskTypeId"),
        goal_name: str | None = Query(None, alias="goalName"),
        goal_description: str | None = Query(None, alias="goalDescription"),
        goal_keywords: str | None = Query(None, alias="goalKeywords"),
        task_creation_from: int | None = Query(None, alias="taskCreationFrom"),
        task_creation_to: int | None = Query(None, alias="taskCreationTo"),
        task_update_from: int | None = Query(None, alias="taskUpdateFrom"),
        task_update_to: int | None = Query(None, alias="taskUpdateTo"),
        has_close_ts: bool | None = Query(None, alias="hasCloseTs"),
        close_from: int | None = Query(None, alias="closeFrom"),
        close_to: int | None = Query(None, alias="closeTo"),
        task_id: str | None = Query(None, alias="taskId"),
        transaction_id: str | None = Query(None, alias="transactionId"),
        transaction_label: str | None = Query(None, alias="transactionLabel"),
        transaction_actioneer_id: str | None = Query(None, alias="transactionActioneerId"),
        transaction_creation_from: int | None = Query(None, alias="transactionCreationFrom"),
        transaction_creation_to: int | None = Query(None, alias="transactionCreationTo"),
        transaction_update_from: int | None = Query(None, alias="transactionUpdateFrom"),
        transaction_update_to: int | None = Query(None, alias="transactionUpdateTo"),
        receiver_id: str | None = Query(None, alias="receiverId"),
        label: str | None = Query(None),
        order: str | None = Query(None),
        offset: int = Query(0, ge=0),
        limit: int = Query(10, ge=0),
    ):
        """Get the page of the messages, of any task transaction, that match the conditions."""
        query = GetMessagesPageQuery(
            app_id=app_id,
            requester_id=requester_id,
            task_type_id=task_type_id,
            goal_name=goal_name,
            goal_description=goal_description,
            goal_keywords=split_list(goal_keywords),
            task_creation_from=task_creation_from,
            task_creation_to=task_creation_to,
            task_update_from=task_update_from,
            task_update_to=task_update_to,
            has_close_ts=has_close_ts,
            close_from=close_from,
            close_to=close_to,
            task_id=task_id,
            transaction_id=transaction_id,
            transaction_label=transaction_label,
            transaction_actioneer_id=transaction_actioneer_id,
            transaction_creation_from=transaction_creation_from,
            transaction_creation_to=transaction_creation_to,
            transaction_update_from=transaction_update_from,
            transaction_update_to=transaction_update_to,
            receiver_id=receiver_id,
            label=label,
            order=split_order(order),
            offset=offset,
            limit=limit,
        )
        return self.process(await self.mediator.execute_async(query))
