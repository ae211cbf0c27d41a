"""Tasks API controller."""

from typing import Any

from classy_fastapi.decorators import delete, get, patch, post, put
from fastapi import Body, Query
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase

from api.dependencies import split_list, split_order
from application.commands import AddMessageIntoTransactionCommand, AddTransactionIntoTaskCommand, CreateTaskCommand, DeleteTaskCommand, MergeTaskCommand, UpdateTaskCommand
from application.queries import GetTaskByIdQuery, GetTasksPageQuery, GetTaskTransactionsPageQuery


class TasksController(ControllerBase):
    """Controller for the tasks, and the transactions done over them."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @get("/")
    async def get_tasks_page(
        self,
        app_id: str | None = Query(None, alias="appId"),
        requester_id: str | None = Query(None, alias="requesterId"),
        task_type_id: str | None = Query(None, alias="taskTypeId"),
        goal_name: str | None = Query(None, alias="goalName"),
        goal_description: str | None = Query(None, alias="goalDescription"),
        goal_keywords: str | None = Query(None, alias="goalKeywords"),
        creation_from: int | None = Query(None, alias="creationFrom"),
        creation_to: int | None = Query(None, alias="creationTo"),
        update_from: int | None = Query(None, alias="updateFrom"),
        update_to: int | None = Query(None, alias="updateTo"),
        has_close_ts: bool | None = Query(None, alias="hasCloseTs"),
        close_from: int | None = Query(None, alias="closeFrom"),
        close_to: int | None = Query(None, alias="closeTo"),
        order: str | None = Query(None),
        offset: int = Query(0, ge=0),
        limit: int = Query(10, ge=0),
    ):
        """Get the page of the tasks that match the conditions.

        String values enclosed between '/' are matched as regular expressions.
        """
        query = GetTasksPageQuery(
            app_id=app_id,
            requester_id=requester_id,
            task_type_id=task_type_id,
            goal_name=goal_name,
            goal_description=goal_description,
            goal_keywords=split_list(goal_keywords),
            creation_from=creation_from,
            creation_to=creation_to,
            update_from=update_from,
            update_to=update_to,
            has_close_ts=has_close_ts,
            close_from=close_from,
            close_to=close_to,
            order=split_order(order),
            offset=offset,
            limit=limit,
        )
        return self.process(await self.mediator.execute_async(query))

    @post("/")
    async def create_task(self, task: Any = Body(...)):
        """Create a new task."""
        return self.process(await self.mediator.execute_async(CreateTaskCommand(task=task)))

    @get("/transactions")
    async def get_task_transactions_page(
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
        label: str | None = Query(None),
        actioneer_id: str | None = Query(None, alias="actioneerId"),
        creation_from: int | None = Query(None, alias="creationFrom"),
        creation_to: int | None = Query(None, alias="creationTo"),
        update_from: int | None = Query(None, alias="updateFrom"),
        update_to: int | None = Query(None, alias="updateTo"),
        order: str | None = Query(None),
        offset: int = Query(0, ge=0),
        limit: int = Query(10, ge=0),
    ):
        """Get the page of the transactions, of any task, that match the conditions."""
        query = GetTaskTransactionsPageQuery(
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
            label=label,
            actioneer_id=actioneer_id,
            creation_from=creation_from,
            creation_to=creation_to,
            update_from=update_from,
            update_to=update_to,
            order=split_order(order),
            offset=offset,
            limit=limit,
        )
        return self.process(await self.mediator.execute_async(query))

    @get("/{task_id}")
    async def get_task(self, task_id: str):
        """Get a single task, with its transactions and messages."""
        return self.process(await self.mediator.execute_async(GetTaskByIdQuery(task_id=task_id)))

    @put("/{task_id}")
    async def update_task(self, task_id: str, task: Any = Body(...)):
        """Replace the values of a task. Its transactions are not modified."""
        return self.process(await self.mediator.execute_async(UpdateTaskCommand(task_id=task_id, task=task)))

    @patch("/{task_id}")
    async def merge_task(self, task_id: str, task: Any = Body(...)):
        """Modify only the values of a task present in the body."""
        return self.process(await self.mediator.execute_async(MergeTaskCommand(task_id=task_id, task=task)))

    @delete("/{task_id}")
    async def delete_task(self, task_id: str):
        return self.process(await self.mediator.execute_async(DeleteTaskCommand(task_id=task_id)))

    @post("/{task_id}/transactions")
    async def add_transaction_into_task(self, task_id: str, transaction: Any = Body(...)):
        """Add a transaction into a task.

        The identifier of the transaction is its position in the task.
        """
        command = AddTransactionIntoTaskCommand(task_id=task_id, transaction=transaction)
        return self.process(await self.mediator.execute_async(command))

    @post("/{task_id}/transactions/{transaction_id}/messages")
    async def add_message_into_transaction(self, task_id: str, transaction_id: str, message: Any = Body(...)):
        """Add a message into a transaction of a task."""
        command = AddMessageIntoTransactionCommand(task_id=task_id, transaction_id=transaction_id, message=message)
        return self.process(await self.mediator.execute_async(command))
