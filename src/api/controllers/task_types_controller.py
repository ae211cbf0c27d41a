"""Task types API controller."""

from typing import Any

from classy_fastapi.decorators import delete, get, patch, post, put
from classy_fastapi.routable import Routable
from fastapi import Body, Query
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase
from neuroglia.mvc.controller_base import generate_unique_id_function

from api.dependencies import split_list, split_order
from application.commands import CreateTaskTypeCommand, DeleteTaskTypeCommand, MergeTaskTypeCommand, UpdateTaskTypeCommand
from application.queries import GetTaskTypeByIdQuery, GetTaskTypesPageQuery


class TaskTypesController(ControllerBase):
    """Controller for the task types."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        self.service_provider = service_provider
        self.mapper = mapper
        self.mediator = mediator
        self.name = "TaskTypes"

        # Routes are published as /taskTypes, not the lowercase controller name
        Routable.__init__(
            self,
            prefix="/taskTypes",
            tags=["TaskTypes"],
            generate_unique_id_function=generate_unique_id_function,
        )

    @get("/")
    async def get_task_types_page(
        self,
        name: str | None = Query(None),
        description: str | None = Query(None),
        keywords: str | None = Query(None),
        order: str | None = Query(None),
        offset: int = Query(0, ge=0),
        limit: int = Query(10, ge=0),
    ):
        """Get the page of the task types that match the conditions."""
        query = GetTaskTypesPageQuery(
            name=name,
            description=description,
            keywords=split_list(keywords),
            order=split_order(order),
            offset=offset,
            limit=limit,
        )
        return self.process(await self.mediator.execute_async(query))

    @post("/")
    async def create_task_type(self, task_type: Any = Body(...)):
        return self.process(await self.mediator.execute_async(CreateTaskTypeCommand(task_type=task_type)))

    @get("/{task_type_id}")
    async def get_task_type(self, task_type_id: str):
        return self.process(await self.mediator.execute_async(GetTaskTypeByIdQuery(task_type_id=task_type_id)))

    @put("/{task_type_id}")
    async def update_task_type(self, task_type_id: str, task_type: Any = Body(...)):
        command = UpdateTaskTypeCommand(task_type_id=task_type_id, task_type=task_type)
        return self.process(await self.mediator.execute_async(command))

    @patch("/{task_type_id}")
    async def merge_task_type(self, task_type_id: str, task_type: Any = Body(...)):
        command = MergeTaskTypeCommand(task_type_id=task_type_id, task_type=task_type)
        return self.process(await self.mediator.execute_async(command))

    @delete("/{task_type_id}")
    async def delete_task_type(self, task_type_id: str):
        return self.process(await self.mediator.execute_async(DeleteTaskTypeCommand(task_type_id=task_type_id)))
