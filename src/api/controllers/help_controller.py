"""Help and versions API controllers."""

from classy_fastapi.decorators import get
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase

from application.queries import GetApiInfoQuery, GetVersionQuery


class HelpController(ControllerBase):
    """Controller for the information about the API."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @get("/info")
    async def get_info(self):
        """Get the name, versions, vendor and license of the API implementation."""
        return self.process(await self.mediator.execute_async(GetApiInfoQuery()))


class VersionsController(ControllerBase):
    """Controller for the versions of the API, as published by the first releases."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @get("/")
    async def get_version(self):
        return self.process(await self.mediator.execute_async(GetVersionQuery()))
