"""Profiles API controller."""

from classy_fastapi.decorators import delete
from fastapi import Path
from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.mvc import ControllerBase

from application.commands import DeleteProfileCommand


class ProfilesController(ControllerBase):
    """Controller notified when a profile is deleted from the platform."""

    def __init__(self, service_provider: ServiceProviderBase, mapper: Mapper, mediator: Mediator):
        super().__init__(service_provider, mapper, mediator)

    @delete("/{profile_id}")
    async def delete_profile(self, profile_id: str = Path(..., description="The identifier of the profile to delete its information")):
        """Delete the tasks requested by the profile and the messages sent to it."""
        return self.process(await self.mediator.execute_async(DeleteProfileCommand(profile_id=profile_id)))
