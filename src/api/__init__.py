"""API layer package.

This package contains:
- Controllers: REST endpoints of the tasks, messages, task types, profiles and help using Neuroglia ControllerBase
- Dependencies: parsing of the list query parameters
- Services: OpenAPI configuration
"""

from .controllers import HelpController, MessagesController, ProfilesController, TasksController, TaskTypesController, VersionsController

__all__ = [
    "HelpController",
    "ProfilesController",
    "VersionsController",
    "MessagesController",
    "TaskTypesController",
    "TasksController",
]
