"""API controllers package."""

from .help_controller import HelpController, VersionsController
from .messages_controller import MessagesController
from .profiles_controller import ProfilesController
from .task_types_controller import TaskTypesController
from .tasks_controller import TasksController

__all__ = [
    "TasksController",
    "MessagesController",
    "TaskTypesController",
    "ProfilesController",
    "HelpController",
    "VersionsController",
]
