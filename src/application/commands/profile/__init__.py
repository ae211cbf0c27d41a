"""Profile commands: clean-up of the information of the deleted profiles."""

from .delete_profile_command import DeleteProfileCommand, DeleteProfileCommandHandler

__all__ = [
    "DeleteProfileCommand",
    "DeleteProfileCommandHandler",
]
