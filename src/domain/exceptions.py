"""Domain error taxonomy for the task manager.

Repositories raise these errors and the command/query handlers translate
them into ``OperationResult`` responses. Driver failures
(``pymongo.errors.PyMongoError``) are not wrapped and propagate unchanged.
"""

from typing import Any


class TaskManagerError(Exception):
    """Base error raised by the task manager persistence layer.

    Attributes:
        message: Human-readable error message
        error_code: Stable machine-readable code (e.g. ``bad_order``)
    """

    default_code = "task_manager_error"

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {"code": self.error_code, "message": self.message}

    def __str__(self) -> str:
        return f"{self.message} [{self.error_code}]"


class NotFoundError(TaskManagerError):
    """The task, transaction or task type to operate on does not exist."""

    default_code = "not_found"


class ConflictError(TaskManagerError):
    """A document with the same identifier is already stored."""

    default_code = "duplicated_id"


class ValidationError(TaskManagerError):
    """A search or sort parameter is not valid."""

    default_code = "bad_request"


class SerializationError(TaskManagerError):
    """A model cannot be converted to or from its storage representation."""

    default_code = "bad_serialization"
