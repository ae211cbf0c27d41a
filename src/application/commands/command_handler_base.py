import logging
import time
from typing import Any

from neuroglia.core import OperationResult

from domain.exceptions import ConflictError, NotFoundError, TaskManagerError

log = logging.getLogger(__name__)


class CommandHandlerBase:
    """Represents the base class for all services used to handle the Task Manager Commands.

    Must be combined with a neuroglia ``CommandHandler``, that provides the
    ``ok``/``created``/``not_found``/``bad_request``/``conflict`` results.
    """

    @staticmethod
    def now() -> int:
        """Gets the current time, in seconds since the UNIX epoch."""
        return int(time.time())

    @staticmethod
    def elapsed_ms(start_time: float) -> float:
        return (time.time() - start_time) * 1000

    def error_result(self, error: TaskManagerError, entity_type: type, key: Any = None) -> OperationResult:
        """Converts an error raised by a repository into the result of the command."""
        log.debug(f"Command over {entity_type.__name__} '{key}' failed: {error}")
        if isinstance(error, NotFoundError):
            return self.not_found(entity_type, key)  # type: ignore[attr-defined]
        if isinstance(error, ConflictError):
            return self.conflict(str(error))  # type: ignore[attr-defined]
        return self.bad_request(str(error))  # type: ignore[attr-defined]
