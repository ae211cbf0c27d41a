"""Domain repositories package.

Contains abstract repository interfaces.
Implementations are in src/integration/repositories/.
"""

from .task_repository import TaskRepository
from .task_type_repository import TaskTypeRepository

__all__: list[str] = [
    "TaskRepository",
    "TaskTypeRepository",
]
