"""Integration layer repositories package.

Contains the MongoDB implementations of the abstract repositories defined
in domain/repositories/, registered through MotorRepository.configure().
"""

from .motor_repository_base import MotorRepositoryBase
from .motor_task_repository import TASKS_COLLECTION, MotorTaskRepository
from .motor_task_type_repository import TASK_TYPES_COLLECTION, MotorTaskTypeRepository

__all__ = [
    "MotorRepositoryBase",
    "MotorTaskRepository",
    "MotorTaskTypeRepository",
    "TASKS_COLLECTION",
    "TASK_TYPES_COLLECTION",
]
