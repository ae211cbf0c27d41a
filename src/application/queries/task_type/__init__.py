"""Task type queries."""

from .get_task_type_by_id_query import GetTaskTypeByIdQuery, GetTaskTypeByIdQueryHandler
from .get_task_types_page_query import GetTaskTypesPageQuery, GetTaskTypesPageQueryHandler

__all__ = [
    "GetTaskTypeByIdQuery",
    "GetTaskTypeByIdQueryHandler",
    "GetTaskTypesPageQuery",
    "GetTaskTypesPageQueryHandler",
]
