"""Construction of MongoDB filters, sorts and pages."""

from .page_queries import create_messages_page_query, create_task_transactions_page_query, create_task_types_page_query, create_tasks_page_query
from .pagination import create_unwind_pipeline, retrieve_page, retrieve_unwound_page
from .query_builder import QueryBuilder, equals_or_regex, is_regex
from .sort_builder import (
    BAD_ORDER,
    MESSAGES_INDEX,
    TRANSACTIONS_INDEX,
    SortSpecBuilder,
    UnwoundSortSpecBuilder,
    create_messages_page_sort,
    create_task_transactions_page_sort,
    create_task_types_page_sort,
    create_tasks_page_sort,
)

__all__ = [
    # Filters
    "QueryBuilder",
    "equals_or_regex",
    "is_regex",
    "create_tasks_page_query",
    "create_task_transactions_page_query",
    "create_messages_page_query",
    "create_task_types_page_query",
    # Sorts
    "BAD_ORDER",
    "TRANSACTIONS_INDEX",
    "MESSAGES_INDEX",
    "SortSpecBuilder",
    "UnwoundSortSpecBuilder",
    "create_tasks_page_sort",
    "create_task_types_page_sort",
    "create_task_transactions_page_sort",
    "create_messages_page_sort",
    # Pages
    "retrieve_page",
    "retrieve_unwound_page",
    "create_unwind_pipeline",
]
