"""Shared parts of the queries that return a page of models."""

from dataclasses import fields
from typing import Any

from neuroglia.core import OperationResult

from domain.exceptions import TaskManagerError

# Fields of a page query that are not part of the search filter
PAGING_FIELDS = ("order", "offset", "limit")


def search_filters(query: Any) -> dict[str, Any]:
    """Return the filter values of a page query, keyed as the filter factory arguments."""
    return {field.name: getattr(query, field.name) for field in fields(query) if field.name not in PAGING_FIELDS}


class PageQueryHandlerBase:
    """Base class of the handlers that return a page, combined with a neuroglia ``QueryHandler``."""

    def invalid_page_request(self, error: TaskManagerError) -> OperationResult:
        return self.bad_request(str(error))  # type: ignore[attr-defined]
