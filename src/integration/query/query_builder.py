"""Fluent builder of MongoDB filter documents.

Text values written between slashes (``/.*eat.*/``) are matched as regular
expressions, any other value has to be equal. Absent (``None``) values do not
add any condition, so they match anything.
"""

import copy
from typing import Any, Iterable

from domain.exceptions import ValidationError

REGEX_DELIMITER = "/"


def is_regex(value: str) -> bool:
    """Check if the value has to be matched as a regular expression."""
    return len(value) >= 2 and value.startswith(REGEX_DELIMITER) and value.endswith(REGEX_DELIMITER)


def equals_or_regex(value: str) -> Any:
    """Return the condition that matches the value exactly or as a regular expression."""
    if is_regex(value):
        return {"$regex": value[1:-1]}
    return value


class QueryBuilder:
    """Accumulates the conditions of a filter document.

    Each ``with_*`` method adds (or replaces) the condition of one field and
    returns the builder, so calls can be chained::

        query = QueryBuilder().with_equals_or_regex("appId", app_id).with_range("_creationTs", creation_from, creation_to).build()
    """

    def __init__(self) -> None:
        self._query: dict[str, Any] = {}

    def with_equals_or_regex(self, field: str, value: str | None) -> "QueryBuilder":
        """Add a condition to match a value exactly or as a ``/regex/``."""
        if value is not None:
            self._query[field] = equals_or_regex(value)
        return self

    def with_contains_equals_or_regex(self, field: str, values: Iterable[str | None] | None) -> "QueryBuilder":
        """Add a condition on an array field that has to contain all the values.

        Every value has to match (exactly or as a ``/regex/``) at least one
        element of the array.
        """
        if values is None:
            return self

        conditions: list[dict[str, Any]] = []
        for index, value in enumerate(values):
            if value is None or value == "":
                raise ValidationError(f"The value at '{index}' of '{field}' is not defined", f"bad_{field}[{index}]")
            if is_regex(value):
                conditions.append({"$elemMatch": {"$regex": value[1:-1]}})
            else:
                conditions.append({"$elemMatch": {"$eq": value}})

        if len(conditions) == 1:
            self._query[field] = conditions[0]
        elif conditions:
            self._query[field] = {"$all": conditions}
        return self

    def with_range(self, field: str, from_: int | float | None, to: int | float | None, exists: bool | None = None) -> "QueryBuilder":
        """Add a condition to match the values inside the closed range ``[from_, to]``.

        When ``exists`` is defined the same condition also requires the field
        to be (or not to be) defined.
        """
        condition: dict[str, Any] = {}
        if exists is not None:
            condition["$exists"] = exists
        if from_ is not None:
            condition["$gte"] = from_
        if to is not None:
            condition["$lte"] = to
        if condition:
            self._query[field] = condition
        return self

    def with_exists(self, field: str, exists: bool | None) -> "QueryBuilder":
        """Add a condition on whether the field is defined."""
        if exists is not None:
            self._query[field] = {"$exists": exists}
        return self

    def build(self) -> dict[str, Any]:
        """Return the filter document built so far."""
        return copy.deepcopy(self._query)
