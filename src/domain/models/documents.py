"""Helpers shared by the document-backed models."""

import copy
from typing import Any

from domain.exceptions import SerializationError


def compact(document: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the document without the ``None`` valued fields.

    Absent fields are meaningful for the store (``$exists`` filters on
    ``closeTs``, the ``messages: null`` element filter), so models never
    write explicit nulls.
    """
    return {key: value for key, value in document.items() if value is not None}


def ensure_document(value: Any, model_name: str) -> dict[str, Any]:
    """Check that the raw value can be decoded as a model."""
    if not isinstance(value, dict):
        raise SerializationError(f"Cannot decode a {model_name} from {type(value).__name__}", f"bad_{model_name}")
    return value


def ensure_list(value: Any, field_name: str) -> list[Any] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise SerializationError(f"The '{field_name}' field must be an array", f"bad_{field_name}")
    return value


def ensure_map(value: Any, field_name: str) -> dict[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise SerializationError(f"The '{field_name}' field must be an object", f"bad_{field_name}")
    return value


def merge_documents(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge ``source`` over ``target`` without touching either of them.

    Nested objects are merged recursively, any other value replaces the
    target one, and ``None`` values in the source keep the target value.
    """
    merged = copy.deepcopy(target)
    for key, value in source.items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_documents(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
