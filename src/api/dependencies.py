"""FastAPI helpers for the query parameters of the paginated searches.

List parameters (``order``, ``goalKeywords``, ``keywords``) are received as a
single comma separated value, like ``order=-creationTs,goalName``.
"""

from typing import Optional


def split_list(value: Optional[str]) -> Optional[list[str]]:
    """Split a comma separated query parameter.

    Returns ``None`` when the parameter is missing or blank. Blank elements
    are kept, so the filters can reject them.
    """
    if value is None or not value.strip():
        return None
    return [element.strip() for element in value.split(",")]


def split_order(value: Optional[str]) -> list[str]:
    return split_list(value) or []
