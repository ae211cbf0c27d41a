"""Paginated searches over MongoDB collections.

Two kinds of pages are supported:

- root pages, a window over the documents of a collection that match a
  filter (one ``count_documents`` plus one windowed ``find``);
- unwound pages, a window over the elements of nested arrays, flattened
  with ``$unwind`` so that each element keeps the fields of the documents
  that contain it and can be filtered and sorted by them.
"""

import logging
from typing import Any, Callable, Mapping, Sequence, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection

from domain.models import Page

log = logging.getLogger(__name__)

P = TypeVar("P", bound=Page)

Mapper = Callable[[dict[str, Any]], Any]


def _is_empty_window(total: int, offset: int, limit: int) -> bool:
    return total == 0 or offset >= total or limit <= 0


async def retrieve_page(
    collection: AsyncIOMotorCollection,
    query: Mapping[str, Any],
    sort: Mapping[str, int] | None,
    offset: int,
    limit: int,
    page_type: type[P],
    mapper: Mapper,
) -> P:
    """Return the page of the documents that match the query.

    Args:
        collection: Collection to search
        query: Filter the documents have to match
        sort: Sort document, ``None`` to use the natural order
        offset: Index of the first document to return
        limit: Maximum number of documents to return
        page_type: Page class to create
        mapper: Converts each stored document into the page item
    """
    total = await collection.count_documents(dict(query))
    page = page_type(offset=offset, total=total)
    if _is_empty_window(total, offset, limit):
        return page

    cursor = collection.find(dict(query), skip=offset, limit=limit, sort=list(sort.items()) if sort else None)
    documents = await cursor.to_list(length=None)
    page.items = [mapper(document) for document in documents] or None
    return page


def create_unwind_pipeline(query: Mapping[str, Any], unwind: Sequence[tuple[str, str]]) -> list[dict[str, Any]]:
    """Return the stages that flatten the nested arrays and keep the matching elements.

    The query is applied before unwinding, to discard the root documents
    without any matching element, and again after it, to keep only the
    elements that match.

    Args:
        query: Filter over the root and the (dotted) nested fields
        unwind: The ``(array path, index field)`` of each nesting level,
            from the outer to the inner array
    """
    pipeline: list[dict[str, Any]] = [{"$match": dict(query)}]
    for path, index_field in unwind:
        pipeline.append({"$unwind": {"path": f"${path}", "includeArrayIndex": index_field, "preserveNullAndEmptyArrays": False}})
    pipeline.append({"$match": dict(query)})
    return pipeline


def _extract_element(document: dict[str, Any], path: str) -> dict[str, Any]:
    element: Any = document
    for name in path.split("."):
        element = element[name]
    return element


async def retrieve_unwound_page(
    collection: AsyncIOMotorCollection,
    query: Mapping[str, Any],
    sort: Mapping[str, int],
    offset: int,
    limit: int,
    unwind: Sequence[tuple[str, str]],
    page_type: type[P],
    mapper: Mapper,
) -> P:
    """Return the page of the nested array elements that match the query.

    The ``total`` of the page counts the flattened elements, not the root
    documents that contain them.
    """
    pipeline = create_unwind_pipeline(query, unwind)

    counted = await collection.aggregate([*pipeline, {"$count": "total"}]).to_list(length=None)
    total = counted[0]["total"] if counted else 0
    page = page_type(offset=offset, total=total)
    if _is_empty_window(total, offset, limit):
        return page

    pipeline.extend([{"$sort": dict(sort)}, {"$skip": offset}, {"$limit": limit}])
    log.debug(f"Retrieving unwound page with {pipeline}")
    documents = await collection.aggregate(pipeline).to_list(length=None)
    element_path = unwind[-1][0]
    page.items = [mapper(_extract_element(document, element_path)) for document in documents] or None
    return page
