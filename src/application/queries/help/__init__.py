"""Help queries: information about the API implementation."""

from .get_api_info_query import GetApiInfoQuery, GetApiInfoQueryHandler, GetVersionQuery, GetVersionQueryHandler

__all__ = [
    "GetApiInfoQuery",
    "GetApiInfoQueryHandler",
    "GetVersionQuery",
    "GetVersionQueryHandler",
]
