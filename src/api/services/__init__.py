"""API services package."""

from .openapi_config import configure_api_openapi

__all__ = [
    "configure_api_openapi",
]
