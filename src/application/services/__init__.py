"""Application services package."""

from .logger import configure_logging

__all__ = [
    "configure_logging",
]
