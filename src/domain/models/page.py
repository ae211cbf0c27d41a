"""Pages returned by the paginated searches.

The wire shape is ``{"offset": int, "total": int, <items>: list | None}``.
The items are ``None`` (not an empty list) when the page is empty.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from .task import Message, Task, TaskTransaction
from .task_type import TaskType

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """A window over the models that match a search."""

    items_field: ClassVar[str] = "items"

    offset: int = 0
    total: int = 0
    items: list[T] | None = None

    def to_dict(self) -> dict[str, Any]:
        items = [item.to_dict() for item in self.items] if self.items else None  # type: ignore[attr-defined]
        return {"offset": self.offset, "total": self.total, self.items_field: items}


@dataclass
class TasksPage(Page[Task]):
    items_field: ClassVar[str] = "tasks"


@dataclass
class TaskTransactionsPage(Page[TaskTransaction]):
    items_field: ClassVar[str] = "transactions"


@dataclass
class MessagesPage(Page[Message]):
    items_field: ClassVar[str] = "messages"


@dataclass
class TaskTypesPage(Page[TaskType]):
    items_field: ClassVar[str] = "taskTypes"
