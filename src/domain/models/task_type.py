"""TaskType model."""

from dataclasses import dataclass
from typing import Any

from .documents import compact, ensure_document, ensure_list, ensure_map


@dataclass
class TaskType:
    """Describes the norms and the transactions that a kind of task accepts.

    ``transactions`` maps each transaction label to its description and the
    properties (JSON schema like) of the transaction attributes.
    """

    id: str | None = None
    name: str | None = None
    description: str | None = None
    keywords: list[str] | None = None
    norms: list[Any] | None = None
    attributes: dict[str, Any] | None = None
    transactions: dict[str, Any] | None = None
    callbacks: dict[str, Any] | None = None
    creation_ts: int | None = None
    last_update_ts: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "id": self.id,
                "name": self.name,
                "description": self.description,
                "keywords": list(self.keywords) if self.keywords is not None else None,
                "norms": self.norms,
                "attributes": self.attributes,
                "transactions": self.transactions,
                "callbacks": self.callbacks,
                "_creationTs": self.creation_ts,
                "_lastUpdateTs": self.last_update_ts,
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> "TaskType":
        data = ensure_document(data, "taskType")
        return cls(
            id=data.get("id", data.get("_id")),
            name=data.get("name"),
            description=data.get("description"),
            keywords=ensure_list(data.get("keywords"), "keywords"),
            norms=ensure_list(data.get("norms"), "norms"),
            attributes=ensure_map(data.get("attributes"), "attributes"),
            transactions=ensure_map(data.get("transactions"), "transactions"),
            callbacks=ensure_map(data.get("callbacks"), "callbacks"),
            creation_ts=data.get("_creationTs"),
            last_update_ts=data.get("_lastUpdateTs"),
        )
