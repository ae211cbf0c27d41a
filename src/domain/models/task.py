"""Task, TaskTransaction and Message models.

A task is a root document of the ``tasks`` collection. Its transactions are
embedded in the ``transactions`` array, and every transaction embeds the
messages sent while doing it. Transactions are identified by their position
in the array ("0", "1", ...), messages only by their position inside the
transaction.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .documents import compact, ensure_document, ensure_list, ensure_map


@dataclass
class TaskGoal:
    """The goal that the requester wants to achieve with a task."""

    name: str | None = None
    description: str | None = None
    keywords: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "name": self.name,
                "description": self.description,
                "keywords": list(self.keywords) if self.keywords is not None else None,
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> "TaskGoal":
        data = ensure_document(data, "goal")
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            keywords=ensure_list(data.get("keywords"), "keywords"),
        )


@dataclass
class Message:
    """A message sent to a user as a consequence of a task transaction."""

    app_id: str | None = None
    receiver_id: str | None = None
    label: str | None = None
    attributes: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "appId": self.app_id,
                "receiverId": self.receiver_id,
                "label": self.label,
                "attributes": self.attributes,
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        data = ensure_document(data, "message")
        return cls(
            app_id=data.get("appId"),
            receiver_id=data.get("receiverId"),
            label=data.get("label"),
            attributes=ensure_map(data.get("attributes"), "attributes"),
        )


@dataclass
class TaskTransaction:
    """A transaction done over a task.

    The ``id`` is assigned by the store when the transaction is added to the
    task, and it is the position of the transaction in the task.
    """

    id: str | None = None
    task_id: str | None = None
    label: str | None = None
    actioneer_id: str | None = None
    attributes: dict[str, Any] | None = None
    creation_ts: int | None = None
    last_update_ts: int | None = None
    messages: list[Message] | None = None

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "id": self.id,
                "taskId": self.task_id,
                "label": self.label,
                "actioneerId": self.actioneer_id,
                "attributes": self.attributes,
                "_creationTs": self.creation_ts,
                "_lastUpdateTs": self.last_update_ts,
                "messages": [message.to_dict() for message in self.messages] if self.messages is not None else None,
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> "TaskTransaction":
        data = ensure_document(data, "transaction")
        messages = ensure_list(data.get("messages"), "messages")
        return cls(
            id=data.get("id"),
            task_id=data.get("taskId"),
            label=data.get("label"),
            actioneer_id=data.get("actioneerId"),
            attributes=ensure_map(data.get("attributes"), "attributes"),
            creation_ts=data.get("_creationTs"),
            last_update_ts=data.get("_lastUpdateTs"),
            messages=[Message.from_dict(message) for message in messages] if messages is not None else None,
        )


@dataclass
class Task:
    """A task requested by a user of a WeNet application."""

    id: str | None = None
    app_id: str | None = None
    requester_id: str | None = None
    community_id: str | None = None
    task_type_id: str | None = None
    goal: Optional[TaskGoal] = None
    norms: list[Any] | None = None
    attributes: dict[str, Any] | None = None
    close_ts: int | None = None
    creation_ts: int | None = None
    last_update_ts: int | None = None
    transactions: list[TaskTransaction] | None = field(default=None)

    @property
    def is_closed(self) -> bool:
        return self.close_ts is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire/storage document."""
        return compact(
            {
                "id": self.id,
                "appId": self.app_id,
                "requesterId": self.requester_id,
                "communityId": self.community_id,
                "taskTypeId": self.task_type_id,
                "goal": self.goal.to_dict() if self.goal is not None else None,
                "norms": self.norms,
                "attributes": self.attributes,
                "closeTs": self.close_ts,
                "_creationTs": self.creation_ts,
                "_lastUpdateTs": self.last_update_ts,
                "transactions": [transaction.to_dict() for transaction in self.transactions] if self.transactions is not None else None,
            }
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """Deserialize from a wire or storage document (``_id`` is read as ``id``)."""
        data = ensure_document(data, "task")
        goal = data.get("goal")
        transactions = ensure_list(data.get("transactions"), "transactions")
        return cls(
            id=data.get("id", data.get("_id")),
            app_id=data.get("appId"),
            requester_id=data.get("requesterId"),
            community_id=data.get("communityId"),
            task_type_id=data.get("taskTypeId"),
            goal=TaskGoal.from_dict(goal) if goal is not None else None,
            norms=ensure_list(data.get("norms"), "norms"),
            attributes=ensure_map(data.get("attributes"), "attributes"),
            close_ts=data.get("closeTs"),
            creation_ts=data.get("_creationTs"),
            last_update_ts=data.get("_lastUpdateTs"),
            transactions=[TaskTransaction.from_dict(transaction) for transaction in transactions] if transactions is not None else None,
        )
