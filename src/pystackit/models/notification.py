"""Notification models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pystackit.models._base import StackItBaseModel, StackItEnum, StackItTimestamp


class NotificationType(StackItEnum):
    ANSWER = "answer"
    VOTE = "vote"
    COMMENT = "comment"
    MENTION = "mention"
    ACCEPT = "accept"
    UNKNOWN = "unknown"


class Notification(StackItBaseModel):
    """A notification addressed to the current user.

    ``is_read`` only ever moves from ``False`` to ``True`` on this client.
    """

    id: int
    type: NotificationType = NotificationType.UNKNOWN
    content: str = ""
    is_read: bool = False
    question_id: int | None = None
    answer_id: int | None = None
    created_at: StackItTimestamp = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return NotificationType(value)
        return value

    def as_read(self) -> Notification:
        if self.is_read:
            return self
        return self.model_copy(update={"is_read": True})


class NotificationStats(StackItBaseModel):
    total_count: int = Field(default=0, validation_alias=AliasChoices("total_count", "total"))
    unread_count: int = 0


class UnreadCount(StackItBaseModel):
    count: int = Field(default=0, ge=0, validation_alias=AliasChoices("count", "unread_count"))
