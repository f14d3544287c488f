"""State change messages delivered to observers.

Every write into :class:`pystackit.state.store.ForumState` made by the
mutator is announced as one :class:`StateChange`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeSource(StrEnum):
    OPTIMISTIC = "optimistic"
    SERVER = "server"
    ROLLBACK = "rollback"


class EntityKind(StrEnum):
    VOTE = "vote"
    ACCEPTANCE = "acceptance"
    ANSWERS = "answers"
    QUESTIONS = "questions"
    NOTIFICATIONS = "notifications"


class StateChange(BaseModel):
    """One write into the client state."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str = Field(..., description="Mutation key, e.g. 'vote:42'")
    kind: EntityKind
    source: ChangeSource
    value: Any = None
    error: str | None = Field(default=None, description="User-facing message on rollback")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("key")
    @classmethod
    def _normalize_key(cls, value: str) -> str:
        key = value.strip()
        if not key:
            raise ValueError("key must be non-empty")
        return key


def entity_key(kind: EntityKind, entity_id: int | str | None = None) -> str:
    if entity_id is None:
        return kind.value
    return f"{kind.value}:{entity_id}"
