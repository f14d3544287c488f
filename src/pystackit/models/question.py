"""Question model."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from pystackit.models._base import StackItBaseModel, StackItTimestamp


class Question(StackItBaseModel):
    """A forum question as listed and shown on its detail page."""

    id: int
    title: str
    description: str = ""
    tags: list[str] = []
    user_id: int | None = None
    username: str | None = None
    accepted_answer_id: int | None = None
    answer_count: int = 0
    created_at: StackItTimestamp = None
    updated_at: StackItTimestamp = None

    @property
    def has_accepted_answer(self) -> bool:
        return self.accepted_answer_id is not None

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_names(cls, value: Any) -> Any:
        # Some listings embed tag objects instead of plain names.
        if not isinstance(value, list):
            return value
        return [item.get("name") if isinstance(item, dict) else item for item in value]
