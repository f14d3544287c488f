"""Tag model."""

from __future__ import annotations

from pystackit.models._base import StackItBaseModel, StackItTimestamp


class Tag(StackItBaseModel):
    id: int | None = None
    name: str
    description: str | None = None
    question_count: int = 0
    created_at: StackItTimestamp = None
