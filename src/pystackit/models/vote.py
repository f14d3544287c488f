"""Vote models."""

from __future__ import annotations

import enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pystackit.models._base import StackItBaseModel


class VoteValue(enum.IntEnum):
    DOWN = -1
    NONE = 0
    UP = 1


class Vote(StackItBaseModel):
    """A persisted vote as returned by ``/votes/answer/{id}/my-vote``."""

    id: int | None = None
    answer_id: int | None = None
    user_id: int | None = None
    value: VoteValue = VoteValue.NONE


class VoteStats(StackItBaseModel):
    """Aggregate vote state of an answer."""

    answer_id: int | None = None
    total_score: int = Field(default=0, validation_alias=AliasChoices("total_score", "vote_score", "score"))
    upvotes: int = 0
    downvotes: int = 0
    user_vote: VoteValue = VoteValue.NONE


class VoteResult(StackItBaseModel):
    """Response of a vote cast or removal.

    ``total_score`` is present when the server reports the recomputed
    aggregate; the client then reconciles to it.
    """

    answer_id: int | None = None
    value: int | None = None
    total_score: int | None = Field(default=None, validation_alias=AliasChoices("total_score", "vote_score", "score"))
    message: str | None = None


class VoteState(BaseModel):
    """Vote state of one answer as displayed to the current user.

    ``score`` is the sum of all persisted votes; ``user_vote`` is the
    current user's own contribution to it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    entity_id: int
    user_vote: VoteValue = VoteValue.NONE
    score: int = 0

    @field_validator("user_vote", mode="before")
    @classmethod
    def _coerce_vote(cls, value: object) -> object:
        if value is None:
            return VoteValue.NONE
        return value

    @classmethod
    def from_stats(cls, entity_id: int, stats: VoteStats) -> VoteState:
        return cls(entity_id=entity_id, user_vote=stats.user_vote, score=stats.total_score)
