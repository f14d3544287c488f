"""Answer model and per-question acceptance state."""

from __future__ import annotations

import enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pystackit.models._base import StackItBaseModel, StackItTimestamp


class Answer(StackItBaseModel):
    """An answer to a question."""

    id: int
    question_id: int | None = None
    description: str = ""
    user_id: int | None = None
    username: str | None = None
    vote_score: int = 0
    is_accepted: bool = False
    created_at: StackItTimestamp = None
    updated_at: StackItTimestamp = None


class AcceptAnswerResult(StackItBaseModel):
    """Response of ``POST /answers/accept``.

    Depending on the backend version this is either the accepted answer
    record or a short acknowledgement; every field is optional.
    """

    answer_id: int | None = Field(default=None, validation_alias=AliasChoices("answer_id", "id"))
    question_id: int | None = None
    accepted_answer_id: int | None = None
    is_accepted: bool | None = None
    message: str | None = None

    @property
    def confirmed_answer_id(self) -> int | None:
        if self.accepted_answer_id is not None:
            return self.accepted_answer_id
        return self.answer_id


class AcceptancePhase(enum.Enum):
    UNANSWERED = "unanswered"
    HAS_ANSWERS = "has_answers"
    ACCEPTED = "accepted"


class AcceptanceState(BaseModel):
    """Which answer of a question is accepted, if any.

    At most one answer per question is accepted; once set, the client
    never clears it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    question_id: int
    accepted_answer_id: int | None = None
    answer_count: int = Field(default=0, ge=0)

    @property
    def phase(self) -> AcceptancePhase:
        if self.accepted_answer_id is not None:
            return AcceptancePhase.ACCEPTED
        if self.answer_count > 0:
            return AcceptancePhase.HAS_ANSWERS
        return AcceptancePhase.UNANSWERED
