"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`pystackit.client.StackItClient`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pystackit._constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_QUIZ_DIFFICULTY,
    DEFAULT_QUIZ_QUESTIONS,
    VALID_QUIZ_DIFFICULTIES,
    VALID_VOTE_VALUES,
)


def _non_empty(value: str, field_name: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError(f"{field_name} must be non-empty")
    return text


class _Request(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class LoginRequest(_Request):
    # Passwords are sent verbatim.
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def _username_non_empty(cls, value: str) -> str:
        return _non_empty(value, "username")


class RegisterRequest(LoginRequest):
    email: str

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        email = _non_empty(value, "email")
        if "@" not in email:
            raise ValueError("email must contain '@'")
        return email


class PageRequest(_Request):
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=100)

    def to_params(self) -> list[tuple[str, str]]:
        """Query parameters; list values become repeated keys."""
        params: list[tuple[str, str]] = []
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, list):
                params.extend((key, str(item)) for item in value)
            elif isinstance(value, bool):
                params.append((key, "true" if value else "false"))
            else:
                params.append((key, str(value)))
        return params


class QuestionListRequest(PageRequest):
    search: str | None = None
    tags: list[str] | None = None
    sort: str | None = None


class NotificationListRequest(PageRequest):
    unread_only: bool | None = None


class TagSearchRequest(PageRequest):
    q: str

    @field_validator("q")
    @classmethod
    def _query_non_empty(cls, value: str) -> str:
        return _non_empty(value, "query")


def _normalize_tags(tags: list[str]) -> list[str]:
    normalized: list[str] = []
    for tag in tags:
        name = tag.strip().lower()
        if name and name not in normalized:
            normalized.append(name)
    return normalized


class QuestionCreateRequest(_Request):
    title: str
    description: str
    tags: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def _title_non_empty(cls, value: str) -> str:
        return _non_empty(value, "title")

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, value: str) -> str:
        return _non_empty(value, "description")

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: list[str]) -> list[str]:
        return _normalize_tags(value)


class QuestionUpdateRequest(_Request):
    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: list[str] | None) -> list[str] | None:
        return None if value is None else _normalize_tags(value)


class AnswerCreateRequest(_Request):
    question_id: int
    description: str

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, value: str) -> str:
        return _non_empty(value, "description")


class AnswerUpdateRequest(_Request):
    description: str

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, value: str) -> str:
        return _non_empty(value, "description")


class VoteRequest(_Request):
    answer_id: int
    value: int

    @field_validator("value")
    @classmethod
    def _value_allowed(cls, value: int) -> int:
        if value not in VALID_VOTE_VALUES:
            raise ValueError(f"vote value must be one of {VALID_VOTE_VALUES}, got {value}")
        return value


class AcceptAnswerRequest(_Request):
    answer_id: int


class TagCreateRequest(_Request):
    name: str
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return _non_empty(value, "name").lower()


class QuizCreateRequest(_Request):
    topic: str
    num_questions: int = Field(default=DEFAULT_QUIZ_QUESTIONS, ge=1, le=50)
    difficulty: str = DEFAULT_QUIZ_DIFFICULTY

    @field_validator("topic")
    @classmethod
    def _topic_non_empty(cls, value: str) -> str:
        return _non_empty(value, "topic")

    @field_validator("difficulty")
    @classmethod
    def _difficulty_known(cls, value: str) -> str:
        difficulty = value.lower()
        if difficulty not in VALID_QUIZ_DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {VALID_QUIZ_DIFFICULTIES}, got {value!r}")
        return difficulty
