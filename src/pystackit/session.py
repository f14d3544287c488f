"""Session state management for authenticated API calls."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pystackit.models.user import User


class Session(BaseModel):
    """Authenticated session after a successful login.

    Parameters
    ----------
    access_token : str
        Bearer token sent in the ``Authorization`` header.
    token_type : str
        Token scheme returned by the server (``bearer``).
    user : User or None
        Identity resolved through ``/auth/me``.
    created_at : float
        Monotonic timestamp (``time.monotonic()``) when the session
        was created.  Defaults to *now* if not provided.
    ttl : float
        Time-to-live in seconds.  ``inf`` disables client-side expiry.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    access_token: str
    token_type: str = "bearer"
    user: User | None = None
    created_at: float = Field(default_factory=time.monotonic)
    ttl: float = float("inf")

    @field_validator("access_token")
    @classmethod
    def _token_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("access_token must be non-empty")
        return value

    @property
    def authorization(self) -> str:
        """``Authorization`` header value."""
        return f"Bearer {self.access_token}"

    @property
    def user_id(self) -> int | None:
        return self.user.id if self.user is not None else None

    @property
    def is_expired(self) -> bool:
        """Whether the session has exceeded its TTL."""
        return (time.monotonic() - self.created_at) >= self.ttl

    @property
    def age(self) -> float:
        """Seconds since the session was created."""
        return time.monotonic() - self.created_at

    def with_user(self, user: User) -> Session:
        return self.model_copy(update={"user": user})
