"""Account models."""

from __future__ import annotations

from pydantic import Field

from pystackit.models._base import StackItBaseModel, StackItTimestamp


class User(StackItBaseModel):
    """Identity returned by ``/auth/me`` and ``/auth/register``."""

    id: int
    username: str
    email: str | None = None
    is_active: bool = True
    created_at: StackItTimestamp = None


class AuthToken(StackItBaseModel):
    """Token returned after successful login.

    Parameters
    ----------
    access_token : str
        Bearer token for the ``Authorization`` header.
    token_type : str
        Token scheme, ``bearer`` for this API.
    """

    access_token: str = Field(min_length=1)
    token_type: str = "bearer"
