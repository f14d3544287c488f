"""Custom exception hierarchy for pystackit."""

from __future__ import annotations


class StackItError(Exception):
    """Base exception for all pystackit errors."""


class StackItConfigError(StackItError):
    """Invalid or missing configuration."""


class StackItDecodeError(StackItError):
    """A response payload did not match the expected schema."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class StackItTransportError(StackItError):
    """HTTP-level failure (network error, non-JSON body)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class StackItApiError(StackItError):
    """API answered with an error status.

    ``detail`` holds the human-readable message from the response body
    (``detail`` or ``message`` field), suitable for showing to a user.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        detail: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(message)


class StackItAuthenticationError(StackItApiError):
    """Missing or rejected credentials; the user has to log in."""


class StackItSessionExpiredError(StackItAuthenticationError):
    """Bearer token rejected by the server.

    Raised when an authenticated call fails with ``401`` while a token is
    held. The client catches this internally to log in again when
    credentials are configured.
    """


class StackItValidationError(StackItApiError):
    """Request rejected by server-side validation (e.g. duplicate accept)."""


class StackItNotFoundError(StackItApiError):
    """Referenced entity does not exist."""


class StackItMutationError(StackItError):
    """An optimistic mutation failed and was rolled back.

    The original failure is chained as ``__cause__``; ``user_message``
    is the single line meant for display.
    """

    def __init__(self, user_message: str, *, key: str = "") -> None:
        self.user_message = user_message
        self.key = key
        super().__init__(user_message)


class StackItMutationInFlightError(StackItError):
    """A mutation on the same entity is still waiting for the server."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"mutation already in flight for {key}")


GENERIC_FAILURE_MESSAGE = "Request failed, please try again"
LOGIN_REQUIRED_MESSAGE = "Please login to continue"


def describe_error(exc: BaseException) -> str:
    """Return the user-facing message for *exc*."""
    if isinstance(exc, StackItMutationError):
        return exc.user_message
    if isinstance(exc, StackItAuthenticationError):
        return LOGIN_REQUIRED_MESSAGE
    if isinstance(exc, StackItApiError):
        return exc.detail or GENERIC_FAILURE_MESSAGE
    return GENERIC_FAILURE_MESSAGE
