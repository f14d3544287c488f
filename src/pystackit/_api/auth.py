"""Authentication endpoints.

Endpoints:
  - /auth/register
  - /auth/login
  - /auth/me
  - /auth/verify-token
"""

from __future__ import annotations

import logging

from pystackit._api._common import decode_model, token_of
from pystackit._transport import Transport
from pystackit.exceptions import StackItAuthenticationError, StackItValidationError
from pystackit.models.requests import LoginRequest, RegisterRequest
from pystackit.models.user import AuthToken, User
from pystackit.session import Session

_logger = logging.getLogger(__name__)


async def register(transport: Transport, request: RegisterRequest) -> User:
    endpoint = "/auth/register"
    payload = await transport.request("POST", endpoint, json_body=request.to_body())
    return decode_model(User, payload, endpoint=endpoint)


async def login(transport: Transport, request: LoginRequest) -> AuthToken:
    """Exchange credentials for a bearer token.

    The server answers bad credentials with 400 on some versions and 401
    on others; both surface as :class:`StackItAuthenticationError`.
    """
    endpoint = "/auth/login"
    try:
        payload = await transport.request("POST", endpoint, json_body=request.to_body())
    except StackItValidationError as exc:
        raise StackItAuthenticationError(
            str(exc),
            status_code=exc.status_code,
            endpoint=endpoint,
            detail=exc.detail,
        ) from exc
    token = decode_model(AuthToken, payload, endpoint=endpoint)
    _logger.debug("Login succeeded for %s", request.username)
    return token


async def fetch_current_user(transport: Transport, session: Session) -> User:
    endpoint = "/auth/me"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(User, payload, endpoint=endpoint)


async def verify_token(transport: Transport, session: Session) -> bool:
    endpoint = "/auth/verify-token"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    if isinstance(payload, dict):
        return bool(payload.get("valid", True))
    return True
