"""HTTP transport: JSON bodies, bearer auth, and status → exception mapping."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import aiohttp

from pystackit._constants import AUTH_ERROR_STATUSES, NOT_FOUND_STATUS, VALIDATION_ERROR_STATUSES
from pystackit._redact import redact_for_log
from pystackit.config import StackItConfig
from pystackit.exceptions import (
    StackItApiError,
    StackItAuthenticationError,
    StackItNotFoundError,
    StackItSessionExpiredError,
    StackItTransportError,
    StackItValidationError,
)

_logger = logging.getLogger(__name__)

QueryParams = Mapping[str, Any] | Sequence[tuple[str, str]]


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`JsonTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        params: QueryParams | None = None,
        json_body: Any = None,
    ) -> Any:
        ...


def extract_detail(body: Any) -> str:
    """Pull the human-readable message out of an error body.

    Handles ``{"detail": "..."}``, ``{"message": "..."}`` and FastAPI's
    validation format ``{"detail": [{"loc": [...], "msg": "..."}]}``.
    """
    if isinstance(body, str):
        return body.strip()[:200]
    if not isinstance(body, Mapping):
        return ""
    detail = body.get("detail", body.get("message"))
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        parts: list[str] = []
        for item in detail:
            if not isinstance(item, Mapping):
                parts.append(str(item))
                continue
            msg = str(item.get("msg", ""))
            loc = item.get("loc")
            if isinstance(loc, list) and loc:
                field = ".".join(str(p) for p in loc if p != "body")
                parts.append(f"{field}: {msg}" if field else msg)
            else:
                parts.append(msg)
        return "; ".join(p for p in parts if p)
    return ""


def error_for_status(
    status: int,
    body: Any,
    *,
    endpoint: str,
    authenticated: bool,
) -> StackItApiError:
    """Build the typed exception for an HTTP error response."""
    detail = extract_detail(body)
    message = f"HTTP {status} from {endpoint}: {detail or 'no detail'}"
    kwargs: dict[str, Any] = {"status_code": status, "endpoint": endpoint, "detail": detail}
    if status == 401 and authenticated:
        return StackItSessionExpiredError(message, **kwargs)
    if status in AUTH_ERROR_STATUSES:
        return StackItAuthenticationError(message, **kwargs)
    if status == NOT_FOUND_STATUS:
        return StackItNotFoundError(message, **kwargs)
    if status in VALIDATION_ERROR_STATUSES:
        return StackItValidationError(message, **kwargs)
    return StackItApiError(message, **kwargs)


def _parse_body(text: str) -> Any:
    if not text.strip():
        return None
    return json.loads(text)


class JsonTransport:
    """aiohttp transport speaking JSON to the StackIt REST API."""

    def __init__(self, config: StackItConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout: aiohttp.ClientTimeout | None = None
        if config.request_timeout is not None:
            self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        params: QueryParams | None = None,
        json_body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (``None`` if empty)."""
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        if token:
            headers["authorization"] = f"Bearer {token}"

        url = f"{self._config.api_root}{endpoint}"
        request_kwargs: dict[str, Any] = {"headers": headers}
        if params:
            request_kwargs["params"] = params
        if json_body is not None:
            request_kwargs["json"] = json_body
        if self._timeout is not None:
            request_kwargs["timeout"] = self._timeout

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled:
            _logger.debug("request body %s: %s", endpoint, redact_for_log(json_body))

        try:
            async with self._http.request(method, url, **request_kwargs) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise StackItTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise StackItTransportError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc

        try:
            body = _parse_body(text)
        except json.JSONDecodeError as exc:
            if status >= 400:
                raise error_for_status(status, text, endpoint=endpoint, authenticated=token is not None) from exc
            raise StackItTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("response %s %s: %s", status, endpoint, redact_for_log(body))

        if status >= 400:
            raise error_for_status(status, body, endpoint=endpoint, authenticated=token is not None)
        return body
