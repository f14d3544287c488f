"""Shared helpers for StackIt API endpoint modules.

This module centralizes the most repeated patterns:
- validating response payloads into typed models
- turning schema mismatches into :class:`StackItDecodeError`
- acknowledgement bodies of write endpoints

It is internal to pystackit and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pystackit.exceptions import StackItDecodeError
from pystackit.models._base import Ack
from pystackit.session import Session

M = TypeVar("M", bound=BaseModel)


def token_of(session: Session | None) -> str | None:
    return session.access_token if session is not None else None


def decode_model(model_cls: type[M], payload: Any, *, endpoint: str) -> M:
    """Validate *payload* as *model_cls* or raise :class:`StackItDecodeError`."""
    if not isinstance(payload, dict):
        raise StackItDecodeError(
            f"{endpoint} returned {type(payload).__name__}, expected an object",
            endpoint=endpoint,
        )
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise StackItDecodeError(
            f"{endpoint} returned an invalid {model_cls.__name__}: {exc.errors(include_url=False)}",
            endpoint=endpoint,
        ) from exc


def decode_list(model_cls: type[M], payload: Any, *, endpoint: str) -> list[M]:
    """Validate a list payload; ``{"items": [...]}`` envelopes are unwrapped."""
    if isinstance(payload, dict) and isinstance(payload.get("items"), list):
        payload = payload["items"]
    if not isinstance(payload, list):
        raise StackItDecodeError(
            f"{endpoint} returned {type(payload).__name__}, expected a list",
            endpoint=endpoint,
        )
    return [decode_model(model_cls, item, endpoint=endpoint) for item in payload]


def decode_ack(payload: Any, *, endpoint: str) -> Ack:
    if payload is None:
        return Ack()
    if isinstance(payload, str):
        return Ack(message=payload, raw={"message": payload})
    return decode_model(Ack, payload, endpoint=endpoint)


def decode_strings(payload: Any, *, endpoint: str) -> list[str]:
    if isinstance(payload, dict) and isinstance(payload.get("topics"), list):
        payload = payload["topics"]
    if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
        raise StackItDecodeError(f"{endpoint} returned a non-string list", endpoint=endpoint)
    return list(payload)
