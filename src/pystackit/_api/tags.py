"""Tag endpoints."""

from __future__ import annotations

from urllib.parse import quote

from pystackit._api._common import decode_list, decode_model, token_of
from pystackit._transport import Transport
from pystackit.models.question import Question
from pystackit.models.requests import PageRequest, TagCreateRequest, TagSearchRequest
from pystackit.models.tag import Tag
from pystackit.session import Session


def _tag_path(name: str) -> str:
    return quote(name.strip().lower(), safe="")


async def create_tag(transport: Transport, session: Session, request: TagCreateRequest) -> Tag:
    endpoint = "/tags/"
    payload = await transport.request("POST", endpoint, token=token_of(session), json_body=request.to_body())
    return decode_model(Tag, payload, endpoint=endpoint)


async def list_tags(transport: Transport, session: Session | None, request: PageRequest) -> list[Tag]:
    endpoint = "/tags/"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Tag, payload, endpoint=endpoint)


async def list_popular_tags(transport: Transport, session: Session | None, request: PageRequest) -> list[Tag]:
    endpoint = "/tags/popular"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Tag, payload, endpoint=endpoint)


async def search_tags(transport: Transport, session: Session | None, request: TagSearchRequest) -> list[Tag]:
    endpoint = "/tags/search"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Tag, payload, endpoint=endpoint)


async def fetch_tag(transport: Transport, session: Session | None, name: str) -> Tag:
    endpoint = f"/tags/{_tag_path(name)}"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(Tag, payload, endpoint=endpoint)


async def list_questions_by_tag(
    transport: Transport,
    session: Session | None,
    name: str,
    request: PageRequest,
) -> list[Question]:
    endpoint = f"/tags/{_tag_path(name)}/questions"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Question, payload, endpoint=endpoint)
