"""Question endpoints."""

from __future__ import annotations

from pystackit._api._common import decode_ack, decode_list, decode_model, token_of
from pystackit._transport import Transport
from pystackit.models._base import Ack
from pystackit.models.question import Question
from pystackit.models.requests import PageRequest, QuestionCreateRequest, QuestionListRequest, QuestionUpdateRequest
from pystackit.session import Session


async def list_questions(transport: Transport, session: Session | None, request: QuestionListRequest) -> list[Question]:
    endpoint = "/questions/"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Question, payload, endpoint=endpoint)


async def fetch_question(transport: Transport, session: Session | None, question_id: int) -> Question:
    endpoint = f"/questions/{question_id}"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(Question, payload, endpoint=endpoint)


async def create_question(transport: Transport, session: Session, request: QuestionCreateRequest) -> Question:
    endpoint = "/questions/"
    payload = await transport.request("POST", endpoint, token=token_of(session), json_body=request.to_body())
    return decode_model(Question, payload, endpoint=endpoint)


async def update_question(
    transport: Transport,
    session: Session,
    question_id: int,
    request: QuestionUpdateRequest,
) -> Question:
    endpoint = f"/questions/{question_id}"
    payload = await transport.request("PUT", endpoint, token=token_of(session), json_body=request.to_body())
    return decode_model(Question, payload, endpoint=endpoint)


async def delete_question(transport: Transport, session: Session, question_id: int) -> Ack:
    endpoint = f"/questions/{question_id}"
    payload = await transport.request("DELETE", endpoint, token=token_of(session))
    return decode_ack(payload, endpoint=endpoint)


async def list_questions_by_user(
    transport: Transport,
    session: Session | None,
    user_id: int,
    request: PageRequest,
) -> list[Question]:
    endpoint = f"/questions/user/{user_id}"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Question, payload, endpoint=endpoint)
