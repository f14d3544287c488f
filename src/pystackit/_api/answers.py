"""Answer endpoints."""

from __future__ import annotations

from pystackit._api._common import decode_ack, decode_list, decode_model, token_of
from pystackit._transport import Transport
from pystackit.models._base import Ack
from pystackit.models.answer import AcceptAnswerResult, Answer
from pystackit.models.requests import AcceptAnswerRequest, AnswerCreateRequest, AnswerUpdateRequest, PageRequest
from pystackit.session import Session


async def create_answer(transport: Transport, session: Session, request: AnswerCreateRequest) -> Answer:
    endpoint = "/answers/"
    payload = await transport.request("POST", endpoint, token=token_of(session), json_body=request.to_body())
    return decode_model(Answer, payload, endpoint=endpoint)


async def list_answers(
    transport: Transport,
    session: Session | None,
    question_id: int,
    request: PageRequest | None = None,
) -> list[Answer]:
    endpoint = f"/answers/question/{question_id}"
    params = request.to_params() if request is not None else None
    payload = await transport.request("GET", endpoint, token=token_of(session), params=params)
    return decode_list(Answer, payload, endpoint=endpoint)


async def fetch_answer(transport: Transport, session: Session | None, answer_id: int) -> Answer:
    endpoint = f"/answers/{answer_id}"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(Answer, payload, endpoint=endpoint)


async def update_answer(transport: Transport, session: Session, answer_id: int, request: AnswerUpdateRequest) -> Answer:
    endpoint = f"/answers/{answer_id}"
    payload = await transport.request("PUT", endpoint, token=token_of(session), json_body=request.to_body())
    return decode_model(Answer, payload, endpoint=endpoint)


async def delete_answer(transport: Transport, session: Session, answer_id: int) -> Ack:
    endpoint = f"/answers/{answer_id}"
    payload = await transport.request("DELETE", endpoint, token=token_of(session))
    return decode_ack(payload, endpoint=endpoint)


async def accept_answer(transport: Transport, session: Session, request: AcceptAnswerRequest) -> AcceptAnswerResult:
    endpoint = "/answers/accept"
    payload = await transport.request("POST", endpoint, token=token_of(session), json_body=request.to_body())
    if payload is None:
        return AcceptAnswerResult(answer_id=request.answer_id)
    return decode_model(AcceptAnswerResult, payload, endpoint=endpoint)


async def list_answers_by_user(
    transport: Transport,
    session: Session | None,
    user_id: int,
    request: PageRequest,
) -> list[Answer]:
    endpoint = f"/answers/user/{user_id}"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Answer, payload, endpoint=endpoint)
