"""Vote endpoints."""

from __future__ import annotations

from pystackit._api._common import decode_model, token_of
from pystackit._transport import Transport
from pystackit.models.requests import VoteRequest
from pystackit.models.vote import Vote, VoteResult, VoteStats
from pystackit.session import Session


async def cast_vote(transport: Transport, session: Session, request: VoteRequest) -> VoteResult:
    endpoint = "/votes/"
    payload = await transport.request("POST", endpoint, token=token_of(session), json_body=request.to_body())
    if payload is None:
        return VoteResult(answer_id=request.answer_id, value=request.value)
    return decode_model(VoteResult, payload, endpoint=endpoint)


async def remove_vote(transport: Transport, session: Session, answer_id: int) -> VoteResult:
    endpoint = f"/votes/answer/{answer_id}"
    payload = await transport.request("DELETE", endpoint, token=token_of(session))
    if payload is None:
        return VoteResult(answer_id=answer_id, value=0)
    return decode_model(VoteResult, payload, endpoint=endpoint)


async def fetch_vote_stats(transport: Transport, session: Session | None, answer_id: int) -> VoteStats:
    endpoint = f"/votes/answer/{answer_id}/stats"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(VoteStats, payload, endpoint=endpoint)


async def fetch_my_vote(transport: Transport, session: Session, answer_id: int) -> Vote | None:
    """Current user's vote, or ``None`` when they have not voted."""
    endpoint = f"/votes/answer/{answer_id}/my-vote"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    if payload is None or payload == {}:
        return None
    return decode_model(Vote, payload, endpoint=endpoint)
