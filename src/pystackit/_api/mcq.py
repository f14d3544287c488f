"""MCQ quiz endpoints."""

from __future__ import annotations

from urllib.parse import quote

from pystackit._api._common import decode_list, decode_model, decode_strings, token_of
from pystackit._transport import Transport
from pystackit.models.mcq import LeaderboardEntry, Quiz, QuizQuestion, QuizResult, QuizSubmission, TopicStats
from pystackit.models.requests import PageRequest, QuizCreateRequest
from pystackit.session import Session


async def create_quiz(transport: Transport, session: Session, request: QuizCreateRequest) -> Quiz:
    endpoint = "/mcq/quiz"
    payload = await transport.request("POST", endpoint, token=token_of(session), json_body=request.to_body())
    return decode_model(Quiz, payload, endpoint=endpoint)


async def fetch_quiz(transport: Transport, session: Session, quiz_id: int) -> Quiz:
    endpoint = f"/mcq/quiz/{quiz_id}"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(Quiz, payload, endpoint=endpoint)


async def fetch_quiz_questions(transport: Transport, session: Session, quiz_id: int) -> list[QuizQuestion]:
    endpoint = f"/mcq/quiz/{quiz_id}/questions"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_list(QuizQuestion, payload, endpoint=endpoint)


async def submit_quiz(transport: Transport, session: Session, submission: QuizSubmission) -> QuizResult:
    endpoint = "/mcq/quiz/submit"
    body = submission.model_dump(exclude_none=True)
    payload = await transport.request("POST", endpoint, token=token_of(session), json_body=body)
    return decode_model(QuizResult, payload, endpoint=endpoint)


async def list_my_quizzes(transport: Transport, session: Session, request: PageRequest) -> list[Quiz]:
    endpoint = "/mcq/my-quizzes"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Quiz, payload, endpoint=endpoint)


async def list_topics(transport: Transport, session: Session | None) -> list[str]:
    endpoint = "/mcq/topics"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_strings(payload, endpoint=endpoint)


async def fetch_topic_stats(transport: Transport, session: Session, topic: str) -> TopicStats:
    endpoint = f"/mcq/topics/{quote(topic, safe='')}/stats"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(TopicStats, payload, endpoint=endpoint)


async def list_leaderboard(
    transport: Transport,
    session: Session | None,
    topic: str,
    request: PageRequest,
) -> list[LeaderboardEntry]:
    endpoint = f"/mcq/leaderboard/{quote(topic, safe='')}"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(LeaderboardEntry, payload, endpoint=endpoint)
