"""Internal read operations for :class:`pystackit.client.StackItClient`.

Reads that feed rendered views also load their result into the client's
:class:`pystackit.state.store.ForumState`, replacing whatever the views
showed before.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pystackit._api import answers as _answers_api
from pystackit._api import notifications as _notifications_api
from pystackit._api import questions as _questions_api
from pystackit._api import votes as _votes_api
from pystackit.models.answer import Answer
from pystackit.models.notification import Notification, NotificationStats, UnreadCount
from pystackit.models.question import Question
from pystackit.models.requests import NotificationListRequest, QuestionListRequest
from pystackit.models.vote import VoteState, VoteStats, VoteValue

if TYPE_CHECKING:
    from pystackit.client import StackItClient


async def get_questions(client: StackItClient, request: QuestionListRequest) -> list[Question]:
    async def _fetch() -> list[Question]:
        return await _questions_api.list_questions(client._require_transport(), client._optional_session(), request)

    questions: list[Question] = await client._call_with_reauth(_fetch)
    client.state.load_questions(questions)
    return questions


async def get_question(client: StackItClient, question_id: int) -> Question:
    async def _fetch() -> Question:
        return await _questions_api.fetch_question(client._require_transport(), client._optional_session(), question_id)

    question: Question = await client._call_with_reauth(_fetch)
    client.state.load_question(question)
    return question


async def get_answers(client: StackItClient, question_id: int) -> list[Answer]:
    async def _fetch() -> list[Answer]:
        return await _answers_api.list_answers(client._require_transport(), client._optional_session(), question_id)

    answers: list[Answer] = await client._call_with_reauth(_fetch)
    client.state.load_answers(question_id, answers)
    return answers


async def get_vote_stats(client: StackItClient, answer_id: int) -> VoteStats:
    async def _fetch() -> VoteStats:
        return await _votes_api.fetch_vote_stats(client._require_transport(), client._optional_session(), answer_id)

    return await client._call_with_reauth(_fetch)


async def refresh_vote_state(client: StackItClient, answer_id: int) -> VoteState:
    """Fetch the authoritative vote state of an answer and store it.

    When the stats carry no ``user_vote`` (missing or ``null``) the
    personal vote is read from ``/my-vote``.
    """
    stats = await get_vote_stats(client, answer_id)
    state = client.state.load_vote_stats(answer_id, stats)
    session = client._optional_session()
    if session is not None and stats.raw.get("user_vote") is None:

        async def _fetch_mine() -> VoteValue:
            vote = await _votes_api.fetch_my_vote(client._require_transport(), session, answer_id)
            return vote.value if vote is not None else VoteValue.NONE

        mine: VoteValue = await client._call_with_reauth(_fetch_mine)
        state = state.model_copy(update={"user_vote": mine})
        client.state.write_vote_state(state)
    return state


async def get_notifications(client: StackItClient, request: NotificationListRequest) -> list[Notification]:
    async def _fetch() -> list[Notification]:
        session = await client.ensure_session()
        return await _notifications_api.list_notifications(client._require_transport(), session, request)

    notifications: list[Notification] = await client._call_with_reauth(_fetch)
    client.state.load_notifications(notifications)
    return notifications


async def get_notification_stats(client: StackItClient) -> NotificationStats:
    async def _fetch() -> NotificationStats:
        session = await client.ensure_session()
        return await _notifications_api.fetch_stats(client._require_transport(), session)

    stats: NotificationStats = await client._call_with_reauth(_fetch)
    client.state.set_unread_count(stats.unread_count)
    return stats


async def get_unread_count(client: StackItClient) -> int:
    async def _fetch() -> UnreadCount:
        session = await client.ensure_session()
        return await _notifications_api.fetch_unread_count(client._require_transport(), session)

    unread: UnreadCount = await client._call_with_reauth(_fetch)
    client.state.set_unread_count(unread.count)
    return unread.count
