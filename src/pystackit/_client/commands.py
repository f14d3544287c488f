"""Internal write operations for :class:`pystackit.client.StackItClient`.

These functions keep `client.py` small without changing the public API.
Every visible mutation goes through the state's
:class:`~pystackit.state.mutator.OptimisticMutator`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pystackit._api import answers as _answers_api
from pystackit._api import notifications as _notifications_api
from pystackit._api import questions as _questions_api
from pystackit._api import votes as _votes_api
from pystackit._client import reads as _reads
from pystackit.exceptions import StackItMutationInFlightError
from pystackit.models._base import Ack
from pystackit.models.answer import AcceptAnswerResult, AcceptanceState, Answer
from pystackit.models.notification import Notification
from pystackit.models.question import Question
from pystackit.models.requests import (
    AcceptAnswerRequest,
    AnswerCreateRequest,
    QuestionCreateRequest,
    VoteRequest,
)
from pystackit.models.vote import VoteResult, VoteState
from pystackit.state.events import EntityKind, entity_key
from pystackit.state.policy import accept_transition, is_vote_removal, mark_all_read, next_vote_state
from pystackit.state.store import NotificationsSnapshot

if TYPE_CHECKING:
    from pystackit.client import StackItClient

_logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Votes
# ----------------------------------------------------------------------


async def vote(client: StackItClient, *, answer_id: int, value: int) -> VoteState:
    request = VoteRequest(answer_id=answer_id, value=value)
    await client.ensure_session()
    state = client.state
    current = state.vote_state(answer_id)
    if current is None:
        current = await _reads.refresh_vote_state(client, answer_id)
    predicted = next_vote_state(current, request.value)
    removing = is_vote_removal(current, request.value)

    async def _remote() -> VoteState:
        async def _call() -> VoteResult:
            session = await client.ensure_session()
            transport = client._require_transport()
            if removing:
                return await _votes_api.remove_vote(transport, session, answer_id)
            return await _votes_api.cast_vote(transport, session, request)

        result: VoteResult = await client._call_with_reauth(_call)
        if result.total_score is None:
            return predicted
        return predicted.model_copy(update={"score": result.total_score})

    return await state.mutator.apply_mutation(
        entity_key(EntityKind.VOTE, answer_id),
        kind=EntityKind.VOTE,
        current=current,
        predicted=predicted,
        remote_call=_remote,
        write=state.write_vote_state,
    )


# ----------------------------------------------------------------------
# Questions and answers
# ----------------------------------------------------------------------


async def create_question(client: StackItClient, request: QuestionCreateRequest) -> Question:
    async def _call() -> Question:
        session = await client.ensure_session()
        return await _questions_api.create_question(client._require_transport(), session, request)

    question: Question = await client._call_with_reauth(_call)
    client.state.load_question(question)
    return question


async def delete_question(client: StackItClient, question_id: int) -> None:
    await client.ensure_session()
    view = client.state.questions
    current = view.snapshot()
    predicted = tuple(question for question in current if question.id != question_id)

    async def _remote() -> tuple[Question, ...]:
        async def _call() -> Ack:
            session = await client.ensure_session()
            return await _questions_api.delete_question(client._require_transport(), session, question_id)

        await client._call_with_reauth(_call)
        return predicted

    # The write replaces the whole list, so the lock covers the whole list.
    await client.state.mutator.apply_mutation(
        entity_key(EntityKind.QUESTIONS),
        kind=EntityKind.QUESTIONS,
        current=current,
        predicted=predicted,
        remote_call=_remote,
        write=view.restore,
    )


async def create_answer(client: StackItClient, request: AnswerCreateRequest) -> Answer:
    async def _call() -> Answer:
        session = await client.ensure_session()
        return await _answers_api.create_answer(client._require_transport(), session, request)

    answer: Answer = await client._call_with_reauth(_call)
    client.state.add_answer(request.question_id, answer)
    return answer


async def delete_answer(client: StackItClient, answer_id: int, *, question_id: int | None = None) -> None:
    await client.ensure_session()
    state = client.state
    if question_id is None:
        found = state.find_answer(answer_id)
        question_id = found[0] if found is not None else None

    async def _call() -> Ack:
        session = await client.ensure_session()
        return await _answers_api.delete_answer(client._require_transport(), session, answer_id)

    if question_id is None:
        # Not rendered anywhere, so there is nothing to predict.
        await client._call_with_reauth(_call)
        state.discard_vote(answer_id)
        return

    current = state.answers(question_id).snapshot()
    predicted = tuple(answer for answer in current if answer.id != answer_id)

    async def _remote() -> tuple[Answer, ...]:
        await client._call_with_reauth(_call)
        return predicted

    def _write(answers: tuple[Answer, ...]) -> None:
        state.write_answers(question_id, answers)

    await state.mutator.apply_mutation(
        entity_key(EntityKind.ANSWERS, question_id),
        kind=EntityKind.ANSWERS,
        current=current,
        predicted=predicted,
        remote_call=_remote,
        write=_write,
    )
    state.discard_vote(answer_id)


async def accept_answer(client: StackItClient, answer_id: int, *, question_id: int | None = None) -> AcceptanceState:
    """Accept *answer_id* for its question.

    Only the question owner may accept, and only while no answer is
    accepted. A disallowed accept returns the unchanged acceptance state
    and sends nothing.
    """
    session = await client.ensure_session()
    state = client.state
    if question_id is None:
        found = state.find_answer(answer_id)
        if found is None:
            answer = await client.get_answer(answer_id)
            question_id = answer.question_id
        else:
            question_id = found[0]
    if question_id is None:
        raise ValueError(f"question of answer {answer_id} is unknown; pass question_id")

    question = state.questions.get(question_id)
    if question is None:
        question = await _reads.get_question(client, question_id)
    is_owner = session.user_id is not None and question.user_id == session.user_id

    # Accepting rewrites the answer flags, so it shares the answer list's key.
    key = entity_key(EntityKind.ANSWERS, question_id)
    if state.mutator.is_in_flight(key):
        raise StackItMutationInFlightError(key)

    current = state.acceptance(question_id)
    predicted = accept_transition(current, answer_id, is_owner=is_owner)
    if predicted is current:
        _logger.debug("Accept of answer %s on question %s not allowed in %s", answer_id, question_id, current.phase)
        return current

    request = AcceptAnswerRequest(answer_id=answer_id)

    async def _remote() -> AcceptanceState:
        async def _call() -> AcceptAnswerResult:
            active = await client.ensure_session()
            return await _answers_api.accept_answer(client._require_transport(), active, request)

        result: AcceptAnswerResult = await client._call_with_reauth(_call)
        confirmed = result.confirmed_answer_id
        if confirmed is None or confirmed == predicted.accepted_answer_id:
            return predicted
        return predicted.model_copy(update={"accepted_answer_id": confirmed})

    return await state.mutator.apply_mutation(
        key,
        kind=EntityKind.ACCEPTANCE,
        current=current,
        predicted=predicted,
        remote_call=_remote,
        write=state.write_acceptance,
    )


# ----------------------------------------------------------------------
# Notifications
# ----------------------------------------------------------------------


async def mark_notification_read(client: StackItClient, notification_id: int) -> Notification | None:
    await client.ensure_session()
    state = client.state

    async def _call() -> Ack:
        session = await client.ensure_session()
        return await _notifications_api.mark_as_read(client._require_transport(), session, notification_id)

    # List mutations snapshot every notification, so single updates lock the list too.
    key = entity_key(EntityKind.NOTIFICATIONS)
    if state.mutator.is_in_flight(key):
        raise StackItMutationInFlightError(key)

    current = state.notifications.get(notification_id)
    if current is None:
        await client._call_with_reauth(_call)
        return None
    if current.is_read:
        return current
    predicted = current.as_read()

    async def _remote() -> Notification:
        await client._call_with_reauth(_call)
        return predicted

    return await state.mutator.apply_mutation(
        key,
        kind=EntityKind.NOTIFICATIONS,
        current=current,
        predicted=predicted,
        remote_call=_remote,
        write=state.write_notification,
    )


async def mark_all_notifications_read(client: StackItClient) -> NotificationsSnapshot:
    await client.ensure_session()
    state = client.state
    current = state.notifications_snapshot()
    predicted = NotificationsSnapshot(items=mark_all_read(current.items), unread_count=0)

    async def _remote() -> NotificationsSnapshot:
        async def _call() -> Ack:
            session = await client.ensure_session()
            return await _notifications_api.mark_all_as_read(client._require_transport(), session)

        await client._call_with_reauth(_call)
        return predicted

    return await state.mutator.apply_mutation(
        entity_key(EntityKind.NOTIFICATIONS),
        kind=EntityKind.NOTIFICATIONS,
        current=current,
        predicted=predicted,
        remote_call=_remote,
        write=state.write_notifications,
    )


async def delete_notification(client: StackItClient, notification_id: int) -> NotificationsSnapshot:
    await client.ensure_session()
    state = client.state
    current = state.notifications_snapshot()
    removed = state.notifications.get(notification_id)
    unread = current.unread_count
    if removed is not None and not removed.is_read:
        unread = max(0, unread - 1)
    predicted = NotificationsSnapshot(
        items=tuple(item for item in current.items if item.id != notification_id),
        unread_count=unread,
    )

    async def _remote() -> NotificationsSnapshot:
        async def _call() -> Ack:
            session = await client.ensure_session()
            return await _notifications_api.delete_notification(client._require_transport(), session, notification_id)

        await client._call_with_reauth(_call)
        return predicted

    return await state.mutator.apply_mutation(
        entity_key(EntityKind.NOTIFICATIONS),
        kind=EntityKind.NOTIFICATIONS,
        current=current,
        predicted=predicted,
        remote_call=_remote,
        write=state.write_notifications,
    )
