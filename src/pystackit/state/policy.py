"""Pure state transition rules.

Predicted states are computed here from the current state and the user's
intent only; nothing in this module talks to the server.
"""

from __future__ import annotations

from collections.abc import Iterable

from pystackit.models.answer import AcceptancePhase, AcceptanceState, Answer
from pystackit.models.notification import Notification
from pystackit.models.vote import VoteState, VoteValue


def next_vote_state(current: VoteState, value: int) -> VoteState:
    """Predict the vote state after the user clicks *value* (``1`` or ``-1``).

    Clicking the vote already held removes it. Clicking the opposite vote
    replaces it, so the score moves by ``-old + new``.
    """
    intent = VoteValue(value)
    if intent == VoteValue.NONE:
        raise ValueError("vote intent must be 1 or -1")
    old = current.user_vote
    new = VoteValue.NONE if old == intent else intent
    return current.model_copy(update={"user_vote": new, "score": current.score - int(old) + int(new)})


def is_vote_removal(current: VoteState, value: int) -> bool:
    return int(current.user_vote) == value


def accept_transition(state: AcceptanceState, answer_id: int, *, is_owner: bool) -> AcceptanceState:
    """Next acceptance state for an accept click.

    Returns *state* itself when the transition is not allowed: the caller
    is not the question owner, no answer exists yet, or an answer is
    already accepted.
    """
    if not is_owner:
        return state
    if state.phase is not AcceptancePhase.HAS_ANSWERS:
        return state
    return state.model_copy(update={"accepted_answer_id": answer_id})


def apply_acceptance(answers: Iterable[Answer], accepted_answer_id: int | None) -> list[Answer]:
    """Flag exactly the accepted answer; leave records that already match untouched."""
    updated: list[Answer] = []
    for answer in answers:
        flag = accepted_answer_id is not None and answer.id == accepted_answer_id
        if answer.is_accepted != flag:
            answer = answer.model_copy(update={"is_accepted": flag})
        updated.append(answer)
    return updated


def mark_all_read(notifications: Iterable[Notification]) -> tuple[Notification, ...]:
    return tuple(notification.as_read() for notification in notifications)


def count_unread(notifications: Iterable[Notification]) -> int:
    return sum(1 for notification in notifications if not notification.is_read)
