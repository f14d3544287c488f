from __future__ import annotations

import itertools

import pytest

from pystackit.models.answer import AcceptancePhase, AcceptanceState, Answer
from pystackit.models.vote import VoteState, VoteValue
from pystackit.state.policy import accept_transition, apply_acceptance, is_vote_removal, next_vote_state


def test_upvote_from_no_vote_adds_one() -> None:
    state = next_vote_state(VoteState(entity_id=1, score=5), 1)
    assert state.user_vote == VoteValue.UP
    assert state.score == 6


def test_same_vote_twice_is_a_no_op() -> None:
    start = VoteState(entity_id=1, score=5)
    after = next_vote_state(next_vote_state(start, 1), 1)
    assert after.user_vote == VoteValue.NONE
    assert after.score == start.score


def test_opposite_vote_replaces() -> None:
    start = VoteState(entity_id=1, user_vote=VoteValue.UP, score=6)
    after = next_vote_state(start, -1)
    assert after.user_vote == VoteValue.DOWN
    assert after.score == 4


@pytest.mark.parametrize("value", [0, 2, -2])
def test_invalid_vote_intent_rejected(value: int) -> None:
    with pytest.raises(ValueError):
        next_vote_state(VoteState(entity_id=1), value)


def test_score_tracks_removed_and_added_votes_for_every_sequence() -> None:
    for length in range(1, 6):
        for clicks in itertools.product((1, -1), repeat=length):
            state = VoteState(entity_id=7, score=3)
            removed = 0
            added = 0
            for click in clicks:
                old = int(state.user_vote)
                state = next_vote_state(state, click)
                removed += old
                added += int(state.user_vote)
            assert state.score == 3 - removed + added, clicks
            assert state.user_vote in (VoteValue.DOWN, VoteValue.NONE, VoteValue.UP)


def test_is_vote_removal() -> None:
    state = VoteState(entity_id=1, user_vote=VoteValue.DOWN, score=-1)
    assert is_vote_removal(state, -1) is True
    assert is_vote_removal(state, 1) is False


def test_accept_allowed_for_owner_with_answers() -> None:
    state = AcceptanceState(question_id=10, answer_count=2)
    assert state.phase is AcceptancePhase.HAS_ANSWERS
    after = accept_transition(state, 42, is_owner=True)
    assert after.accepted_answer_id == 42
    assert after.phase is AcceptancePhase.ACCEPTED


def test_accept_is_partial() -> None:
    unanswered = AcceptanceState(question_id=10)
    accepted = AcceptanceState(question_id=10, accepted_answer_id=41, answer_count=2)
    answered = AcceptanceState(question_id=10, answer_count=2)

    assert accept_transition(unanswered, 42, is_owner=True) is unanswered
    assert accept_transition(accepted, 42, is_owner=True) is accepted
    assert accept_transition(answered, 42, is_owner=False) is answered
    assert accepted.accepted_answer_id == 41


def test_apply_acceptance_flags_exactly_one_answer() -> None:
    answers = [Answer(id=41), Answer(id=42), Answer(id=43, is_accepted=True)]
    updated = apply_acceptance(answers, 42)
    assert [a.is_accepted for a in updated] == [False, True, False]
    assert updated[0] is answers[0]
