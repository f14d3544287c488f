from __future__ import annotations

import asyncio

import pytest

from pystackit.exceptions import (
    GENERIC_FAILURE_MESSAGE,
    StackItMutationError,
    StackItMutationInFlightError,
    StackItValidationError,
)
from pystackit.models.vote import VoteState, VoteValue
from pystackit.state.events import ChangeSource, EntityKind, StateChange, entity_key
from pystackit.state.mutator import OptimisticMutator
from pystackit.state.policy import next_vote_state

KEY = entity_key(EntityKind.VOTE, 42)


class _Cell:
    def __init__(self, value: VoteState) -> None:
        self.value = value
        self.writes: list[VoteState] = []

    def write(self, value: VoteState) -> None:
        self.value = value
        self.writes.append(value)


@pytest.mark.asyncio
async def test_predicted_state_is_visible_before_remote_call_completes() -> None:
    mutator = OptimisticMutator()
    cell = _Cell(VoteState(entity_id=42, score=5))
    predicted = next_vote_state(cell.value, 1)
    seen_during_call: list[VoteState] = []

    async def remote() -> VoteState:
        seen_during_call.append(cell.value)
        return predicted

    result = await mutator.apply_mutation(
        KEY, kind=EntityKind.VOTE, current=cell.value, predicted=predicted, remote_call=remote, write=cell.write
    )

    assert seen_during_call == [predicted]
    assert result.score == 6
    assert cell.value == predicted


@pytest.mark.asyncio
async def test_server_value_wins_over_prediction() -> None:
    mutator = OptimisticMutator()
    cell = _Cell(VoteState(entity_id=42, score=5))
    predicted = next_vote_state(cell.value, 1)
    server = predicted.model_copy(update={"score": 5})

    async def remote() -> VoteState:
        return server

    result = await mutator.apply_mutation(
        KEY, kind=EntityKind.VOTE, current=cell.value, predicted=predicted, remote_call=remote, write=cell.write
    )

    assert [w.score for w in cell.writes] == [6, 5]
    assert result == server
    assert cell.value.user_vote == VoteValue.UP


@pytest.mark.asyncio
async def test_failure_restores_previous_state_and_reports_detail() -> None:
    mutator = OptimisticMutator()
    start = VoteState(entity_id=42, score=5)
    cell = _Cell(start)
    predicted = next_vote_state(start, 1)

    async def remote() -> VoteState:
        raise StackItValidationError("HTTP 400", status_code=400, detail="Cannot vote on your own answer")

    with pytest.raises(StackItMutationError) as exc_info:
        await mutator.apply_mutation(
            KEY, kind=EntityKind.VOTE, current=start, predicted=predicted, remote_call=remote, write=cell.write
        )

    assert cell.value == start
    assert exc_info.value.user_message == "Cannot vote on your own answer"
    assert exc_info.value.key == KEY
    assert isinstance(exc_info.value.__cause__, StackItValidationError)
    assert not mutator.is_in_flight(KEY)


@pytest.mark.asyncio
async def test_unexpected_failure_uses_generic_message() -> None:
    mutator = OptimisticMutator()
    start = VoteState(entity_id=42, score=5)
    cell = _Cell(start)

    async def remote() -> VoteState:
        raise RuntimeError("connection reset")

    with pytest.raises(StackItMutationError) as exc_info:
        await mutator.apply_mutation(
            KEY,
            kind=EntityKind.VOTE,
            current=start,
            predicted=next_vote_state(start, -1),
            remote_call=remote,
            write=cell.write,
        )

    assert exc_info.value.user_message == GENERIC_FAILURE_MESSAGE
    assert cell.value == start


@pytest.mark.asyncio
async def test_second_mutation_on_same_key_is_rejected_while_in_flight() -> None:
    mutator = OptimisticMutator()
    start = VoteState(entity_id=42, score=5)
    cell = _Cell(start)
    predicted = next_vote_state(start, 1)
    release = asyncio.Event()

    async def slow_remote() -> VoteState:
        await release.wait()
        return predicted

    first = asyncio.create_task(
        mutator.apply_mutation(
            KEY, kind=EntityKind.VOTE, current=start, predicted=predicted, remote_call=slow_remote, write=cell.write
        )
    )
    await asyncio.sleep(0)
    assert mutator.is_in_flight(KEY)

    async def never_called() -> VoteState:
        raise AssertionError("remote call must not be issued")

    with pytest.raises(StackItMutationInFlightError):
        await mutator.apply_mutation(
            KEY,
            kind=EntityKind.VOTE,
            current=predicted,
            predicted=next_vote_state(predicted, 1),
            remote_call=never_called,
            write=cell.write,
        )
    assert cell.value == predicted

    release.set()
    assert await first == predicted
    assert mutator.in_flight == frozenset()


@pytest.mark.asyncio
async def test_observers_see_optimistic_then_server_and_can_unsubscribe() -> None:
    mutator = OptimisticMutator()
    start = VoteState(entity_id=42, score=5)
    cell = _Cell(start)
    changes: list[StateChange] = []
    unsubscribe = mutator.subscribe(changes.append)

    async def remote() -> VoteState:
        return next_vote_state(start, 1)

    await mutator.apply_mutation(
        KEY, kind=EntityKind.VOTE, current=start, predicted=next_vote_state(start, 1), remote_call=remote, write=cell.write
    )
    assert [c.source for c in changes] == [ChangeSource.OPTIMISTIC, ChangeSource.SERVER]
    assert all(c.key == KEY and c.kind is EntityKind.VOTE for c in changes)

    unsubscribe()
    await mutator.apply_mutation(
        KEY, kind=EntityKind.VOTE, current=cell.value, predicted=start, remote_call=_returning(start), write=cell.write
    )
    assert len(changes) == 2


@pytest.mark.asyncio
async def test_rollback_is_announced_with_message() -> None:
    mutator = OptimisticMutator()
    start = VoteState(entity_id=42, score=5)
    cell = _Cell(start)
    changes: list[StateChange] = []
    mutator.subscribe(changes.append)

    async def remote() -> VoteState:
        raise RuntimeError("boom")

    with pytest.raises(StackItMutationError):
        await mutator.apply_mutation(
            KEY, kind=EntityKind.VOTE, current=start, predicted=next_vote_state(start, 1), remote_call=remote, write=cell.write
        )

    assert [c.source for c in changes] == [ChangeSource.OPTIMISTIC, ChangeSource.ROLLBACK]
    assert changes[-1].value == start
    assert changes[-1].error == GENERIC_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_failing_observer_does_not_break_mutation() -> None:
    mutator = OptimisticMutator()
    start = VoteState(entity_id=42, score=5)
    cell = _Cell(start)

    def broken(_change: StateChange) -> None:
        raise RuntimeError("observer bug")

    mutator.subscribe(broken)
    predicted = next_vote_state(start, 1)
    result = await mutator.apply_mutation(
        KEY, kind=EntityKind.VOTE, current=start, predicted=predicted, remote_call=_returning(predicted), write=cell.write
    )
    assert result == predicted


def _returning(value: VoteState):
    async def _remote() -> VoteState:
        return value

    return _remote
