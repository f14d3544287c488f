from __future__ import annotations

from pystackit.models.answer import Answer
from pystackit.state.view import ViewState


def _answers(*ids: int) -> list[Answer]:
    return [Answer(id=answer_id, description=f"answer {answer_id}") for answer_id in ids]


def test_remove_preserves_order_of_the_rest() -> None:
    view = ViewState(_answers(41, 42, 43))
    assert view.remove_by_id(42) is True
    assert view.ids() == [41, 43]
    assert len(view) == 2


def test_remove_unknown_id_is_noop() -> None:
    view = ViewState(_answers(1, 2))
    assert view.remove_by_id(99) is False
    assert view.ids() == [1, 2]


def test_merge_replaces_in_place_and_appends_new() -> None:
    view = ViewState(_answers(1, 2, 3))
    view.merge(Answer(id=2, description="edited"))
    view.merge(Answer(id=4))

    assert view.ids() == [1, 2, 3, 4]
    edited = view.get(2)
    assert edited is not None
    assert edited.description == "edited"


def test_snapshot_restore_round_trip() -> None:
    view = ViewState(_answers(1, 2, 3))
    snapshot = view.snapshot()
    view.remove_by_id(1)
    view.merge(Answer(id=9))

    view.restore(snapshot)
    assert view.ids() == [1, 2, 3]


def test_update_all_keeps_positions() -> None:
    view = ViewState(_answers(3, 1, 2))
    view.update_all(lambda a: a.model_copy(update={"vote_score": a.id * 10}))
    assert view.ids() == [3, 1, 2]
    assert [a.vote_score for a in view] == [30, 10, 20]
    assert 1 in view
    assert 5 not in view
