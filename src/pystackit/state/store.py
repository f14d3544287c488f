"""Per-session in-memory forum state.

One :class:`ForumState` belongs to one logged-in client session. It holds
the entities the presentation layer renders and is only changed by the
client's read calls (server snapshots) and by the optimistic mutator.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable

from pystackit.models.answer import AcceptanceState, Answer
from pystackit.models.notification import Notification
from pystackit.models.question import Question
from pystackit.models.vote import VoteState, VoteStats
from pystackit.state.events import StateChange
from pystackit.state.mutator import OptimisticMutator
from pystackit.state.policy import apply_acceptance, count_unread
from pystackit.state.view import ViewState


@dataclasses.dataclass(frozen=True)
class NotificationsSnapshot:
    """Notification list plus unread badge, restored together on rollback."""

    items: tuple[Notification, ...]
    unread_count: int


class ForumState:
    """Read-mostly cache of the entities shown to the current user."""

    def __init__(self, *, mutator: OptimisticMutator | None = None) -> None:
        self.mutator = mutator or OptimisticMutator()
        self.questions: ViewState[Question] = ViewState()
        self.notifications: ViewState[Notification] = ViewState()
        self.unread_count: int = 0
        self._answers: dict[int, ViewState[Answer]] = {}
        self._acceptance: dict[int, AcceptanceState] = {}
        self._votes: dict[int, VoteState] = {}

    def subscribe(self, observer: Callable[[StateChange], None]) -> Callable[[], None]:
        return self.mutator.subscribe(observer)

    def reset(self) -> None:
        """Drop everything; called when the session ends."""
        self.questions.clear()
        self.notifications.clear()
        self.unread_count = 0
        self._answers.clear()
        self._acceptance.clear()
        self._votes.clear()

    # ------------------------------------------------------------------
    # Votes
    # ------------------------------------------------------------------

    def vote_state(self, answer_id: int) -> VoteState | None:
        return self._votes.get(answer_id)

    def write_vote_state(self, state: VoteState) -> None:
        self._votes[state.entity_id] = state

    def load_vote_stats(self, answer_id: int, stats: VoteStats) -> VoteState:
        state = VoteState.from_stats(answer_id, stats)
        self._votes[answer_id] = state
        return state

    def seed_vote_state(self, answer_id: int, score: int) -> VoteState:
        """Create a vote state from a listed score unless one is already known."""
        state = self._votes.get(answer_id)
        if state is None:
            state = VoteState(entity_id=answer_id, score=score)
            self._votes[answer_id] = state
        return state

    def discard_vote(self, answer_id: int) -> None:
        self._votes.pop(answer_id, None)

    # ------------------------------------------------------------------
    # Questions, answers and acceptance
    # ------------------------------------------------------------------

    def load_questions(self, questions: Iterable[Question], *, replace: bool = True) -> None:
        if replace:
            self.questions.replace_all(questions)
        else:
            self.questions.merge_all(questions)

    def load_question(self, question: Question) -> None:
        self.questions.merge(question)
        known = self._acceptance.get(question.id)
        accepted = question.accepted_answer_id
        if accepted is None and known is not None:
            accepted = known.accepted_answer_id
        answer_count = question.answer_count
        if question.id in self._answers:
            answer_count = max(answer_count, len(self._answers[question.id]))
        self._acceptance[question.id] = AcceptanceState(
            question_id=question.id,
            accepted_answer_id=accepted,
            answer_count=answer_count,
        )

    def answers(self, question_id: int) -> ViewState[Answer]:
        view = self._answers.get(question_id)
        if view is None:
            view = ViewState()
            self._answers[question_id] = view
        return view

    def load_answers(self, question_id: int, answers: Iterable[Answer]) -> ViewState[Answer]:
        view = self.answers(question_id)
        view.replace_all(answers)
        current = self.acceptance(question_id)
        accepted = current.accepted_answer_id
        if accepted is None:
            accepted = next((a.id for a in view if a.is_accepted), None)
        self._acceptance[question_id] = AcceptanceState(
            question_id=question_id,
            accepted_answer_id=accepted,
            answer_count=len(view),
        )
        for answer in view:
            self.seed_vote_state(answer.id, answer.vote_score)
        return view

    def find_answer(self, answer_id: int) -> tuple[int, Answer] | None:
        """Locate a loaded answer; returns ``(question_id, answer)``."""
        for question_id, view in self._answers.items():
            answer = view.get(answer_id)
            if answer is not None:
                return question_id, answer
        return None

    def add_answer(self, question_id: int, answer: Answer) -> None:
        view = self.answers(question_id)
        view.merge(answer)
        current = self.acceptance(question_id)
        self._acceptance[question_id] = current.model_copy(
            update={"answer_count": max(current.answer_count, len(view))}
        )
        self.seed_vote_state(answer.id, answer.vote_score)

    def write_answers(self, question_id: int, answers: tuple[Answer, ...]) -> None:
        """Restore the answer list, keeping its flags in line with the stored acceptance."""
        view = self.answers(question_id)
        current = self.acceptance(question_id)
        view.restore(tuple(apply_acceptance(answers, current.accepted_answer_id)))
        self._acceptance[question_id] = current.model_copy(update={"answer_count": len(view)})

    def acceptance(self, question_id: int) -> AcceptanceState:
        state = self._acceptance.get(question_id)
        if state is None:
            view = self._answers.get(question_id)
            state = AcceptanceState(question_id=question_id, answer_count=len(view) if view else 0)
        return state

    def write_acceptance(self, state: AcceptanceState) -> None:
        """Store *state* and project it onto the answer flags and question record."""
        self._acceptance[state.question_id] = state
        view = self._answers.get(state.question_id)
        if view is not None:
            view.replace_all(apply_acceptance(view, state.accepted_answer_id))
        question = self.questions.get(state.question_id)
        if question is not None and question.accepted_answer_id != state.accepted_answer_id:
            self.questions.merge(question.model_copy(update={"accepted_answer_id": state.accepted_answer_id}))

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def load_notifications(self, notifications: Iterable[Notification], *, replace: bool = True) -> None:
        if replace:
            self.notifications.replace_all(notifications)
        else:
            self.notifications.merge_all(notifications)

    def set_unread_count(self, count: int) -> None:
        self.unread_count = max(0, count)

    def write_notification(self, notification: Notification) -> None:
        """Update one loaded notification, moving the unread badge with its read flag.

        A notification that is no longer in the view is left out.
        """
        previous = self.notifications.get(notification.id)
        if previous is None:
            return
        if previous.is_read != notification.is_read:
            delta = -1 if notification.is_read else 1
            self.unread_count = max(0, self.unread_count + delta)
        self.notifications.merge(notification)

    def visible_unread(self) -> int:
        return count_unread(self.notifications)

    def notifications_snapshot(self) -> NotificationsSnapshot:
        return NotificationsSnapshot(items=self.notifications.snapshot(), unread_count=self.unread_count)

    def write_notifications(self, snapshot: NotificationsSnapshot) -> None:
        self.notifications.restore(snapshot.items)
        self.unread_count = snapshot.unread_count
