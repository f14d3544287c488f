"""MCQ quiz models."""

from __future__ import annotations

import dataclasses
import time

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pystackit._constants import DEFAULT_QUIZ_TIME_LIMIT
from pystackit.models._base import StackItBaseModel, StackItTimestamp


class QuizQuestion(StackItBaseModel):
    """One multiple-choice question.

    ``correct_option`` and ``explanation`` are only sent once the quiz is
    completed.
    """

    id: int
    question: str
    options: list[str] = []
    correct_option: int | None = None
    explanation: str | None = None


class Quiz(StackItBaseModel):
    """A generated quiz. ``/mcq/my-quizzes`` returns the same shape without questions."""

    id: int
    topic: str = ""
    difficulty: str | None = None
    questions: list[QuizQuestion] = []
    total_questions: int = 0
    time_limit: int = DEFAULT_QUIZ_TIME_LIMIT
    score: int | None = None
    completed: bool = False
    created_at: StackItTimestamp = None

    @property
    def question_count(self) -> int:
        return self.total_questions or len(self.questions)


class QuizAnswer(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    question_id: int
    selected_option: int = Field(ge=0)


class QuizSubmission(BaseModel):
    """Body of ``POST /mcq/quiz/submit``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    quiz_id: int
    answers: list[QuizAnswer]
    time_taken: int | None = Field(default=None, ge=0)


class QuizResult(StackItBaseModel):
    quiz_id: int | None = None
    score: int = 0
    total_questions: int = 0
    time_taken: int | None = None
    questions: list[QuizQuestion] = []

    @property
    def percentage(self) -> float:
        if self.total_questions <= 0:
            return 0.0
        return round(100.0 * self.score / self.total_questions, 1)


class TopicStats(StackItBaseModel):
    topic: str | None = None
    total_quizzes: int = 0
    average_score: float | None = None
    best_score: float | None = None
    completion_rate: float | None = None


class LeaderboardEntry(StackItBaseModel):
    user_id: int | None = None
    username: str = ""
    score: float = Field(default=0, validation_alias=AliasChoices("score", "best_score", "total_score"))
    rank: int | None = None


@dataclasses.dataclass
class QuizAttempt:
    """Local answer sheet for a quiz being taken.

    Usage::

        attempt = QuizAttempt(quiz)
        attempt.select(question_id, 2)
        result = await client.submit_quiz(attempt.to_submission())
    """

    quiz: Quiz
    started_at: float = dataclasses.field(default_factory=time.monotonic)
    selections: dict[int, int] = dataclasses.field(default_factory=dict)

    def select(self, question_id: int, option_index: int) -> None:
        question = next((q for q in self.quiz.questions if q.id == question_id), None)
        if question is None:
            raise ValueError(f"question {question_id} is not part of quiz {self.quiz.id}")
        if question.options and not 0 <= option_index < len(question.options):
            raise ValueError(f"option {option_index} out of range for question {question_id}")
        self.selections[question_id] = option_index

    @property
    def unanswered(self) -> list[int]:
        return [q.id for q in self.quiz.questions if q.id not in self.selections]

    @property
    def is_complete(self) -> bool:
        return not self.unanswered

    def elapsed(self) -> int:
        return int(time.monotonic() - self.started_at)

    def time_left(self) -> int:
        return max(0, self.quiz.time_limit - self.elapsed())

    def to_submission(self) -> QuizSubmission:
        answers = [
            QuizAnswer(question_id=question_id, selected_option=option)
            for question_id, option in self.selections.items()
        ]
        return QuizSubmission(quiz_id=self.quiz.id, answers=answers, time_taken=self.elapsed())
