"""Data models for StackIt API responses."""

from pystackit.models._base import Ack, StackItBaseModel, StackItEnum, StackItTimestamp, parse_timestamp
from pystackit.models.answer import AcceptanceState, AcceptancePhase, AcceptAnswerResult, Answer
from pystackit.models.mcq import (
    LeaderboardEntry,
    Quiz,
    QuizAnswer,
    QuizAttempt,
    QuizQuestion,
    QuizResult,
    QuizSubmission,
    TopicStats,
)
from pystackit.models.notification import Notification, NotificationStats, NotificationType, UnreadCount
from pystackit.models.question import Question
from pystackit.models.tag import Tag
from pystackit.models.user import AuthToken, User
from pystackit.models.vote import Vote, VoteResult, VoteState, VoteStats, VoteValue

__all__ = [
    "AcceptAnswerResult",
    "AcceptancePhase",
    "AcceptanceState",
    "Ack",
    "Answer",
    "AuthToken",
    "LeaderboardEntry",
    "Notification",
    "NotificationStats",
    "NotificationType",
    "Question",
    "Quiz",
    "QuizAnswer",
    "QuizAttempt",
    "QuizQuestion",
    "QuizResult",
    "QuizSubmission",
    "StackItBaseModel",
    "StackItEnum",
    "StackItTimestamp",
    "Tag",
    "TopicStats",
    "UnreadCount",
    "User",
    "Vote",
    "VoteResult",
    "VoteState",
    "VoteStats",
    "VoteValue",
    "parse_timestamp",
]
