"""High-level async client for the StackIt Q&A API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiohttp

from pystackit._api import answers as _answers_api
from pystackit._api import auth as _auth_api
from pystackit._api import mcq as _mcq_api
from pystackit._api import questions as _questions_api
from pystackit._api import tags as _tags_api
from pystackit._api import votes as _votes_api
from pystackit._client import commands as _commands
from pystackit._client import reads as _reads
from pystackit._constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_QUIZ_DIFFICULTY,
    DEFAULT_QUIZ_QUESTIONS,
    NOTIFICATION_PAGE_SIZE,
    TAG_SUGGESTION_LIMIT,
)
from pystackit._transport import JsonTransport, Transport
from pystackit.config import StackItConfig
from pystackit.exceptions import (
    LOGIN_REQUIRED_MESSAGE,
    StackItAuthenticationError,
    StackItError,
    StackItSessionExpiredError,
)
from pystackit.models.answer import AcceptanceState, Answer
from pystackit.models.mcq import LeaderboardEntry, Quiz, QuizQuestion, QuizResult, QuizSubmission, TopicStats
from pystackit.models.notification import Notification, NotificationStats
from pystackit.models.question import Question
from pystackit.models.requests import (
    AnswerCreateRequest,
    AnswerUpdateRequest,
    LoginRequest,
    NotificationListRequest,
    PageRequest,
    QuestionCreateRequest,
    QuestionListRequest,
    QuestionUpdateRequest,
    QuizCreateRequest,
    RegisterRequest,
    TagCreateRequest,
    TagSearchRequest,
)
from pystackit.models.tag import Tag
from pystackit.models.user import User
from pystackit.models.vote import Vote, VoteState, VoteStats
from pystackit.session import Session
from pystackit.state.events import StateChange
from pystackit.state.store import ForumState, NotificationsSnapshot

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class StackItClient:
    """Async client for the StackIt Q&A API.

    Usage::

        async with StackItClient(config) as client:
            await client.login()
            questions = await client.get_questions()
            await client.vote(answer_id=42, value=1)

    The client owns one :class:`~pystackit.state.store.ForumState`. Read
    calls load server snapshots into it; :meth:`vote`,
    :meth:`accept_answer`, the delete calls and the notification read
    markers update it optimistically before the server answers.
    """

    def __init__(
        self,
        config: StackItConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        state: ForumState | None = None,
    ) -> None:
        self._config = config or StackItConfig()
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport
        self._session: Session | None = None
        self._credentials: LoginRequest | None = None
        self._state = state or ForumState()

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> StackItClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = JsonTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    @property
    def config(self) -> StackItConfig:
        return self._config

    @property
    def state(self) -> ForumState:
        return self._state

    def subscribe(self, observer: Callable[[StateChange], None]) -> Callable[[], None]:
        """Observe every optimistic, confirmed and rolled-back state write."""
        return self._state.subscribe(observer)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self, username: str | None = None, password: str | None = None) -> User:
        """Authenticate and resolve the current user.

        Without arguments the credentials from the configuration are used.
        The state is reset when a different user logs in.
        """
        if username is None and password is None:
            if not self._config.has_credentials:
                raise StackItAuthenticationError("No credentials configured", detail=LOGIN_REQUIRED_MESSAGE)
            username, password = self._config.username, self._config.password
        request = LoginRequest(username=username or "", password=password or "")
        transport = self._require_transport()
        token = await _auth_api.login(transport, request)

        ttl = self._config.session_ttl if self._config.session_ttl > 0 else float("inf")
        session = Session(access_token=token.access_token, token_type=token.token_type, ttl=ttl)
        user = await _auth_api.fetch_current_user(transport, session)

        previous = self._session.user_id if self._session is not None else None
        if previous is not None and previous != user.id:
            self._state.reset()
        self._session = session.with_user(user)
        self._credentials = request
        _logger.debug("Logged in as %s (id=%s)", user.username, user.id)
        return user

    async def register(self, username: str, email: str, password: str) -> User:
        request = RegisterRequest(username=username, email=email, password=password)
        return await _auth_api.register(self._require_transport(), request)

    def logout(self) -> None:
        """Forget the token and credentials and clear all cached state."""
        self._session = None
        self._credentials = None
        self._state.reset()

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None and not self._session.is_expired

    @property
    def current_user(self) -> User | None:
        return self._session.user if self._session is not None else None

    async def get_current_user(self) -> User:
        async def _call() -> User:
            session = await self.ensure_session()
            return await _auth_api.fetch_current_user(self._require_transport(), session)

        user: User = await self._call_with_reauth(_call)
        if self._session is not None:
            self._session = self._session.with_user(user)
        return user

    async def verify_token(self) -> bool:
        """Ask the server whether the held token is still valid."""
        if self._session is None:
            return False
        try:
            return await _auth_api.verify_token(self._require_transport(), self._session)
        except StackItAuthenticationError:
            self.invalidate_session()
            return False

    async def ensure_session(self) -> Session:
        """Return an active session, logging in again if it expired."""
        if self._session is not None and not self._session.is_expired:
            return self._session
        if self._credentials is not None:
            await self.login(self._credentials.username, self._credentials.password)
        elif self._config.has_credentials:
            await self.login()
        else:
            raise StackItAuthenticationError("Not logged in", detail=LOGIN_REQUIRED_MESSAGE)
        assert self._session is not None  # noqa: S101
        return self._session

    def invalidate_session(self) -> None:
        """Force session invalidation (next call will re-authenticate)."""
        self._session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise StackItError("Client not initialized. Use 'async with StackItClient(...) as client:'")
        return self._transport

    def _optional_session(self) -> Session | None:
        """Session for public reads; anonymous when absent or expired."""
        if self._session is None or self._session.is_expired:
            return None
        return self._session

    async def _call_with_reauth(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run an API call, retrying once on session expiry."""
        try:
            return await fn()
        except StackItSessionExpiredError:
            _logger.debug("Token rejected, logging in again")
            self.invalidate_session()
            await self.ensure_session()
            return await fn()

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    async def get_questions(
        self,
        *,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        search: str | None = None,
        tags: list[str] | None = None,
        sort: str | None = None,
    ) -> list[Question]:
        request = QuestionListRequest(skip=skip, limit=limit, search=search or None, tags=tags or None, sort=sort)
        return await _reads.get_questions(self, request)

    async def get_question(self, question_id: int) -> Question:
        return await _reads.get_question(self, question_id)

    async def create_question(self, title: str, description: str, tags: list[str] | None = None) -> Question:
        request = QuestionCreateRequest(title=title, description=description, tags=tags or [])
        return await _commands.create_question(self, request)

    async def update_question(
        self,
        question_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> Question:
        request = QuestionUpdateRequest(title=title, description=description, tags=tags)

        async def _call() -> Question:
            session = await self.ensure_session()
            return await _questions_api.update_question(self._require_transport(), session, question_id, request)

        question: Question = await self._call_with_reauth(_call)
        self._state.load_question(question)
        return question

    async def delete_question(self, question_id: int) -> None:
        """Delete a question, removing it from the question list first."""
        await _commands.delete_question(self, question_id)

    async def get_questions_by_user(
        self, user_id: int, *, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[Question]:
        request = PageRequest(skip=skip, limit=limit)

        async def _call() -> list[Question]:
            return await _questions_api.list_questions_by_user(
                self._require_transport(), self._optional_session(), user_id, request
            )

        return await self._call_with_reauth(_call)

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    async def get_answers(self, question_id: int) -> list[Answer]:
        """Load the answers of a question, with their acceptance and vote states."""
        return await _reads.get_answers(self, question_id)

    async def get_answer(self, answer_id: int) -> Answer:
        async def _call() -> Answer:
            return await _answers_api.fetch_answer(self._require_transport(), self._optional_session(), answer_id)

        return await self._call_with_reauth(_call)

    async def create_answer(self, question_id: int, description: str) -> Answer:
        request = AnswerCreateRequest(question_id=question_id, description=description)
        return await _commands.create_answer(self, request)

    async def update_answer(self, answer_id: int, description: str) -> Answer:
        request = AnswerUpdateRequest(description=description)

        async def _call() -> Answer:
            session = await self.ensure_session()
            return await _answers_api.update_answer(self._require_transport(), session, answer_id, request)

        answer: Answer = await self._call_with_reauth(_call)
        found = self._state.find_answer(answer_id)
        if found is not None:
            self._state.answers(found[0]).merge(answer)
        return answer

    async def delete_answer(self, answer_id: int, *, question_id: int | None = None) -> None:
        await _commands.delete_answer(self, answer_id, question_id=question_id)

    async def accept_answer(self, answer_id: int, *, question_id: int | None = None) -> AcceptanceState:
        return await _commands.accept_answer(self, answer_id, question_id=question_id)

    async def get_answers_by_user(self, user_id: int, *, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> list[Answer]:
        request = PageRequest(skip=skip, limit=limit)

        async def _call() -> list[Answer]:
            return await _answers_api.list_answers_by_user(
                self._require_transport(), self._optional_session(), user_id, request
            )

        return await self._call_with_reauth(_call)

    # ------------------------------------------------------------------
    # Votes
    # ------------------------------------------------------------------

    async def vote(self, *, answer_id: int, value: int) -> VoteState:
        """Toggle the user's vote on an answer.

        Voting the value already held removes the vote; voting the opposite
        value replaces it. The state is updated before the request is sent
        and rolled back if it fails.
        """
        return await _commands.vote(self, answer_id=answer_id, value=value)

    async def get_vote_stats(self, answer_id: int) -> VoteStats:
        return await _reads.get_vote_stats(self, answer_id)

    async def get_my_vote(self, answer_id: int) -> Vote | None:
        async def _call() -> Vote | None:
            session = await self.ensure_session()
            return await _votes_api.fetch_my_vote(self._require_transport(), session, answer_id)

        return await self._call_with_reauth(_call)

    async def refresh_vote_state(self, answer_id: int) -> VoteState:
        return await _reads.refresh_vote_state(self, answer_id)

    def discard_vote(self, answer_id: int) -> None:
        """Drop the cached vote state of an answer that is no longer shown."""
        self._state.discard_vote(answer_id)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def get_notifications(
        self,
        *,
        skip: int = 0,
        limit: int = NOTIFICATION_PAGE_SIZE,
        unread_only: bool = False,
    ) -> list[Notification]:
        request = NotificationListRequest(skip=skip, limit=limit, unread_only=unread_only or None)
        return await _reads.get_notifications(self, request)

    async def get_notification_stats(self) -> NotificationStats:
        return await _reads.get_notification_stats(self)

    async def get_unread_count(self) -> int:
        return await _reads.get_unread_count(self)

    async def mark_notification_read(self, notification_id: int) -> Notification | None:
        return await _commands.mark_notification_read(self, notification_id)

    async def mark_all_notifications_read(self) -> NotificationsSnapshot:
        return await _commands.mark_all_notifications_read(self)

    async def delete_notification(self, notification_id: int) -> NotificationsSnapshot:
        return await _commands.delete_notification(self, notification_id)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    async def get_tags(self, *, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> list[Tag]:
        request = PageRequest(skip=skip, limit=limit)

        async def _call() -> list[Tag]:
            return await _tags_api.list_tags(self._require_transport(), self._optional_session(), request)

        return await self._call_with_reauth(_call)

    async def get_popular_tags(self, *, limit: int = DEFAULT_PAGE_SIZE) -> list[Tag]:
        request = PageRequest(limit=limit)

        async def _call() -> list[Tag]:
            return await _tags_api.list_popular_tags(self._require_transport(), self._optional_session(), request)

        return await self._call_with_reauth(_call)

    async def search_tags(self, query: str, *, limit: int = TAG_SUGGESTION_LIMIT) -> list[Tag]:
        request = TagSearchRequest(q=query, limit=limit)

        async def _call() -> list[Tag]:
            return await _tags_api.search_tags(self._require_transport(), self._optional_session(), request)

        return await self._call_with_reauth(_call)

    async def get_tag(self, name: str) -> Tag:
        async def _call() -> Tag:
            return await _tags_api.fetch_tag(self._require_transport(), self._optional_session(), name)

        return await self._call_with_reauth(_call)

    async def get_questions_by_tag(self, name: str, *, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> list[Question]:
        request = PageRequest(skip=skip, limit=limit)

        async def _call() -> list[Question]:
            return await _tags_api.list_questions_by_tag(
                self._require_transport(), self._optional_session(), name, request
            )

        return await self._call_with_reauth(_call)

    async def create_tag(self, name: str, description: str | None = None) -> Tag:
        request = TagCreateRequest(name=name, description=description)

        async def _call() -> Tag:
            session = await self.ensure_session()
            return await _tags_api.create_tag(self._require_transport(), session, request)

        return await self._call_with_reauth(_call)

    # ------------------------------------------------------------------
    # MCQ quizzes
    # ------------------------------------------------------------------

    async def create_quiz(
        self,
        topic: str,
        *,
        num_questions: int = DEFAULT_QUIZ_QUESTIONS,
        difficulty: str = DEFAULT_QUIZ_DIFFICULTY,
    ) -> Quiz:
        request = QuizCreateRequest(topic=topic, num_questions=num_questions, difficulty=difficulty)

        async def _call() -> Quiz:
            session = await self.ensure_session()
            return await _mcq_api.create_quiz(self._require_transport(), session, request)

        return await self._call_with_reauth(_call)

    async def get_quiz(self, quiz_id: int) -> Quiz:
        async def _call() -> Quiz:
            session = await self.ensure_session()
            return await _mcq_api.fetch_quiz(self._require_transport(), session, quiz_id)

        return await self._call_with_reauth(_call)

    async def get_quiz_questions(self, quiz_id: int) -> list[QuizQuestion]:
        async def _call() -> list[QuizQuestion]:
            session = await self.ensure_session()
            return await _mcq_api.fetch_quiz_questions(self._require_transport(), session, quiz_id)

        return await self._call_with_reauth(_call)

    async def submit_quiz(self, submission: QuizSubmission) -> QuizResult:
        """Submit answers; build *submission* with :meth:`QuizAttempt.to_submission`."""

        async def _call() -> QuizResult:
            session = await self.ensure_session()
            return await _mcq_api.submit_quiz(self._require_transport(), session, submission)

        return await self._call_with_reauth(_call)

    async def get_my_quizzes(self, *, skip: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> list[Quiz]:
        request = PageRequest(skip=skip, limit=limit)

        async def _call() -> list[Quiz]:
            session = await self.ensure_session()
            return await _mcq_api.list_my_quizzes(self._require_transport(), session, request)

        return await self._call_with_reauth(_call)

    async def get_topics(self) -> list[str]:
        async def _call() -> list[str]:
            return await _mcq_api.list_topics(self._require_transport(), self._optional_session())

        return await self._call_with_reauth(_call)

    async def get_topic_stats(self, topic: str) -> TopicStats:
        async def _call() -> TopicStats:
            session = await self.ensure_session()
            return await _mcq_api.fetch_topic_stats(self._require_transport(), session, topic)

        return await self._call_with_reauth(_call)

    async def get_topic_leaderboard(self, topic: str, *, limit: int = DEFAULT_PAGE_SIZE) -> list[LeaderboardEntry]:
        request = PageRequest(limit=limit)

        async def _call() -> list[LeaderboardEntry]:
            return await _mcq_api.list_leaderboard(self._require_transport(), self._optional_session(), topic, request)

        return await self._call_with_reauth(_call)
