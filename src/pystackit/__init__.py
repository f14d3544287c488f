"""pystackit - Async Python client for the StackIt Q&A API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pystackit")
except PackageNotFoundError:
    __version__ = "0+local"
from pystackit.client import StackItClient
from pystackit.config import StackItConfig
from pystackit.exceptions import (
    StackItApiError,
    StackItAuthenticationError,
    StackItConfigError,
    StackItDecodeError,
    StackItError,
    StackItMutationError,
    StackItMutationInFlightError,
    StackItNotFoundError,
    StackItSessionExpiredError,
    StackItTransportError,
    StackItValidationError,
    describe_error,
)
from pystackit.models import (
    AcceptancePhase,
    AcceptanceState,
    Answer,
    Notification,
    Question,
    QuizAttempt,
    Tag,
    User,
    VoteState,
    VoteValue,
)
from pystackit.state.events import ChangeSource, StateChange
from pystackit.state.store import ForumState

__all__ = [
    "__version__",
    "AcceptancePhase",
    "AcceptanceState",
    "Answer",
    "ChangeSource",
    "ForumState",
    "Notification",
    "Question",
    "QuizAttempt",
    "StackItApiError",
    "StackItAuthenticationError",
    "StackItClient",
    "StackItConfig",
    "StackItConfigError",
    "StackItDecodeError",
    "StackItError",
    "StackItMutationError",
    "StackItMutationInFlightError",
    "StackItNotFoundError",
    "StackItSessionExpiredError",
    "StackItTransportError",
    "StackItValidationError",
    "StateChange",
    "Tag",
    "User",
    "VoteState",
    "VoteValue",
    "describe_error",
]
