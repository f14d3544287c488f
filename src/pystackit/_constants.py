"""Internal constants shared across the library."""

BASE_URL = "http://localhost:8000"
API_PREFIX = "/api/v1"
USER_AGENT = "pystackit/0.1"

#: HTTP statuses that mean "log in again".
AUTH_ERROR_STATUSES: frozenset[int] = frozenset({401, 403})
#: HTTP statuses carrying a user-visible validation message.
VALIDATION_ERROR_STATUSES: frozenset[int] = frozenset({400, 409, 422})
NOT_FOUND_STATUS = 404

#: Vote values accepted by ``POST /votes/``.
VALID_VOTE_VALUES: tuple[int, ...] = (-1, 1)

# ------------------------------------------------------------------
# Default paging, mirrored from the web front-end
# ------------------------------------------------------------------

DEFAULT_PAGE_SIZE = 20
NOTIFICATION_PAGE_SIZE = 50
TAG_SUGGESTION_LIMIT = 5

# ------------------------------------------------------------------
# MCQ quiz defaults
# ------------------------------------------------------------------

DEFAULT_QUIZ_QUESTIONS = 10
DEFAULT_QUIZ_DIFFICULTY = "mixed"
#: Seconds allowed when the server does not send ``time_limit``.
DEFAULT_QUIZ_TIME_LIMIT = 600
VALID_QUIZ_DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard", "mixed")
