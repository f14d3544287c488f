from __future__ import annotations

import pytest

from pystackit._transport import error_for_status, extract_detail
from pystackit.exceptions import (
    GENERIC_FAILURE_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    StackItApiError,
    StackItAuthenticationError,
    StackItMutationError,
    StackItNotFoundError,
    StackItSessionExpiredError,
    StackItTransportError,
    StackItValidationError,
    describe_error,
)


@pytest.mark.parametrize(
    ("status", "authenticated", "expected"),
    [
        (401, True, StackItSessionExpiredError),
        (401, False, StackItAuthenticationError),
        (403, True, StackItAuthenticationError),
        (404, False, StackItNotFoundError),
        (400, True, StackItValidationError),
        (409, True, StackItValidationError),
        (422, False, StackItValidationError),
        (500, True, StackItApiError),
    ],
)
def test_error_for_status_maps_to_typed_exceptions(
    status: int, authenticated: bool, expected: type[StackItApiError]
) -> None:
    err = error_for_status(status, {"detail": "nope"}, endpoint="/x", authenticated=authenticated)
    assert type(err) is expected
    assert err.status_code == status
    assert err.endpoint == "/x"
    assert err.detail == "nope"


def test_extract_detail_formats() -> None:
    assert extract_detail({"detail": "Answer already accepted"}) == "Answer already accepted"
    assert extract_detail({"message": "gone"}) == "gone"
    assert extract_detail("Internal Server Error") == "Internal Server Error"
    assert extract_detail(None) == ""
    assert extract_detail({"detail": [{"loc": ["body", "value"], "msg": "invalid vote"}]}) == "value: invalid vote"


def test_describe_error_messages() -> None:
    assert describe_error(StackItSessionExpiredError("x", status_code=401)) == LOGIN_REQUIRED_MESSAGE
    assert describe_error(StackItValidationError("x", detail="Already voted")) == "Already voted"
    assert describe_error(StackItApiError("x", status_code=500)) == GENERIC_FAILURE_MESSAGE
    assert describe_error(StackItTransportError("timeout")) == GENERIC_FAILURE_MESSAGE
    assert describe_error(StackItMutationError("shown as is")) == "shown as is"
