from __future__ import annotations

from pystackit._redact import REDACTED, mask_email, redact_for_log


def test_redact_for_log_redacts_credentials_and_tokens() -> None:
    payload = {
        "username": "alice",
        "password": "pw",
        "access_token": "eyJhbGciOi",
        "token_type": "bearer",
        "headers": {"Authorization": "Bearer eyJhbGciOi", "Set-Cookie": "sid=1"},
        "items": [{"token": "t", "hashed_password": "$2b$12$abc"}],
    }

    redacted = redact_for_log(payload)
    assert redacted["username"] == "alice"
    assert redacted["password"] == REDACTED
    assert redacted["access_token"] == REDACTED
    assert redacted["token_type"] == "bearer"
    assert redacted["headers"] == {"Authorization": REDACTED, "Set-Cookie": REDACTED}
    assert redacted["items"][0] == {"token": REDACTED, "hashed_password": REDACTED}


def test_redact_for_log_masks_account_email() -> None:
    me = {"id": 1, "username": "alice", "email": "alice@example.com", "is_active": True}

    redacted = redact_for_log(me)
    assert redacted == {"id": 1, "username": "alice", "email": "a***@example.com", "is_active": True}


def test_mask_email_without_domain_is_fully_redacted() -> None:
    assert mask_email("not-an-address") == REDACTED
    assert mask_email("@example.com") == REDACTED


def test_redact_for_log_masks_bearer_inside_text() -> None:
    redacted = redact_for_log({"detail": "token Bearer abc.def.ghi rejected"})
    assert redacted["detail"] == f"token Bearer {REDACTED} rejected"
    assert "abc.def.ghi" not in redacted["detail"]


def test_redact_for_log_truncates_long_descriptions() -> None:
    redacted = redact_for_log({"description": "x" * 600}, max_string=10)
    assert redacted["description"].startswith("x" * 10)
    assert "<truncated>" in redacted["description"]


def test_redact_for_log_keeps_forum_payload_shape() -> None:
    answers = [{"id": 41, "vote_score": 5, "is_accepted": False, "body": b"\x00\x01"}]
    assert redact_for_log(answers) == [{"id": 41, "vote_score": 5, "is_accepted": False, "body": "<bytes:2b>"}]
