from types import SimpleNamespace

import pytest

from app.core.auth import Identity, authenticate, extract_token
from app.core.errors import AuthenticationError, ForbiddenError
from app.core.policy import ensure_participant, ensure_recipient, ensure_self, sender_for
from app.core.security import TokenService

ALICE = Identity("alice")
BOB = Identity("bob")
CAROL = Identity("carol")


def _message(sender="alice", recipient="bob"):
    return SimpleNamespace(from_username=sender, to_username=recipient)


def test_extract_token_prefers_query_param():
    assert extract_token("q-token", "Bearer h-token") == "q-token"
    assert extract_token(None, "Bearer h-token") == "h-token"
    assert extract_token(None, "Basic abc") is None
    assert extract_token(None, None) is None


def test_authenticate_rejects_missing_token():
    with pytest.raises(AuthenticationError):
        authenticate(None, TokenService("k"))


def test_authenticate_rejects_invalid_token():
    with pytest.raises(AuthenticationError) as exc:
        authenticate("nope", TokenService("k"))
    assert exc.value.status_code == 401


def test_authenticate_returns_identity():
    tokens = TokenService("k")
    assert authenticate(tokens.issue("alice"), tokens) == ALICE


def test_ensure_self():
    ensure_self(ALICE, "alice")
    with pytest.raises(ForbiddenError):
        ensure_self(ALICE, "bob")


def test_participants_can_read_message():
    message = _message()
    ensure_participant(ALICE, message)
    ensure_participant(BOB, message)
    with pytest.raises(ForbiddenError):
        ensure_participant(CAROL, message)


def test_only_recipient_marks_read():
    message = _message()
    ensure_recipient(BOB, message)
    with pytest.raises(ForbiddenError):
        ensure_recipient(ALICE, message)
    with pytest.raises(ForbiddenError):
        ensure_recipient(CAROL, message)


def test_self_message_allowed():
    message = _message("alice", "alice")
    ensure_participant(ALICE, message)
    ensure_recipient(ALICE, message)


def test_sender_comes_from_identity():
    assert sender_for(BOB) == "bob"
