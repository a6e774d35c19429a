import pytest
from jose import jwt

from app.core.config import Settings
from app.core.security import InvalidTokenError, TokenService


@pytest.fixture
def tokens():
    return TokenService(secret_key="unit-test-key")


def test_issue_verify_round_trip(tokens):
    token = tokens.issue("alice")
    assert tokens.verify(token) == {"username": "alice"}


def test_token_carries_expiry_and_issued_at(tokens):
    claims = jwt.get_unverified_claims(tokens.issue("alice"))
    assert claims["username"] == "alice"
    assert claims["exp"] > claims["iat"]


def test_corrupted_signature_fails(tokens):
    token = tokens.issue("alice")
    header, payload, signature = token.split(".")
    # el último char de base64 puede ser solo padding: tocar uno del medio
    mid = len(signature) // 2
    swapped = "A" if signature[mid] != "A" else "B"
    corrupted = ".".join([header, payload, signature[:mid] + swapped + signature[mid + 1:]])
    with pytest.raises(InvalidTokenError):
        tokens.verify(corrupted)


def test_token_signed_with_other_key_fails(tokens):
    other = TokenService(secret_key="another-key").issue("alice")
    with pytest.raises(InvalidTokenError):
        tokens.verify(other)


def test_malformed_token_fails(tokens):
    with pytest.raises(InvalidTokenError):
        tokens.verify("garbage")


def test_expired_token_fails(tokens):
    token = tokens.issue("alice", expires_minutes=-5)
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_without_username_fails(tokens):
    token = jwt.encode({"sub": "alice"}, "unit-test-key", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_from_settings_uses_configured_secret():
    settings = Settings(SECRET_KEY="configured", ACCESS_TOKEN_EXPIRE_MIN=5)
    service = TokenService.from_settings(settings)
    assert service.expire_minutes == 5
    assert "configured" not in repr(service)
    assert service.verify(service.issue("bob")) == {"username": "bob"}


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        TokenService(secret_key="")
