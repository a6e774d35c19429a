import pytest

from app.core.security import CryptoError, PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(work_factor=1)


def test_hash_then_verify(hasher):
    hashed = hasher.hash("supersecurepassword")
    assert hashed.startswith("$argon2")
    assert hasher.verify("supersecurepassword", hashed)


def test_wrong_password_returns_false(hasher):
    hashed = hasher.hash("secret1")
    assert hasher.verify("secret2", hashed) is False


def test_hash_is_salted(hasher):
    assert hasher.hash("same-password") != hasher.hash("same-password")


def test_malformed_hash_raises_crypto_error(hasher):
    with pytest.raises(CryptoError):
        hasher.verify("secret1", "not-a-real-hash")


def test_hash_from_lower_work_factor_needs_update():
    weak = PasswordHasher(work_factor=1).hash("secret1")
    stronger = PasswordHasher(work_factor=2)
    assert stronger.verify("secret1", weak)
    assert stronger.needs_update(weak)
    assert not stronger.needs_update(stronger.hash("secret1"))
