# app/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import Settings


class CryptoError(Exception):
    """Hash almacenado malformado o de un esquema desconocido."""


class InvalidTokenError(Exception):
    """Firma inválida, token malformado, sin `username` o expirado."""


class PasswordHasher:
    """
    Solo argon2 (evita líos de bcrypt en Windows).
    `work_factor` son los rounds (time cost) de argon2.
    """

    def __init__(self, work_factor: int = 3):
        self.work_factor = work_factor
        self._ctx = CryptContext(
            schemes=["argon2"],
            default="argon2",
            deprecated="auto",
            argon2__default_rounds=work_factor,
            # hashes con menos rounds -> needs_update() True (rehash en login)
            argon2__min_desired_rounds=work_factor,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(work_factor=settings.HASH_WORK_FACTOR)

    def hash(self, password: str) -> str:
        return self._ctx.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return self._ctx.verify(password, hashed)
        except (ValueError, TypeError) as e:
            # passlib lanza ValueError si no reconoce el hash
            raise CryptoError(str(e)) from e

    def dummy_verify(self) -> bool:
        # mismo costo que un verify real cuando el usuario no existe
        return self._ctx.dummy_verify()

    def needs_update(self, hashed: str) -> bool:
        try:
            return self._ctx.needs_update(hashed)
        except (ValueError, TypeError) as e:
            raise CryptoError(str(e)) from e


class TokenService:
    """
    JWT firmado (no cifrado) con {username, iat, exp}.
    Sin lista de revocación: el token vale hasta que expira.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.TOKEN_ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MIN,
        )

    def __repr__(self) -> str:
        return f"TokenService(algorithm={self.algorithm!r}, expire_minutes={self.expire_minutes})"

    def issue(self, username: str, expires_minutes: int | None = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_minutes or self.expire_minutes)
        payload = {"username": username, "iat": now, "exp": expire}
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e
        username = payload.get("username")
        if not username or not isinstance(username, str):
            raise InvalidTokenError("missing username")
        return {"username": username}
