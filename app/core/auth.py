# app/core/auth.py
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header, Query, Request

from app.core.errors import AuthenticationError
from app.core.security import InvalidTokenError, TokenService


@dataclass(frozen=True)
class Identity:
    username: str


def extract_token(token: str | None, authorization: str | None) -> str | None:
    # token por query o Authorization: Bearer XXX
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    return token or None


def authenticate(token: str | None, tokens: TokenService) -> Identity:
    """
    1) sin token -> 401
    2) firma/claims inválidos -> 401
    3) Identity{username}

    No consulta la DB: un token válido de un usuario que ya no existe
    sigue autenticando.
    """
    if not token:
        raise AuthenticationError("missing token")
    try:
        claims = tokens.verify(token)
    except InvalidTokenError:
        raise AuthenticationError("invalid token")
    return Identity(username=claims["username"])


async def get_identity(
    request: Request,
    token: str | None = Query(None),
    authorization: str | None = Header(None),
) -> Identity:
    identity = authenticate(extract_token(token, authorization), request.app.state.tokens)
    request.state.identity = identity
    return identity
