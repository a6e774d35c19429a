# app/users/service.py
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.auth import Identity
from app.core.errors import DuplicateUsernameError, InvalidCredentialsError, NotFoundError
from app.core.policy import ensure_self
from app.core.security import CryptoError, PasswordHasher, TokenService
from app.users import repository as repo
from app.users.models import User
from app.users.schemas import RegisterIn

log = logging.getLogger("uvicorn")


async def register_user(
    db: AsyncSession,
    data: RegisterIn,
    hasher: PasswordHasher,
    tokens: TokenService,
) -> str:
    if await repo.get_by_username(db, data.username):
        raise DuplicateUsernameError()

    # argon2 es CPU: fuera del event loop
    hashed = await run_in_threadpool(hasher.hash, data.password)
    user = await repo.create_user(
        db,
        username=data.username,
        password_hash=hashed,
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
    )
    await repo.update_login_timestamp(db, user.username)

    # El commit lo hace el router
    log.info("user registered: %s", user.username)
    return tokens.issue(user.username)


async def authenticate_user(
    db: AsyncSession,
    username: str,
    password: str,
    hasher: PasswordHasher,
) -> User | None:
    user = await repo.get_by_username(db, username)
    if not user:
        await run_in_threadpool(hasher.dummy_verify)
        return None
    try:
        ok = await run_in_threadpool(hasher.verify, password, user.password_hash)
    except CryptoError:
        log.error("unreadable password hash for user %s", username)
        return None
    if not ok:
        return None

    # rehash transparente si subió el work factor
    if hasher.needs_update(user.password_hash):
        new_hash = await run_in_threadpool(hasher.hash, password)
        await repo.update_password_hash(db, user.username, new_hash)
    return user


async def login_user(
    db: AsyncSession,
    username: str,
    password: str,
    hasher: PasswordHasher,
    tokens: TokenService,
) -> str:
    user = await authenticate_user(db, username, password, hasher)
    if not user:
        log.info("login failed for %s", username)
        raise InvalidCredentialsError()
    await repo.update_login_timestamp(db, user.username)
    log.info("login ok: %s", user.username)
    return tokens.issue(user.username)


async def list_users(db: AsyncSession) -> list[User]:
    return await repo.list_users(db)


async def get_user_detail(db: AsyncSession, identity: Identity, username: str) -> User:
    ensure_self(identity, username)
    user = await repo.get_by_username(db, username)
    if not user:
        raise NotFoundError("user not found")
    return user
