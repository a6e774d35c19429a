# app/users/repository.py
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DuplicateUsernameError
from app.users.models import User

async def get_by_username(db: AsyncSession, username: str) -> User | None:
    res = await db.execute(select(User).where(User.username == username))
    return res.scalar_one_or_none()

async def list_users(db: AsyncSession) -> list[User]:
    res = await db.execute(select(User).order_by(User.username.asc()))
    return list(res.scalars())

async def create_user(
    db: AsyncSession,
    *,
    username: str,
    password_hash: str,
    first_name: str,
    last_name: str,
    phone: str,
) -> User:
    user = User(
        username=username,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # la PK es la que decide entre dos registros concurrentes;
        # el rollback lo hace get_session
        raise DuplicateUsernameError() from e
    await db.refresh(user)
    return user

async def update_login_timestamp(db: AsyncSession, username: str) -> datetime | None:
    now = datetime.now(timezone.utc)
    res = await db.execute(
        update(User)
        .where(User.username == username)
        .values(last_login_at=now)
    )
    return now if res.rowcount else None

async def update_password_hash(db: AsyncSession, username: str, password_hash: str) -> None:
    await db.execute(
        update(User)
        .where(User.username == username)
        .values(password_hash=password_hash)
    )
