# app/db/session.py
from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def build_engine(db_url: str) -> AsyncEngine:
    # Timeouts cortos: si la DB no responde -> falla rápido (5s)
    if db_url.startswith("postgresql+psycopg"):
        return create_async_engine(
            db_url,
            pool_pre_ping=True,
            pool_recycle=300,
            pool_size=5,
            max_overflow=10,
            connect_args={"connect_timeout": 5},
        )
    if db_url.startswith("postgresql+asyncpg"):
        return create_async_engine(
            db_url,
            pool_pre_ping=True,
            pool_recycle=300,
            pool_size=5,
            max_overflow=10,
            connect_args={
                "timeout": 5,
                "server_settings": {"client_encoding": "UTF8"},
            },
        )
    # sqlite+aiosqlite (dev/tests): el pool lo elige SQLAlchemy
    return create_async_engine(db_url)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_session(request: Request) -> AsyncSession:
    async with request.app.state.sessionmaker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
