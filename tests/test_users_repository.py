import asyncio

import pytest
from sqlalchemy import func, select

from app.core.errors import DuplicateUsernameError
from app.db.init_db import init_models
from app.db.session import build_engine, build_sessionmaker
from app.users import repository as repo
from app.users.models import User


def _new_user(db, username):
    return repo.create_user(
        db,
        username=username,
        password_hash="$argon2id$placeholder",
        first_name="A",
        last_name="B",
        phone="1",
    )


def test_primary_key_rejects_second_registration(settings):
    async def scenario():
        engine = build_engine(settings.DATABASE_URL)
        sessions = build_sessionmaker(engine)
        try:
            await init_models(engine)

            async with sessions() as first:
                await _new_user(first, "alice")
                await first.commit()

            # sin pre-check: solo la PK decide
            async with sessions() as second:
                with pytest.raises(DuplicateUsernameError):
                    await _new_user(second, "alice")
                await second.rollback()

            async with sessions() as check:
                res = await check.execute(
                    select(func.count()).select_from(User).where(User.username == "alice")
                )
                return res.scalar_one()
        finally:
            await engine.dispose()

    assert asyncio.run(scenario()) == 1
