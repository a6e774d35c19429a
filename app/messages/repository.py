# app/messages/repository.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.messages.models import Message


async def create_message(
    db: AsyncSession,
    *,
    from_username: str,
    to_username: str,
    body: str,
) -> Message:
    m = Message(from_username=from_username, to_username=to_username, body=body)
    db.add(m)
    await db.flush()
    await db.refresh(m, attribute_names=["id", "sent_at", "read_at"])
    return m


async def get_message(db: AsyncSession, message_id: int) -> Message | None:
    res = await db.execute(select(Message).where(Message.id == message_id))
    return res.scalar_one_or_none()


async def get_message_detail(db: AsyncSession, message_id: int) -> Message | None:
    # con from_user / to_user ya cargados
    res = await db.execute(
        select(Message)
        .options(joinedload(Message.from_user), joinedload(Message.to_user))
        .where(Message.id == message_id)
    )
    return res.scalar_one_or_none()


async def list_messages_to(db: AsyncSession, username: str) -> List[Message]:
    res = await db.execute(
        select(Message)
        .options(joinedload(Message.from_user))
        .where(Message.to_username == username)
        .order_by(Message.sent_at.asc(), Message.id.asc())
    )
    return list(res.scalars())


async def list_messages_from(db: AsyncSession, username: str) -> List[Message]:
    res = await db.execute(
        select(Message)
        .options(joinedload(Message.to_user))
        .where(Message.from_username == username)
        .order_by(Message.sent_at.asc(), Message.id.asc())
    )
    return list(res.scalars())


async def mark_read(db: AsyncSession, message_id: int) -> datetime | None:
    """
    UPDATE condicional (read_at IS NULL): una sola fila, atómico.
    Devuelve el read_at vigente; si ya estaba leído no lo toca.
    """
    now = datetime.now(timezone.utc)
    await db.execute(
        update(Message)
        .where(Message.id == message_id, Message.read_at.is_(None))
        .values(read_at=now)
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(
        select(Message.read_at).where(Message.id == message_id)
    )
    return res.scalar_one_or_none()
