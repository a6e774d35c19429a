# app/messages/service.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity
from app.core.errors import NotFoundError
from app.core.policy import ensure_participant, ensure_recipient, ensure_self, sender_for
from app.messages import repository as repo
from app.messages.models import Message
from app.messages.schemas import MessageCreate
from app.users.repository import get_by_username

log = logging.getLogger("uvicorn")


async def send_message(db: AsyncSession, identity: Identity, data: MessageCreate) -> Message:
    if not await get_by_username(db, data.to_username):
        raise NotFoundError("recipient not found")
    return await repo.create_message(
        db,
        from_username=sender_for(identity),
        to_username=data.to_username,
        body=data.body,
    )


async def get_message(db: AsyncSession, identity: Identity, message_id: int) -> Message:
    # 404 antes que 403: el chequeo necesita la fila
    m = await repo.get_message_detail(db, message_id)
    if not m:
        raise NotFoundError("message not found")
    ensure_participant(identity, m)
    return m


async def mark_read(db: AsyncSession, identity: Identity, message_id: int) -> tuple[int, datetime | None]:
    m = await repo.get_message(db, message_id)
    if not m:
        raise NotFoundError("message not found")
    ensure_recipient(identity, m)
    read_at = await repo.mark_read(db, message_id)
    log.info("message %s read by %s", message_id, identity.username)
    return m.id, read_at


async def messages_to(db: AsyncSession, identity: Identity, username: str) -> List[Message]:
    ensure_self(identity, username)
    return await repo.list_messages_to(db, username)


async def messages_from(db: AsyncSession, identity: Identity, username: str) -> List[Message]:
    ensure_self(identity, username)
    return await repo.list_messages_from(db, username)
