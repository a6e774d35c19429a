# app/messages/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity, get_identity
from app.db.session import get_session
from app.messages import service as svc
from app.messages.schemas import MessageCreate, MessageDetail, MessageOut, MessageReadOut

router = APIRouter(prefix="/api/messages", tags=["messages"])

# ids fuera de rango de la columna Integer (32 bits) -> 400, no llegan al driver
MAX_MESSAGE_ID = 2**31 - 1


@router.post("/", response_model=MessageOut)
async def create_message(
    payload: MessageCreate,
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    m = await svc.send_message(db, identity, payload)
    await db.commit()
    return m


@router.get("/{message_id}/", response_model=MessageDetail)
async def message_detail(
    message_id: int = Path(..., ge=1, le=MAX_MESSAGE_ID),
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    return await svc.get_message(db, identity, message_id)


@router.post("/{message_id}/read/", response_model=MessageReadOut)
async def mark_message_read(
    message_id: int = Path(..., ge=1, le=MAX_MESSAGE_ID),
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    mid, read_at = await svc.mark_read(db, identity, message_id)
    await db.commit()
    return {"id": mid, "read_at": read_at}
