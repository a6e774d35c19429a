# app/messages/schemas.py
from pydantic import BaseModel, Field
from datetime import datetime

from app.users.schemas import UserBasic


class MessageCreate(BaseModel):
    # from_username NO se acepta: sale del token
    to_username: str = Field(..., min_length=1)
    body: str


class MessageOut(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None = None

    class Config:
        from_attributes = True


class MessageDetail(BaseModel):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    from_user: UserBasic
    to_user: UserBasic

    class Config:
        from_attributes = True


class InboxItem(BaseModel):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    from_user: UserBasic

    class Config:
        from_attributes = True


class OutboxItem(BaseModel):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    to_user: UserBasic

    class Config:
        from_attributes = True


class MessageReadOut(BaseModel):
    id: int
    read_at: datetime | None
