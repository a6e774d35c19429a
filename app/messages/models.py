# app/messages/models.py
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    Integer,
    String,
    Text,
    DateTime,
    func,
    ForeignKey,
)
from app.db.base import Base
from app.users.models import User


class Message(Base):
    """
    Mensaje dirigido e inmutable: from/to/body/sent_at no cambian.
    Solo read_at pasa de NULL a timestamp, una vez.
    """

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    from_username: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.username"),
        index=True,
        nullable=False,
    )
    to_username: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.username"),
        index=True,
        nullable=False,
    )

    body: Mapped[str] = mapped_column(Text, nullable=False)

    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    read_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # async: nada de lazy load implícito, se cargan con joinedload
    from_user: Mapped[User] = relationship(User, foreign_keys=[from_username], lazy="raise")
    to_user: Mapped[User] = relationship(User, foreign_keys=[to_username], lazy="raise")
