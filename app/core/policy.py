# app/core/policy.py
"""
Política de autorización: chequeos de propiedad fijos, sin motor de reglas.

Funciones puras. Devuelven None si se permite, lanzan ForbiddenError si no.
Para mensajes el caller carga la fila primero (404 antes que 403), porque
el chequeo necesita from_username / to_username.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.core.auth import Identity
from app.core.errors import ForbiddenError

if TYPE_CHECKING:
    from app.messages.models import Message

log = logging.getLogger("uvicorn")


def _deny(identity: Identity, detail: str) -> ForbiddenError:
    log.warning("forbidden: user=%s %s", identity.username, detail)
    return ForbiddenError(detail)


def ensure_self(identity: Identity, username: str) -> None:
    """Detalle de usuario y bandejas /to /from: solo el propio usuario."""
    if identity.username != username:
        raise _deny(identity, "only that user can access this resource")


def ensure_participant(identity: Identity, message: Message) -> None:
    if identity.username not in (message.from_username, message.to_username):
        raise _deny(
            identity,
            "only the users that are associated with this message can access it",
        )


def ensure_recipient(identity: Identity, message: Message) -> None:
    if identity.username != message.to_username:
        raise _deny(identity, "only the intended recipient can mark a message as read")


def sender_for(identity: Identity) -> str:
    # el remitente sale SIEMPRE de la sesión, nunca del body
    return identity.username
