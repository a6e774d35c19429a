# app/users/router.py
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity, get_identity
from app.db.session import get_session
from app.messages import service as msg_svc
from app.messages.schemas import InboxItem, OutboxItem
from app.users import service as svc
from app.users.schemas import LoginIn, RegisterIn, TokenOut, UserBasic, UserDetail

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
router = APIRouter(prefix="/api/users", tags=["users"])


@auth_router.post("/register/", response_model=TokenOut)
async def register(payload: RegisterIn, request: Request, db: AsyncSession = Depends(get_session)):
    state = request.app.state
    token = await svc.register_user(db, payload, state.hasher, state.tokens)
    await db.commit()
    return {"token": token}


@auth_router.post("/login/", response_model=TokenOut)
async def login(payload: LoginIn, request: Request, db: AsyncSession = Depends(get_session)):
    state = request.app.state
    token = await svc.login_user(db, payload.username, payload.password, state.hasher, state.tokens)
    await db.commit()
    return {"token": token}


@router.get("/", response_model=List[UserBasic])
async def users_list(
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    # cualquier usuario autenticado
    return await svc.list_users(db)


@router.get("/{username}/", response_model=UserDetail)
async def user_detail(
    username: str,
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    return await svc.get_user_detail(db, identity, username)


@router.get("/{username}/to/", response_model=List[InboxItem])
async def messages_to_user(
    username: str,
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    return await msg_svc.messages_to(db, identity, username)


@router.get("/{username}/from/", response_model=List[OutboxItem])
async def messages_from_user(
    username: str,
    db: AsyncSession = Depends(get_session),
    identity: Identity = Depends(get_identity),
):
    return await msg_svc.messages_from(db, identity, username)
