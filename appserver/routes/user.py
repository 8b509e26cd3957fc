from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends

from appserver.application.container import get_container
from appserver.core.schema import UserCreate
from appserver.domain import User
from appserver.routes.deps import current_user

router = APIRouter(prefix="/users", tags=["user"])


@router.post("")
async def create_user(payload: UserCreate) -> dict:
    service = get_container().user_service
    user = await asyncio.to_thread(service.create_user, payload.email, payload.name)
    return user.to_dict()


@router.get("/me")
async def get_me(user: User = Depends(current_user)) -> dict:
    return user.to_dict()
