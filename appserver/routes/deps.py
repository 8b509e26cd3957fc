from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request

from appserver.application import get_container
from appserver.domain import User


async def current_user(x_user_email: str | None = Header(default=None)) -> User:
    """Bind the user named by the ``X-User-Email`` header to the request."""

    if not x_user_email:
        raise HTTPException(status_code=401, detail="X-User-Email header is required")
    container = get_container()
    user = container.user_repository.find_by_email(x_user_email)
    if user is None:
        raise HTTPException(status_code=401, detail="unknown user")
    container.session_user_service.set_current_user(user)
    return user


async def instance_admin(request: Request, user: User = Depends(current_user)) -> User:
    """Allow only the instance administrators listed in ``ADMIN_EMAILS``."""

    admin_emails = getattr(request.app.state, "admin_emails", frozenset())
    if user.email.lower() not in admin_emails:
        raise HTTPException(status_code=403, detail="instance administrator required")
    return user


async def optional_user(x_user_email: str | None = Header(default=None)) -> User | None:
    container = get_container()
    user = container.user_repository.find_by_email(x_user_email) if x_user_email else None
    container.session_user_service.set_current_user(user)
    return user
