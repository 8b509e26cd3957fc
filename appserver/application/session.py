from __future__ import annotations

from contextvars import ContextVar, Token

from appserver.domain import AppError, ErrorCode, User

_current_user: ContextVar[User | None] = ContextVar("current_user", default=None)


class SessionUserService:
    """Exposes the user bound to the running request."""

    def find_current_user(self) -> User | None:
        return _current_user.get()

    def get_current_user(self) -> User:
        user = _current_user.get()
        if user is None:
            raise AppError(ErrorCode.UNAUTHORIZED)
        return user

    def set_current_user(self, user: User | None) -> Token:
        return _current_user.set(user)

    def clear_current_user(self, token: Token | None = None) -> None:
        if token is not None:
            _current_user.reset(token)
        else:
            _current_user.set(None)
