"""Infrastructure layer for users and uploaded assets."""
from __future__ import annotations

from typing import Protocol
from uuid import uuid4

from appserver.domain import Asset, User


class UserRepository(Protocol):
    def save(self, user: User) -> User: ...

    def find_by_id(self, user_id: str) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def reset(self) -> None: ...


class AssetRepository(Protocol):
    def save(self, asset: Asset) -> Asset: ...

    def find_by_id(self, asset_id: str) -> Asset | None: ...

    def delete_by_id(self, asset_id: str) -> bool: ...

    def reset(self) -> None: ...


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def save(self, user: User) -> User:
        if user.id is None:
            user.id = uuid4().hex
        self._users[user.id] = user
        return user

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        needle = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == needle:
                return user
        return None

    def reset(self) -> None:
        self._users.clear()


class InMemoryAssetRepository:
    def __init__(self) -> None:
        self._assets: dict[str, Asset] = {}

    def save(self, asset: Asset) -> Asset:
        if asset.id is None:
            asset.id = uuid4().hex
        self._assets[asset.id] = asset
        return asset

    def find_by_id(self, asset_id: str) -> Asset | None:
        return self._assets.get(asset_id)

    def delete_by_id(self, asset_id: str) -> bool:
        return self._assets.pop(asset_id, None) is not None

    def reset(self) -> None:
        self._assets.clear()
