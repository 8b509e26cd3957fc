"""Domain entities for workspaces and their members."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from appserver.core.acl import AppRole


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class WorkspacePlugin:
    """A plugin installed into a workspace."""

    plugin_id: str
    status: str = "ACTIVATED"


@dataclass(slots=True)
class UserRole:
    """Membership of a single user inside a workspace."""

    username: str
    role: AppRole
    name: str | None = None


@dataclass(slots=True)
class Workspace:
    """Tenant-scoped container grouping applications and users."""

    name: str | None = None
    id: str | None = None
    slug: str | None = None
    email: str | None = None
    website: str | None = None
    domain: str | None = None
    logo_asset_id: str | None = None
    plugins: list[WorkspacePlugin] = field(default_factory=list)
    user_roles: list[UserRole] = field(default_factory=list)
    is_auto_generated: bool = False
    deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def logo_url(self) -> str | None:
        if not self.logo_asset_id:
            return None
        return f"/api/assets/{self.logo_asset_id}"

    def role_of(self, username: str) -> AppRole | None:
        username = username.strip().lower()
        for user_role in self.user_roles:
            if user_role.username.lower() == username:
                return user_role.role
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "email": self.email,
            "website": self.website,
            "domain": self.domain,
            "logo_url": self.logo_url,
            "plugins": [{"plugin_id": p.plugin_id, "status": p.status} for p in self.plugins],
            "user_roles": [
                {"username": r.username, "name": r.name, "role": r.role.display_name} for r in self.user_roles
            ],
            "is_auto_generated": self.is_auto_generated,
        }
