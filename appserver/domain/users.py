"""User, asset and plugin records."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class User:
    email: str
    name: str | None = None
    id: str | None = None
    workspace_ids: set[str] = field(default_factory=set)
    current_workspace_id: str | None = None
    examples_workspace_id: str | None = None

    @property
    def first_name(self) -> str:
        if self.name and self.name.strip():
            return self.name.split()[0]
        return self.email.split("@", 1)[0]

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "workspace_ids": sorted(self.workspace_ids),
            "current_workspace_id": self.current_workspace_id,
            "examples_workspace_id": self.examples_workspace_id,
        }


@dataclass(slots=True)
class Asset:
    """Binary blob uploaded by a user, e.g. a workspace logo."""

    content_type: str
    data: bytes
    id: str | None = None


@dataclass(slots=True)
class Plugin:
    id: str
    name: str
    package_name: str
    default_install: bool = False
