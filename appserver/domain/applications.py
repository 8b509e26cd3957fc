"""Domain entities for user-built applications and their pages."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class ApplicationPage:
    """Reference from an application to one of its pages."""

    id: str
    is_default: bool = False


@dataclass(slots=True)
class Page:
    id: str | None = None
    name: str = "Page1"
    application_id: str | None = None
    deleted: bool = False


@dataclass(slots=True)
class Application:
    """A project owned by a workspace.

    ``app_is_example`` is transient: it is computed whenever the application
    is read back and is never stored by the repository.
    """

    name: str | None = None
    workspace_id: str | None = None
    id: str | None = None
    slug: str | None = None
    is_public: bool = False
    color: str | None = None
    pages: list[ApplicationPage] = field(default_factory=list)
    deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    app_is_example: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "workspace_id": self.workspace_id,
            "slug": self.slug,
            "is_public": self.is_public,
            "color": self.color,
            "pages": [{"id": page.id, "is_default": page.is_default} for page in self.pages],
            "app_is_example": self.app_is_example,
        }
