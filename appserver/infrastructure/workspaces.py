"""Infrastructure layer for workspace persistence."""
from __future__ import annotations

from typing import Iterable, Protocol
from uuid import uuid4

from appserver.domain import Workspace, utcnow


class WorkspaceRepository(Protocol):
    """Persistence contract for workspaces."""

    def save(self, workspace: Workspace) -> Workspace: ...

    def find_by_id(self, workspace_id: str) -> Workspace | None: ...

    def find_all_by_ids(self, workspace_ids: Iterable[str]) -> list[Workspace]: ...

    def find_by_slug(self, slug: str) -> Workspace | None: ...

    def archive(self, workspace: Workspace) -> Workspace: ...

    def reset(self) -> None: ...


class InMemoryWorkspaceRepository:
    """Simple in-memory repository for fast iteration and tests."""

    def __init__(self) -> None:
        self._workspaces: dict[str, Workspace] = {}

    def save(self, workspace: Workspace) -> Workspace:
        now = utcnow()
        if workspace.id is None:
            workspace.id = uuid4().hex
            workspace.created_at = now
        workspace.updated_at = now
        self._workspaces[workspace.id] = workspace
        return workspace

    def find_by_id(self, workspace_id: str) -> Workspace | None:
        workspace = self._workspaces.get(workspace_id)
        if workspace is None or workspace.deleted:
            return None
        return workspace

    def find_all_by_ids(self, workspace_ids: Iterable[str]) -> list[Workspace]:
        found = [self.find_by_id(ws_id) for ws_id in workspace_ids]
        workspaces = [workspace for workspace in found if workspace is not None]
        workspaces.sort(key=lambda item: item.created_at or utcnow())
        return workspaces

    def find_by_slug(self, slug: str) -> Workspace | None:
        for workspace in self._workspaces.values():
            if workspace.slug == slug and not workspace.deleted:
                return workspace
        return None

    def archive(self, workspace: Workspace) -> Workspace:
        workspace.deleted = True
        return self.save(workspace)

    def reset(self) -> None:
        self._workspaces.clear()
