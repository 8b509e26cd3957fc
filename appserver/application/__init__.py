"""Application services."""

from .container import ServiceContainer, build_container, get_container, get_workspace_service, reset_container
from .workspaces import WorkspaceService, WorkspaceServiceBase

__all__ = [
    "ServiceContainer",
    "WorkspaceService",
    "WorkspaceServiceBase",
    "build_container",
    "get_container",
    "get_workspace_service",
    "reset_container",
]
