"""Domain layer definitions."""

from .applications import Application, ApplicationPage, Page
from .errors import AppError, ErrorCode
from .users import Asset, Plugin, User
from .workspaces import UserRole, Workspace, WorkspacePlugin, utcnow

__all__ = [
    "AppError",
    "Application",
    "ApplicationPage",
    "Asset",
    "ErrorCode",
    "Page",
    "Plugin",
    "User",
    "UserRole",
    "Workspace",
    "WorkspacePlugin",
    "utcnow",
]
