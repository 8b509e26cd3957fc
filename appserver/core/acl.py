"""Permissions, workspace roles and the graph that relates them."""
from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Hashable, Iterable, Mapping, TypeVar

T = TypeVar("T", bound=Hashable)


class AclPermission(str, Enum):
    MANAGE_WORKSPACES = "manage:workspaces"
    READ_WORKSPACES = "read:workspaces"
    WORKSPACE_MANAGE_APPLICATIONS = "manage:workspaceApplications"
    WORKSPACE_READ_APPLICATIONS = "read:workspaceApplications"
    WORKSPACE_INVITE_USERS = "inviteUsers:workspace"
    MANAGE_APPLICATIONS = "manage:applications"
    READ_APPLICATIONS = "read:applications"
    MAKE_PUBLIC_APPLICATIONS = "makePublic:applications"


class AppRole(Enum):
    ADMINISTRATOR = (
        "Administrator",
        "Can modify all workspace settings including editing applications, inviting other users to the workspace and exporting applications from the workspace",
        frozenset({AclPermission.MANAGE_WORKSPACES}),
    )
    DEVELOPER = (
        "Developer",
        "Can edit and view applications along with inviting other users to the workspace",
        frozenset(
            {
                AclPermission.READ_WORKSPACES,
                AclPermission.WORKSPACE_MANAGE_APPLICATIONS,
                AclPermission.WORKSPACE_INVITE_USERS,
            }
        ),
    )
    APP_VIEWER = (
        "App Viewer",
        "Can view applications and invite other users to view applications",
        frozenset(
            {
                AclPermission.READ_WORKSPACES,
                AclPermission.WORKSPACE_READ_APPLICATIONS,
                AclPermission.WORKSPACE_INVITE_USERS,
            }
        ),
    )

    def __init__(self, display_name: str, description: str, permissions: frozenset[AclPermission]) -> None:
        self.display_name = display_name
        self.description = description
        self.permissions = permissions

    @classmethod
    def from_name(cls, value: str) -> "AppRole":
        """Resolve either the enum name or the display name."""

        for role in cls:
            if value in (role.name, role.display_name):
                return role
        raise ValueError(f"unknown role: {value}")


PERMISSION_HIERARCHY: dict[AclPermission, set[AclPermission]] = {
    AclPermission.MANAGE_WORKSPACES: {
        AclPermission.READ_WORKSPACES,
        AclPermission.WORKSPACE_MANAGE_APPLICATIONS,
        AclPermission.WORKSPACE_INVITE_USERS,
    },
    AclPermission.WORKSPACE_MANAGE_APPLICATIONS: {
        AclPermission.WORKSPACE_READ_APPLICATIONS,
        AclPermission.MANAGE_APPLICATIONS,
    },
    AclPermission.WORKSPACE_READ_APPLICATIONS: {AclPermission.READ_APPLICATIONS},
    AclPermission.MANAGE_APPLICATIONS: {
        AclPermission.READ_APPLICATIONS,
        AclPermission.MAKE_PUBLIC_APPLICATIONS,
    },
}

ROLE_HIERARCHY: dict[AppRole, set[AppRole]] = {
    AppRole.ADMINISTRATOR: {AppRole.DEVELOPER},
    AppRole.DEVELOPER: {AppRole.APP_VIEWER},
}


def _closure(edges: Mapping[T, Iterable[T]], roots: Iterable[T]) -> set[T]:
    seen: set[T] = set()
    queue = deque(roots)
    while queue:
        node = queue.popleft()
        if node in seen:
            continue
        seen.add(node)
        queue.extend(edges.get(node, ()))
    return seen


class RoleGraph:
    """Expands roles into the full set of permissions they imply."""

    def __init__(
        self,
        permission_hierarchy: Mapping[AclPermission, Iterable[AclPermission]] | None = None,
        role_hierarchy: Mapping[AppRole, Iterable[AppRole]] | None = None,
    ) -> None:
        self._permissions = permission_hierarchy if permission_hierarchy is not None else PERMISSION_HIERARCHY
        self._roles = role_hierarchy if role_hierarchy is not None else ROLE_HIERARCHY

    def generate_permissions(self, role: AppRole) -> set[AclPermission]:
        return _closure(self._permissions, role.permissions)

    def generate_permissions_for_roles(self, roles: Iterable[AppRole]) -> set[AclPermission]:
        granted: set[AclPermission] = set()
        for role in roles:
            granted |= self.generate_permissions(role)
        return granted

    def generate_hierarchical_roles(self, role: AppRole) -> set[AppRole]:
        return _closure(self._roles, [role])

    def has_permission(self, role: AppRole | None, permission: AclPermission) -> bool:
        if role is None:
            return False
        return permission in self.generate_permissions(role)
