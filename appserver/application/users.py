"""User accounts and workspace membership."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from appserver.application.analytics import AnalyticsService
from appserver.application.session import SessionUserService
from appserver.core.acl import AclPermission, AppRole, RoleGraph
from appserver.domain import AppError, ErrorCode, User, UserRole, Workspace
from appserver.infrastructure import UserRepository, WorkspaceRepository

if TYPE_CHECKING:
    from appserver.application.examples import ExamplesWorkspaceCloner
    from appserver.application.workspaces import WorkspaceService

logger = logging.getLogger(__name__)


class UserWorkspaceService:
    """Manages who belongs to a workspace and what their role allows."""

    def __init__(
        self,
        workspace_repository: WorkspaceRepository,
        user_repository: UserRepository,
        session_user_service: SessionUserService,
        role_graph: RoleGraph,
    ) -> None:
        self._workspace_repository = workspace_repository
        self._user_repository = user_repository
        self._session_user_service = session_user_service
        self._role_graph = role_graph

    # ------------------------------------------------------------------
    # permission helpers
    # ------------------------------------------------------------------
    def has_permission(self, workspace: Workspace, permission: AclPermission, user: User | None = None) -> bool:
        user = user or self._session_user_service.get_current_user()
        return self._role_graph.has_permission(workspace.role_of(user.email), permission)

    def find_workspace(self, workspace_id: str, permission: AclPermission) -> Workspace:
        """Load a workspace the current user holds ``permission`` on."""

        workspace = self._workspace_repository.find_by_id(workspace_id)
        if workspace is None or not self.has_permission(workspace, permission):
            raise AppError(ErrorCode.ACL_NO_RESOURCE_FOUND, "workspace", workspace_id)
        return workspace

    # ------------------------------------------------------------------
    # membership
    # ------------------------------------------------------------------
    def add_user_to_workspace(self, workspace: Workspace, user: User, role: AppRole) -> UserRole:
        """Attach ``user`` to ``workspace`` without any permission check."""

        user_role = UserRole(username=user.email, role=role, name=user.name)
        workspace.user_roles.append(user_role)
        self._workspace_repository.save(workspace)
        user.workspace_ids.add(workspace.id)
        self._user_repository.save(user)
        return user_role

    def add_user_role_to_workspace(self, workspace_id: str, username: str, role: AppRole) -> UserRole:
        workspace = self.find_workspace(workspace_id, AclPermission.WORKSPACE_INVITE_USERS)
        inviter = self._session_user_service.get_current_user()
        inviter_role = workspace.role_of(inviter.email)
        if inviter_role is None or role not in self._role_graph.generate_hierarchical_roles(inviter_role):
            raise AppError(ErrorCode.ACTION_IS_NOT_AUTHORIZED, f"assign role {role.display_name}")

        user = self._user_repository.find_by_email(username)
        if user is None:
            raise AppError(ErrorCode.NO_RESOURCE_FOUND, "user", username)
        existing = workspace.role_of(user.email)
        if existing is not None:
            raise AppError(ErrorCode.USER_ALREADY_EXISTS_IN_WORKSPACE, username, existing.display_name)

        user_role = self.add_user_to_workspace(workspace, user, role)
        logger.info("added %s to workspace %s as %s", username, workspace_id, role.display_name)
        return user_role

    def update_role_for_member(self, workspace_id: str, username: str, role: AppRole | None) -> UserRole | None:
        """Change a member's role; ``None`` removes the member."""

        workspace = self.find_workspace(workspace_id, AclPermission.MANAGE_WORKSPACES)
        member = self._find_member(workspace, username)
        self._guard_last_admin(workspace, member, role)

        if role is None:
            self._remove_member(workspace, member)
            return None
        member.role = role
        self._workspace_repository.save(workspace)
        return member

    def leave_workspace(self, workspace_id: str) -> User:
        user = self._session_user_service.get_current_user()
        workspace = self._workspace_repository.find_by_id(workspace_id)
        if workspace is None or workspace.role_of(user.email) is None:
            raise AppError(ErrorCode.NO_RESOURCE_FOUND, "workspace", workspace_id)
        member = self._find_member(workspace, user.email)
        self._guard_last_admin(workspace, member, None)
        self._remove_member(workspace, member)
        return user

    def _find_member(self, workspace: Workspace, username: str) -> UserRole:
        normalized = username.strip().lower()
        for user_role in workspace.user_roles:
            if user_role.username.lower() == normalized:
                return user_role
        raise AppError(ErrorCode.NO_RESOURCE_FOUND, "user", username)

    def _guard_last_admin(self, workspace: Workspace, member: UserRole, new_role: AppRole | None) -> None:
        if member.role is not AppRole.ADMINISTRATOR or new_role is AppRole.ADMINISTRATOR:
            return
        admins = [item for item in workspace.user_roles if item.role is AppRole.ADMINISTRATOR]
        if len(admins) <= 1:
            raise AppError(ErrorCode.REMOVE_LAST_WORKSPACE_ADMIN_ERROR)

    def _remove_member(self, workspace: Workspace, member: UserRole) -> None:
        workspace.user_roles.remove(member)
        self._workspace_repository.save(workspace)
        user = self._user_repository.find_by_email(member.username)
        if user is not None:
            user.workspace_ids.discard(workspace.id)
            if user.current_workspace_id == workspace.id:
                user.current_workspace_id = None
            self._user_repository.save(user)
        logger.info("removed %s from workspace %s", member.username, workspace.id)


class UserService:
    def __init__(
        self,
        repository: UserRepository,
        workspace_service: "WorkspaceService",
        examples_workspace_cloner: "ExamplesWorkspaceCloner",
        analytics_service: AnalyticsService,
    ) -> None:
        self._repository = repository
        self._workspace_service = workspace_service
        self._examples_workspace_cloner = examples_workspace_cloner
        self._analytics_service = analytics_service

    def create_user(self, email: str, name: str | None = None) -> User:
        """Sign up a user with a personal workspace and a copy of the examples."""

        if self._repository.find_by_email(email) is not None:
            raise AppError(ErrorCode.DUPLICATE_KEY, "user", email)
        user = self._repository.save(User(email=email.strip().lower(), name=name))
        self._workspace_service.create_default(user)
        self._examples_workspace_cloner.clone_examples_workspace(user)
        self._analytics_service.send_create_event(user)
        logger.info("created user %s", user.email)
        return user

    def get_by_email(self, email: str) -> User:
        user = self._repository.find_by_email(email)
        if user is None:
            raise AppError(ErrorCode.NO_RESOURCE_FOUND, "user", email)
        return user
