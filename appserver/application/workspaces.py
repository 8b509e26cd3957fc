"""Application service layer for workspace CRUD."""
from __future__ import annotations

import logging

from appserver.application.analytics import AnalyticsService
from appserver.application.assets import AssetService
from appserver.application.session import SessionUserService
from appserver.application.users import UserWorkspaceService
from appserver.core.acl import AclPermission, AppRole, RoleGraph
from appserver.core.slugs import make_slug
from appserver.core.validation import validate_contact
from appserver.domain import AppError, ErrorCode, User, UserRole, Workspace, WorkspacePlugin
from appserver.infrastructure import (
    ApplicationRepository,
    AssetRepository,
    PluginRepository,
    UserRepository,
    WorkspaceRepository,
)

logger = logging.getLogger(__name__)

MAX_LOGO_SIZE_KB = 250


class WorkspaceServiceBase:
    """Coordinates workspace-related use cases."""

    def __init__(
        self,
        repository: WorkspaceRepository,
        analytics_service: AnalyticsService,
        plugin_repository: PluginRepository,
        session_user_service: SessionUserService,
        user_workspace_service: UserWorkspaceService,
        user_repository: UserRepository,
        role_graph: RoleGraph,
        asset_repository: AssetRepository,
        asset_service: AssetService,
        application_repository: ApplicationRepository,
    ) -> None:
        self._repository = repository
        self._analytics_service = analytics_service
        self._plugin_repository = plugin_repository
        self._session_user_service = session_user_service
        self._user_workspace_service = user_workspace_service
        self._user_repository = user_repository
        self._role_graph = role_graph
        self._asset_repository = asset_repository
        self._asset_service = asset_service
        self._application_repository = application_repository

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _next_unique_slug(self, name: str, workspace_id: str | None = None) -> str:
        base = make_slug(name) or "workspace"
        candidate = base
        suffix = 0
        while True:
            owner = self._repository.find_by_slug(candidate)
            if owner is None or owner.id == workspace_id:
                return candidate
            suffix += 1
            candidate = f"{base}{suffix}"

    def _find(self, workspace_id: str, permission: AclPermission) -> Workspace:
        return self._user_workspace_service.find_workspace(workspace_id, permission)

    # ------------------------------------------------------------------
    # workspace lifecycle
    # ------------------------------------------------------------------
    def create(self, workspace: Workspace, user: User | None = None) -> Workspace:
        """Persist a new workspace with ``user`` (default: current user) as its administrator."""

        user = user or self._session_user_service.get_current_user()
        if not workspace.name or not workspace.name.strip():
            raise AppError(ErrorCode.INVALID_PARAMETER, "name")
        validate_contact(workspace.email, workspace.website)

        workspace.name = workspace.name.strip()
        workspace.slug = self._next_unique_slug(workspace.name)
        workspace.plugins = [
            WorkspacePlugin(plugin_id=plugin.id) for plugin in self._plugin_repository.find_by_default_install()
        ]
        workspace.user_roles = []
        self._repository.save(workspace)

        self._user_workspace_service.add_user_to_workspace(workspace, user, AppRole.ADMINISTRATOR)
        user.current_workspace_id = workspace.id
        self._user_repository.save(user)

        self._analytics_service.send_create_event(workspace)
        logger.info("created workspace %s (%s) for %s", workspace.id, workspace.slug, user.email)
        return workspace

    def create_default(self, user: User) -> Workspace:
        workspace = Workspace(name=f"{user.first_name}'s apps", is_auto_generated=True)
        return self.create(workspace, user)

    def get_by_id(self, workspace_id: str) -> Workspace | None:
        return self._repository.find_by_id(workspace_id)

    def find_by_id(self, workspace_id: str, permission: AclPermission) -> Workspace:
        return self._find(workspace_id, permission)

    def get_all(self) -> list[Workspace]:
        user = self._session_user_service.get_current_user()
        workspaces = self._repository.find_all_by_ids(user.workspace_ids)
        return [
            workspace
            for workspace in workspaces
            if self._user_workspace_service.has_permission(workspace, AclPermission.READ_WORKSPACES, user)
        ]

    def update(self, workspace_id: str, resource: Workspace) -> Workspace:
        """Merge the non-null fields of ``resource`` into the stored workspace."""

        workspace = self._find(workspace_id, AclPermission.MANAGE_WORKSPACES)
        validate_contact(resource.email, resource.website)

        if resource.name is not None:
            name = resource.name.strip()
            if not name:
                raise AppError(ErrorCode.INVALID_PARAMETER, "name")
            if name != workspace.name:
                workspace.name = name
                workspace.slug = self._next_unique_slug(name, workspace.id)
        for attribute in ("email", "website", "domain"):
            value = getattr(resource, attribute)
            if value is not None:
                setattr(workspace, attribute, value)

        self._repository.save(workspace)
        self._analytics_service.send_update_event(workspace)
        return workspace

    def archive_by_id(self, workspace_id: str) -> Workspace:
        workspace = self._find(workspace_id, AclPermission.MANAGE_WORKSPACES)
        if self._application_repository.count_by_workspace_id(workspace_id) > 0:
            raise AppError(
                ErrorCode.UNSUPPORTED_OPERATION,
                "workspace still contains applications, delete them before deleting the workspace",
            )
        self._repository.archive(workspace)
        self._analytics_service.send_delete_event(workspace)
        logger.info("archived workspace %s", workspace_id)
        return workspace

    # ------------------------------------------------------------------
    # members & roles
    # ------------------------------------------------------------------
    def get_workspace_members(self, workspace_id: str) -> list[UserRole]:
        workspace = self._find(workspace_id, AclPermission.READ_WORKSPACES)
        return list(workspace.user_roles)

    def get_user_roles_for_workspace(self, workspace_id: str) -> dict[str, str]:
        """Roles the current user is allowed to hand out in this workspace."""

        workspace = self._find(workspace_id, AclPermission.READ_WORKSPACES)
        user = self._session_user_service.get_current_user()
        role = workspace.role_of(user.email)
        if role is None:
            return {}
        allowed = self._role_graph.generate_hierarchical_roles(role)
        return {item.display_name: item.description for item in AppRole if item in allowed}

    # ------------------------------------------------------------------
    # logo
    # ------------------------------------------------------------------
    def upload_logo(self, workspace_id: str, data: bytes, content_type: str | None) -> Workspace:
        workspace = self._find(workspace_id, AclPermission.MANAGE_WORKSPACES)
        previous = workspace.logo_asset_id
        asset = self._asset_service.upload(data, content_type, MAX_LOGO_SIZE_KB)
        workspace.logo_asset_id = asset.id
        self._repository.save(workspace)
        self._remove_asset(previous)
        self._analytics_service.send_update_event(workspace, {"logoAssetId": asset.id})
        return workspace

    def delete_logo(self, workspace_id: str) -> Workspace:
        workspace = self._find(workspace_id, AclPermission.MANAGE_WORKSPACES)
        if workspace.logo_asset_id:
            self._remove_asset(workspace.logo_asset_id)
            workspace.logo_asset_id = None
            self._repository.save(workspace)
            self._analytics_service.send_update_event(workspace, {"logoAssetId": None})
        return workspace

    def _remove_asset(self, asset_id: str | None) -> None:
        if asset_id and self._asset_repository.find_by_id(asset_id) is not None:
            self._asset_service.remove(asset_id)


class WorkspaceService(WorkspaceServiceBase):
    """Injectable workspace service; collaborators go straight to the base."""

    def __init__(
        self,
        repository: WorkspaceRepository,
        analytics_service: AnalyticsService,
        plugin_repository: PluginRepository,
        session_user_service: SessionUserService,
        user_workspace_service: UserWorkspaceService,
        user_repository: UserRepository,
        role_graph: RoleGraph,
        asset_repository: AssetRepository,
        asset_service: AssetService,
        application_repository: ApplicationRepository,
    ) -> None:
        super().__init__(
            repository,
            analytics_service,
            plugin_repository,
            session_user_service,
            user_workspace_service,
            user_repository,
            role_graph,
            asset_repository,
            asset_service,
            application_repository,
        )
