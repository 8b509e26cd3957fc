"""Process-wide wiring of repositories and services."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from appserver.application.analytics import AnalyticsService
from appserver.application.applications import ApplicationPageService, ApplicationService
from appserver.application.assets import AssetService
from appserver.application.config import ConfigService
from appserver.application.examples import ExamplesWorkspaceCloner
from appserver.application.session import SessionUserService
from appserver.application.users import UserService, UserWorkspaceService
from appserver.application.workspaces import WorkspaceService
from appserver.core.acl import RoleGraph
from appserver.infrastructure import (
    InMemoryApplicationRepository,
    InMemoryAssetRepository,
    InMemoryConfigRepository,
    InMemoryPageRepository,
    InMemoryPluginRepository,
    InMemoryUserRepository,
    InMemoryWorkspaceRepository,
    load_plugin_seed,
)


@dataclass
class ServiceContainer:
    workspace_repository: InMemoryWorkspaceRepository
    application_repository: InMemoryApplicationRepository
    page_repository: InMemoryPageRepository
    user_repository: InMemoryUserRepository
    asset_repository: InMemoryAssetRepository
    plugin_repository: InMemoryPluginRepository
    config_repository: InMemoryConfigRepository
    role_graph: RoleGraph
    session_user_service: SessionUserService
    config_service: ConfigService
    analytics_service: AnalyticsService
    asset_service: AssetService
    user_workspace_service: UserWorkspaceService
    workspace_service: WorkspaceService
    application_page_service: ApplicationPageService
    application_service: ApplicationService
    examples_workspace_cloner: ExamplesWorkspaceCloner
    user_service: UserService


def build_container(plugin_seed: Path | None = None) -> ServiceContainer:
    if plugin_seed is None and os.getenv("PLUGIN_SEED_FILE"):
        plugin_seed = Path(os.environ["PLUGIN_SEED_FILE"]).expanduser()

    workspace_repository = InMemoryWorkspaceRepository()
    application_repository = InMemoryApplicationRepository()
    page_repository = InMemoryPageRepository()
    user_repository = InMemoryUserRepository()
    asset_repository = InMemoryAssetRepository()
    plugin_repository = InMemoryPluginRepository(load_plugin_seed(plugin_seed))
    config_repository = InMemoryConfigRepository()
    role_graph = RoleGraph()

    session_user_service = SessionUserService()
    config_service = ConfigService(config_repository, application_repository)
    analytics_service = AnalyticsService(config_service, session_user_service)
    asset_service = AssetService(asset_repository)
    user_workspace_service = UserWorkspaceService(
        workspace_repository, user_repository, session_user_service, role_graph
    )
    workspace_service = WorkspaceService(
        workspace_repository,
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
    application_page_service = ApplicationPageService(
        application_repository, page_repository, user_workspace_service, analytics_service
    )
    application_service = ApplicationService(
        application_repository,
        page_repository,
        workspace_repository,
        user_workspace_service,
        config_service,
        session_user_service,
        analytics_service,
    )
    examples_workspace_cloner = ExamplesWorkspaceCloner(
        workspace_service, application_page_service, config_service, session_user_service, user_repository
    )
    user_service = UserService(user_repository, workspace_service, examples_workspace_cloner, analytics_service)

    return ServiceContainer(
        workspace_repository=workspace_repository,
        application_repository=application_repository,
        page_repository=page_repository,
        user_repository=user_repository,
        asset_repository=asset_repository,
        plugin_repository=plugin_repository,
        config_repository=config_repository,
        role_graph=role_graph,
        session_user_service=session_user_service,
        config_service=config_service,
        analytics_service=analytics_service,
        asset_service=asset_service,
        user_workspace_service=user_workspace_service,
        workspace_service=workspace_service,
        application_page_service=application_page_service,
        application_service=application_service,
        examples_workspace_cloner=examples_workspace_cloner,
        user_service=user_service,
    )


_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Return the singleton service container for the process."""

    global _container
    if _container is None:
        _container = build_container()
    return _container


def reset_container() -> None:
    """Drop all in-memory state (used in tests)."""

    global _container
    _container = None


def get_workspace_service() -> WorkspaceService:
    return get_container().workspace_service
