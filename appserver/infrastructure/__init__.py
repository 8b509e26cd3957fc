"""Infrastructure layer exports."""

from .analytics import (
    AnalyticsClient,
    AnalyticsError,
    HttpAnalyticsClient,
    NoOpAnalyticsClient,
    configure_analytics_client,
    get_analytics_client,
)
from .applications import (
    ApplicationRepository,
    InMemoryApplicationRepository,
    InMemoryPageRepository,
    PageRepository,
)
from .plugins import (
    ConfigRepository,
    InMemoryConfigRepository,
    InMemoryPluginRepository,
    PluginRepository,
    load_plugin_seed,
)
from .users import AssetRepository, InMemoryAssetRepository, InMemoryUserRepository, UserRepository
from .workspaces import InMemoryWorkspaceRepository, WorkspaceRepository

__all__ = [
    "AnalyticsClient",
    "AnalyticsError",
    "ApplicationRepository",
    "AssetRepository",
    "ConfigRepository",
    "HttpAnalyticsClient",
    "InMemoryApplicationRepository",
    "InMemoryAssetRepository",
    "InMemoryConfigRepository",
    "InMemoryPageRepository",
    "InMemoryPluginRepository",
    "InMemoryUserRepository",
    "InMemoryWorkspaceRepository",
    "NoOpAnalyticsClient",
    "PageRepository",
    "PluginRepository",
    "UserRepository",
    "WorkspaceRepository",
    "configure_analytics_client",
    "get_analytics_client",
    "load_plugin_seed",
]
