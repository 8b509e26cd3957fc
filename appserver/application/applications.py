"""Application service layer for user-built applications."""
from __future__ import annotations

import logging
import random
from typing import Iterable

from appserver.application.analytics import AnalyticsService
from appserver.application.config import ConfigService
from appserver.application.session import SessionUserService
from appserver.application.users import UserWorkspaceService
from appserver.core.acl import AclPermission
from appserver.core.slugs import make_slug
from appserver.domain import AppError, Application, ApplicationPage, ErrorCode, Page, User
from appserver.infrastructure import ApplicationRepository, PageRepository, WorkspaceRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_NAME = "Page1"

APPLICATION_COLORS = [
    "#FFDEDE",
    "#FFEFDB",
    "#F3F1C7",
    "#F4FFDE",
    "#C7F3F0",
    "#D9E7FF",
    "#E3DEFF",
    "#F1DEFF",
    "#C7F3E3",
    "#F5D1D1",
]


class ApplicationPageService:
    """Creates applications together with their pages."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        page_repository: PageRepository,
        user_workspace_service: UserWorkspaceService,
        analytics_service: AnalyticsService,
    ) -> None:
        self._application_repository = application_repository
        self._page_repository = page_repository
        self._user_workspace_service = user_workspace_service
        self._analytics_service = analytics_service

    def _unique_name(self, name: str, workspace_id: str) -> str:
        candidate = name
        suffix = 0
        while self._application_repository.find_by_name_and_workspace(candidate, workspace_id) is not None:
            suffix += 1
            candidate = f"{name} ({suffix})"
        return candidate

    def _persist(self, application: Application, page_names: list[tuple[str, bool]]) -> Application:
        application.name = self._unique_name(application.name, application.workspace_id)
        application.slug = make_slug(application.name) or "application"
        application.pages = []
        self._application_repository.save(application)

        for page_name, is_default in page_names:
            page = self._page_repository.save(Page(name=page_name, application_id=application.id))
            application.pages.append(ApplicationPage(id=page.id, is_default=is_default))
        return self._application_repository.save(application)

    def create_application(self, application: Application, workspace_id: str | None = None) -> Application:
        """Store ``application`` in a workspace with a default page.

        The given record is updated in place, so callers can read the
        generated id from the object they passed in.
        """

        if not application.name or not application.name.strip():
            raise AppError(ErrorCode.INVALID_PARAMETER, "name")
        workspace_id = workspace_id or application.workspace_id
        if not workspace_id:
            raise AppError(ErrorCode.INVALID_PARAMETER, "workspaceId")
        self._user_workspace_service.find_workspace(workspace_id, AclPermission.WORKSPACE_MANAGE_APPLICATIONS)

        application.name = application.name.strip()
        application.workspace_id = workspace_id
        application.color = application.color or random.choice(APPLICATION_COLORS)
        self._persist(application, [(DEFAULT_PAGE_NAME, True)])

        self._analytics_service.send_create_event(application, {"workspaceId": workspace_id})
        logger.info("created application %s in workspace %s", application.id, workspace_id)
        return application

    def clone_application(self, source: Application, workspace_id: str) -> Application:
        """Copy ``source`` and its pages into another workspace."""

        pages_by_id = {page.id: page for page in self._page_repository.find_by_application_id(source.id)}
        page_names = [
            (pages_by_id[ref.id].name, ref.is_default) for ref in source.pages if ref.id in pages_by_id
        ]
        if not page_names:
            page_names = [(DEFAULT_PAGE_NAME, True)]

        clone = Application(
            name=source.name,
            workspace_id=workspace_id,
            is_public=source.is_public,
            color=source.color,
        )
        self._persist(clone, page_names)
        self._analytics_service.send_create_event(clone, {"workspaceId": workspace_id, "clonedFrom": source.id})
        return clone


class ApplicationService:
    def __init__(
        self,
        repository: ApplicationRepository,
        page_repository: PageRepository,
        workspace_repository: WorkspaceRepository,
        user_workspace_service: UserWorkspaceService,
        config_service: ConfigService,
        session_user_service: SessionUserService,
        analytics_service: AnalyticsService,
    ) -> None:
        self._repository = repository
        self._page_repository = page_repository
        self._workspace_repository = workspace_repository
        self._user_workspace_service = user_workspace_service
        self._config_service = config_service
        self._session_user_service = session_user_service
        self._analytics_service = analytics_service

    def _is_permitted(self, application: Application, permission: AclPermission, user: User | None) -> bool:
        if permission is AclPermission.READ_APPLICATIONS and application.is_public:
            return True
        if user is None:
            return False
        workspace = self._workspace_repository.find_by_id(application.workspace_id)
        return workspace is not None and self._user_workspace_service.has_permission(workspace, permission, user)

    def set_transient_fields(self, applications: Iterable[Application]) -> list[Application]:
        """Flag the applications that are configured as templates."""

        template_ids = {application.id for application in self._config_service.get_template_applications()}
        marked = list(applications)
        for application in marked:
            application.app_is_example = application.id in template_ids
        return marked

    def find_by_workspace_id(self, workspace_id: str, permission: AclPermission) -> list[Application]:
        user = self._session_user_service.find_current_user()
        applications = [
            application
            for application in self._repository.find_by_workspace_id(workspace_id)
            if self._is_permitted(application, permission, user)
        ]
        return self.set_transient_fields(applications)

    def find_by_id(self, application_id: str, permission: AclPermission) -> Application:
        application = self._repository.find_by_id(application_id)
        user = self._session_user_service.find_current_user()
        if application is None or not self._is_permitted(application, permission, user):
            raise AppError(ErrorCode.ACL_NO_RESOURCE_FOUND, "application", application_id)
        return self.set_transient_fields([application])[0]

    def get_by_id(self, application_id: str) -> Application:
        application = self._repository.find_by_id(application_id)
        if application is None:
            raise AppError(ErrorCode.NO_RESOURCE_FOUND, "application", application_id)
        return self.set_transient_fields([application])[0]

    def change_view_access(self, application_id: str, is_public: bool) -> Application:
        application = self.find_by_id(application_id, AclPermission.MAKE_PUBLIC_APPLICATIONS)
        application.is_public = is_public
        self._repository.save(application)
        self._analytics_service.send_update_event(application, {"isPublic": is_public})
        return application

    def archive_by_id(self, application_id: str) -> Application:
        application = self.find_by_id(application_id, AclPermission.MANAGE_APPLICATIONS)
        archived_pages = self._page_repository.archive_by_application_id(application_id)
        self._repository.archive(application)
        self._analytics_service.send_delete_event(application)
        logger.info("archived application %s with %d pages", application_id, archived_pages)
        return application
