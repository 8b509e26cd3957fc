from __future__ import annotations

import logging

from appserver.application.applications import ApplicationPageService
from appserver.application.config import ConfigService
from appserver.application.session import SessionUserService
from appserver.application.workspaces import WorkspaceService
from appserver.domain import User, Workspace
from appserver.infrastructure import UserRepository

logger = logging.getLogger(__name__)


class ExamplesWorkspaceCloner:
    """Gives a user their own copy of the template workspace."""

    def __init__(
        self,
        workspace_service: WorkspaceService,
        application_page_service: ApplicationPageService,
        config_service: ConfigService,
        session_user_service: SessionUserService,
        user_repository: UserRepository,
    ) -> None:
        self._workspace_service = workspace_service
        self._application_page_service = application_page_service
        self._config_service = config_service
        self._session_user_service = session_user_service
        self._user_repository = user_repository

    def clone_examples_workspace(self, user: User | None = None) -> Workspace | None:
        user = user or self._session_user_service.get_current_user()
        if user.examples_workspace_id:
            existing = self._workspace_service.get_by_id(user.examples_workspace_id)
            if existing is not None:
                return existing

        template_workspace_id = self._config_service.get_template_workspace_id()
        if not template_workspace_id:
            logger.info("no template workspace configured, skipping examples for %s", user.email)
            return None

        workspace = self._workspace_service.create(
            Workspace(name=f"{user.first_name}'s apps", is_auto_generated=True), user
        )
        templates = self._config_service.get_template_applications()
        for template in templates:
            self._application_page_service.clone_application(template, workspace.id)

        user.examples_workspace_id = workspace.id
        self._user_repository.save(user)
        logger.info("cloned %d example applications into %s for %s", len(templates), workspace.id, user.email)
        return workspace
