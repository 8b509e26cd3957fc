"""Instance-wide configuration documents."""
from __future__ import annotations

import logging
from uuid import uuid4

from appserver.domain import AppError, Application, ErrorCode
from appserver.infrastructure import ApplicationRepository, ConfigRepository

logger = logging.getLogger(__name__)

TEMPLATE_WORKSPACE_CONFIG = "template-workspace"
INSTANCE_CONFIG = "instance-id"


class ConfigService:
    def __init__(self, repository: ConfigRepository, application_repository: ApplicationRepository) -> None:
        self._repository = repository
        self._application_repository = application_repository

    def get_instance_id(self) -> str:
        config = self._repository.find_by_name(INSTANCE_CONFIG)
        if config and config.get("value"):
            return str(config["value"])
        instance_id = uuid4().hex
        self._repository.save(INSTANCE_CONFIG, {"value": instance_id})
        logger.info("generated instance id %s", instance_id)
        return instance_id

    def get_template_workspace_id(self) -> str | None:
        config = self._repository.find_by_name(TEMPLATE_WORKSPACE_CONFIG)
        if not config:
            return None
        return config.get("workspaceId") or None

    def get_template_application_ids(self) -> list[str]:
        config = self._repository.find_by_name(TEMPLATE_WORKSPACE_CONFIG) or {}
        return [str(app_id) for app_id in config.get("applicationIds") or []]

    def get_template_applications(self) -> list[Application]:
        """Return the template applications that still exist."""

        return self._application_repository.find_by_ids(self.get_template_application_ids())

    def set_template_workspace(self, workspace_id: str, application_ids: list[str]) -> None:
        """Designate template applications; each must live in ``workspace_id``."""

        for application_id in application_ids:
            application = self._application_repository.find_by_id(application_id)
            if application is None:
                raise AppError(ErrorCode.ACL_NO_RESOURCE_FOUND, "application", application_id)
            if application.workspace_id != workspace_id:
                raise AppError(ErrorCode.INVALID_PARAMETER, f"applicationIds ({application_id} is not in {workspace_id})")
        self._repository.save(
            TEMPLATE_WORKSPACE_CONFIG,
            {"workspaceId": workspace_id, "applicationIds": list(application_ids)},
        )
        logger.info("template workspace set to %s with %d applications", workspace_id, len(application_ids))
