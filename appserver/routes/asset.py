from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, Response

from appserver.application.container import get_container
from appserver.core.acl import AclPermission
from appserver.core.schema import TemplateConfigPayload
from appserver.domain import User
from appserver.routes.deps import instance_admin

router = APIRouter(tags=["asset"])


@router.get("/assets/{asset_id}")
async def get_asset(asset_id: str) -> Response:
    asset = get_container().asset_service.get(asset_id)
    return Response(content=asset.data, media_type=asset.content_type)


def _designate_templates(payload: TemplateConfigPayload) -> None:
    container = get_container()
    container.workspace_service.find_by_id(payload.workspace_id, AclPermission.MANAGE_WORKSPACES)
    container.config_service.set_template_workspace(payload.workspace_id, payload.application_ids)


@router.post("/admin/templates")
async def set_template_workspace(payload: TemplateConfigPayload, user: User = Depends(instance_admin)) -> dict:
    """Designate the workspace and applications shown to new users as examples."""

    await asyncio.to_thread(_designate_templates, payload)
    return {"workspaceId": payload.workspace_id, "applicationIds": payload.application_ids}
