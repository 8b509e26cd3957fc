from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query

from appserver.application.container import get_container
from appserver.core.acl import AclPermission
from appserver.core.schema import AccessPayload, ApplicationPayload
from appserver.domain import Application, User
from appserver.routes.deps import current_user, optional_user

router = APIRouter(prefix="/applications", tags=["application"])


@router.post("")
async def create_application(
    payload: ApplicationPayload,
    workspace_id: str | None = Query(default=None, alias="workspaceId"),
    user: User = Depends(current_user),
) -> dict:
    target = workspace_id or payload.workspace_id
    if not target:
        raise HTTPException(status_code=400, detail="workspaceId is required")
    application = Application(
        name=payload.name,
        workspace_id=target,
        is_public=payload.is_public,
        color=payload.color,
    )
    service = get_container().application_page_service
    created = await asyncio.to_thread(service.create_application, application, target)
    return created.to_dict()


@router.get("")
async def list_applications(
    workspace_id: str = Query(alias="workspaceId"),
    user: User | None = Depends(optional_user),
) -> dict:
    service = get_container().application_service
    applications = service.find_by_workspace_id(workspace_id, AclPermission.READ_APPLICATIONS)
    return {"items": [application.to_dict() for application in applications]}


@router.get("/{application_id}")
async def get_application(application_id: str, user: User | None = Depends(optional_user)) -> dict:
    service = get_container().application_service
    return service.find_by_id(application_id, AclPermission.READ_APPLICATIONS).to_dict()


@router.put("/{application_id}/access")
async def change_view_access(application_id: str, payload: AccessPayload, user: User = Depends(current_user)) -> dict:
    service = get_container().application_service
    application = await asyncio.to_thread(service.change_view_access, application_id, payload.public)
    return application.to_dict()


@router.delete("/{application_id}")
async def archive_application(application_id: str, user: User = Depends(current_user)) -> dict:
    service = get_container().application_service
    application = await asyncio.to_thread(service.archive_by_id, application_id)
    return {"id": application.id, "deleted": application.deleted}
