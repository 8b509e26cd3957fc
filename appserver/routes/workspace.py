from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from appserver.application import get_workspace_service
from appserver.application.container import get_container
from appserver.core.acl import AclPermission
from appserver.core.schema import MemberRolePayload, WorkspacePayload
from appserver.domain import User, UserRole, Workspace
from appserver.routes.deps import current_user

router = APIRouter(prefix="/workspaces", tags=["workspace"])


def _serialise_member(user_role: UserRole) -> dict:
    return {"username": user_role.username, "name": user_role.name, "role": user_role.role.display_name}


@router.get("")
async def list_workspaces(user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    return {"items": [workspace.to_dict() for workspace in service.get_all()]}


@router.post("")
async def create_workspace(payload: WorkspacePayload, user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    workspace = await asyncio.to_thread(service.create, Workspace(**payload.model_dump()))
    return workspace.to_dict()


@router.get("/{workspace_id}")
async def get_workspace(workspace_id: str, user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    return service.find_by_id(workspace_id, AclPermission.READ_WORKSPACES).to_dict()


@router.put("/{workspace_id}")
async def update_workspace(workspace_id: str, payload: WorkspacePayload, user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    workspace = await asyncio.to_thread(service.update, workspace_id, Workspace(**payload.model_dump()))
    return workspace.to_dict()


@router.delete("/{workspace_id}")
async def archive_workspace(workspace_id: str, user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    workspace = await asyncio.to_thread(service.archive_by_id, workspace_id)
    return {"id": workspace.id, "deleted": workspace.deleted}


@router.get("/{workspace_id}/members")
async def list_members(workspace_id: str, user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    return {"items": [_serialise_member(item) for item in service.get_workspace_members(workspace_id)]}


@router.get("/{workspace_id}/roles")
async def list_assignable_roles(workspace_id: str, user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    return service.get_user_roles_for_workspace(workspace_id)


@router.post("/{workspace_id}/members")
async def add_member(workspace_id: str, payload: MemberRolePayload, user: User = Depends(current_user)) -> dict:
    if payload.role is None:
        raise HTTPException(status_code=400, detail="role is required")
    service = get_container().user_workspace_service
    user_role = service.add_user_role_to_workspace(workspace_id, payload.username, payload.role)
    return _serialise_member(user_role)


@router.put("/{workspace_id}/members")
async def update_member(workspace_id: str, payload: MemberRolePayload, user: User = Depends(current_user)) -> dict:
    service = get_container().user_workspace_service
    user_role = service.update_role_for_member(workspace_id, payload.username, payload.role)
    if user_role is None:
        return {"username": payload.username, "removed": True}
    return _serialise_member(user_role)


@router.delete("/{workspace_id}/members/me")
async def leave_workspace(workspace_id: str, user: User = Depends(current_user)) -> dict:
    service = get_container().user_workspace_service
    return service.leave_workspace(workspace_id).to_dict()


@router.post("/{workspace_id}/logo")
async def upload_logo(workspace_id: str, file: UploadFile = File(...), user: User = Depends(current_user)) -> dict:
    try:
        data = await file.read()
    finally:
        await file.close()
    service = get_workspace_service()
    workspace = await asyncio.to_thread(service.upload_logo, workspace_id, data, file.content_type)
    return workspace.to_dict()


@router.delete("/{workspace_id}/logo")
async def delete_logo(workspace_id: str, user: User = Depends(current_user)) -> dict:
    service = get_workspace_service()
    workspace = await asyncio.to_thread(service.delete_logo, workspace_id)
    return workspace.to_dict()
