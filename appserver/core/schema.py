from __future__ import annotations

from pydantic import BaseModel, Field, constr, field_validator

from appserver.core.acl import AppRole


class UserCreate(BaseModel):
    email: constr(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str | None = None


class WorkspacePayload(BaseModel):
    name: str | None = None
    email: str | None = None
    website: str | None = None
    domain: str | None = None


class ApplicationPayload(BaseModel):
    name: str | None = None
    workspace_id: str | None = Field(default=None, alias="workspaceId")
    is_public: bool = Field(default=False, alias="isPublic")
    color: str | None = None

    model_config = {"populate_by_name": True}


class MemberRolePayload(BaseModel):
    username: str
    role: AppRole | None = None

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, value: object) -> object:
        if value is None or isinstance(value, AppRole):
            return value
        return AppRole.from_name(str(value))


class AccessPayload(BaseModel):
    public: bool


class TemplateConfigPayload(BaseModel):
    workspace_id: str = Field(alias="workspaceId")
    application_ids: list[str] = Field(default_factory=list, alias="applicationIds")

    model_config = {"populate_by_name": True}
