"""Error catalogue shared by the service layer."""
from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    INVALID_PARAMETER = ("AE-APP-4000", 400, "Please enter a valid parameter {}.")
    VALIDATION_FAILURE = ("AE-VAL-4028", 400, "Validation Failure(s): {}")
    UNSUPPORTED_OPERATION = ("AE-APP-4004", 400, "Unsupported operation: {}")
    USER_ALREADY_EXISTS_IN_WORKSPACE = ("AE-USR-4004", 400, "The user {} has already been added to the workspace with role {}.")
    REMOVE_LAST_WORKSPACE_ADMIN_ERROR = ("AE-WSP-4010", 400, "The last admin can not be removed from the workspace.")
    UNAUTHORIZED = ("AE-ACL-4010", 401, "Unauthorized access.")
    ACTION_IS_NOT_AUTHORIZED = ("AE-ACL-4003", 403, "Sorry. You do not have permissions to perform this action: {}")
    NO_RESOURCE_FOUND = ("AE-APP-4040", 404, "Unable to find {} {}")
    ACL_NO_RESOURCE_FOUND = ("AE-APP-4041", 404, "Unable to find {} {}. Either the resource does not exist or you do not have the required permissions.")
    DUPLICATE_KEY = ("AE-APP-4090", 409, "Duplicate key error: {} {} already exists.")
    PAYLOAD_TOO_LARGE = ("AE-APP-4130", 413, "The request payload is too large. Max allowed size for request payload is {} KB")

    def __init__(self, code: str, http_status: int, template: str) -> None:
        self.code = code
        self.http_status = http_status
        self.template = template


class AppError(Exception):
    """Raised by services; the HTTP layer turns it into a JSON error body."""

    def __init__(self, error: ErrorCode, *args: object) -> None:
        self.error = error
        super().__init__(error.template.format(*args))

    @property
    def message(self) -> str:
        return str(self)

    @property
    def http_status(self) -> int:
        return self.error.http_status

    def to_dict(self) -> dict[str, object]:
        return {"error": {"code": self.error.code, "message": self.message}}
