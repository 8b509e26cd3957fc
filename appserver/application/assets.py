from __future__ import annotations

from appserver.domain import AppError, Asset, ErrorCode
from appserver.infrastructure import AssetRepository

ALLOWED_CONTENT_TYPES = frozenset({"image/png", "image/jpeg", "image/svg+xml", "image/x-icon"})


class AssetService:
    def __init__(self, repository: AssetRepository) -> None:
        self._repository = repository

    def upload(self, data: bytes, content_type: str | None, max_size_kb: int) -> Asset:
        """Validate and store an uploaded image."""

        if content_type not in ALLOWED_CONTENT_TYPES:
            allowed = ", ".join(sorted(ALLOWED_CONTENT_TYPES))
            raise AppError(ErrorCode.VALIDATION_FAILURE, f"Please upload a valid image. Only {allowed} are allowed.")
        if len(data) > max_size_kb * 1024:
            raise AppError(ErrorCode.PAYLOAD_TOO_LARGE, max_size_kb)
        return self._repository.save(Asset(content_type=content_type, data=data))

    def get(self, asset_id: str) -> Asset:
        asset = self._repository.find_by_id(asset_id)
        if asset is None:
            raise AppError(ErrorCode.NO_RESOURCE_FOUND, "asset", asset_id)
        return asset

    def remove(self, asset_id: str) -> None:
        self._repository.delete_by_id(asset_id)
