"""Infrastructure layer for application and page persistence."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Protocol
from uuid import uuid4

from appserver.domain import Application, Page, utcnow


class ApplicationRepository(Protocol):
    def save(self, application: Application) -> Application: ...

    def find_by_id(self, application_id: str) -> Application | None: ...

    def find_by_ids(self, application_ids: Iterable[str]) -> list[Application]: ...

    def find_by_workspace_id(self, workspace_id: str) -> list[Application]: ...

    def find_by_name_and_workspace(self, name: str, workspace_id: str) -> Application | None: ...

    def count_by_workspace_id(self, workspace_id: str) -> int: ...

    def archive(self, application: Application) -> Application: ...

    def reset(self) -> None: ...


class PageRepository(Protocol):
    def save(self, page: Page) -> Page: ...

    def find_by_application_id(self, application_id: str) -> list[Page]: ...

    def archive_by_application_id(self, application_id: str) -> int: ...

    def reset(self) -> None: ...


class InMemoryApplicationRepository:
    """Stores copies so that transient fields never leak into storage."""

    def __init__(self) -> None:
        self._applications: dict[str, Application] = {}

    def _load(self, stored: Application) -> Application:
        return replace(stored, pages=list(stored.pages), app_is_example=False)

    def save(self, application: Application) -> Application:
        now = utcnow()
        if application.id is None:
            application.id = uuid4().hex
            application.created_at = now
        application.updated_at = now
        self._applications[application.id] = replace(
            application, pages=list(application.pages), app_is_example=False
        )
        return application

    def find_by_id(self, application_id: str) -> Application | None:
        stored = self._applications.get(application_id)
        if stored is None or stored.deleted:
            return None
        return self._load(stored)

    def find_by_ids(self, application_ids: Iterable[str]) -> list[Application]:
        found = [self.find_by_id(app_id) for app_id in application_ids]
        return [application for application in found if application is not None]

    def find_by_workspace_id(self, workspace_id: str) -> list[Application]:
        return [
            self._load(stored)
            for stored in self._applications.values()
            if stored.workspace_id == workspace_id and not stored.deleted
        ]

    def find_by_name_and_workspace(self, name: str, workspace_id: str) -> Application | None:
        for application in self.find_by_workspace_id(workspace_id):
            if application.name == name:
                return application
        return None

    def count_by_workspace_id(self, workspace_id: str) -> int:
        return len(self.find_by_workspace_id(workspace_id))

    def archive(self, application: Application) -> Application:
        application.deleted = True
        return self.save(application)

    def reset(self) -> None:
        self._applications.clear()


class InMemoryPageRepository:
    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}

    def save(self, page: Page) -> Page:
        if page.id is None:
            page.id = uuid4().hex
        self._pages[page.id] = page
        return page

    def find_by_application_id(self, application_id: str) -> list[Page]:
        return [page for page in self._pages.values() if page.application_id == application_id and not page.deleted]

    def archive_by_application_id(self, application_id: str) -> int:
        pages = self.find_by_application_id(application_id)
        for page in pages:
            page.deleted = True
        return len(pages)

    def reset(self) -> None:
        self._pages.clear()
