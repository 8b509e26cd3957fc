import pytest

from appserver.core.acl import AclPermission
from appserver.domain import AppError, Application, ErrorCode, Workspace


def _seed_applications(workspace_id: str) -> list[Application]:
    seeds = [
        ("first application", True),
        ("second application", True),
        ("third application", False),
        ("fourth application", False),
    ]
    return [Application(name=name, workspace_id=workspace_id, is_public=public) for name, public in seeds]


def test_example_applications_are_marked(container, api_user, monkeypatch):
    workspace = container.workspace_service.create(Workspace(name="Template Organization 3"))
    assert workspace.id is not None

    app1, app2, app3, app4 = _seed_applications(workspace.id)
    monkeypatch.setattr(container.config_service, "get_template_workspace_id", lambda: workspace.id)
    # Only three of the four applications are designated as templates.
    monkeypatch.setattr(container.config_service, "get_template_applications", lambda: [app1, app2, app3])

    for application in (app1, app2, app3, app4):
        container.application_page_service.create_application(application)

    applications = container.application_service.find_by_workspace_id(
        workspace.id, AclPermission.READ_APPLICATIONS
    )

    assert len(applications) == 4
    assert len([application for application in applications if application.app_is_example]) == 3
    assert {application.name for application in applications if not application.app_is_example} == {
        "fourth application"
    }


def test_template_config_marks_designated_subset(container, api_user):
    workspace = container.workspace_service.create(Workspace(name="Templates"))
    applications = _seed_applications(workspace.id)
    for application in applications:
        container.application_page_service.create_application(application)

    container.config_service.set_template_workspace(workspace.id, [item.id for item in applications[:3]])

    listed = container.application_service.find_by_workspace_id(workspace.id, AclPermission.READ_APPLICATIONS)
    flags = {application.name: application.app_is_example for application in listed}
    assert flags == {
        "first application": True,
        "second application": True,
        "third application": True,
        "fourth application": False,
    }


def test_example_flag_is_not_persisted(container, api_user):
    workspace = container.workspace_service.create(Workspace(name="Templates"))
    application = container.application_page_service.create_application(
        Application(name="demo", workspace_id=workspace.id)
    )
    container.config_service.set_template_workspace(workspace.id, [application.id])
    assert container.application_service.get_by_id(application.id).app_is_example is True

    container.config_service.set_template_workspace(workspace.id, [])
    assert container.application_service.get_by_id(application.id).app_is_example is False
    assert container.application_repository.find_by_id(application.id).app_is_example is False


def test_nothing_is_marked_without_template_config(container, api_user):
    workspace = container.workspace_service.create(Workspace(name="Plain"))
    for application in _seed_applications(workspace.id):
        container.application_page_service.create_application(application)

    listed = container.application_service.find_by_workspace_id(workspace.id, AclPermission.READ_APPLICATIONS)
    assert len(listed) == 4
    assert not any(application.app_is_example for application in listed)


def test_archived_template_is_skipped(container, api_user):
    workspace = container.workspace_service.create(Workspace(name="Templates"))
    kept = container.application_page_service.create_application(Application(name="kept", workspace_id=workspace.id))
    dropped = container.application_page_service.create_application(
        Application(name="dropped", workspace_id=workspace.id)
    )
    container.config_service.set_template_workspace(workspace.id, [kept.id, dropped.id])
    container.application_service.archive_by_id(dropped.id)

    templates = container.config_service.get_template_applications()
    assert [application.id for application in templates] == [kept.id]


def test_templates_must_belong_to_the_designated_workspace(container, api_user):
    templates = container.workspace_service.create(Workspace(name="Templates"))
    other = container.workspace_service.create(Workspace(name="Other"))
    own = container.application_page_service.create_application(Application(name="own", workspace_id=templates.id))
    foreign = container.application_page_service.create_application(Application(name="foreign", workspace_id=other.id))

    with pytest.raises(AppError) as excinfo:
        container.config_service.set_template_workspace(templates.id, [own.id, foreign.id])
    assert excinfo.value.error is ErrorCode.INVALID_PARAMETER

    with pytest.raises(AppError) as excinfo:
        container.config_service.set_template_workspace(templates.id, ["missing"])
    assert excinfo.value.error is ErrorCode.ACL_NO_RESOURCE_FOUND

    assert container.config_service.get_template_workspace_id() is None
    assert container.application_service.get_by_id(foreign.id).app_is_example is False
