import pytest

from appserver.core.acl import AppRole
from appserver.domain import AppError, ErrorCode, Workspace


@pytest.fixture()
def workspace(container, api_user):
    return container.workspace_service.create(Workspace(name="Acme"))


def test_invite_existing_user(container, workspace, make_user):
    bob = make_user("bob@example.com", "Bob")

    user_role = container.user_workspace_service.add_user_role_to_workspace(
        workspace.id, "bob@example.com", AppRole.DEVELOPER
    )

    assert user_role.username == "bob@example.com"
    assert user_role.name == "Bob"
    assert workspace.role_of(bob.email) is AppRole.DEVELOPER
    assert workspace.id in bob.workspace_ids


def test_invite_rejects_unknown_and_duplicate_members(container, workspace, make_user):
    with pytest.raises(AppError) as excinfo:
        container.user_workspace_service.add_user_role_to_workspace(workspace.id, "ghost@example.com", AppRole.APP_VIEWER)
    assert excinfo.value.error is ErrorCode.NO_RESOURCE_FOUND

    make_user("bob@example.com")
    container.user_workspace_service.add_user_role_to_workspace(workspace.id, "bob@example.com", AppRole.APP_VIEWER)
    with pytest.raises(AppError) as excinfo:
        container.user_workspace_service.add_user_role_to_workspace(workspace.id, "bob@example.com", AppRole.DEVELOPER)
    assert excinfo.value.error is ErrorCode.USER_ALREADY_EXISTS_IN_WORKSPACE
    assert "App Viewer" in excinfo.value.message


def test_inviter_cannot_grant_roles_above_their_own(container, workspace, make_user, login):
    bob = make_user("bob@example.com")
    make_user("carol@example.com")
    container.user_workspace_service.add_user_role_to_workspace(workspace.id, bob.email, AppRole.DEVELOPER)
    login(bob)

    with pytest.raises(AppError) as excinfo:
        container.user_workspace_service.add_user_role_to_workspace(
            workspace.id, "carol@example.com", AppRole.ADMINISTRATOR
        )
    assert excinfo.value.error is ErrorCode.ACTION_IS_NOT_AUTHORIZED

    user_role = container.user_workspace_service.add_user_role_to_workspace(
        workspace.id, "carol@example.com", AppRole.APP_VIEWER
    )
    assert user_role.role is AppRole.APP_VIEWER


def test_last_administrator_is_protected(container, workspace, api_user):
    with pytest.raises(AppError) as excinfo:
        container.user_workspace_service.update_role_for_member(workspace.id, api_user.email, AppRole.DEVELOPER)
    assert excinfo.value.error is ErrorCode.REMOVE_LAST_WORKSPACE_ADMIN_ERROR

    with pytest.raises(AppError) as excinfo:
        container.user_workspace_service.leave_workspace(workspace.id)
    assert excinfo.value.error is ErrorCode.REMOVE_LAST_WORKSPACE_ADMIN_ERROR
    assert workspace.role_of(api_user.email) is AppRole.ADMINISTRATOR


def test_update_role_and_remove_member(container, workspace, make_user):
    bob = make_user("bob@example.com")
    container.user_workspace_service.add_user_role_to_workspace(workspace.id, bob.email, AppRole.APP_VIEWER)

    updated = container.user_workspace_service.update_role_for_member(workspace.id, bob.email, AppRole.DEVELOPER)
    assert updated.role is AppRole.DEVELOPER

    removed = container.user_workspace_service.update_role_for_member(workspace.id, bob.email, None)
    assert removed is None
    assert workspace.role_of(bob.email) is None
    assert workspace.id not in bob.workspace_ids


def test_leave_after_promoting_another_admin(container, workspace, api_user, make_user):
    bob = make_user("bob@example.com")
    container.user_workspace_service.add_user_role_to_workspace(workspace.id, bob.email, AppRole.ADMINISTRATOR)

    container.user_workspace_service.leave_workspace(workspace.id)

    assert workspace.role_of(api_user.email) is None
    assert workspace.id not in api_user.workspace_ids
    assert api_user.current_workspace_id is None
    assert [member.username for member in workspace.user_roles] == [bob.email]


def test_leave_foreign_workspace_fails(container, workspace, make_user, login):
    login(make_user("outsider@example.com"))

    with pytest.raises(AppError) as excinfo:
        container.user_workspace_service.leave_workspace(workspace.id)
    assert excinfo.value.error is ErrorCode.NO_RESOURCE_FOUND


def test_member_lookup_ignores_case_and_whitespace(container, workspace, make_user):
    bob = make_user("bob@example.com")
    container.user_workspace_service.add_user_role_to_workspace(workspace.id, bob.email, AppRole.APP_VIEWER)

    assert workspace.role_of(" Bob@Example.com ") is AppRole.APP_VIEWER
    updated = container.user_workspace_service.update_role_for_member(workspace.id, "Bob@Example.com", AppRole.DEVELOPER)
    assert updated.username == "bob@example.com"
    assert updated.role is AppRole.DEVELOPER

    container.user_workspace_service.update_role_for_member(workspace.id, "BOB@EXAMPLE.COM ", None)
    assert workspace.role_of(bob.email) is None
    assert workspace.id not in bob.workspace_ids
