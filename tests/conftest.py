import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from appserver.application import get_container, reset_container
from appserver.domain import User
from appserver.infrastructure import NoOpAnalyticsClient, configure_analytics_client


@pytest.fixture(autouse=True)
def reset_state():
    reset_container()
    yield
    reset_container()
    configure_analytics_client(NoOpAnalyticsClient())


@pytest.fixture()
def container():
    return get_container()


@pytest.fixture()
def login(container):
    """Return a helper that makes the given user the current session user."""

    tokens = []

    def _login(user: User | None) -> User | None:
        tokens.append(container.session_user_service.set_current_user(user))
        return user

    yield _login
    for token in reversed(tokens):
        container.session_user_service.clear_current_user(token)


@pytest.fixture()
def make_user(container):
    def _make_user(email: str, name: str | None = None) -> User:
        return container.user_repository.save(User(email=email, name=name))

    return _make_user


@pytest.fixture()
def api_user(make_user, login):
    return login(make_user("api_user@test.com", "Api User"))
