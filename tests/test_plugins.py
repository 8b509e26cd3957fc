from appserver.application import build_container
from appserver.domain import User
from appserver.infrastructure import load_plugin_seed


def test_bundled_seed_has_default_plugins():
    plugins = load_plugin_seed()

    assert {plugin.id for plugin in plugins if plugin.default_install} == {
        "restapi-plugin",
        "postgres-plugin",
        "mongo-plugin",
    }


def test_seed_file_override(tmp_path, monkeypatch):
    seed = tmp_path / "plugins.yaml"
    seed.write_text(
        "plugins:\n"
        "  - id: only-plugin\n"
        "    name: Only\n"
        "    package_name: only-plugin\n"
        "    default_install: true\n"
        "  - id: optional-plugin\n"
        "    name: Optional\n"
        "    package_name: optional-plugin\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PLUGIN_SEED_FILE", str(seed))

    container = build_container()
    user = container.user_repository.save(User(email="seed@example.com"))
    workspace = container.workspace_service.create_default(user)

    assert [plugin.plugin_id for plugin in workspace.plugins] == ["only-plugin"]
