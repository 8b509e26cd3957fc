"""Plugin catalogue and instance configuration storage."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import yaml

from appserver.domain import Plugin

SEED_DIR = Path(__file__).resolve().parent / "seeds"


def load_plugin_seed(path: Path | None = None) -> list[Plugin]:
    """Read the plugin catalogue from a YAML seed file."""

    seed_path = path or SEED_DIR / "plugins.yaml"
    with seed_path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    plugins: list[Plugin] = []
    for item in data.get("plugins", []):
        plugins.append(
            Plugin(
                id=str(item["id"]),
                name=str(item["name"]),
                package_name=str(item["package_name"]),
                default_install=bool(item.get("default_install", False)),
            )
        )
    return plugins


class PluginRepository(Protocol):
    def find_by_default_install(self) -> list[Plugin]: ...


class InMemoryPluginRepository:
    def __init__(self, plugins: list[Plugin] | None = None) -> None:
        self._plugins = list(plugins) if plugins is not None else load_plugin_seed()

    def find_by_default_install(self) -> list[Plugin]:
        return [plugin for plugin in self._plugins if plugin.default_install]


class ConfigRepository(Protocol):
    """Named configuration documents, e.g. the template workspace."""

    def find_by_name(self, name: str) -> dict[str, Any] | None: ...

    def save(self, name: str, config: dict[str, Any]) -> dict[str, Any]: ...

    def reset(self) -> None: ...


class InMemoryConfigRepository:
    def __init__(self) -> None:
        self._configs: dict[str, dict[str, Any]] = {}

    def find_by_name(self, name: str) -> dict[str, Any] | None:
        config = self._configs.get(name)
        return dict(config) if config is not None else None

    def save(self, name: str, config: dict[str, Any]) -> dict[str, Any]:
        self._configs[name] = dict(config)
        return dict(config)

    def reset(self) -> None:
        self._configs.clear()
