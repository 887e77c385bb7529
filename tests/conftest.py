"""Shared fixtures: registry documents written to a temporary directory."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest
import structlog

from componentkit.loader import RegistryLoader
from componentkit.resolver import DependencyResolver

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    WriteRegistry = Callable[[Any], Path]


def _component(
    name: str,
    dependencies: list[str] | None = None,
    npm_dependencies: list[str] | None = None,
    description: str | None = None,
) -> dict[str, Any]:
    """Raw registry entry for *name* with one primary file and one metadata file."""
    return {
        "metadata": {
            "name": name.title(),
            "description": description or f"A {name} component",
            "dependencies": dependencies or [],
            "files": [
                {
                    "path": f"components/ui/{name}.tsx",
                    "content": f"export const {name.title()} = () => null;",
                    "type": "component",
                }
            ],
            "npmDependencies": npm_dependencies or [],
        },
        "component": {
            "path": f"components/ui/{name}.tsx",
            "content": f"export const {name.title()} = () => null;",
        },
    }


def _registry(*components: tuple[str, dict[str, Any]]) -> dict[str, Any]:
    return {
        "components": dict(components),
        "utils": {
            "cn": {
                "path": "lib/utils.ts",
                "content": "export function cn() {}",
                "description": "Class name utility",
            }
        },
    }


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo configure_logging() calls so later tests do not log to closed streams."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def write_registry(tmp_path: Path) -> WriteRegistry:
    """Write a document (dict, or raw text) to registry.json and return its path."""
    path = tmp_path / "registry.json"

    def _write(document: Any) -> Path:
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def form_registry() -> dict[str, Any]:
    """button <- input <- form, with form also depending on button directly."""
    return _registry(
        ("button", _component("button", npm_dependencies=["react", "clsx"])),
        ("input", _component("input", ["button"], ["react", "tailwind-merge"])),
        ("form", _component("form", ["input", "button"], ["react-hook-form", "clsx"])),
    )


@pytest.fixture()
def resolver_for(write_registry: WriteRegistry) -> Callable[[dict[str, Any]], DependencyResolver]:
    def _build(document: dict[str, Any]) -> DependencyResolver:
        return DependencyResolver(RegistryLoader(write_registry(document)))

    return _build


@pytest.fixture()
def form_resolver(
    resolver_for: Callable[[dict[str, Any]], DependencyResolver],
    form_registry: dict[str, Any],
) -> DependencyResolver:
    return resolver_for(form_registry)


@pytest.fixture()
def make_component() -> Callable[..., dict[str, Any]]:
    return _component


@pytest.fixture()
def make_registry() -> Callable[..., dict[str, Any]]:
    return _registry
