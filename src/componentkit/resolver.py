"""Dependency resolution over the component registry.

Components form a directed graph keyed by registry name, with an edge from
each component to every name in its ``metadata.dependencies``. The graph may
reference undefined names and may contain cycles; neither is an error here.
Undefined names are dead ends and cycles are reported by
``has_circular_dependencies``. Only the loader raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from componentkit.loader import RegistryLoader
from componentkit.models.results import (
    DependencyCheck,
    InstallPlan,
    PopularityEntry,
    RegistryStats,
    SearchResult,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from componentkit.models.registry import ComponentFile, RegistryComponent

log = structlog.get_logger()


def _dependencies_of(name: str, components: Mapping[str, RegistryComponent]) -> list[str]:
    component = components.get(name)
    return component.metadata.dependencies if component is not None else []


def _collect_dependencies(name: str, components: Mapping[str, RegistryComponent]) -> list[str]:
    """Depth-first walk returning every name reachable from *name* in discovery order.

    Each component is expanded at most once. The stack holds one dependency
    iterator per open component, so depth is not limited by recursion.
    """
    found: dict[str, None] = {}
    visited = {name}
    stack = [iter(_dependencies_of(name, components))]
    while stack:
        dep = next(stack[-1], None)
        if dep is None:
            stack.pop()
            continue
        found[dep] = None
        if dep in visited:
            continue
        visited.add(dep)
        stack.append(iter(_dependencies_of(dep, components)))
    return list(found)


def _has_back_edge(name: str, components: Mapping[str, RegistryComponent]) -> bool:
    # on_path holds gray nodes, visited minus on_path holds black ones
    visited = {name}
    on_path = {name}
    stack = [(name, iter(_dependencies_of(name, components)))]
    while stack:
        node, deps = stack[-1]
        dep = next(deps, None)
        if dep is None:
            stack.pop()
            on_path.discard(node)
            continue
        if dep in on_path:
            return True
        if dep in visited:
            continue
        visited.add(dep)
        on_path.add(dep)
        stack.append((dep, iter(_dependencies_of(dep, components))))
    return False


def _component_files(component: RegistryComponent) -> list[ComponentFile]:
    """Primary file, then utils, then types, then metadata files."""
    files = [component.component.as_component_file()]
    files.extend(component.utils or ())
    files.extend(component.types or ())
    files.extend(component.metadata.files)
    return files


class DependencyResolver:
    """Answers dependency questions about the components of one registry."""

    def __init__(
        self,
        loader: RegistryLoader | None = None,
        registry_path: str | Path | None = None,
    ) -> None:
        self.loader = loader if loader is not None else RegistryLoader(registry_path)

    async def search_components(self, query: str) -> list[SearchResult]:
        """Case-insensitive substring match on the component key or description."""
        components = await self.loader.get_all_components()
        needle = query.lower()
        return [
            SearchResult(name=name, component=component)
            for name, component in components.items()
            if needle in name.lower() or needle in component.metadata.description.lower()
        ]

    async def get_component_dependents(self, name: str) -> list[str]:
        """Components that list *name* as a direct dependency."""
        components = await self.loader.get_all_components()
        return [
            key
            for key, component in components.items()
            if name in component.metadata.dependencies
        ]

    async def get_component_dependencies(self, name: str) -> list[str]:
        """Transitive dependencies of *name*, excluding *name* itself.

        Returns an empty list when *name* is not in the registry.
        """
        components = await self.loader.get_all_components()
        if name not in components:
            return []

        return [dep for dep in _collect_dependencies(name, components) if dep != name]

    async def get_all_npm_dependencies(self, name: str) -> list[str]:
        """Deduplicated npm packages needed by *name* and its transitive dependencies."""
        components = await self.loader.get_all_components()
        packages: dict[str, None] = {}
        for key in [name, *await self.get_component_dependencies(name)]:
            component = components.get(key)
            if component is not None:
                packages.update(dict.fromkeys(component.metadata.npm_dependencies))
        return list(packages)

    async def get_all_component_files(self, name: str) -> list[ComponentFile]:
        """Files to install for *name* and its dependencies, first path wins."""
        components = await self.loader.get_all_components()
        files: dict[str, ComponentFile] = {}
        for key in [name, *await self.get_component_dependencies(name)]:
            component = components.get(key)
            if component is None:
                continue
            for file in _component_files(component):
                files.setdefault(file.path, file)
        return list(files.values())

    async def get_install_plan(self, name: str) -> InstallPlan | None:
        """Bundle everything needed to install *name*, or None if it is unknown."""
        if await self.loader.get_component(name) is None:
            return None
        plan = InstallPlan(
            name=name,
            dependencies=await self.get_component_dependencies(name),
            files=await self.get_all_component_files(name),
            npm_dependencies=await self.get_all_npm_dependencies(name),
        )
        log.debug(
            "install_plan_built",
            component=name,
            dependencies=len(plan.dependencies),
            files=len(plan.files),
        )
        return plan

    async def validate_component_dependencies(self, name: str) -> DependencyCheck:
        """Check the direct dependencies of *name* against the registry.

        Only direct dependencies are checked; transitive references are left
        to the check of the component that declares them.
        """
        components = await self.loader.get_all_components()
        component = components.get(name)
        if component is None:
            return DependencyCheck(valid=False, missing=[name])

        missing = [dep for dep in component.metadata.dependencies if dep not in components]
        if missing:
            log.warning("missing_dependencies", component=name, missing=missing)
        return DependencyCheck(valid=not missing, missing=missing)

    async def get_registry_stats(self) -> RegistryStats:
        registry = await self.loader.load_registry()
        components = list(registry.components.values())
        total = len(components)
        dependency_counts = [len(c.metadata.dependencies) for c in components]
        return RegistryStats(
            total_components=total,
            total_utils=len(registry.utils),
            components_with_dependencies=sum(1 for count in dependency_counts if count > 0),
            average_dependencies=round(sum(dependency_counts) / total, 2) if total else 0,
        )

    async def get_components_by_popularity(self) -> list[PopularityEntry]:
        """Components ordered by number of direct dependents, most depended-on first."""
        entries = [
            PopularityEntry(name=name, dependents=len(await self.get_component_dependents(name)))
            for name in await self.loader.get_component_names()
        ]
        return sorted(entries, key=lambda entry: entry.dependents, reverse=True)

    async def has_circular_dependencies(self, name: str) -> bool:
        """True if a depth-first walk from *name* reaches a node still on its stack."""
        components = await self.loader.get_all_components()
        return _has_back_edge(name, components)

    def clear_cache(self) -> None:
        self.loader.clear_cache()
