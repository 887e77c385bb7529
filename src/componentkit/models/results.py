from __future__ import annotations

from pydantic import BaseModel

from componentkit.models.registry import ComponentFile, RegistryComponent


class SearchResult(BaseModel):
    name: str
    component: RegistryComponent


class DependencyCheck(BaseModel):
    """Outcome of checking a component's direct dependencies against the registry."""

    valid: bool
    missing: list[str]


class RegistryStats(BaseModel):
    total_components: int
    total_utils: int
    components_with_dependencies: int
    average_dependencies: float  # rounded to 2 decimal places


class PopularityEntry(BaseModel):
    name: str
    dependents: int  # number of direct dependents


class InstallPlan(BaseModel):
    """Everything an installer needs to add one component to a project."""

    name: str
    dependencies: list[str]  # transitive, discovery order
    files: list[ComponentFile]
    npm_dependencies: list[str]


class ValidationReport(BaseModel):
    is_valid: bool
    errors: list[str]
