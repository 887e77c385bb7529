from __future__ import annotations

from componentkit.models.registry import (
    ComponentFile,
    ComponentMetadata,
    FileType,
    PrimaryFile,
    Registry,
    RegistryComponent,
    UtilEntry,
)
from componentkit.models.results import (
    DependencyCheck,
    InstallPlan,
    PopularityEntry,
    RegistryStats,
    SearchResult,
    ValidationReport,
)

__all__ = [
    # registry
    "ComponentFile",
    "ComponentMetadata",
    "FileType",
    "PrimaryFile",
    "Registry",
    "RegistryComponent",
    "UtilEntry",
    # results
    "DependencyCheck",
    "InstallPlan",
    "PopularityEntry",
    "RegistryStats",
    "SearchResult",
    "ValidationReport",
]
