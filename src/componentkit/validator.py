"""Standalone registry validation for build-time linting.

Unlike the loader, nothing here raises for malformed input: every function
returns the full list of problems found so CI can report them all at once.
The structural rules live in ``componentkit.schema`` and are shared with the
loader.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from componentkit.models.results import ValidationReport
from componentkit.schema import (
    COMPONENT_FILE,
    COMPONENT_METADATA,
    REGISTRY,
    REGISTRY_COMPONENT,
    iter_errors,
)

if TYPE_CHECKING:
    from componentkit.models.registry import RegistryComponent


def validate_component_file(file: Any, context: str = "file") -> list[str]:
    return list(iter_errors(file, COMPONENT_FILE, context))


def validate_component_metadata(metadata: Any, context: str = "metadata") -> list[str]:
    return list(iter_errors(metadata, COMPONENT_METADATA, context))


def validate_registry_component(component: Any, context: str = "component") -> list[str]:
    return list(iter_errors(component, REGISTRY_COMPONENT, context))


def validate_registry(document: Any) -> ValidationReport:
    """Validate a whole decoded registry document, accumulating every error."""
    errors = list(iter_errors(document, REGISTRY))
    return ValidationReport(is_valid=not errors, errors=errors)


# Heuristic, not a parser: import styles not listed here go unnoticed.
IMPORT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?P<package>@radix-ui/react-[\w-]+)"),
    re.compile(r"""from\s+["'](?P<package>class-variance-authority)["']"""),
    re.compile(r"""from\s+["'](?P<package>clsx)["']"""),
    re.compile(r"""from\s+["'](?P<package>tailwind-merge)["']"""),
    re.compile(r"""from\s+["'](?P<package>lucide-react)["']"""),
)


def find_imported_packages(content: str) -> list[str]:
    """npm packages referenced by *content* according to ``IMPORT_PATTERNS``, in rule order."""
    packages: dict[str, None] = {}
    for pattern in IMPORT_PATTERNS:
        for match in pattern.finditer(content):
            packages[match.group("package")] = None
    return list(packages)


def validate_npm_dependencies(component: RegistryComponent) -> list[str]:
    """Warn about packages the primary file appears to import but does not declare."""
    declared = set(component.metadata.npm_dependencies)
    return [
        f"Component uses {package} but it's not listed in npmDependencies"
        for package in find_imported_packages(component.component.content)
        if package not in declared
    ]
