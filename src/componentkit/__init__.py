"""Component registry loading, dependency resolution and registry linting."""

from __future__ import annotations

from componentkit.errors import ComponentKitError, ErrorCode
from componentkit.loader import RegistryLoader
from componentkit.resolver import DependencyResolver

__all__ = [
    "ComponentKitError",
    "DependencyResolver",
    "ErrorCode",
    "RegistryLoader",
]
