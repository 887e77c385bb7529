"""Registry loader: read, validate and cache the component registry document.

The document is read once per loader instance and kept in memory until
``clear_cache()`` is called. Validation is all-or-nothing: the first
structural error aborts the load and nothing is cached.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from componentkit.errors import ComponentKitError, ErrorCode
from componentkit.models.registry import Registry
from componentkit.schema import REGISTRY, first_error

if TYPE_CHECKING:
    from componentkit.config import Settings
    from componentkit.models.registry import ComponentMetadata, RegistryComponent, UtilEntry

log = structlog.get_logger()

BUNDLED_REGISTRY_PATH = Path(__file__).parent / "data" / "registry.json"


class RegistryLoader:
    """Loads the registry from a JSON document and exposes read accessors."""

    def __init__(self, registry_path: str | Path | None = None) -> None:
        self.registry_path = (
            Path(registry_path) if registry_path is not None else BUNDLED_REGISTRY_PATH
        )
        self._cached: Registry | None = None
        # Serialises first loads so concurrent callers trigger a single read
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> RegistryLoader:
        return cls(settings.registry.path)

    async def load_registry(self) -> Registry:
        """Return the cached registry, reading and validating it on first use.

        Raises:
            ComponentKitError: ``NOT_FOUND`` when the document is missing or not a file,
                ``INVALID_FORMAT`` when it is not UTF-8 JSON, ``INVALID_PROJECT``
                when it fails structural validation.
        """
        if self._cached is not None:
            return self._cached

        async with self._lock:
            if self._cached is not None:
                return self._cached

            raw = await self._read_text()
            try:
                document = json.loads(raw)
            except json.JSONDecodeError as exc:
                log.error("registry_invalid_json", path=str(self.registry_path), error=str(exc))
                raise ComponentKitError(
                    code=ErrorCode.INVALID_FORMAT,
                    message=f"Invalid registry JSON format: {exc}",
                    suggestion="Check the registry.json file for syntax errors.",
                ) from exc

            error = first_error(document, REGISTRY)
            if error is not None:
                log.error("registry_invalid", path=str(self.registry_path), error=error)
                raise ComponentKitError(
                    code=ErrorCode.INVALID_PROJECT,
                    message=f"Invalid registry structure: {error}",
                    suggestion="Run componentkit-validate to list every problem in the document.",
                )

            registry = Registry.model_validate(document)
            self._cached = registry
            log.info(
                "registry_loaded",
                path=str(self.registry_path),
                components=len(registry.components),
                utils=len(registry.utils),
            )
            return registry

    async def _read_text(self) -> str:
        try:
            return await asyncio.to_thread(self.registry_path.read_text, encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as exc:
            log.error("registry_not_found", path=str(self.registry_path))
            raise ComponentKitError(
                code=ErrorCode.NOT_FOUND,
                message=f"Registry file not found: {self.registry_path}",
                suggestion="Ensure the registry.json file exists or try reinstalling the package.",
            ) from exc
        except UnicodeDecodeError as exc:
            log.error("registry_invalid_encoding", path=str(self.registry_path), error=str(exc))
            raise ComponentKitError(
                code=ErrorCode.INVALID_FORMAT,
                message=f"Registry file is not valid UTF-8: {exc}",
                suggestion="Save the registry.json file with UTF-8 encoding.",
            ) from exc

    async def get_component(self, name: str) -> RegistryComponent | None:
        """Return the component registered under *name*, or None."""
        registry = await self.load_registry()
        return registry.components.get(name)

    async def get_component_names(self) -> list[str]:
        registry = await self.load_registry()
        return list(registry.components)

    async def get_component_metadata(self, name: str) -> ComponentMetadata | None:
        component = await self.get_component(name)
        return component.metadata if component is not None else None

    async def get_all_components(self) -> dict[str, RegistryComponent]:
        registry = await self.load_registry()
        return registry.components

    async def get_utils(self) -> dict[str, UtilEntry]:
        registry = await self.load_registry()
        return registry.utils

    def clear_cache(self) -> None:
        """Drop the cached registry; the next access re-reads and re-validates."""
        self._cached = None
        log.debug("registry_cache_cleared", path=str(self.registry_path))
