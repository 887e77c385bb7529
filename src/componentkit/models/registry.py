from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FileType = Literal["component", "utility", "type"]


class _Frozen(BaseModel):
    # Registry data is read-only once loaded; aliases mirror the JSON document keys
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ComponentFile(_Frozen):
    """A single file installed into the consumer's project. ``path`` is its identity."""

    path: str
    content: str
    type: FileType


class ComponentMetadata(_Frozen):
    name: str
    description: str
    dependencies: list[str] = []  # component keys, may name components that do not exist
    files: list[ComponentFile] = []
    npm_dependencies: list[str] = Field(default=[], alias="npmDependencies")


class PrimaryFile(_Frozen):
    """The ``component`` entry: the main source file of a registry component."""

    path: str
    content: str

    def as_component_file(self) -> ComponentFile:
        return ComponentFile(path=self.path, content=self.content, type="component")


class RegistryComponent(_Frozen):
    metadata: ComponentMetadata
    component: PrimaryFile
    utils: list[ComponentFile] | None = None
    types: list[ComponentFile] | None = None
    examples: list[str] | None = None  # free-text usage snippets


class UtilEntry(_Frozen):
    """Registry-wide helper snippet. Not part of dependency resolution."""

    path: str
    content: str
    description: str


class Registry(_Frozen):
    """The whole registry document, keyed by canonical component name."""

    components: dict[str, RegistryComponent]
    utils: dict[str, UtilEntry]
    version: str | None = None
    last_updated: str | None = Field(default=None, alias="lastUpdated")
