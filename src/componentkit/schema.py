"""Declarative shape of the registry document and a generic walker over it.

The shapes below are the single source of structural rules. The loader takes
the first error ``iter_errors`` yields and aborts; the standalone validator
collects every error for CI reporting.

Each error is prefixed with a dotted breadcrumb to the offending value, e.g.
``components.button.metadata.files[0].type: must be one of component, utility, type``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Kind(Enum):
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    MAPPING = "mapping"  # object with arbitrary keys, every value of one shape


@dataclass(frozen=True)
class Field:
    name: str
    kind: Kind
    required: bool = True
    non_empty: bool = False
    choices: tuple[str, ...] = ()
    # element shape for ARRAY (a Shape, or Kind.STRING for arrays of strings),
    # value shape for MAPPING, nested shape for OBJECT
    of: Shape | Kind | None = None


@dataclass(frozen=True)
class Shape:
    label: str
    fields: tuple[Field, ...]


FILE_TYPES = ("component", "utility", "type")

COMPONENT_FILE = Shape(
    "file",
    (
        Field("path", Kind.STRING, non_empty=True),
        Field("content", Kind.STRING),
        Field("type", Kind.STRING, choices=FILE_TYPES),
    ),
)

COMPONENT_METADATA = Shape(
    "metadata",
    (
        Field("name", Kind.STRING, non_empty=True),
        Field("description", Kind.STRING, non_empty=True),
        Field("dependencies", Kind.ARRAY, of=Kind.STRING),
        Field("files", Kind.ARRAY, of=COMPONENT_FILE),
        Field("npmDependencies", Kind.ARRAY, of=Kind.STRING),
    ),
)

PRIMARY_FILE = Shape(
    "component",
    (
        Field("path", Kind.STRING, non_empty=True),
        Field("content", Kind.STRING, non_empty=True),
    ),
)

REGISTRY_COMPONENT = Shape(
    "component",
    (
        Field("metadata", Kind.OBJECT, of=COMPONENT_METADATA),
        Field("component", Kind.OBJECT, of=PRIMARY_FILE),
        Field("utils", Kind.ARRAY, required=False, of=COMPONENT_FILE),
        Field("types", Kind.ARRAY, required=False, of=COMPONENT_FILE),
        Field("examples", Kind.ARRAY, required=False, of=Kind.STRING),
    ),
)

UTIL_ENTRY = Shape(
    "util",
    (
        Field("path", Kind.STRING),
        Field("content", Kind.STRING),
        Field("description", Kind.STRING),
    ),
)

REGISTRY = Shape(
    "registry",
    (
        Field("components", Kind.MAPPING, of=REGISTRY_COMPONENT),
        Field("utils", Kind.MAPPING, of=UTIL_ENTRY),
        Field("version", Kind.STRING, required=False),
        Field("lastUpdated", Kind.STRING, required=False),
    ),
)


def _join(context: str, name: str) -> str:
    return f"{context}.{name}" if context else name


def iter_errors(value: Any, shape: Shape, context: str = "") -> Iterator[str]:
    """Yield every structural error in *value* against *shape*, in document order."""
    where = context or shape.label
    if not isinstance(value, Mapping):
        yield f"{where}: must be an object"
        return
    for field in shape.fields:
        if field.name not in value:
            if field.required:
                yield f"{where}: missing field '{field.name}'"
            continue
        yield from _check(value[field.name], field, _join(context, field.name))


def _nested(field: Field) -> Shape:
    if not isinstance(field.of, Shape):
        raise TypeError(f"field '{field.name}' of kind {field.kind.value} needs a Shape in 'of'")
    return field.of


def _check(value: Any, field: Field, where: str) -> Iterator[str]:
    if field.kind is Kind.STRING:
        yield from _check_string(value, field, where)
    elif field.kind is Kind.OBJECT:
        yield from iter_errors(value, _nested(field), where)
    elif field.kind is Kind.ARRAY:
        if not isinstance(value, list):
            yield f"{where}: must be an array"
            return
        for index, item in enumerate(value):
            item_where = f"{where}[{index}]"
            if isinstance(field.of, Shape):
                yield from iter_errors(item, field.of, item_where)
            elif not isinstance(item, str):
                yield f"{item_where}: must be a string"
    elif field.kind is Kind.MAPPING:
        if not isinstance(value, Mapping):
            yield f"{where}: must be an object"
            return
        shape = _nested(field)
        for key, item in value.items():
            yield from iter_errors(item, shape, f"{where}.{key}")


def _check_string(value: Any, field: Field, where: str) -> Iterator[str]:
    if not isinstance(value, str):
        yield f"{where}: must be a string"
    elif field.non_empty and not value:
        yield f"{where}: must not be empty"
    elif field.choices and value not in field.choices:
        yield f"{where}: must be one of {', '.join(field.choices)}"


def first_error(value: Any, shape: Shape, context: str = "") -> str | None:
    """Return the first structural error, or None when *value* conforms."""
    return next(iter_errors(value, shape, context), None)
