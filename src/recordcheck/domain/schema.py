"""FieldSpec and RecordSchema — declarative record shapes.

A RecordSchema is an ordered, frozen tree of FieldSpecs.  Top-level specs
may declare children when they are ``object`` fields; nested paths are the
parent's name joined to the child's with ``.`` (``bookingdates.checkin``).

INVARIANT: A schema that constructs successfully can be walked by the
validator without further checks.  Every structural mistake is raised as
:class:`SchemaError` at construction time.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from typing import Any

from pydantic import BaseModel, Field, model_validator

from recordcheck.domain.formats import is_known_format
from recordcheck.domain.types import CompareMode, FieldType

MAX_DEPTH = 2
PATH_SEPARATOR = "."


class SchemaError(Exception):
    """A RecordSchema or FieldSpec is malformed.

    Not a ``ValueError``: pydantic would wrap that in a ValidationError
    when raised inside a validator.
    """


class FieldSpec(BaseModel):
    """One validated field: key, expected type, requiredness, format, compare mode."""

    model_config = {"frozen": True, "populate_by_name": True}

    name: str
    expected_type: FieldType = Field(alias="type")
    required: bool = True
    format: str | None = None
    pattern: str | None = None
    min_length: int | None = None
    minimum: float | None = None
    compare_mode: CompareMode = Field(default=CompareMode.EXACT, alias="compare")
    children: tuple[FieldSpec, ...] = ()

    @model_validator(mode="after")
    def _check_constraints(self) -> FieldSpec:
        if not self.name:
            raise SchemaError("Field name must not be empty")
        if self.children and self.expected_type is not FieldType.OBJECT:
            raise SchemaError(
                f"Field '{self.name}' declares children but is a {self.expected_type}"
            )
        string_only = {
            "format": self.format,
            "pattern": self.pattern,
            "min_length": self.min_length,
        }
        for key, value in string_only.items():
            if value is not None and self.expected_type is not FieldType.STRING:
                raise SchemaError(f"Field '{self.name}': {key} applies only to strings")
        if self.minimum is not None and self.expected_type is not FieldType.NUMBER:
            raise SchemaError(f"Field '{self.name}': minimum applies only to numbers")
        if self.format is not None and not is_known_format(self.format):
            raise SchemaError(f"Field '{self.name}': unknown format '{self.format}'")
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise SchemaError(f"Field '{self.name}': invalid pattern: {exc}") from exc
        if self.min_length is not None and self.min_length < 0:
            raise SchemaError(f"Field '{self.name}': min_length must be >= 0")
        return self

    @property
    def is_nested(self) -> bool:
        return self.expected_type is FieldType.OBJECT and bool(self.children)


class RecordSchema(BaseModel):
    """Named, ordered collection of FieldSpecs for one record type."""

    model_config = {"frozen": True}

    name: str
    description: str = ""
    fields: tuple[FieldSpec, ...]

    @model_validator(mode="after")
    def _check_tree(self) -> RecordSchema:
        _check_siblings(self.fields, parent=None, depth=1)
        return self

    def walk(self) -> Iterator[tuple[str, FieldSpec]]:
        """Yield ``(dotted_path, spec)`` pairs in declaration order, depth-first."""
        yield from _walk(self.fields, prefix="")

    def paths(self) -> list[str]:
        return [path for path, _ in self.walk()]

    def get(self, path: str) -> FieldSpec:
        """Look up a FieldSpec by dotted path.

        Raises:
            KeyError: If no field is declared at *path*.
        """
        for candidate, spec in self.walk():
            if candidate == path:
                return spec
        raise KeyError(path)

    @classmethod
    def from_paths(
        cls,
        name: str,
        specs: Sequence[FieldSpec],
        *,
        description: str = "",
    ) -> RecordSchema:
        """Build a schema from a flat list whose names may be dotted paths.

        ``bookingdates.checkin`` attaches a child named ``checkin`` to the
        ``bookingdates`` object field, which must appear earlier in *specs*.
        """
        top: dict[str, FieldSpec] = {}
        children: dict[str, list[FieldSpec]] = {}
        for spec in specs:
            parent_name, sep, child_name = spec.name.partition(PATH_SEPARATOR)
            if not sep:
                if spec.name in top:
                    raise SchemaError(f"Duplicate field '{spec.name}' in schema '{name}'")
                top[spec.name] = spec
                children[spec.name] = list(spec.children)
                continue
            parent = top.get(parent_name)
            if parent is None:
                raise SchemaError(
                    f"Field '{spec.name}' refers to undeclared parent '{parent_name}'"
                )
            if parent.expected_type is not FieldType.OBJECT:
                raise SchemaError(f"Field '{spec.name}': parent '{parent_name}' is not an object")
            children[parent_name].append(spec.model_copy(update={"name": child_name}))

        fields = tuple(
            _with_children(spec, children[key]) if children[key] else spec
            for key, spec in top.items()
        )
        return cls(name=name, description=description, fields=fields)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def join_path(prefix: str, name: str) -> str:
    return f"{prefix}{PATH_SEPARATOR}{name}" if prefix else name


def _walk(specs: Sequence[FieldSpec], prefix: str) -> Iterator[tuple[str, FieldSpec]]:
    for spec in specs:
        path = join_path(prefix, spec.name)
        yield path, spec
        if spec.children:
            yield from _walk(spec.children, path)


def _with_children(spec: FieldSpec, children: list[FieldSpec]) -> FieldSpec:
    data: dict[str, Any] = spec.model_dump(exclude={"children"})
    # Revalidate so the child list goes through FieldSpec's own checks.
    return FieldSpec(**data, children=tuple(children))


def _check_siblings(specs: Sequence[FieldSpec], *, parent: str | None, depth: int) -> None:
    seen: set[str] = set()
    for spec in specs:
        where = join_path(parent or "", spec.name)
        if PATH_SEPARATOR in spec.name:
            raise SchemaError(
                f"Field '{where}' uses a dotted name; declare it as a child "
                "or build the schema with RecordSchema.from_paths()"
            )
        if spec.name in seen:
            raise SchemaError(f"Duplicate field '{where}'")
        seen.add(spec.name)
        if spec.children:
            if depth >= MAX_DEPTH:
                raise SchemaError(f"Field '{where}' nests deeper than one level")
            _check_siblings(spec.children, parent=where, depth=depth + 1)


FieldSpec.model_rebuild()
