"""
Shape descriptors: static, data-driven declarations of request payloads.

A Shape is an ordered tuple of FieldSpecs. Each FieldSpec carries the
primitive kind the raw value is coerced to and the ordered constraints run
against the coerced value. A pydantic model is generated once per shape and
is the type of every validated instance.
"""
from __future__ import annotations

import typing
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, TypeAdapter, create_model

from supervision_api.core.constraints import constraint_code
from supervision_api.core.errors import ShapeConfigurationError

# Markers meaning "no shape, hand the raw value through"
PRIMITIVE_MARKERS = frozenset({str, int, float, bool, list, dict, bytes})

FIELD_KINDS = frozenset({str, int, float, bool, list, dict})

# lax coercion; a JSON number sent for a str field becomes its string form
_FIELD_CONFIG = ConfigDict(coerce_numbers_to_str=True)

UnknownPolicy = Literal["forbid", "drop"]


def _kind_name(kind: Any) -> str:
    origin = typing.get_origin(kind)
    if origin is None:
        return getattr(kind, "__name__", repr(kind))
    args = ", ".join(_kind_name(a) for a in typing.get_args(kind))
    return f"{origin.__name__}[{args}]"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: Any = str
    constraints: tuple[Callable[[str, Any], str | None], ...] = ()
    optional: bool = False
    default: Any = None
    # applied to the raw value before coercion, e.g. split "a,b" into a list
    transform: Callable[[Any], Any] | None = None
    adapter: TypeAdapter = dc_field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.name.isidentifier() or self.name.startswith("_"):
            raise ShapeConfigurationError(f"Invalid field name: {self.name!r}")
        if (typing.get_origin(self.kind) or self.kind) not in FIELD_KINDS:
            raise ShapeConfigurationError(f"Unsupported kind for field {self.name!r}: {self.kind!r}")
        for c in self.constraints:
            if not callable(c):
                raise ShapeConfigurationError(f"Constraint on {self.name!r} is not callable: {c!r}")
        object.__setattr__(self, "constraints", tuple(self.constraints))
        object.__setattr__(self, "adapter", TypeAdapter(self.kind, config=_FIELD_CONFIG))

    @property
    def kind_name(self) -> str:
        return _kind_name(self.kind)

    @property
    def constraint_codes(self) -> list[str]:
        return [constraint_code(c) for c in self.constraints]


def field(
    name: str,
    kind: Any = str,
    *constraints: Callable[[str, Any], str | None],
    optional: bool = False,
    default: Any = None,
    transform: Callable[[Any], Any] | None = None,
) -> FieldSpec:
    return FieldSpec(
        name=name,
        kind=kind,
        constraints=constraints,
        optional=optional,
        default=default,
        transform=transform,
    )


@dataclass(frozen=True)
class Shape:
    name: str
    fields: tuple[FieldSpec, ...]
    unknown: UnknownPolicy = "forbid"
    model: type[BaseModel] = dc_field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.unknown not in ("forbid", "drop"):
            raise ShapeConfigurationError(f"Unknown-field policy must be 'forbid' or 'drop', got {self.unknown!r}")

        fields = tuple(self.fields)
        names = [f.name for f in fields]
        if len(set(names)) != len(names):
            raise ShapeConfigurationError(f"Duplicate field names in shape {self.name!r}")
        object.__setattr__(self, "fields", fields)

        definitions: dict[str, Any] = {}
        for f in fields:
            if f.optional:
                definitions[f.name] = (f.kind | None, f.default)
            else:
                definitions[f.name] = (f.kind, ...)

        model = create_model(
            self.name,
            __config__=ConfigDict(extra="forbid", coerce_numbers_to_str=True),
            **definitions,
        )
        object.__setattr__(self, "model", model)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


_REGISTRY: dict[str, Shape] = {}


def register_shape(shape: Shape) -> Shape:
    if not isinstance(shape, Shape):
        raise ShapeConfigurationError(f"Not a shape: {shape!r}")
    existing = _REGISTRY.get(shape.name)
    if existing is not None and existing is not shape:
        raise ShapeConfigurationError(f"Shape {shape.name!r} is already registered")
    _REGISTRY[shape.name] = shape
    return shape


def define_shape(name: str, *fields: FieldSpec, unknown: UnknownPolicy = "forbid") -> Shape:
    """Declare a shape and add it to the registry."""
    return register_shape(Shape(name=name, fields=fields, unknown=unknown))


def get_shape(name: str) -> Shape:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise ShapeConfigurationError(f"No shape registered under {name!r}") from None


def registered_shapes() -> list[Shape]:
    return sorted(_REGISTRY.values(), key=lambda s: s.name)


def split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value
