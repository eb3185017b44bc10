from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from supervision_api.core.constraints import constraint_code
from supervision_api.core.errors import ShapeConfigurationError, ValidationFailure
from supervision_api.core.shapes import PRIMITIVE_MARKERS, FieldSpec, Shape, get_shape
from supervision_api.schemas.validation import ROOT_FIELD, Violation

logger = logging.getLogger(__name__)

# returned by read_json when the request carries no body at all
MISSING_BODY = object()


def resolve_shape(shape: Shape | str | type | None) -> Shape | None:
    """
    None / primitive marker -> None (pass-through).
    Shape -> itself; str -> registry lookup.
    Anything else is a programming error, not a client error.
    """
    if shape is None:
        return None
    if isinstance(shape, Shape):
        return shape
    if isinstance(shape, type) and shape in PRIMITIVE_MARKERS:
        return None
    if isinstance(shape, str):
        return get_shape(shape)
    raise ShapeConfigurationError(f"Not a recognised shape descriptor: {shape!r}")


def _coerce_field(spec: FieldSpec, raw: Any) -> tuple[Any, Violation | None]:
    value = spec.transform(raw) if spec.transform else raw
    try:
        return spec.adapter.validate_python(value), None
    except PydanticValidationError:
        return None, Violation(
            field=spec.name,
            code="type",
            message=f"{spec.name} must be of type {spec.kind_name}",
        )


def collect_violations(raw_payload: Any, shape: Shape) -> tuple[dict[str, Any], list[Violation]]:
    """
    Coerce each declared field and run its constraints.
    Violations come back in field then constraint declaration order,
    followed by unknown keys (forbid policy) in payload order.
    """
    if not isinstance(raw_payload, Mapping):
        return {}, [Violation(field=ROOT_FIELD, code="object", message=f"{shape.name} payload must be an object")]

    coerced: dict[str, Any] = {}
    violations: list[Violation] = []

    for spec in shape.fields:
        raw = raw_payload.get(spec.name)
        if raw is None:
            if spec.optional:
                continue
            violations.append(Violation(field=spec.name, code="required", message=f"{spec.name} is required"))
            continue

        value, type_violation = _coerce_field(spec, raw)
        if type_violation is not None:
            violations.append(type_violation)
            continue

        for constraint in spec.constraints:
            message = constraint(spec.name, value)
            if message:
                violations.append(Violation(field=spec.name, code=constraint_code(constraint), message=message))
        coerced[spec.name] = value

    if shape.unknown == "forbid":
        declared = set(shape.field_names)
        for key in raw_payload:
            if key not in declared:
                violations.append(
                    Violation(field=str(key), code="whitelist", message=f"property {key} should not exist")
                )

    return coerced, violations


def validate(raw_payload: Any, shape: Shape | str | type | None = None) -> Any:
    """
    Turn a raw payload into an instance of ``shape.model``.

    Returns the payload untouched when no shape (or a primitive marker) is
    given. Raises ValidationFailure with every violation when any constraint
    fails; no partial instance is ever returned.
    """
    resolved = resolve_shape(shape)
    if resolved is None:
        return raw_payload

    coerced, violations = collect_violations(raw_payload, resolved)
    if violations:
        raise ValidationFailure("Validation failed", violations)

    return resolved.model(**coerced)


class ValidationPipe:
    """
    Binds a shape to ``validate`` for use at a request boundary.
    Shape problems surface at construction time when possible.
    """

    def __init__(self, shape: Shape | str | type | None = None):
        self.shape = shape
        if not isinstance(shape, str):
            resolve_shape(shape)

    def transform(self, value: Any) -> Any:
        try:
            return validate(value, self.shape)
        except ValidationFailure as e:
            logger.info(
                "Rejected payload for %s: %s",
                getattr(self.shape, "name", self.shape),
                "; ".join(v.message for v in e.violations),
            )
            raise
        except ShapeConfigurationError:
            logger.error("Invalid shape descriptor %r", self.shape)
            raise


async def read_json(request: Request) -> Any:
    """
    Decoded JSON body, or MISSING_BODY when the body is empty.
    A literal `null` body decodes to None and is validated like any other value.
    """
    body = await request.body()
    if not body.strip():
        return MISSING_BODY
    try:
        return json.loads(body)
    except ValueError:
        raise ValidationFailure(
            "Validation failed",
            [Violation(field=ROOT_FIELD, code="json", message="Request body is not valid JSON")],
        ) from None


def validated_body(shape: Shape | str | type | None):
    """FastAPI dependency: JSON body run through the pipe."""
    pipe = ValidationPipe(shape)

    async def dependency(request: Request) -> Any:
        payload = await read_json(request)
        if payload is MISSING_BODY:
            payload = {} if resolve_shape(pipe.shape) is not None else None
        return pipe.transform(payload)

    return dependency


def validated_query(shape: Shape | str | type | None):
    """FastAPI dependency: query parameters run through the pipe."""
    pipe = ValidationPipe(shape)

    def dependency(request: Request) -> Any:
        params = request.query_params
        payload: dict[str, Any] = {}
        for key in params.keys():
            values = params.getlist(key)
            payload[key] = values if len(values) > 1 else values[0]
        return pipe.transform(payload)

    return dependency
