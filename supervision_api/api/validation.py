from fastapi import APIRouter, Depends, HTTPException, Request

from supervision_api.core.errors import ShapeConfigurationError, ValidationFailure
from supervision_api.core.shapes import Shape, get_shape, registered_shapes
from supervision_api.core.validation import MISSING_BODY, ValidationPipe, read_json, validate, validated_query
from supervision_api.schemas.pagination import PaginatedResponse, PaginationMeta, ShapeListQueryShape
from supervision_api.schemas.validation import (
    ShapeFieldOut,
    ShapeOut,
    ValidationPreviewResponse,
)

# Register the request shapes exposed through this router
from supervision_api.schemas import rooms as _rooms  # noqa: F401
from supervision_api.schemas import users as _users  # noqa: F401

router = APIRouter(prefix="/validation", tags=["validation"])

SHAPE_SORT_KEYS = {
    "name": lambda s: s.name,
    "fields": lambda s: (len(s.fields), s.name),
}


def shape_to_out(shape: Shape) -> ShapeOut:
    return ShapeOut(
        name=shape.name,
        unknown=shape.unknown,
        fields=[
            ShapeFieldOut(
                name=f.name,
                kind=f.kind_name,
                optional=f.optional,
                constraints=f.constraint_codes,
            )
            for f in shape.fields
        ],
    )


def _shape_or_404(shape_name: str) -> Shape:
    try:
        return get_shape(shape_name)
    except ShapeConfigurationError:
        raise HTTPException(status_code=404, detail="Shape not found")


@router.get("/shapes", response_model=PaginatedResponse[ShapeOut])
def list_shapes(params=Depends(validated_query(ShapeListQueryShape))):
    """
    List registered request shapes.
    Query parameters are themselves validated against the ShapeListQuery shape.
    """
    shapes = registered_shapes()
    if params.search:
        term = params.search.lower()
        shapes = [s for s in shapes if term in s.name.lower()]
    shapes = sorted(shapes, key=SHAPE_SORT_KEYS[params.sort_by], reverse=params.sort_order == "DESC")

    total = len(shapes)
    start = (params.page - 1) * params.limit
    items = [shape_to_out(s) for s in shapes[start:start + params.limit]]

    return PaginatedResponse(
        items=items,
        pagination=PaginationMeta(page=params.page, limit=params.limit, total_items=total),
    )


@router.get("/shapes/{shape_name}", response_model=ShapeOut)
def get_shape_detail(shape_name: str):
    return shape_to_out(_shape_or_404(shape_name))


@router.post("/{shape_name}/preview", response_model=ValidationPreviewResponse)
async def preview(shape_name: str, request: Request):
    """
    Dry-run a payload against a shape without rejecting the request.
    Unknown keys on shapes that drop them are reported as warnings.
    """
    shape = _shape_or_404(shape_name)
    payload = await read_json(request)
    if payload is MISSING_BODY:
        payload = {}

    warnings: list[str] = []
    if shape.unknown == "drop" and isinstance(payload, dict):
        declared = set(shape.field_names)
        warnings = [f"property {k} will be ignored" for k in payload if k not in declared]

    try:
        validate(payload, shape)
    except ValidationFailure as e:
        return ValidationPreviewResponse(valid=False, errors=e.violations, warnings=warnings)

    return ValidationPreviewResponse(valid=True, errors=[], warnings=warnings)


@router.post("/{shape_name}/normalize")
async def normalize(shape_name: str, request: Request):
    """
    Return the payload coerced into the shape (e.g. "5" -> 5, defaults filled).
    Invalid payloads are rejected with 400 and the violation list.
    """
    shape = _shape_or_404(shape_name)
    payload = await read_json(request)
    instance = ValidationPipe(shape).transform({} if payload is MISSING_BODY else payload)
    return instance.model_dump()
