from pydantic import BaseModel, ConfigDict

# field name used for violations about the payload as a whole
ROOT_FIELD = "$root"


class Violation(BaseModel):
    """One failed constraint for one field"""
    model_config = ConfigDict(frozen=True)

    field: str
    code: str  # required, type, whitelist, not_empty, email, min, max, ...
    message: str


class ValidationPreviewResponse(BaseModel):
    """Response from validation preview endpoint"""
    valid: bool
    errors: list[Violation]
    warnings: list[str]  # Non-blocking warnings


class ShapeFieldOut(BaseModel):
    name: str
    kind: str
    optional: bool
    constraints: list[str]


class ShapeOut(BaseModel):
    name: str
    unknown: str
    fields: list[ShapeFieldOut]
