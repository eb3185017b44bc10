from fastapi import FastAPI

from supervision_api.core.constraints import is_email, not_empty
from supervision_api.core.errors import register_exception_handlers
from supervision_api.core.shapes import Shape, field

# The name/email pair used throughout the validator tests
PersonShape = Shape(
    name="Person",
    fields=(
        field("name", str, not_empty()),
        field("email", str, is_email()),
    ),
)


def make_app() -> FastAPI:
    """Bare app with the project's error envelope, for mounting test routes"""
    app = FastAPI()
    register_exception_handlers(app)
    return app


def violation_fields(exc) -> list[str]:
    return [v.field for v in exc.violations]


def violation_codes(exc) -> list[str]:
    return [v.code for v in exc.violations]
