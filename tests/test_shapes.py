import pytest

from supervision_api.core.constraints import not_empty
from supervision_api.core.errors import ShapeConfigurationError
from supervision_api.core.shapes import (
    Shape,
    define_shape,
    field,
    get_shape,
    register_shape,
    registered_shapes,
)
from supervision_api.schemas.rooms import CreateRoomShape
from tests.helpers import PersonShape


def test_shape_generates_model_with_declared_fields():
    assert list(PersonShape.model.model_fields) == ["name", "email"]
    assert PersonShape.field_names == ["name", "email"]


def test_field_spec_reports_kind_and_constraint_codes():
    roles = field("roles", list[str], not_empty(), optional=True)
    assert roles.kind_name == "list[str]"
    assert roles.constraint_codes == ["not_empty"]


def test_duplicate_field_names_are_rejected():
    with pytest.raises(ShapeConfigurationError):
        Shape(name="Dup", fields=(field("a"), field("a")))


def test_unsupported_kind_is_rejected():
    with pytest.raises(ShapeConfigurationError):
        field("when", object)


def test_invalid_field_name_is_rejected():
    with pytest.raises(ShapeConfigurationError):
        field("first-name")


def test_non_callable_constraint_is_rejected():
    with pytest.raises(ShapeConfigurationError):
        field("name", str, "not_empty")


def test_unknown_policy_must_be_known():
    with pytest.raises(ShapeConfigurationError):
        Shape(name="Loose", fields=(field("a"),), unknown="keep")


def test_define_shape_registers_by_name():
    shape = define_shape("ShapesTestNote", field("body", str, not_empty()))
    assert get_shape("ShapesTestNote") is shape
    assert shape in registered_shapes()


def test_registering_a_different_shape_under_same_name_fails():
    with pytest.raises(ShapeConfigurationError):
        register_shape(Shape(name="CreateRoom", fields=(field("number"),)))


def test_registering_the_same_shape_twice_is_allowed():
    assert register_shape(CreateRoomShape) is CreateRoomShape


def test_register_rejects_non_shapes():
    with pytest.raises(ShapeConfigurationError):
        register_shape({"name": str})


def test_get_shape_unknown_name():
    with pytest.raises(ShapeConfigurationError):
        get_shape("DefinitelyMissing")
