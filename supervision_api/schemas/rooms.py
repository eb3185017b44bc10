from supervision_api.core.constraints import is_uuid, min_value, not_empty
from supervision_api.core.shapes import define_shape, field

CreateRoomShape = define_shape(
    "CreateRoom",
    field("number", str, not_empty()),
    field("name", str, optional=True),
    field("capacity", int, min_value(0), optional=True),
    field("description", str, optional=True),
    field("active", bool, optional=True, default=True),
    field("hall_id", str, is_uuid(), not_empty()),
    field("building_id", str, is_uuid(), optional=True),
)
