from supervision_api.core.constraints import (
    is_date_string,
    is_email,
    min_length,
    min_value,
    not_empty,
    one_of,
)
from supervision_api.core.shapes import define_shape, field, split_csv

GENDERS = ("male", "female", "other")

USER_ROLES = ("admin", "supervisor", "observer")


def known_roles(name: str, value: list[str]) -> str | None:
    unknown = [r for r in value if r not in USER_ROLES]
    if unknown:
        return f"{name} contains unknown roles: {', '.join(unknown)}"
    return None


CreateUserShape = define_shape(
    "CreateUser",
    field("username", str, not_empty()),
    field("email", str, is_email(), not_empty()),
    field("password", str, not_empty(), min_length(6)),
    field("full_name", str, not_empty()),
    field("phone", str, not_empty()),
    field("first_name", str, optional=True),
    field("last_name", str, optional=True),
    field("middle_name", str, optional=True),
    field("personal_id", str, optional=True),
    field("gender", str, one_of(GENDERS), optional=True),
    field("birthday", str, is_date_string(), optional=True),
    field("profile_photo", str, optional=True),
    field("institution", str, optional=True),
    field("specialty", str, optional=True),
    field("contact_details", str, optional=True),
    # a JSON body must carry a real array; only query strings are split
    field("roles", list[str], known_roles, optional=True),
    field("is_active", bool, optional=True),
    field("is_approved", bool, optional=True),
)

QueryUserShape = define_shape(
    "QueryUser",
    field("search", str, optional=True),
    field("roles", list[str], known_roles, optional=True, transform=split_csv),
    field("is_active", bool, optional=True),
    field("is_approved", bool, optional=True),
    field("page", int, min_value(1), optional=True, default=1),
    field("limit", int, min_value(1), optional=True, default=10),
    unknown="drop",
)
