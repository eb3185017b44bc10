import pytest

from supervision_api.core.constraints import (
    Constraint,
    constraint_code,
    is_date_string,
    is_email,
    is_uuid,
    matches,
    max_length,
    max_value,
    min_length,
    min_value,
    not_empty,
    one_of,
)


@pytest.mark.parametrize("value", ["", [], {}, None])
def test_not_empty_rejects_empty_values(value):
    assert not_empty()("name", value) == "name should not be empty"


@pytest.mark.parametrize("value", ["x", ["a"], 0, False])
def test_not_empty_accepts_values(value):
    assert not_empty()("name", value) is None


def test_is_email():
    c = is_email()
    assert c("email", "jane@example.com") is None
    assert c("email", "invalid-email") == "email must be an email"
    assert c("email", "") is not None
    assert c("email", 123) is not None


def test_is_uuid():
    c = is_uuid()
    assert c("hall_id", "0f8fad5b-d9cb-469f-a165-70867728950e") is None
    assert c("hall_id", "hall-1") == "hall_id must be a UUID"


def test_is_date_string():
    c = is_date_string()
    assert c("birthday", "2025-01-01") is None
    assert c("birthday", "2025-11-14T10:00:00.000Z") is None
    assert c("birthday", "14/11/2025") is not None


def test_one_of():
    c = one_of(["male", "female", "other"])
    assert c("gender", "other") is None
    assert c("gender", "unknown") == "gender must be one of the following values: male, female, other"


def test_numeric_bounds():
    assert min_value(1)("page", 1) is None
    assert min_value(1)("page", 0) == "page must not be less than 1"
    assert max_value(100)("limit", 100) is None
    assert max_value(100)("limit", 101) == "limit must not be greater than 100"


def test_length_bounds():
    assert min_length(6)("password", "secret") is None
    assert min_length(6)("password", "abc") == "password must be longer than or equal to 6 characters"
    assert max_length(3)("code", "abcd") == "code must be shorter than or equal to 3 characters"


def test_matches_pattern_with_braces():
    c = matches(r"^\d{3}-\d{4}$")
    assert c("phone", "555-1234") is None
    assert c("phone", "5551234") == r"phone must match ^\d{3}-\d{4}$ regular expression"


def test_constraint_codes():
    assert constraint_code(not_empty()) == "not_empty"
    assert constraint_code(is_email()) == "email"

    def no_spaces(name, value):
        return None

    assert constraint_code(no_spaces) == "no_spaces"


def test_constraints_are_immutable():
    c = Constraint("custom", lambda v: True, "is fine")
    with pytest.raises(AttributeError):
        c.code = "other"
