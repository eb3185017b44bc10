"""
Field constraints for shape descriptors.

A constraint is a callable ``(field, value) -> str | None`` returning a
violation message, or None when the value is acceptable. It runs on the
already-coerced value. The ``code`` attribute names the rule in violation
reports; plain functions fall back to their ``__name__``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Iterable
from uuid import UUID

from pydantic import EmailStr, TypeAdapter, ValidationError

_EMAIL = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class Constraint:
    code: str
    check: Callable[[Any], bool]
    message: str  # appended to the field name

    def __call__(self, field: str, value: Any) -> str | None:
        if self.check(value):
            return None
        return f"{field} {self.message}"


def constraint_code(constraint: Callable) -> str:
    return getattr(constraint, "code", None) or getattr(constraint, "__name__", "custom")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, dict, tuple, set)):
        return len(value) == 0
    return False


def _email_ok(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _EMAIL.validate_python(value)
    except ValidationError:
        return False
    return True


def _uuid_ok(value: Any) -> bool:
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


def _iso_date_ok(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    s = value.strip()
    try:
        date.fromisoformat(s)
        return True
    except ValueError:
        pass
    try:
        datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def not_empty() -> Constraint:
    return Constraint("not_empty", lambda v: not _is_empty(v), "should not be empty")


def is_email() -> Constraint:
    return Constraint("email", _email_ok, "must be an email")


def is_uuid() -> Constraint:
    return Constraint("uuid", _uuid_ok, "must be a UUID")


def is_date_string() -> Constraint:
    return Constraint("date_string", _iso_date_ok, "must be a valid ISO 8601 date string")


def one_of(choices: Iterable[Any]) -> Constraint:
    allowed = tuple(choices)
    listed = ", ".join(str(c) for c in allowed)
    return Constraint(
        "choice",
        lambda v: v in allowed,
        "must be one of the following values: " + listed,
    )


def min_value(minimum: float) -> Constraint:
    return Constraint("min", lambda v: v >= minimum, "must not be less than " + str(minimum))


def max_value(maximum: float) -> Constraint:
    return Constraint("max", lambda v: v <= maximum, "must not be greater than " + str(maximum))


def min_length(n: int) -> Constraint:
    return Constraint(
        "min_length",
        lambda v: len(v) >= n,
        "must be longer than or equal to " + str(n) + " characters",
    )


def max_length(n: int) -> Constraint:
    return Constraint(
        "max_length",
        lambda v: len(v) <= n,
        "must be shorter than or equal to " + str(n) + " characters",
    )


def matches(pattern: str | re.Pattern) -> Constraint:
    rx = re.compile(pattern) if isinstance(pattern, str) else pattern
    return Constraint(
        "matches",
        lambda v: isinstance(v, str) and rx.search(v) is not None,
        "must match " + rx.pattern + " regular expression",
    )
