"""Assertion helpers for ``on_pass`` callbacks and named tests.

Every ``expect*`` helper prints a check-mark line and returns ``True`` when
the condition holds, and raises :class:`ExpectationFailedError` otherwise.
"""

from __future__ import annotations

import json
import re
from typing import Any, Union

from src.shared.display import print_expectation
from src.shared.errors import ExpectationFailedError
from src.shared.models.execution import ReqResponse

# Type constants accepted by has_structure / expect_struct
TString = str
TNumber = float
TBoolean = bool
TArray = list
TObject = dict

Structure = Union[type, dict[str, Any]]


def expect(condition: Any, message: str = "") -> bool:
    if not condition:
        raise ExpectationFailedError(message)
    print_expectation(message)
    return True


def has_structure(data: Any, shape: Structure) -> bool:
    """Check *data* against a type constant or a nested dict of them.

    ``TNumber`` accepts ints and floats but never booleans.  A dict shape
    requires *data* to be a dict whose listed keys all match; extra keys
    are allowed.
    """
    if shape is TString:
        return isinstance(data, str)
    if shape is TNumber:
        return isinstance(data, (int, float)) and not isinstance(data, bool)
    if shape is TBoolean:
        return isinstance(data, bool)
    if shape is TArray:
        return isinstance(data, list)
    if shape is TObject:
        return isinstance(data, dict)
    if isinstance(shape, dict):
        return isinstance(data, dict) and all(
            has_structure(data.get(key), sub_shape) for key, sub_shape in shape.items()
        )
    return False


def expect_struct(data: Any, shape: Structure) -> bool:
    return expect(has_structure(data, shape), f"structure matches {_describe_shape(shape)}")


def expect_status(res: ReqResponse, expected: int) -> bool:
    return expect(res.status == expected, f"Expected status {expected}, got {res.status}")


def expect_field(obj: Any, field: str | list[str]) -> bool:
    """Assert that *obj* is a dict containing *field* (or every field of a list)."""
    fields = field if isinstance(field, list) else [field]
    for name in fields:
        expect(
            isinstance(obj, dict) and name in obj,
            f"Expected field '{name}' in object, got: {json.dumps(obj, default=str)}",
        )
    return True


def expect_field_match(obj: Any, field: str, pattern: str | re.Pattern[str]) -> bool:
    """Assert that ``obj[field]`` is a string matched by *pattern* (``re.search``)."""
    value = obj.get(field) if isinstance(obj, dict) else None
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return expect(
        isinstance(value, str) and regex.search(value) is not None,
        f"Expected field '{field}' to match {regex.pattern}, got: {value}",
    )


def _describe_shape(shape: Structure) -> str:
    if isinstance(shape, dict):
        inner = ", ".join(f"{key}: {_describe_shape(value)}" for key, value in shape.items())
        return "{" + inner + "}"
    return getattr(shape, "__name__", repr(shape))
