"""Tests for the expect* assertion helpers."""
from __future__ import annotations

import re

import pytest

from src.runner.assertions import (
    TArray,
    TBoolean,
    TNumber,
    TObject,
    TString,
    expect,
    expect_field,
    expect_field_match,
    expect_status,
    expect_struct,
    has_structure,
)
from src.shared.errors import ExpectationFailedError
from src.shared.models.execution import ReqResponse


class TestExpect:
    """Tests for expect."""

    def test_true_condition_prints_check(self, capsys):
        assert expect(True, "it holds") is True
        assert "✅ it holds" in capsys.readouterr().out

    def test_false_condition_raises(self):
        with pytest.raises(ExpectationFailedError) as exc_info:
            expect(0, "nope")
        assert exc_info.value.detail == "FAIL: nope"


class TestHasStructure:
    """Tests for has_structure."""

    @pytest.mark.parametrize(
        ("value", "shape", "expected"),
        [
            ("x", TString, True),
            (1, TString, False),
            (3, TNumber, True),
            (2.5, TNumber, True),
            (True, TNumber, False),
            (False, TBoolean, True),
            ([], TArray, True),
            ({}, TArray, False),
            ({}, TObject, True),
            ([], TObject, False),
            (None, TObject, False),
        ],
    )
    def test_type_constants(self, value, shape, expected):
        assert has_structure(value, shape) is expected

    def test_nested_shape(self):
        shape = {"id": TNumber, "profile": {"name": TString, "tags": TArray}}
        data = {"id": 1, "profile": {"name": "bob", "tags": []}, "extra": True}
        assert has_structure(data, shape)

    def test_nested_shape_missing_key(self):
        assert not has_structure({"id": 1}, {"id": TNumber, "name": TString})

    def test_unknown_shape(self):
        assert not has_structure(1, int)


class TestExpectHelpers:
    """Tests for the higher-level expect helpers."""

    def test_expect_struct(self):
        assert expect_struct({"token": "abc"}, {"token": TString})
        with pytest.raises(ExpectationFailedError) as exc_info:
            expect_struct({"token": 1}, {"token": TString})
        assert "structure matches {token: str}" in exc_info.value.detail

    def test_expect_status(self):
        assert expect_status(ReqResponse(201), 201)
        with pytest.raises(ExpectationFailedError) as exc_info:
            expect_status(ReqResponse(500), 201)
        assert exc_info.value.detail == "FAIL: Expected status 201, got 500"

    def test_expect_field_single(self):
        assert expect_field({"id": 1}, "id")
        with pytest.raises(ExpectationFailedError):
            expect_field({"id": 1}, "name")

    def test_expect_field_list(self):
        assert expect_field({"id": 1, "name": "x"}, ["id", "name"])
        with pytest.raises(ExpectationFailedError) as exc_info:
            expect_field({"id": 1}, ["id", "name"])
        assert "'name'" in exc_info.value.detail

    def test_expect_field_on_non_object(self):
        with pytest.raises(ExpectationFailedError):
            expect_field("text body", "id")
        with pytest.raises(ExpectationFailedError):
            expect_field(None, "id")

    def test_expect_field_match(self):
        assert expect_field_match({"email": "a@b.c"}, "email", r"^[^@]+@[^@]+$")
        assert expect_field_match({"email": "a@b.c"}, "email", re.compile(r"@b\."))
        with pytest.raises(ExpectationFailedError):
            expect_field_match({"email": 5}, "email", r".*")
        with pytest.raises(ExpectationFailedError):
            expect_field_match({}, "email", r".*")
