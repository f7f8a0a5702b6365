# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for type-directed value coercion."""

from __future__ import annotations

import pytest

from argcascade.config.coercion import coerce_value
from argcascade.config.errors import (
    ArityMismatchError,
    InvalidEnumValueError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from argcascade.json import JsonKind
from argcascade.schema.types import TypeKind, TypeSpec, type_spec_for
from tests.fixtures.options import Mode

pytestmark = pytest.mark.unit


def test_flag_requires_bool() -> None:
    spec = type_spec_for(bool)
    assert coerce_value(spec, True) is True
    with pytest.raises(TypeMismatchError) as exc_info:
        _ = coerce_value(spec, 1)
    assert exc_info.value.expected == "bool"
    assert exc_info.value.actual is JsonKind.NUMBER


def test_enum_matches_name_then_value() -> None:
    spec = type_spec_for(Mode)
    assert coerce_value(spec, "SAFE") is Mode.SAFE
    assert coerce_value(spec, "safe") is Mode.SAFE


def test_enum_rejects_unknown_member() -> None:
    with pytest.raises(InvalidEnumValueError, match="'slow' is not one of: FAST, SAFE"):
        _ = coerce_value(type_spec_for(Mode), "slow")


def test_enum_requires_string() -> None:
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(type_spec_for(Mode), 1)


def test_float_accepts_any_number() -> None:
    spec = type_spec_for(float)
    assert coerce_value(spec, 3) == 3.0
    assert isinstance(coerce_value(spec, 3), float)
    assert coerce_value(spec, 2.5) == 2.5
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, "2.5")
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, False)


def test_signed_accepts_integral_numbers() -> None:
    spec = type_spec_for(int)
    assert coerce_value(spec, -7) == -7
    assert coerce_value(spec, 42.0) == 42
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, 4.5)
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, True)


def test_unsigned_rejects_negative_numbers() -> None:
    spec = TypeSpec(TypeKind.UNSIGNED, int)
    assert coerce_value(spec, 0) == 0
    with pytest.raises(TypeMismatchError, match="non-negative integer"):
        _ = coerce_value(spec, -1)


def test_string_accepts_null_as_none() -> None:
    spec = type_spec_for(str)
    assert coerce_value(spec, "x") == "x"
    assert coerce_value(spec, None) is None
    with pytest.raises(TypeMismatchError, match="expected string or null but got number"):
        _ = coerce_value(spec, 5)


def test_dynamic_array_recurses_into_elements() -> None:
    spec = type_spec_for(list[int])
    assert coerce_value(spec, [1, 2.0, 3]) == [1, 2, 3]
    assert coerce_value(spec, []) == []
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, [1, "2"])
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, 1)


def test_variadic_tuple_keeps_tuple_type() -> None:
    assert coerce_value(type_spec_for(tuple[str, ...]), ["a", "b"]) == ("a", "b")


def test_fixed_array_checks_length() -> None:
    spec = type_spec_for(tuple[int, int])
    assert coerce_value(spec, [1, 2]) == (1, 2)
    with pytest.raises(ArityMismatchError) as exc_info:
        _ = coerce_value(spec, [1, 2, 3])
    assert (exc_info.value.expected, exc_info.value.actual) == (2, 3)


def test_option_handler_counts() -> None:
    spec = TypeSpec(TypeKind.OPTION_HANDLER)
    assert coerce_value(spec, 3) == 3
    assert coerce_value(spec, True) == 1
    assert coerce_value(spec, False) == 0
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, -2)
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, "twice")


def test_argument_handler_values() -> None:
    spec = TypeSpec(TypeKind.ARGUMENT_HANDLER)
    assert coerce_value(spec, "a") == ("a",)
    assert coerce_value(spec, ["a", "b"]) == ("a", "b")
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, ["a", 1])
    with pytest.raises(TypeMismatchError):
        _ = coerce_value(spec, None)


def test_unsupported_types_are_rejected() -> None:
    spec = type_spec_for(dict[str, int])
    assert spec.kind is TypeKind.UNSUPPORTED
    with pytest.raises(UnsupportedTypeError):
        _ = coerce_value(spec, {"a": 1})


def test_non_json_values_are_unsupported() -> None:
    with pytest.raises(UnsupportedTypeError):
        _ = coerce_value(type_spec_for(int), object())
