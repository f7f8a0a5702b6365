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

"""Type-directed conversion of JSON nodes into typed field values.

``coerce_value`` is a pure function of a ``TypeSpec`` and one node of the
generic JSON tree. It never consults the options schema; callers attach the
config key to failures.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, cast

from argcascade.json import JsonKind, json_kind
from argcascade.schema.types import TypeKind

from .errors import ArityMismatchError, InvalidEnumValueError, TypeMismatchError, UnsupportedTypeError

if TYPE_CHECKING:
    from argcascade.schema.types import TypeSpec

__all__ = ["coerce_value"]


def _require(value: object, expected: str, *kinds: JsonKind) -> JsonKind:
    try:
        kind = json_kind(value)
    except TypeError as exc:
        raise UnsupportedTypeError(type(value).__name__) from exc
    if kind not in kinds:
        raise TypeMismatchError(expected, kind)
    return kind


def _integral(value: object, expected: str) -> int:
    _ = _require(value, expected, JsonKind.NUMBER)
    number = cast("int | float", value)
    if isinstance(number, float):
        if not number.is_integer():
            raise TypeMismatchError(expected, JsonKind.NUMBER)
        return int(number)
    return number


def _enum_member(enum_type: type[Enum], value: object) -> Enum:
    _ = _require(value, f"string naming a member of {enum_type.__name__}", JsonKind.STRING)
    text = cast("str", value)
    member = enum_type.__members__.get(text)
    if member is not None:
        return member
    for candidate in enum_type:
        if candidate.value == text:
            return candidate
    raise InvalidEnumValueError(text, tuple(enum_type.__members__))


def _elements(spec: TypeSpec, value: object) -> list[object]:
    element = spec.element
    if element is None:  # pragma: no cover - type_spec_for always sets it
        raise UnsupportedTypeError(spec.describe())
    _ = _require(value, "array", JsonKind.ARRAY)
    items = cast("list[object]", value)
    if spec.length is not None and len(items) != spec.length:
        raise ArityMismatchError(spec.length, len(items))
    return [coerce_value(element, item) for item in items]


def _handler_count(value: object) -> int:
    kind = _require(value, "non-negative integer or bool", JsonKind.NUMBER, JsonKind.BOOL)
    if kind is JsonKind.BOOL:
        return 1 if value else 0
    count = _integral(value, "non-negative integer or bool")
    if count < 0:
        raise TypeMismatchError("non-negative integer or bool", kind)
    return count


def _handler_values(value: object) -> tuple[str, ...]:
    kind = _require(value, "string or array of strings", JsonKind.STRING, JsonKind.ARRAY)
    if kind is JsonKind.STRING:
        return (cast("str", value),)
    items = cast("list[object]", value)
    for item in items:
        _ = _require(item, "string", JsonKind.STRING)
    return tuple(cast("list[str]", items))


def coerce_value(spec: TypeSpec, value: object) -> object:
    """Convert one JSON node into a value of the declared type.

    Rules, in order: flags take booleans; enums take a string naming a
    member (by name, then by value); floats take any number; unsigned
    integers take non-negative integral numbers; signed integers take
    integral numbers; strings take a string or ``null`` (``None``); dynamic
    arrays take an array and recurse; fixed arrays take an array of exactly
    the fixed length. Option handlers take a count or a boolean and argument
    handlers a string or an array of strings; both return the normalised
    invocations rather than a value to assign.

    Args:
        spec: Descriptor of the declared type.
        value: Node of a parsed JSON document.

    Returns:
        The typed value.

    Raises:
        TypeMismatchError: If the node's tag does not fit the declared type.
        InvalidEnumValueError: If a string names no enum member.
        ArityMismatchError: If a fixed array has the wrong length.
        UnsupportedTypeError: If the declared type cannot be read from JSON.
    """
    match spec.kind:
        case TypeKind.FLAG:
            _ = _require(value, "bool", JsonKind.BOOL)
            return bool(value)
        case TypeKind.ENUM if spec.python_type is not None:
            return _enum_member(cast("type[Enum]", spec.python_type), value)
        case TypeKind.FLOAT:
            _ = _require(value, "number", JsonKind.NUMBER)
            target = spec.python_type or float
            return target(cast("float", value))
        case TypeKind.UNSIGNED:
            number = _integral(value, "non-negative integer")
            if number < 0:
                raise TypeMismatchError("non-negative integer", JsonKind.NUMBER)
            return number
        case TypeKind.SIGNED:
            number = _integral(value, "integer")
            target = spec.python_type or int
            return target(number)
        case TypeKind.STRING:
            kind = _require(value, "string or null", JsonKind.STRING, JsonKind.NULL)
            return None if kind is JsonKind.NULL else cast("str", value)
        case TypeKind.ARRAY:
            items = _elements(spec, value)
            return tuple(items) if spec.python_type is tuple else items
        case TypeKind.FIXED_ARRAY:
            return tuple(_elements(spec, value))
        case TypeKind.OPTION_HANDLER:
            return _handler_count(value)
        case TypeKind.ARGUMENT_HANDLER:
            return _handler_values(value)
        case _:
            raise UnsupportedTypeError(spec.describe())
