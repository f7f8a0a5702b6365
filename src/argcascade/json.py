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

"""Canonical JSON types and helpers used across argcascade.

Config files are parsed into the generic tree described here: objects,
arrays, strings, numbers, booleans and null. The helpers classify a node by
its tag so that coercion and error messages never have to reason about the
Python types directly. This module has no dependencies on logging,
configuration, or CLI layers.
"""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = [
    "JSONList",
    "JSONMapping",
    "JSONValue",
    "JsonKind",
    "describe_json",
    "json_kind",
    "normalize_enums_for_json",
]

JSONValue: TypeAlias = JsonValue
JSONMapping = dict[str, JsonValue]
JSONList = list[JsonValue]


class JsonKind(StrEnum):
    """Tag of a generic JSON node."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: object) -> JsonKind:
    """Return the JSON tag of a parsed value.

    Args:
        value: Node produced by a JSON parser (or an equivalent in-memory tree).

    Returns:
        The matching ``JsonKind``.

    Raises:
        TypeError: If ``value`` is not a JSON-compatible Python object.
    """
    # bool must be checked before int: bool is an int subclass.
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, int | float):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list | tuple):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    message = f"{type(value).__name__} is not a JSON value"
    raise TypeError(message)


def describe_json(value: object, *, limit: int = 60) -> str:
    """Return a short human-readable rendering of a JSON node for messages.

    Args:
        value: JSON node to describe.
        limit: Maximum number of characters before the text is truncated.

    Returns:
        The node's ``repr`` clipped to ``limit`` characters.
    """
    text = repr(value)
    if len(text) > limit:
        return f"{text[: limit - 3]}..."
    return text


def normalize_enums_for_json(value: object) -> JSONValue:
    """Recursively convert Enum keys/values to their payloads for JSON serialisation.

    Args:
        value: Arbitrary Python object hierarchy that may include `Enum`
            instances, mappings, or sequences.

    Returns:
        A JSON-compatible structure with all enum keys and values replaced by
        their `.value` payloads. Unknown objects are rendered with `str`.
    """

    def _convert(obj: object) -> JSONValue:
        if isinstance(obj, Enum):
            return cast("JSONValue", obj.value)
        if isinstance(obj, dict):
            mapping_obj = cast("dict[object, object]", obj)
            result: dict[str, JSONValue] = {}
            for key, raw_val in mapping_obj.items():
                norm_key = str(key.value) if isinstance(key, Enum) else str(key)
                result[norm_key] = _convert(raw_val)
            return result
        if isinstance(obj, list | tuple):
            items = cast("list[object] | tuple[object, ...]", obj)
            return [_convert(item) for item in items]
        if isinstance(obj, str | int | float | bool) or obj is None:
            return obj
        return str(obj)

    return _convert(value)
