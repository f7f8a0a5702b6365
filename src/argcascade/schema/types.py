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

"""Type descriptors for options fields.

Every field of an options type is described by a ``TypeSpec`` built once from
its annotation. The coercer and the merger dispatch on the descriptor instead
of inspecting Python types at resolution time.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, StrEnum

from annotated_types import Ge, Gt

__all__ = [
    "FieldKind",
    "Multiplicity",
    "TypeKind",
    "TypeSpec",
    "UnsetRule",
    "select_unset_rule",
    "type_spec_for",
]


class FieldKind(StrEnum):
    """How a field is exposed on the command line.

    Attributes:
        ARGUMENT: Positional argument; exposed to config files under its
            derived name.
        OPTION: Named option such as ``--num``.
        PLAIN: Undeclared field; invisible to config files and the CLI.
    """

    ARGUMENT = "argument"
    OPTION = "option"
    PLAIN = "plain"


class Multiplicity(StrEnum):
    """Number of occurrences accepted for an argument."""

    SINGLE = "single"
    ZERO_OR_MORE = "zero_or_more"


class TypeKind(StrEnum):
    """Categories of declared field types understood by the coercer."""

    FLAG = "flag"
    ENUM = "enum"
    FLOAT = "float"
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    STRING = "string"
    ARRAY = "array"
    FIXED_ARRAY = "fixed_array"
    OPTION_HANDLER = "option_handler"
    ARGUMENT_HANDLER = "argument_handler"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


class UnsetRule(StrEnum):
    """Predicate used to decide whether a field still holds its unset value.

    Attributes:
        ARGUMENT_STRING: Unset iff the value equals the ``-`` sentinel.
        ARGUMENT_SEQUENCE: Unset iff every element equals the sentinel.
        FLOAT: Unset iff equal to the default, or both are NaN.
        STRUCTURAL: Unset iff structurally equal to the default.
        IDENTITY: Unset iff identical or equal to the default.
        NEVER: Never replaced by a config value.
    """

    ARGUMENT_STRING = "argument_string"
    ARGUMENT_SEQUENCE = "argument_sequence"
    FLOAT = "float"
    STRUCTURAL = "structural"
    IDENTITY = "identity"
    NEVER = "never"


@dataclass(slots=True, frozen=True)
class TypeSpec:
    """Explicit descriptor of a field's declared type.

    Attributes:
        kind: Category used for dispatch.
        python_type: Concrete Python type for scalars, enums and records.
        element: Element descriptor for array kinds.
        length: Required length for ``FIXED_ARRAY``.
    """

    kind: TypeKind
    python_type: type | None = None
    element: TypeSpec | None = None
    length: int | None = None

    def describe(self) -> str:
        """Return a short description used in error messages."""
        match self.kind:
            case TypeKind.ARRAY if self.element is not None:
                return f"array of {self.element.describe()}"
            case TypeKind.FIXED_ARRAY if self.element is not None:
                return f"array of {self.length} {self.element.describe()}"
            case TypeKind.ENUM if self.python_type is not None:
                return f"enum {self.python_type.__name__}"
            case TypeKind.RECORD if self.python_type is not None:
                return self.python_type.__name__
            case _:
                return self.kind.value.replace("_", " ")


FLAG_SPEC = TypeSpec(TypeKind.FLAG, bool)
STRING_SPEC = TypeSpec(TypeKind.STRING, str)
UNSUPPORTED_SPEC = TypeSpec(TypeKind.UNSUPPORTED)


def _is_unsigned_marker(marker: object) -> bool:
    if isinstance(marker, Ge):
        return isinstance(marker.ge, int | float) and marker.ge >= 0
    if isinstance(marker, Gt):
        return isinstance(marker.gt, int | float) and marker.gt >= 0
    return False


def _strip_optional(annotation: object) -> object:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _sequence_spec(annotation: object) -> TypeSpec | None:
    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeSpec(TypeKind.ARRAY, tuple, element=type_spec_for(args[0]))
        if not args or any(arg != args[0] for arg in args):
            return UNSUPPORTED_SPEC
        return TypeSpec(
            TypeKind.FIXED_ARRAY,
            tuple,
            element=type_spec_for(args[0]),
            length=len(args),
        )
    if origin in (list, Sequence) and len(args) == 1:
        return TypeSpec(TypeKind.ARRAY, list, element=type_spec_for(args[0]))
    return None


def type_spec_for(annotation: object) -> TypeSpec:
    """Build the ``TypeSpec`` for a resolved field annotation.

    ``Annotated[int, Ge(0)]`` (for example pydantic's ``NonNegativeInt``)
    describes an unsigned integer. ``X | None`` is described as ``X``.

    Args:
        annotation: Annotation as returned by ``typing.get_type_hints`` with
            ``include_extras=True``.

    Returns:
        The descriptor; ``UNSUPPORTED`` when no rule applies.
    """
    annotation = _strip_optional(annotation)
    if typing.get_origin(annotation) is typing.Annotated:
        base, *metadata = typing.get_args(annotation)
        spec = type_spec_for(base)
        if spec.kind is TypeKind.SIGNED and any(_is_unsigned_marker(item) for item in metadata):
            return TypeSpec(TypeKind.UNSIGNED, int)
        return spec
    sequence = _sequence_spec(annotation)
    if sequence is not None:
        return sequence
    if not isinstance(annotation, type):
        return UNSUPPORTED_SPEC
    # Order matters: bool is an int, StrEnum is a str.
    if issubclass(annotation, bool):
        return FLAG_SPEC
    if issubclass(annotation, Enum):
        return TypeSpec(TypeKind.ENUM, annotation)
    if issubclass(annotation, float):
        return TypeSpec(TypeKind.FLOAT, annotation)
    if issubclass(annotation, int):
        return TypeSpec(TypeKind.SIGNED, annotation)
    if issubclass(annotation, str):
        return STRING_SPEC
    if dataclasses.is_dataclass(annotation) or annotation.__module__ != "builtins":
        return TypeSpec(TypeKind.RECORD, annotation)
    return UNSUPPORTED_SPEC


def select_unset_rule(spec: TypeSpec, *, is_argument: bool, is_handler: bool) -> UnsetRule:
    """Choose the unset predicate for a field, once, at schema derivation.

    Argument declarations take precedence over the type category, so a
    field declared both as option and argument uses the sentinel rules.

    Args:
        spec: The field's type descriptor.
        is_argument: Whether the field carries an argument declaration.
        is_handler: Whether the field is a handler method.

    Returns:
        The rule consulted by the merger.
    """
    if is_handler:
        return UnsetRule.NEVER
    if is_argument:
        if spec.kind is TypeKind.STRING:
            return UnsetRule.ARGUMENT_STRING
        element = spec.element
        if spec.kind is TypeKind.ARRAY and element is not None and element.kind is TypeKind.STRING:
            return UnsetRule.ARGUMENT_SEQUENCE
        return UnsetRule.NEVER
    if spec.kind in (TypeKind.FIXED_ARRAY, TypeKind.RECORD):
        return UnsetRule.STRUCTURAL
    if spec.kind is TypeKind.FLOAT:
        return UnsetRule.FLOAT
    return UnsetRule.IDENTITY
