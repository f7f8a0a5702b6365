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

"""Options schema derivation.

``derive_schema`` turns a declared options dataclass into an immutable
``OptionsSchema``: the recognised config names of each field, its kind and
type descriptor, its unset predicate, its validators, and the hook queues
sorted by priority. The result is cached per options type so every pipeline
run replays exactly the same order.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import logging
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Final

from argcascade._internal.logging_utils import structured_extra
from argcascade.core.model_types import LogComponent

from .declarations import (
    FIELD_METADATA_KEY,
    HANDLER_ATTRIBUTE,
    HOOK_ATTRIBUTE,
    INT32_MAX,
    INT32_MIN,
    Argument,
    FieldDeclaration,
    HandlerDeclaration,
    HookKind,
    HookMarker,
    Option,
    Validate,
)
from .errors import SchemaDefinitionError
from .types import FieldKind, Multiplicity, TypeKind, TypeSpec, UnsetRule, select_unset_rule, type_spec_for

__all__ = [
    "FieldSchema",
    "FieldValidator",
    "HookDescriptor",
    "OptionsSchema",
    "derive_argument_name",
    "derive_schema",
]

logger: logging.Logger = logging.getLogger("argcascade.schema")

_OPTION_HANDLER_SPEC: Final[TypeSpec] = TypeSpec(TypeKind.OPTION_HANDLER)
_ARGUMENT_HANDLER_SPEC: Final[TypeSpec] = TypeSpec(TypeKind.ARGUMENT_HANDLER)


@dataclass(slots=True, frozen=True)
class FieldValidator:
    """A validation procedure bound to one field.

    Attributes:
        field_id: Identifier of the validated field.
        procedure: The user callable; raises to signal failure.
        enabled: Disabled validators are skipped by the pipeline.
        with_options: Whether the procedure also receives the options value.
    """

    field_id: str
    procedure: Callable[..., object]
    enabled: bool
    with_options: bool

    def __call__(self, value: object, options: object) -> None:
        """Invoke the procedure with the call shape it accepts."""
        if self.with_options:
            self.procedure(value, options)
        else:
            self.procedure(value)


@dataclass(slots=True, frozen=True)
class FieldSchema:
    """Schema entry for one field or handler of an options type.

    Attributes:
        field_id: Attribute name on the options value.
        external_names: Names accepted in config files; option names first,
            then the derived argument name.
        kind: ``ARGUMENT``, ``OPTION`` or ``PLAIN``.
        multiplicity: Argument multiplicity (``SINGLE`` for everything else).
        is_handler: Whether the field is a method invoked per occurrence.
        type_spec: Descriptor of the declared type.
        unset_rule: Predicate used by the config merger.
        option: Option declaration, if any.
        argument: Argument declaration, if any.
        validators: Validators in declaration order.
    """

    field_id: str
    external_names: tuple[str, ...]
    kind: FieldKind
    multiplicity: Multiplicity
    is_handler: bool
    type_spec: TypeSpec
    unset_rule: UnsetRule
    option: Option | None = None
    argument: Argument | None = None
    validators: tuple[FieldValidator, ...] = ()

    @property
    def label(self) -> str:
        """Return ``option``, ``argument`` or ``property`` for error messages."""
        if self.option is not None:
            return "option"
        if self.argument is not None:
            return "argument"
        return "property"

    @property
    def display_name(self) -> str:
        """Return the first external name, or the identifier if there is none."""
        return self.external_names[0] if self.external_names else self.field_id


@dataclass(slots=True, frozen=True)
class HookDescriptor:
    """A lifecycle hook method and its ordering attributes."""

    kind: HookKind
    priority: int
    target: str
    order: int


@dataclass(slots=True, frozen=True)
class OptionsSchema:
    """Immutable schema of an options type.

    Attributes:
        options_type: The described dataclass.
        fields: Data fields in declaration order, followed by handlers.
        hook_queues: Hooks per stage, highest priority first, ties broken by
            declaration order.
    """

    options_type: type
    fields: tuple[FieldSchema, ...]
    hook_queues: Mapping[HookKind, tuple[HookDescriptor, ...]]
    _by_name: Mapping[str, FieldSchema] = field(repr=False, compare=False)

    def field_for_name(self, name: str) -> FieldSchema | None:
        """Return the field answering to an external config name."""
        return self._by_name.get(name)

    def hooks(self, kind: HookKind) -> tuple[HookDescriptor, ...]:
        """Return the execution queue for one stage."""
        return self.hook_queues.get(kind, ())

    @property
    def value_fields(self) -> tuple[FieldSchema, ...]:
        """Fields that hold values, i.e. everything but handlers."""
        return tuple(item for item in self.fields if not item.is_handler)

    @property
    def config_fields(self) -> tuple[FieldSchema, ...]:
        """Fields visible to config files."""
        return tuple(item for item in self.fields if item.external_names)

    def defaults(self) -> object:
        """Build a fresh options value holding only the declared defaults."""
        return self.options_type()


def derive_argument_name(placeholder: str) -> str | None:
    """Derive the config name of an argument from its placeholder.

    ``<in:file>`` becomes ``file``: surrounding angle brackets are removed and
    so is everything up to the final ``:``.

    Args:
        placeholder: Placeholder text of the argument declaration.

    Returns:
        The derived name, or ``None`` when nothing usable remains.
    """
    text = placeholder.strip()
    text = text.removeprefix("<").removesuffix(">")
    name = text.rsplit(":", 1)[-1].strip()
    if not name or any(char in name for char in "<> \t"):
        return None
    return name


def _external_names(
    options_type: type,
    field_id: str,
    option: Option | None,
    argument: Argument | None,
) -> tuple[str, ...]:
    names: list[str] = []
    if option is not None:
        if not option.names:
            raise SchemaDefinitionError(options_type, f"option {field_id!r} declares no names")
        for name in option.names:
            if not name or name.startswith("-") or any(char.isspace() for char in name):
                detail = f"option {field_id!r} has invalid name {name!r}"
                raise SchemaDefinitionError(options_type, detail)
            names.append(name)
    if argument is not None:
        derived = derive_argument_name(argument.placeholder)
        if derived is None:
            detail = f"cannot derive a name from argument placeholder {argument.placeholder!r} of {field_id!r}"
            raise SchemaDefinitionError(options_type, detail)
        names.append(derived)
    return tuple(names)


def _field_kind(option: Option | None, argument: Argument | None) -> FieldKind:
    if argument is not None:
        return FieldKind.ARGUMENT
    if option is not None:
        return FieldKind.OPTION
    return FieldKind.PLAIN


def _accepts_options(procedure: Callable[..., object]) -> bool:
    try:
        signature = inspect.signature(procedure)
    except (TypeError, ValueError):
        return False
    required = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            if parameter.default is inspect.Parameter.empty:
                required += 1
    return required >= 2


def _field_validators(field_id: str, declared: tuple[Validate, ...]) -> tuple[FieldValidator, ...]:
    return tuple(
        FieldValidator(
            field_id=field_id,
            procedure=item.procedure,
            enabled=item.enabled,
            with_options=(
                item.with_options if item.with_options is not None else _accepts_options(item.procedure)
            ),
        )
        for item in declared
    )


def _data_field_schema(
    options_type: type,
    data_field: dataclasses.Field[object],
    annotation: object,
) -> FieldSchema:
    if data_field.default is dataclasses.MISSING and data_field.default_factory is dataclasses.MISSING:
        raise SchemaDefinitionError(options_type, f"field {data_field.name!r} has no default value")
    declaration = data_field.metadata.get(FIELD_METADATA_KEY, FieldDeclaration())
    if not isinstance(declaration, FieldDeclaration):
        detail = f"field {data_field.name!r} carries foreign {FIELD_METADATA_KEY!r} metadata"
        raise SchemaDefinitionError(options_type, detail)
    spec = type_spec_for(annotation)
    argument = declaration.argument
    return FieldSchema(
        field_id=data_field.name,
        external_names=_external_names(options_type, data_field.name, declaration.option, argument),
        kind=_field_kind(declaration.option, argument),
        multiplicity=argument.multiplicity if argument is not None else Multiplicity.SINGLE,
        is_handler=False,
        type_spec=spec,
        unset_rule=select_unset_rule(spec, is_argument=argument is not None, is_handler=False),
        option=declaration.option,
        argument=argument,
        validators=_field_validators(data_field.name, declaration.validators),
    )


def _handler_schema(options_type: type, name: str, declaration: HandlerDeclaration) -> FieldSchema:
    argument = declaration.argument
    spec = _ARGUMENT_HANDLER_SPEC if argument is not None else _OPTION_HANDLER_SPEC
    return FieldSchema(
        field_id=name,
        external_names=_external_names(options_type, name, declaration.option, argument),
        kind=_field_kind(declaration.option, argument),
        multiplicity=argument.multiplicity if argument is not None else Multiplicity.SINGLE,
        is_handler=True,
        type_spec=spec,
        unset_rule=UnsetRule.NEVER,
        option=declaration.option,
        argument=argument,
    )


def _collect_marked(options_type: type, attribute: str) -> dict[str, object]:
    # Walk base classes first so subclasses keep the base declaration position.
    found: dict[str, object] = {}
    for klass in reversed(options_type.__mro__):
        for name, member in vars(klass).items():
            marker = getattr(member, attribute, None)
            if marker is not None and callable(member):
                found[name] = marker
            elif name in found:
                del found[name]
    return found


def _hook_queues(options_type: type) -> dict[HookKind, tuple[HookDescriptor, ...]]:
    descriptors: list[HookDescriptor] = []
    for order, (name, markers) in enumerate(_collect_marked(options_type, HOOK_ATTRIBUTE).items()):
        for marker in typing.cast("tuple[HookMarker, ...]", markers):
            if not INT32_MIN <= marker.priority <= INT32_MAX:
                detail = f"hook {name!r} has priority {marker.priority} outside the int32 range"
                raise SchemaDefinitionError(options_type, detail)
            descriptors.append(HookDescriptor(marker.kind, marker.priority, name, order))
    queues: dict[HookKind, tuple[HookDescriptor, ...]] = {}
    for kind in HookKind:
        # sorted() is stable, so equal priorities keep declaration order.
        selected = [item for item in descriptors if item.kind is kind]
        queues[kind] = tuple(sorted(selected, key=lambda item: -item.priority))
    return queues


@functools.cache
def derive_schema(options_type: type) -> OptionsSchema:
    """Derive (once) the schema of an options dataclass.

    Args:
        options_type: A dataclass whose fields all have defaults.

    Returns:
        The cached, immutable schema.

    Raises:
        SchemaDefinitionError: If the options type is declared incorrectly.
    """
    if not (isinstance(options_type, type) and dataclasses.is_dataclass(options_type)):
        raise SchemaDefinitionError(
            options_type if isinstance(options_type, type) else type(options_type),
            "options types must be dataclasses",
        )
    params = getattr(options_type, "__dataclass_params__", None)
    if params is not None and params.frozen:
        raise SchemaDefinitionError(options_type, "options types must not be frozen")
    try:
        hints = typing.get_type_hints(options_type, include_extras=True)
    except NameError as exc:
        raise SchemaDefinitionError(options_type, f"unresolvable annotation: {exc}") from exc

    entries = [
        _data_field_schema(options_type, data_field, hints.get(data_field.name, object))
        for data_field in dataclasses.fields(options_type)
    ]
    for name, declaration in _collect_marked(options_type, HANDLER_ATTRIBUTE).items():
        entries.append(_handler_schema(options_type, name, typing.cast("HandlerDeclaration", declaration)))

    by_name: dict[str, FieldSchema] = {}
    for entry in entries:
        for name in entry.external_names:
            other = by_name.get(name)
            if other is not None and other is not entry:
                detail = f"config name {name!r} is used by both {other.field_id!r} and {entry.field_id!r}"
                raise SchemaDefinitionError(options_type, detail)
            by_name[name] = entry

    schema = OptionsSchema(
        options_type=options_type,
        fields=tuple(entries),
        hook_queues=_hook_queues(options_type),
        _by_name=by_name,
    )
    logger.debug(
        "Derived schema for %s with %d field(s)",
        options_type.__qualname__,
        len(entries),
        extra=structured_extra(LogComponent.SCHEMA, count=len(entries)),
    )
    return schema
