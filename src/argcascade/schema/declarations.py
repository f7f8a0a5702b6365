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

"""Declarations attached to options types.

Options types are plain dataclasses. Fields are declared with :func:`option`,
:func:`argument` or :func:`plain`, which store a :class:`FieldDeclaration`
in the dataclass field metadata. Methods become handlers or lifecycle hooks
through decorators that record a marker on the function object. The schema
registry reads these markers once per options type.

Example:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Options:
    ...     file: str = argument("<in:file>")
    ...     num: int = option("num", "n", default=1337)
    ...
    ...     @post_validate(Priority.HIGH)
    ...     def announce(self) -> None:
    ...         pass
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any, Final, TypeVar

from argcascade.config.constants import CONFIG_EMPTY_ARGUMENT

from .types import Multiplicity

__all__ = [
    "FIELD_METADATA_KEY",
    "HANDLER_ATTRIBUTE",
    "HOOK_ATTRIBUTE",
    "Argument",
    "FieldDeclaration",
    "HandlerDeclaration",
    "HookKind",
    "HookMarker",
    "Option",
    "Priority",
    "Validate",
    "argument",
    "argument_handler",
    "clean_up",
    "declared",
    "option",
    "option_handler",
    "plain",
    "post_validate",
    "pre_validate",
]

FIELD_METADATA_KEY: Final[str] = "argcascade"
HANDLER_ATTRIBUTE: Final[str] = "__argcascade_handler__"
HOOK_ATTRIBUTE: Final[str] = "__argcascade_hooks__"

INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1

FuncT = TypeVar("FuncT", bound=Callable[..., Any])


class Priority(IntEnum):
    """Named hook priorities. Higher priorities run first.

    The names only aid readability; any int32 value is a valid priority and
    arithmetic such as ``Priority.MAX - 1`` yields a plain ``int``.
    """

    MIN = INT32_MIN
    LOW = -100
    MEDIUM = 0
    HIGH = 100
    MAX = INT32_MAX


class HookKind(StrEnum):
    """Pipeline stage a hook belongs to."""

    PRE_VALIDATE = "pre_validate"
    POST_VALIDATE = "post_validate"
    CLEAN_UP = "clean_up"


@dataclass(slots=True, frozen=True)
class Option:
    """Named option declaration, e.g. ``Option(("num", "n"))``."""

    names: tuple[str, ...]
    help: str = ""


@dataclass(slots=True, frozen=True)
class Argument:
    """Positional argument declaration.

    Attributes:
        placeholder: Placeholder as shown in usage text, e.g. ``<in:file>``.
            The config file name is derived from it.
        multiplicity: Whether one or any number of values is accepted.
        help: Help text for the usage output.
    """

    placeholder: str
    multiplicity: Multiplicity = Multiplicity.SINGLE
    help: str = ""


@dataclass(slots=True, frozen=True)
class Validate:
    """Field validation procedure.

    Attributes:
        procedure: Callable taking the field value, or the field value and the
            whole options value. It signals failure by raising.
        enabled: Disabled validators are never invoked.
        with_options: Force the two-argument call shape. ``None`` inspects the
            procedure's signature.
    """

    procedure: Callable[..., object]
    enabled: bool = True
    with_options: bool | None = None


@dataclass(slots=True, frozen=True)
class FieldDeclaration:
    """Everything declared about one dataclass field."""

    option: Option | None = None
    argument: Argument | None = None
    validators: tuple[Validate, ...] = ()


@dataclass(slots=True, frozen=True)
class HandlerDeclaration:
    """Declaration recorded on a handler method."""

    option: Option | None = None
    argument: Argument | None = None


@dataclass(slots=True, frozen=True)
class HookMarker:
    """Hook registration recorded on a method."""

    kind: HookKind
    priority: int


def _as_validators(validate: Validate | Callable[..., object] | Iterable[Validate]) -> tuple[Validate, ...]:
    if isinstance(validate, Validate):
        return (validate,)
    if callable(validate):
        return (Validate(validate),)
    return tuple(item if isinstance(item, Validate) else Validate(item) for item in validate)


def declared(
    *,
    option: Option | None = None,
    argument: Argument | None = None,
    validate: Validate | Callable[..., object] | Iterable[Validate] = (),
    default: object = dataclasses.MISSING,
    default_factory: Callable[[], object] | Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field with an arbitrary combination of declarations.

    Args:
        option: Option declaration, if the field is a named option.
        argument: Argument declaration, if the field is positional.
        validate: One or more validators (bare callables are wrapped).
        default: Default value.
        default_factory: Factory for mutable defaults.

    Returns:
        A ``dataclasses.field`` carrying the declaration in its metadata.
    """
    declaration = FieldDeclaration(
        option=option,
        argument=argument,
        validators=_as_validators(validate),
    )
    metadata = {FIELD_METADATA_KEY: declaration}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def option(
    *names: str,
    default: object = dataclasses.MISSING,
    default_factory: Callable[[], object] | Any = dataclasses.MISSING,
    help: str = "",  # noqa: A002  # JUSTIFIED: mirrors argparse's keyword
    validate: Validate | Callable[..., object] | Iterable[Validate] = (),
) -> Any:
    """Declare a named option field.

    Args:
        *names: Option names without leading dashes, e.g. ``"num", "n"``.
        default: Default value.
        default_factory: Factory for mutable defaults.
        help: Help text.
        validate: One or more validators.

    Returns:
        A dataclass field.
    """
    return declared(
        option=Option(names, help=help),
        validate=validate,
        default=default,
        default_factory=default_factory,
    )


def argument(
    placeholder: str,
    *,
    multiplicity: Multiplicity = Multiplicity.SINGLE,
    default: object = dataclasses.MISSING,
    default_factory: Callable[[], object] | Any = dataclasses.MISSING,
    help: str = "",  # noqa: A002  # JUSTIFIED: mirrors argparse's keyword
    validate: Validate | Callable[..., object] | Iterable[Validate] = (),
) -> Any:
    """Declare a positional argument field.

    Without an explicit default a single argument defaults to the ``-``
    sentinel and a multi-valued argument to an empty list, so that config
    file values can fill them in.

    Args:
        placeholder: Placeholder such as ``<in:file>``.
        multiplicity: ``SINGLE`` or ``ZERO_OR_MORE``.
        default: Default value.
        default_factory: Factory for mutable defaults.
        help: Help text.
        validate: One or more validators.

    Returns:
        A dataclass field.
    """
    if default is dataclasses.MISSING and default_factory is dataclasses.MISSING:
        if multiplicity is Multiplicity.SINGLE:
            default = CONFIG_EMPTY_ARGUMENT
        else:
            default_factory = list
    return declared(
        argument=Argument(placeholder, multiplicity=multiplicity, help=help),
        validate=validate,
        default=default,
        default_factory=default_factory,
    )


def plain(
    default: object = dataclasses.MISSING,
    *,
    default_factory: Callable[[], object] | Any = dataclasses.MISSING,
    validate: Validate | Callable[..., object] | Iterable[Validate] = (),
) -> Any:
    """Declare an undeclared ("property") field that still carries validators."""
    return declared(validate=validate, default=default, default_factory=default_factory)


def option_handler(*names: str, help: str = "") -> Callable[[FuncT], FuncT]:  # noqa: A002  # JUSTIFIED: mirrors argparse's keyword
    """Mark a zero-argument method as invoked once per occurrence of an option.

    Config files may give a non-negative count or a boolean for it.
    """

    def decorator(func: FuncT) -> FuncT:
        setattr(func, HANDLER_ATTRIBUTE, HandlerDeclaration(option=Option(names, help=help)))
        return func

    return decorator


def argument_handler(
    placeholder: str,
    *,
    multiplicity: Multiplicity = Multiplicity.ZERO_OR_MORE,
    help: str = "",  # noqa: A002  # JUSTIFIED: mirrors argparse's keyword
) -> Callable[[FuncT], FuncT]:
    """Mark a one-argument method as invoked once per positional value.

    Config files may give a string or an array of strings for it.
    """

    def decorator(func: FuncT) -> FuncT:
        declaration = HandlerDeclaration(
            argument=Argument(placeholder, multiplicity=multiplicity, help=help),
        )
        setattr(func, HANDLER_ATTRIBUTE, declaration)
        return func

    return decorator


def _hook(kind: HookKind, priority: int) -> Callable[[FuncT], FuncT]:
    def decorator(func: FuncT) -> FuncT:
        existing: tuple[HookMarker, ...] = getattr(func, HOOK_ATTRIBUTE, ())
        setattr(func, HOOK_ATTRIBUTE, (*existing, HookMarker(kind, int(priority))))
        return func

    return decorator


def pre_validate(priority: int = Priority.MEDIUM) -> Callable[[FuncT], FuncT]:
    """Register a method to run before all field validations."""
    return _hook(HookKind.PRE_VALIDATE, priority)


def post_validate(priority: int = Priority.MEDIUM) -> Callable[[FuncT], FuncT]:
    """Register a method to run after all field validations."""
    return _hook(HookKind.POST_VALIDATE, priority)


def clean_up(priority: int = Priority.MEDIUM) -> Callable[[FuncT], FuncT]:
    """Register a method to run just before the program stops."""
    return _hook(HookKind.CLEAN_UP, priority)
