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

"""Command-line adapter: ``argparse`` parsers built from options schemas.

Named options become ``--long`` (or ``-s`` for one-letter names) flags;
boolean fields are switches and option handlers are counted. Positional
arguments that are not given keep their declared default, so an argument
still holding the ``-`` sentinel can later be filled from a config file.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, NoReturn, TypeVar, cast, override

from argcascade._internal.exceptions import CLIException, UsageRequested, VersionRequested
from argcascade._internal.logging_utils import structured_extra
from argcascade.core.model_types import LogComponent
from argcascade.schema.registry import FieldSchema, derive_schema
from argcascade.schema.types import Multiplicity, TypeKind, TypeSpec

__all__ = ["OptionsArgumentParser", "build_parser", "parse_args"]

logger: logging.Logger = logging.getLogger("argcascade.cli")

OptionsT = TypeVar("OptionsT")

_USAGE_DEST = "argcascade_usage"
_VERSION_DEST = "argcascade_version"


class OptionsArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` raising ``CLIException`` instead of exiting."""

    @override
    def error(self, message: str) -> NoReturn:
        raise CLIException(f"{self.prog}: {message}")


@dataclass(slots=True, frozen=True)
class _Binding:
    dest: str
    entry: FieldSchema


def _option_strings(names: Sequence[str]) -> list[str]:
    return [f"-{name}" if len(name) == 1 else f"--{name}" for name in names]


def _enum_converter(enum_type: type[Enum]) -> Callable[[str], Enum]:
    def convert(text: str) -> Enum:
        member = enum_type.__members__.get(text)
        if member is not None:
            return member
        for candidate in enum_type:
            if str(candidate.value) == text:
                return candidate
        message = f"invalid choice {text!r} (choose from {', '.join(enum_type.__members__)})"
        raise argparse.ArgumentTypeError(message)

    convert.__name__ = enum_type.__name__
    return convert


def _unsigned(text: str) -> int:
    value = int(text)
    if value < 0:
        message = f"{text!r} is not a non-negative integer"
        raise argparse.ArgumentTypeError(message)
    return value


def _converter(spec: TypeSpec) -> Callable[[str], Any] | None:
    match spec.kind:
        case TypeKind.ENUM if spec.python_type is not None:
            return _enum_converter(cast("type[Enum]", spec.python_type))
        case TypeKind.FLOAT:
            return spec.python_type or float
        case TypeKind.SIGNED:
            return spec.python_type or int
        case TypeKind.UNSIGNED:
            return _unsigned
        case TypeKind.STRING:
            return str
        case TypeKind.ARRAY | TypeKind.FIXED_ARRAY if spec.element is not None:
            return _converter(spec.element)
        case _:
            return None


def _register_option(parser: argparse.ArgumentParser, entry: FieldSchema) -> _Binding | None:
    option = entry.option
    if option is None:  # pragma: no cover - callers check the declaration
        return None
    flags = _option_strings(option.names)
    dest = entry.field_id
    spec = entry.type_spec
    common: dict[str, Any] = {"dest": dest, "default": None, "help": option.help or None}
    if spec.kind is TypeKind.OPTION_HANDLER:
        _ = parser.add_argument(*flags, action="count", **common)
        return _Binding(dest, entry)
    if spec.kind is TypeKind.FLAG:
        _ = parser.add_argument(*flags, action="store_true", **common)
        return _Binding(dest, entry)
    converter = _converter(spec)
    if converter is None:
        logger.debug(
            "Field %s of type %s is not exposed on the command line",
            entry.field_id,
            spec.describe(),
            extra=structured_extra(LogComponent.CLI, field=entry.field_id),
        )
        return None
    if spec.kind is TypeKind.ARRAY:
        _ = parser.add_argument(*flags, action="append", type=converter, **common)
    elif spec.kind is TypeKind.FIXED_ARRAY:
        _ = parser.add_argument(*flags, nargs=spec.length, type=converter, **common)
    else:
        _ = parser.add_argument(*flags, type=converter, **common)
    return _Binding(dest, entry)


def _register_positional(parser: argparse.ArgumentParser, entry: FieldSchema) -> _Binding | None:
    argument = entry.argument
    if argument is None:  # pragma: no cover - callers check the declaration
        return None
    dest = f"{entry.field_id}__argument"
    nargs = "*" if argument.multiplicity is Multiplicity.ZERO_OR_MORE else "?"
    spec = entry.type_spec
    converter = str if spec.kind is TypeKind.ARGUMENT_HANDLER else _converter(spec)
    if converter is None:
        logger.debug(
            "Argument %s of type %s is not exposed on the command line",
            entry.field_id,
            spec.describe(),
            extra=structured_extra(LogComponent.CLI, field=entry.field_id),
        )
        return None
    _ = parser.add_argument(
        dest,
        metavar=argument.placeholder,
        nargs=nargs,
        type=converter,
        default=None,
        help=argument.help or None,
    )
    return _Binding(dest, entry)


def _build(
    options_type: type,
    *,
    prog: str | None,
    version: str | None,
) -> tuple[OptionsArgumentParser, tuple[_Binding, ...]]:
    schema = derive_schema(options_type)
    parser = OptionsArgumentParser(
        prog=prog,
        description=(options_type.__doc__ or "").strip() or None,
        add_help=False,
    )
    _ = parser.add_argument(
        "--usage",
        "--help",
        dest=_USAGE_DEST,
        action="store_true",
        help="Print usage and exit.",
    )
    if version is not None:
        _ = parser.add_argument("--version", dest=_VERSION_DEST, action="store_true", help="Print version and exit.")
    bindings: list[_Binding] = []
    for entry in schema.fields:
        if entry.option is not None:
            binding = _register_option(parser, entry)
            if binding is not None:
                bindings.append(binding)
        if entry.argument is not None:
            binding = _register_positional(parser, entry)
            if binding is not None:
                bindings.append(binding)
    return parser, tuple(bindings)


def build_parser(options_type: type, *, prog: str | None = None, version: str | None = None) -> argparse.ArgumentParser:
    """Build an ``argparse`` parser for an options type.

    Args:
        options_type: Options dataclass.
        prog: Program name shown in usage text.
        version: Version string; adds ``--version`` when given.

    Returns:
        A parser that raises ``CLIException`` on malformed input.
    """
    parser, _bindings = _build(options_type, prog=prog, version=version)
    return parser


def _assign(options: object, binding: _Binding, value: object) -> None:
    entry = binding.entry
    match entry.type_spec.kind:
        case TypeKind.OPTION_HANDLER:
            handler = getattr(options, entry.field_id)
            for _ in range(cast("int", value)):
                handler()
        case TypeKind.ARGUMENT_HANDLER:
            handler = getattr(options, entry.field_id)
            items = value if isinstance(value, list) else [value]
            for item in cast("list[str]", items):
                handler(item)
        case TypeKind.ARRAY | TypeKind.FIXED_ARRAY if entry.type_spec.python_type is tuple:
            setattr(options, entry.field_id, tuple(cast("list[object]", value)))
        case _:
            setattr(options, entry.field_id, value)


def parse_args(
    options_type: type[OptionsT],
    argv: Sequence[str] | None = None,
    *,
    prog: str | None = None,
    version: str | None = None,
) -> OptionsT:
    """Populate a fresh options value from command-line arguments.

    Fields that do not appear on the command line keep their declared
    defaults.

    Args:
        options_type: Options dataclass.
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.
        prog: Program name shown in usage text.
        version: Version string reported by ``--version``.

    Returns:
        The populated options value.

    Raises:
        UsageRequested: If ``--usage`` was given; the message is the help text.
        VersionRequested: If ``--version`` was given.
        CLIException: If the arguments are malformed.
    """
    parser, bindings = _build(options_type, prog=prog, version=version)
    namespace = parser.parse_args(None if argv is None else list(argv))
    if getattr(namespace, _USAGE_DEST, False):
        raise UsageRequested(parser.format_help())
    if getattr(namespace, _VERSION_DEST, False):
        raise VersionRequested(f"{parser.prog} {version}")
    options = cast("OptionsT", derive_schema(options_type).defaults())
    for binding in bindings:
        value = getattr(namespace, binding.dest, None)
        # Absent flags are None and absent variadic positionals are [].
        if value is None or value == [] or value is False:
            continue
        _assign(options, binding, value)
    logger.debug(
        "Parsed %d command-line argument(s) for %s",
        len(argv) if argv is not None else 0,
        options_type.__qualname__,
        extra=structured_extra(LogComponent.CLI, count=len(argv) if argv is not None else 0),
    )
    return options
