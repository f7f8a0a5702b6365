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

"""Console entry point for argcascade."""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Final

from argcascade._infra.error_codes import error_code_for
from argcascade._internal.exceptions import ArgcascadeError, CLIException
from argcascade._internal.logging_utils import structured_extra
from argcascade.config.constants import MAX_CONFIG_SIZE
from argcascade.config.document import load_config_file
from argcascade.config.errors import ConfigFileError
from argcascade.config.validation import collect_config_errors
from argcascade.core.model_types import ExitCode, LogComponent
from argcascade.logging import LOG_FORMATS, LOG_LEVELS, configure_logging
from argcascade.schema.errors import SchemaDefinitionError
from argcascade.schema.registry import derive_schema

__all__ = ["load_options_type", "main"]

logger: logging.Logger = logging.getLogger("argcascade.cli")

ARGCASCADE_VERSION: Final[str] = "0.1.0"

CommandHandler = Callable[[argparse.Namespace], int]


def _echo(message: str, *, err: bool = False) -> None:
    print(message, file=sys.stderr if err else sys.stdout)


def _report(error: ArgcascadeError) -> None:
    _echo(f"[{error_code_for(error)}] {error}", err=True)


def load_options_type(reference: str) -> type:
    """Import an options type given as ``module:Class``.

    Args:
        reference: Import path such as ``myapp.options:Options``; the class
            part may be dotted for nested classes.

    Returns:
        The options class.

    Raises:
        CLIException: If the reference is malformed or cannot be imported.
    """
    module_name, sep, qualname = reference.partition(":")
    if not sep or not module_name or not qualname:
        message = f"expected module:Class but got {reference!r}"
        raise CLIException(message)
    try:
        target: object = importlib.import_module(module_name)
    except ImportError as exc:
        message = f"cannot import {module_name!r}: {exc}"
        raise CLIException(message) from exc
    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            message = f"{module_name!r} has no attribute {qualname!r}"
            raise CLIException(message) from exc
    if not isinstance(target, type):
        message = f"{reference!r} is not a class"
        raise CLIException(message)
    return target


def _run_validate_config(args: argparse.Namespace) -> int:
    try:
        options_type = load_options_type(args.options)
        _ = derive_schema(options_type)
    except (CLIException, SchemaDefinitionError) as exc:
        _report(exc)
        return ExitCode.USAGE
    path: Path = args.path
    try:
        errors = collect_config_errors(options_type, load_config_file(path, max_size=args.max_size))
    except ConfigFileError as exc:
        errors = [exc]
    for error in errors:
        _report(error)
    logger.info(
        "Checked %s against %s: %d problem(s)",
        path,
        options_type.__qualname__,
        len(errors),
        extra=structured_extra(LogComponent.CLI, path=path, count=len(errors)),
    )
    if errors:
        return ExitCode.INVALID
    _echo(f"{path}: ok")
    return ExitCode.SUCCESS


def _command_handlers() -> dict[str, CommandHandler]:
    return {"validate-config": _run_validate_config}


def _logging_arguments(*, suppress_defaults: bool) -> argparse.ArgumentParser:
    # Subcommand copies must not overwrite flags given before the subcommand.
    common = argparse.ArgumentParser(add_help=False)
    _ = common.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=argparse.SUPPRESS if suppress_defaults else "text",
        help="Select logging output format (human-readable text or structured JSON).",
    )
    _ = common.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=argparse.SUPPRESS if suppress_defaults else "warning",
        help="Set verbosity of logged events.",
    )
    return common


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="argcascade",
        parents=[_logging_arguments(suppress_defaults=False)],
        description="Inspect config files written for argcascade options types.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _ = parser.add_argument("--version", action="store_true", help="Print the argcascade version and exit.")
    subparsers = parser.add_subparsers(dest="command")
    validate = subparsers.add_parser(
        "validate-config",
        help="Check a config file against an options type without applying it",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=[_logging_arguments(suppress_defaults=True)],
    )
    _ = validate.add_argument(
        "--options",
        required=True,
        metavar="MODULE:CLASS",
        help="Options dataclass the config file is written for.",
    )
    _ = validate.add_argument(
        "--max-size",
        type=int,
        default=MAX_CONFIG_SIZE,
        help="Reject config files larger than this many bytes.",
    )
    _ = validate.add_argument("path", type=Path, help="Config file to check.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the ``argcascade`` command-line interface.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        Exit code: 0 on success, 1 for an invalid config file, 2 for usage
        errors.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        _echo(f"argcascade {ARGCASCADE_VERSION}")
        return ExitCode.SUCCESS
    if args.command is None:
        parser.error("No command provided.")
    _ = configure_logging(args.log_format, log_level=args.log_level)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    return handler(args)
