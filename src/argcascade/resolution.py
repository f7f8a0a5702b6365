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

"""End-to-end options resolution.

Precedence, highest first: command line, config file, declared defaults.
The config file location is itself an option; when the command line does not
set it, an environment variable may supply it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from argcascade._internal.logging_utils import structured_extra
from argcascade.cli.parser import parse_args
from argcascade.config.constants import CONFIG_EMPTY_ARGUMENT
from argcascade.config.merge import retro_init_from_config_file
from argcascade.core.model_types import LogComponent
from argcascade.hooks.pipeline import process_options

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__ = ["config_path_for", "resolve_options"]

logger: logging.Logger = logging.getLogger("argcascade.config")

OptionsT = TypeVar("OptionsT")


def _as_path(value: object) -> Path | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Path):
        return value
    text = str(value).strip()
    if not text or text == CONFIG_EMPTY_ARGUMENT:
        return None
    return Path(text)


def config_path_for(
    options: object,
    config_field: str,
    *,
    config_env: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the config file to apply to ``options``, if any.

    Args:
        options: Options value populated from the command line.
        config_field: Attribute holding the config file path.
        config_env: Environment variable consulted when the field is unset.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        The path, or ``None`` when no config file was requested.
    """
    path = _as_path(getattr(options, config_field))
    if path is not None or config_env is None:
        return path
    env = os.environ if environ is None else environ
    return _as_path(env.get(config_env))


def resolve_options(
    options_type: type[OptionsT],
    argv: Sequence[str] | None = None,
    *,
    config_field: str | None = None,
    config_env: str | None = None,
    prog: str | None = None,
    version: str | None = None,
) -> OptionsT:
    """Parse the command line, apply the config file and validate.

    The caller runs the program inside ``cleanup_scope(options)`` so the
    ``clean_up`` hooks run however it exits.

    Args:
        options_type: Options dataclass.
        argv: Arguments without the program name; ``None`` reads ``sys.argv``.
        config_field: Field holding the config file path, if the program
            accepts one.
        config_env: Environment variable naming a config file when the
            command line does not.
        prog: Program name shown in usage text.
        version: Version string reported by ``--version``.

    Returns:
        The validated options value.

    Raises:
        CLIException: For malformed arguments, ``--usage`` or ``--version``.
        ConfigFileError: If the config file cannot be read or applied.
        FieldValidationError: If a field validator fails.
    """
    options = parse_args(options_type, argv, prog=prog, version=version)
    if config_field is not None:
        path = config_path_for(options, config_field, config_env=config_env)
        if path is not None:
            options = retro_init_from_config_file(options, path)
        else:
            logger.debug(
                "No config file requested",
                extra=structured_extra(LogComponent.CONFIG, field=config_field),
            )
    return process_options(options).options
