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

"""argcascade - layered program configuration for Python.

Resolves a program's options from declared defaults, an optional JSON config
file and the command line, with command-line values taking precedence, then
runs priority-ordered validation and clean-up hooks on the result.
"""

from __future__ import annotations

# config must be imported before schema: schema declarations read its constants.
from .config import (
    CONFIG_EMPTY_ARGUMENT,
    MAX_CONFIG_SIZE,
    ConfigDocument,
    ConfigFileError,
    SizeUnit,
    from_bytes,
    load_config_file,
    parse_config,
    parse_config_file,
    retro_init,
    retro_init_from_config,
    retro_init_from_config_file,
    to_bytes,
    validate_config,
    validate_config_file,
)
from .schema import (
    Multiplicity,
    Priority,
    SchemaDefinitionError,
    Validate,
    argument,
    argument_handler,
    clean_up,
    declared,
    derive_schema,
    option,
    option_handler,
    plain,
    post_validate,
    pre_validate,
)
from .exceptions import (
    ArgcascadeError,
    ArgcascadeTypeError,
    ArgcascadeValidationError,
    CLIException,
    UsageRequested,
    ValidationError,
    VersionRequested,
)
from .hooks import FieldValidationError, HookPipeline, cleanup_scope, process_options
from .cli import build_parser, parse_args
from .cli.app import ARGCASCADE_VERSION
from .resolution import resolve_options

__version__ = ARGCASCADE_VERSION

__all__ = [
    "CONFIG_EMPTY_ARGUMENT",
    "MAX_CONFIG_SIZE",
    "ArgcascadeError",
    "ArgcascadeTypeError",
    "ArgcascadeValidationError",
    "CLIException",
    "ConfigDocument",
    "ConfigFileError",
    "FieldValidationError",
    "HookPipeline",
    "Multiplicity",
    "Priority",
    "SchemaDefinitionError",
    "SizeUnit",
    "UsageRequested",
    "Validate",
    "ValidationError",
    "VersionRequested",
    "__version__",
    "argument",
    "argument_handler",
    "build_parser",
    "clean_up",
    "cleanup_scope",
    "declared",
    "derive_schema",
    "from_bytes",
    "load_config_file",
    "option",
    "option_handler",
    "parse_args",
    "parse_config",
    "parse_config_file",
    "plain",
    "post_validate",
    "pre_validate",
    "process_options",
    "resolve_options",
    "retro_init",
    "retro_init_from_config",
    "retro_init_from_config_file",
    "to_bytes",
    "validate_config",
    "validate_config_file",
]
