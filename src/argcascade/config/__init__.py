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

"""Config file loading, validation and merging."""

from __future__ import annotations

from .constants import (
    CONFIG_COMMENT_PREFIX,
    CONFIG_EMPTY_ARGUMENT,
    MAX_CONFIG_SIZE,
    SizeUnit,
    from_bytes,
    to_bytes,
)
from .errors import (
    ArityMismatchError,
    CoercionError,
    ConfigFileError,
    ConfigFileTooLargeError,
    ConfigReadError,
    InvalidConfigValueError,
    InvalidEnumValueError,
    MalformedConfigDocumentError,
    TypeMismatchError,
    UnknownConfigKeyError,
    UnsupportedTypeError,
)
from .coercion import coerce_value
from .document import ConfigDocument, load_config_file, load_document, read_config_file
from .validation import collect_config_errors, validate_config, validate_config_file
from .merge import (
    is_unset,
    parse_config,
    parse_config_file,
    retro_init,
    retro_init_from_config,
    retro_init_from_config_file,
)

__all__ = [
    "CONFIG_COMMENT_PREFIX",
    "CONFIG_EMPTY_ARGUMENT",
    "MAX_CONFIG_SIZE",
    "ArityMismatchError",
    "CoercionError",
    "ConfigDocument",
    "ConfigFileError",
    "ConfigFileTooLargeError",
    "ConfigReadError",
    "InvalidConfigValueError",
    "InvalidEnumValueError",
    "MalformedConfigDocumentError",
    "SizeUnit",
    "TypeMismatchError",
    "UnknownConfigKeyError",
    "UnsupportedTypeError",
    "coerce_value",
    "collect_config_errors",
    "from_bytes",
    "is_unset",
    "load_config_file",
    "load_document",
    "parse_config",
    "parse_config_file",
    "retro_init",
    "retro_init_from_config",
    "retro_init_from_config_file",
    "read_config_file",
    "to_bytes",
    "validate_config",
    "validate_config_file",
]
