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

"""Model types and enumerations for argcascade.

This module defines the enumerations used by the ambient layers of
argcascade (logging and the command-line entry point). Enumerations that
describe options schemas and hooks live next to the code that uses them in
``argcascade.schema`` and ``argcascade.hooks``.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable argcascade components.

    Attributes:
        CLI: Command-line adapter and console script.
        CONFIG: Config file reading, validation and merging.
        SCHEMA: Options schema derivation.
        HOOKS: Lifecycle hook pipeline.
    """

    CLI = "cli"
    CONFIG = "config"
    SCHEMA = "schema"
    HOOKS = "hooks"


class ExitCode(IntEnum):
    """Process exit codes used by the ``argcascade`` console script.

    Attributes:
        SUCCESS: Every checked config file is valid.
        INVALID: At least one config file failed validation.
        USAGE: Bad command line or unloadable options type.
    """

    SUCCESS = 0
    INVALID = 1
    USAGE = 2


__all__ = ["ExitCode", "LogComponent", "LogFormat"]
