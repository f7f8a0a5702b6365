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

"""Common exception hierarchy for argcascade."""

from __future__ import annotations

__all__ = [
    "ArgcascadeError",
    "ArgcascadeTypeError",
    "ArgcascadeValidationError",
    "CLIException",
    "UsageRequested",
    "ValidationError",
    "VersionRequested",
]


class ArgcascadeError(Exception):
    """Base error for all argcascade exceptions."""


class ArgcascadeValidationError(ArgcascadeError, ValueError):
    """Raised when input data fails validation checks."""


class ArgcascadeTypeError(ArgcascadeError, TypeError):
    """Raised when input data has an unexpected type."""


class CLIException(ArgcascadeError):
    """Raised for errors during command-line parsing and option processing.

    The calling CLI layer maps these to exit codes and printed messages.
    """


class UsageRequested(CLIException):
    """Control-flow signal raised when the user asked for usage information."""


class VersionRequested(CLIException):
    """Control-flow signal raised when the user asked for the program version."""


class ValidationError(CLIException):
    """Raised when an option value fails one of the predicate validators."""
