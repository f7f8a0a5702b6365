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

"""Stable error code registry used across argcascade."""

from __future__ import annotations

from typing import TYPE_CHECKING, NewType

from argcascade._internal.exceptions import (
    ArgcascadeError,
    ArgcascadeTypeError,
    ArgcascadeValidationError,
    CLIException,
    UsageRequested,
    ValidationError,
    VersionRequested,
)
from argcascade.config.errors import (
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
from argcascade.hooks.errors import FieldValidationError, PipelineStateError
from argcascade.schema.errors import SchemaDefinitionError

if TYPE_CHECKING:
    from collections.abc import Mapping

ErrorCode = NewType("ErrorCode", str)

_ERROR_CODES: dict[type[BaseException], ErrorCode] = {
    ArgcascadeError: ErrorCode("AC000"),
    ArgcascadeValidationError: ErrorCode("AC100"),
    ArgcascadeTypeError: ErrorCode("AC101"),
    SchemaDefinitionError: ErrorCode("AC102"),
    ConfigFileError: ErrorCode("AC110"),
    ConfigFileTooLargeError: ErrorCode("AC111"),
    MalformedConfigDocumentError: ErrorCode("AC112"),
    UnknownConfigKeyError: ErrorCode("AC113"),
    InvalidConfigValueError: ErrorCode("AC114"),
    ConfigReadError: ErrorCode("AC115"),
    CoercionError: ErrorCode("AC120"),
    TypeMismatchError: ErrorCode("AC121"),
    InvalidEnumValueError: ErrorCode("AC122"),
    ArityMismatchError: ErrorCode("AC123"),
    UnsupportedTypeError: ErrorCode("AC124"),
    FieldValidationError: ErrorCode("AC200"),
    PipelineStateError: ErrorCode("AC201"),
    CLIException: ErrorCode("AC300"),
    ValidationError: ErrorCode("AC301"),
    UsageRequested: ErrorCode("AC302"),
    VersionRequested: ErrorCode("AC303"),
}


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return a stable error code for a structured argcascade exception.

    Args:
        exc: Exception instance raised by argcascade code paths.

    Returns:
        Error code mapped from the exception's class hierarchy.
    """
    for cls in type(exc).__mro__:
        code = _ERROR_CODES.get(cls)
        if code:
            return code
    return ErrorCode("AC000")


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return a stable mapping of fully-qualified exception names to error codes.

    Returns:
        Mapping of ``<module>.<ExceptionName>`` strings to error codes.
    """
    return {f"{cls.__module__}.{cls.__name__}": code for cls, code in _ERROR_CODES.items()}


__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]
