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

"""Exceptions raised while decoding and applying config files.

Two families live here. Coercion errors describe why one JSON node cannot
become a typed field value; they know nothing about keys. Config file
errors carry the offending key and value and are what callers see.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from argcascade._internal.exceptions import ArgcascadeValidationError
from argcascade.json import describe_json

from .constants import from_bytes

if TYPE_CHECKING:
    from pathlib import Path

    from argcascade.json import JsonKind

__all__ = [
    "ArityMismatchError",
    "CoercionError",
    "ConfigFileError",
    "ConfigFileTooLargeError",
    "ConfigReadError",
    "InvalidConfigValueError",
    "InvalidEnumValueError",
    "MalformedConfigDocumentError",
    "TypeMismatchError",
    "UnknownConfigKeyError",
    "UnsupportedTypeError",
]


class CoercionError(ArgcascadeValidationError):
    """Raised when a JSON node cannot be converted to a declared type."""


class TypeMismatchError(CoercionError):
    """Raised when a JSON node has the wrong tag for the declared type."""

    def __init__(self, expected: str, actual: JsonKind) -> None:
        """Initialize the exception with the expected and actual shapes.

        Args:
            expected: Description of the accepted JSON shape(s).
            actual: Tag of the node that was supplied.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} but got {actual.value}")


class InvalidEnumValueError(CoercionError):
    """Raised when a string does not name a member of the declared enum."""

    def __init__(self, value: str, allowed: tuple[str, ...]) -> None:
        """Initialize the exception with the rejected string and the members.

        Args:
            value: The string found in the config file.
            allowed: Names of the enum members.
        """
        self.value = value
        self.allowed = allowed
        super().__init__(f"{value!r} is not one of: {', '.join(allowed)}")


class ArityMismatchError(CoercionError):
    """Raised when an array for a fixed-size field has the wrong length."""

    def __init__(self, expected: int, actual: int) -> None:
        """Initialize the exception with the required and supplied lengths.

        Args:
            expected: Fixed length of the declared array type.
            actual: Length of the supplied array.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(f"array must have {expected} elements but has {actual}")


class UnsupportedTypeError(CoercionError):
    """Raised when the declared type cannot be read from a config file."""

    def __init__(self, declared: str) -> None:
        """Initialize the exception with the description of the declared type.

        Args:
            declared: Description of the unsupported declared type.
        """
        self.declared = declared
        super().__init__(f"values of type {declared} cannot be read from a config file")


class ConfigFileError(ArgcascadeValidationError):
    """Raised for any problem with a config file.

    Attributes:
        key: Offending config key, when the problem concerns one entry.
        value: Offending config value, when applicable.
    """

    def __init__(self, message: str, key: str | None = None, value: object = None) -> None:
        """Initialize the exception with a message and the offending entry.

        Args:
            message: Human-readable description.
            key: Key of the erroneous config entry.
            value: Value of the erroneous config entry.
        """
        self.key = key
        self.value = value
        super().__init__(message)


class ConfigFileTooLargeError(ConfigFileError):
    """Raised when a config file exceeds the size cap; nothing is parsed."""

    def __init__(self, size: int, limit: int) -> None:
        """Initialize the exception with the observed size and the cap.

        Args:
            size: Size of the rejected content in bytes.
            limit: Maximum accepted size in bytes.
        """
        self.size = size
        self.limit = limit
        amount, unit = from_bytes(limit)
        super().__init__(f"config file is too large; must be <= {amount:.2f} {unit.label}")


class MalformedConfigDocumentError(ConfigFileError):
    """Raised when config content is not a single JSON object."""

    def __init__(self, detail: str, source: Path | None = None) -> None:
        """Initialize the exception with a description and the source path.

        Args:
            detail: What is wrong with the document.
            source: File the document was read from, if any.
        """
        self.detail = detail
        self.source = source
        prefix = f"{source}: " if source is not None else ""
        super().__init__(f"{prefix}{detail}")


class UnknownConfigKeyError(ConfigFileError):
    """Raised when a config key matches no field's external name."""

    def __init__(self, key: str) -> None:
        """Initialize the exception with the unknown key.

        Args:
            key: The key that matched no field.
        """
        super().__init__(f"invalid config key `{key}`", key=key)


class InvalidConfigValueError(ConfigFileError):
    """Raised when a config value cannot be coerced to its field's type."""

    def __init__(self, key: str, value: object, cause: Exception) -> None:
        """Initialize the exception with the entry and the coercion failure.

        Args:
            key: Key of the malformed entry.
            value: The malformed value.
            cause: Underlying coercion error.
        """
        self.cause = cause
        super().__init__(
            f"malformed config value `{key}` = {describe_json(value)}: {cause}",
            key=key,
            value=value,
        )


class ConfigReadError(ConfigFileError):
    """Raised when a config file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the config file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")
