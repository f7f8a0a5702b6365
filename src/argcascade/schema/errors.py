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

"""Errors raised while deriving an options schema."""

from __future__ import annotations

from argcascade._internal.exceptions import ArgcascadeTypeError

__all__ = ["SchemaDefinitionError"]


class SchemaDefinitionError(ArgcascadeTypeError):
    """Raised when an options type is declared incorrectly.

    This is a programming error in the options type, detected once when its
    schema is derived, never while resolving a configuration.
    """

    def __init__(self, options_type: type, detail: str) -> None:
        """Initialize the exception with the offending type and a description.

        Args:
            options_type: The options class whose declaration is invalid.
            detail: Human-readable description of the problem.
        """
        self.options_type = options_type
        self.detail = detail
        super().__init__(f"invalid options type {options_type.__qualname__}: {detail}")
