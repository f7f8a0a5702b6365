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

"""Errors raised by the hook pipeline."""

from __future__ import annotations

from argcascade._internal.exceptions import ArgcascadeError, ArgcascadeValidationError, ValidationError

__all__ = ["FieldValidationError", "PipelineStateError"]


class FieldValidationError(ValidationError, ArgcascadeValidationError):
    """Raised when a field validator fails; names the field it guards.

    Belongs to the ``CLIException`` family so command-line front ends can
    report it like any other bad option value.

    Attributes:
        field_kind: ``option``, ``argument`` or ``property``.
        field_name: First external name of the field, or its identifier.
        cause: The exception raised by the validator.
    """

    def __init__(self, field_kind: str, field_name: str, cause: BaseException) -> None:
        """Initialize the exception with the field context and the failure.

        Args:
            field_kind: Label of the field's declaration.
            field_name: Name used to refer to the field.
            cause: Exception raised by the validation procedure.
        """
        self.field_kind = field_kind
        self.field_name = field_name
        self.cause = cause
        super().__init__(f"invalid {field_kind} `{field_name}`: {cause}")


class PipelineStateError(ArgcascadeError):
    """Raised when a pipeline stage is run out of order."""

    def __init__(self, stage: str, state: str) -> None:
        """Initialize the exception with the requested stage and current state.

        Args:
            stage: Stage that was requested.
            state: State the pipeline was in.
        """
        self.stage = stage
        self.state = state
        super().__init__(f"cannot run {stage} while the pipeline is {state}")
