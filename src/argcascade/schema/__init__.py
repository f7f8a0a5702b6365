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

"""Options schema declarations and derivation."""

from __future__ import annotations

from .types import FieldKind, Multiplicity, TypeKind, TypeSpec, UnsetRule, type_spec_for
from .errors import SchemaDefinitionError
from .declarations import (
    Argument,
    FieldDeclaration,
    HookKind,
    Option,
    Priority,
    Validate,
    argument,
    argument_handler,
    clean_up,
    declared,
    option,
    option_handler,
    plain,
    post_validate,
    pre_validate,
)
from .registry import (
    FieldSchema,
    FieldValidator,
    HookDescriptor,
    OptionsSchema,
    derive_argument_name,
    derive_schema,
)

__all__ = [
    "Argument",
    "FieldDeclaration",
    "FieldKind",
    "FieldSchema",
    "FieldValidator",
    "HookDescriptor",
    "HookKind",
    "Multiplicity",
    "Option",
    "OptionsSchema",
    "Priority",
    "SchemaDefinitionError",
    "TypeKind",
    "TypeSpec",
    "UnsetRule",
    "Validate",
    "argument",
    "argument_handler",
    "clean_up",
    "declared",
    "derive_argument_name",
    "derive_schema",
    "option",
    "option_handler",
    "plain",
    "post_validate",
    "pre_validate",
    "type_spec_for",
]
