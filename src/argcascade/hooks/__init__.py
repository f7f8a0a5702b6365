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

"""Lifecycle hooks and field validation for resolved options."""

from __future__ import annotations

from argcascade.schema.declarations import HookKind, Priority, clean_up, post_validate, pre_validate

from .errors import FieldValidationError, PipelineStateError
from .pipeline import HookPipeline, PipelineState, cleanup_scope, process_options, run_hooks, validate_fields

__all__ = [
    "FieldValidationError",
    "HookKind",
    "HookPipeline",
    "PipelineState",
    "PipelineStateError",
    "Priority",
    "clean_up",
    "cleanup_scope",
    "post_validate",
    "pre_validate",
    "process_options",
    "run_hooks",
    "validate_fields",
]
