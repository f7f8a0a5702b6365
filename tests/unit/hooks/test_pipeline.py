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

"""Unit tests for the lifecycle hook pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest

from argcascade.exceptions import CLIException
from argcascade.hooks import (
    FieldValidationError,
    HookPipeline,
    PipelineState,
    PipelineStateError,
    Priority,
    clean_up,
    cleanup_scope,
    post_validate,
    pre_validate,
    process_options,
    validate_fields,
)
from argcascade.schema import Validate, plain
from tests.fixtures.options import HookedOptions, ValidatedOptions

pytestmark = pytest.mark.unit


def test_hooks_run_by_descending_priority() -> None:
    options = HookedOptions()
    pipeline = process_options(options)
    assert pipeline.state is PipelineState.POST_VALIDATED
    assert options.events == ["pre-first", "pre-a", "pre-b", "P1", "P2", "P3"]
    pipeline.clean_up()
    assert options.events[-2:] == ["close", "close-last"]


def test_clean_up_runs_only_once(caplog: pytest.LogCaptureFixture) -> None:
    options = HookedOptions()
    pipeline = HookPipeline(options)
    pipeline.clean_up()
    with caplog.at_level(logging.DEBUG, logger="argcascade.hooks"):
        pipeline.clean_up()
    assert options.events == ["close", "close-last"]
    assert pipeline.state is PipelineState.CLEANED_UP
    assert "already ran" in caplog.text


def test_stages_must_run_in_order() -> None:
    pipeline = HookPipeline(HookedOptions())
    with pytest.raises(PipelineStateError, match="cannot run post_validate while the pipeline is created"):
        pipeline.post_validate()
    with pytest.raises(PipelineStateError):
        pipeline.validate_fields()
    pipeline.pre_validate()
    with pytest.raises(PipelineStateError):
        pipeline.pre_validate()


def test_validate_fields_passes_value_and_options() -> None:
    options = ValidatedOptions(amount=5, values=[1, 2, 3])
    validate_fields(options)
    assert options.calls == ["amount"]


def test_validate_fields_is_idempotent() -> None:
    options = ValidatedOptions(amount=5)
    pipeline = HookPipeline(options)
    pipeline.pre_validate()
    pipeline.validate_fields()
    pipeline.validate_fields()
    assert options.calls == ["amount", "amount"]
    assert options.amount == 5
    assert pipeline.state is PipelineState.FIELDS_VALIDATED


def test_failing_option_validator_is_wrapped() -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        validate_fields(ValidatedOptions(amount=11))
    error = exc_info.value
    assert error.field_kind == "option"
    assert error.field_name == "amount"
    assert isinstance(error.cause, ValueError)
    assert error.__cause__ is error.cause
    assert str(error) == "invalid option `amount`: 11 exceeds 10"


def test_field_validation_failures_are_cli_exceptions() -> None:
    with pytest.raises(CLIException, match="invalid option `amount`"):
        _ = process_options(ValidatedOptions(amount=11))
    with pytest.raises(ValueError, match="invalid option `amount`"):
        validate_fields(ValidatedOptions(amount=11))


def test_failing_property_validator_uses_identifier() -> None:
    with pytest.raises(FieldValidationError) as exc_info:
        validate_fields(ValidatedOptions(values=[3, 1]))
    assert (exc_info.value.field_kind, exc_info.value.field_name) == ("property", "values")


def test_validation_stops_at_first_failing_field() -> None:
    options = ValidatedOptions(amount=11, values=[3, 1])
    with pytest.raises(FieldValidationError) as exc_info:
        validate_fields(options)
    assert exc_info.value.field_name == "amount"


def _never_called(_value: object) -> None:
    message = "disabled validators must not run"
    raise AssertionError(message)


@dataclass
class _Disabled:
    num: int = plain(0, validate=Validate(_never_called, enabled=False))


def test_disabled_validators_are_skipped() -> None:
    validate_fields(_Disabled())


@dataclass
class _FailingHook:
    events: list[str] = field(default_factory=list)

    @pre_validate()
    def explode(self) -> None:
        message = "boom"
        raise RuntimeError(message)

    @post_validate(Priority.LOW)
    def unreachable(self) -> None:
        self.events.append("post")

    @clean_up()
    def close(self) -> None:
        self.events.append("close")


def test_hook_failures_propagate_unwrapped() -> None:
    options = _FailingHook()
    with pytest.raises(RuntimeError, match="boom"):
        _ = process_options(options)
    assert options.events == []


def test_cleanup_scope_runs_on_failure() -> None:
    options = _FailingHook()
    with pytest.raises(RuntimeError, match="boom"), cleanup_scope(options) as scoped:
        assert scoped is options
        _ = process_options(options)
    assert options.events == ["close"]


def test_cleanup_scope_accepts_a_pipeline() -> None:
    options = HookedOptions()
    pipeline = process_options(options)
    with cleanup_scope(pipeline):
        pass
    pipeline.clean_up()
    assert options.events.count("close") == 1
