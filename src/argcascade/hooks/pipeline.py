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

"""Lifecycle hook pipeline for resolved options.

Once an options value holds its final configuration the pipeline runs the
``pre_validate`` hooks, every enabled field validator, and the
``post_validate`` hooks. ``clean_up`` hooks run when the program stops,
including when it fails. Hooks run by descending priority; equal priorities
keep declaration order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import IntEnum
from typing import Generic, TypeVar

from argcascade._internal.logging_utils import structured_extra
from argcascade.core.model_types import LogComponent
from argcascade.schema.declarations import HookKind
from argcascade.schema.registry import derive_schema

from .errors import FieldValidationError, PipelineStateError

__all__ = [
    "HookPipeline",
    "PipelineState",
    "cleanup_scope",
    "process_options",
    "run_hooks",
    "validate_fields",
]

logger: logging.Logger = logging.getLogger("argcascade.hooks")

OptionsT = TypeVar("OptionsT")


class PipelineState(IntEnum):
    """Pipeline states; transitions only move forward."""

    CREATED = 0
    PRE_VALIDATED = 1
    FIELDS_VALIDATED = 2
    POST_VALIDATED = 3
    CLEANED_UP = 4


def run_hooks(options: object, kind: HookKind) -> None:
    """Run every hook of one stage on ``options``.

    Hook failures propagate unchanged.
    """
    for descriptor in derive_schema(type(options)).hooks(kind):
        logger.debug(
            "Running %s hook %s",
            kind,
            descriptor.target,
            extra=structured_extra(
                LogComponent.HOOKS,
                hook=descriptor.target,
                priority=descriptor.priority,
                stage=kind,
            ),
        )
        getattr(options, descriptor.target)()


def validate_fields(options: object) -> None:
    """Run the enabled validators of every field, in declaration order.

    Args:
        options: Options value to check.

    Raises:
        FieldValidationError: On the first validator that raises, wrapping
            its exception.
    """
    for entry in derive_schema(type(options)).fields:
        for validator in entry.validators:
            if not validator.enabled:
                continue
            value = getattr(options, entry.field_id)
            try:
                validator(value, options)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.warning(
                    "Validation of %s `%s` failed: %s",
                    entry.label,
                    entry.display_name,
                    exc,
                    extra=structured_extra(LogComponent.HOOKS, field=entry.field_id, stage="validate_fields"),
                )
                raise FieldValidationError(entry.label, entry.display_name, exc) from exc


class HookPipeline(Generic[OptionsT]):
    """Drives one options value through the lifecycle stages.

    Stages must be run in order: ``pre_validate``, ``validate_fields``,
    ``post_validate``. ``validate_fields`` may be repeated before
    ``post_validate``. ``clean_up`` may be called from any state, for
    example from a failure handler, and only runs the hooks once.

    Example:
        >>> pipeline = HookPipeline(options)
        >>> pipeline.run()
        >>> try:
        ...     program(pipeline.options)
        ... finally:
        ...     pipeline.clean_up()
    """

    __slots__ = ("_state", "options")

    def __init__(self, options: OptionsT) -> None:
        """Bind the pipeline to an options value.

        Args:
            options: Options value; hooks run on it in place.
        """
        self.options: OptionsT = options
        self._state = PipelineState.CREATED

    @property
    def state(self) -> PipelineState:
        """Return the current state."""
        return self._state

    def _advance(self, stage: str, expected: tuple[PipelineState, ...], target: PipelineState) -> None:
        if self._state not in expected:
            raise PipelineStateError(stage, self._state.name.lower())
        self._state = target

    def pre_validate(self) -> None:
        """Run the ``pre_validate`` hooks."""
        self._advance("pre_validate", (PipelineState.CREATED,), PipelineState.PRE_VALIDATED)
        run_hooks(self.options, HookKind.PRE_VALIDATE)

    def validate_fields(self) -> None:
        """Run the field validators."""
        expected = (PipelineState.PRE_VALIDATED, PipelineState.FIELDS_VALIDATED)
        if self._state not in expected:
            raise PipelineStateError("validate_fields", self._state.name.lower())
        validate_fields(self.options)
        self._state = PipelineState.FIELDS_VALIDATED

    def post_validate(self) -> None:
        """Run the ``post_validate`` hooks."""
        self._advance("post_validate", (PipelineState.FIELDS_VALIDATED,), PipelineState.POST_VALIDATED)
        run_hooks(self.options, HookKind.POST_VALIDATE)

    def run(self) -> OptionsT:
        """Run the three validation stages and return the options value."""
        self.pre_validate()
        self.validate_fields()
        self.post_validate()
        return self.options

    def clean_up(self) -> None:
        """Run the ``clean_up`` hooks; later calls do nothing."""
        if self._state is PipelineState.CLEANED_UP:
            logger.debug(
                "Clean-up already ran; skipping",
                extra=structured_extra(LogComponent.HOOKS, stage=HookKind.CLEAN_UP),
            )
            return
        self._state = PipelineState.CLEANED_UP
        run_hooks(self.options, HookKind.CLEAN_UP)


def process_options(options: OptionsT) -> HookPipeline[OptionsT]:
    """Validate a fully resolved options value.

    Args:
        options: Options value after defaults, config file and command line
            have been applied.

    Returns:
        The pipeline in the ``POST_VALIDATED`` state, ready for ``clean_up``.

    Raises:
        FieldValidationError: If a field validator fails.
    """
    pipeline = HookPipeline(options)
    _ = pipeline.run()
    return pipeline


@contextmanager
def cleanup_scope(target: OptionsT | HookPipeline[OptionsT]) -> Iterator[OptionsT]:
    """Guarantee that ``clean_up`` hooks run when the block exits.

    Args:
        target: Options value or a pipeline already driving one.

    Yields:
        The options value.
    """
    pipeline = target if isinstance(target, HookPipeline) else HookPipeline(target)
    try:
        yield pipeline.options
    finally:
        pipeline.clean_up()
