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

"""Unit tests for type descriptors and declarations."""

from __future__ import annotations

import dataclasses
from typing import Annotated

import pytest
from annotated_types import Ge, Gt, Le
from pydantic import NonNegativeInt, PositiveInt

from argcascade.config.constants import CONFIG_EMPTY_ARGUMENT
from argcascade.schema import Multiplicity, Priority, TypeKind, TypeSpec, UnsetRule, argument, option, type_spec_for
from argcascade.schema.declarations import FIELD_METADATA_KEY, FieldDeclaration
from argcascade.schema.types import select_unset_rule
from tests.fixtures.options import Mode, ScenarioOptions

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("annotation", "kind"),
    [
        (bool, TypeKind.FLAG),
        (Mode, TypeKind.ENUM),
        (float, TypeKind.FLOAT),
        (int, TypeKind.SIGNED),
        (NonNegativeInt, TypeKind.UNSIGNED),
        (PositiveInt, TypeKind.UNSIGNED),
        (Annotated[int, Ge(-1)], TypeKind.SIGNED),
        (Annotated[int, Le(5)], TypeKind.SIGNED),
        (Annotated[int, Gt(0)], TypeKind.UNSIGNED),
        (str, TypeKind.STRING),
        (str | None, TypeKind.STRING),
        (list[str], TypeKind.ARRAY),
        (tuple[int, ...], TypeKind.ARRAY),
        (tuple[float, float, float], TypeKind.FIXED_ARRAY),
        (tuple[int, str], TypeKind.UNSUPPORTED),
        (ScenarioOptions, TypeKind.RECORD),
        (dict[str, str], TypeKind.UNSUPPORTED),
        (bytes, TypeKind.UNSUPPORTED),
    ],
)
def test_type_spec_for(annotation: object, kind: TypeKind) -> None:
    assert type_spec_for(annotation).kind is kind


def test_fixed_array_spec_records_length() -> None:
    spec = type_spec_for(tuple[float, float, float])
    assert spec.length == 3
    assert spec.element == TypeSpec(TypeKind.FLOAT, float)
    assert spec.describe() == "array of 3 float"


def test_describe() -> None:
    assert type_spec_for(list[Mode]).describe() == "array of enum Mode"
    assert TypeSpec(TypeKind.OPTION_HANDLER).describe() == "option handler"


@pytest.mark.parametrize(
    ("spec", "is_argument", "rule"),
    [
        (type_spec_for(str), True, UnsetRule.ARGUMENT_STRING),
        (type_spec_for(list[str]), True, UnsetRule.ARGUMENT_SEQUENCE),
        (type_spec_for(list[int]), True, UnsetRule.NEVER),
        (type_spec_for(int), True, UnsetRule.NEVER),
        (type_spec_for(str), False, UnsetRule.IDENTITY),
        (type_spec_for(float), False, UnsetRule.FLOAT),
        (type_spec_for(tuple[int, int]), False, UnsetRule.STRUCTURAL),
        (type_spec_for(ScenarioOptions), False, UnsetRule.STRUCTURAL),
    ],
)
def test_select_unset_rule(spec: TypeSpec, *, is_argument: bool, rule: UnsetRule) -> None:
    assert select_unset_rule(spec, is_argument=is_argument, is_handler=False) is rule
    assert select_unset_rule(spec, is_argument=is_argument, is_handler=True) is UnsetRule.NEVER


def test_priorities_are_plain_integers() -> None:
    assert [int(priority) for priority in Priority] == [-(2**31), -100, 0, 100, 2**31 - 1]
    assert Priority.HIGH > Priority.MEDIUM > Priority.LOW
    assert Priority.MAX - 1 == 2**31 - 2


def test_arguments_default_to_the_sentinel() -> None:
    single = argument("<in:file>")
    assert single.default == CONFIG_EMPTY_ARGUMENT
    many = argument("<in:file>", multiplicity=Multiplicity.ZERO_OR_MORE)
    assert many.default_factory is list
    declaration = many.metadata[FIELD_METADATA_KEY]
    assert isinstance(declaration, FieldDeclaration)
    assert declaration.argument is not None
    assert declaration.argument.multiplicity is Multiplicity.ZERO_OR_MORE


def test_option_records_names_and_validators() -> None:
    def check(_value: object) -> None:
        return None

    declared_field = option("num", "n", default=1, validate=check)
    assert isinstance(declared_field, dataclasses.Field)
    declaration = declared_field.metadata[FIELD_METADATA_KEY]
    assert declaration.option is not None
    assert declaration.option.names == ("num", "n")
    assert [item.procedure for item in declaration.validators] == [check]
