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

"""Tests for the error code registry."""

from __future__ import annotations

import pytest

from argcascade._infra.error_codes import error_code_catalog, error_code_for
from argcascade.config.errors import (
    ConfigFileTooLargeError,
    InvalidConfigValueError,
    MalformedConfigDocumentError,
    TypeMismatchError,
    UnknownConfigKeyError,
)
from argcascade.exceptions import (
    ArgcascadeError,
    ArgcascadeTypeError,
    ArgcascadeValidationError,
    UsageRequested,
    ValidationError,
)
from argcascade.hooks import FieldValidationError
from argcascade.json import JsonKind
from argcascade.schema import SchemaDefinitionError

pytestmark = pytest.mark.unit


def test_error_code_for_known_hierarchy() -> None:
    assert error_code_for(ArgcascadeError("x")) == "AC000"
    assert error_code_for(ArgcascadeValidationError("x")) == "AC100"
    assert error_code_for(ArgcascadeTypeError("x")) == "AC101"
    assert error_code_for(SchemaDefinitionError(int, "x")) == "AC102"
    assert error_code_for(ConfigFileTooLargeError(2, 1)) == "AC111"
    assert error_code_for(MalformedConfigDocumentError("x")) == "AC112"
    assert error_code_for(UnknownConfigKeyError("k")) == "AC113"
    cause = TypeMismatchError("bool", JsonKind.NUMBER)
    assert error_code_for(cause) == "AC121"
    assert error_code_for(InvalidConfigValueError("k", 1, cause)) == "AC114"
    assert error_code_for(FieldValidationError("option", "num", ValueError("x"))) == "AC200"
    assert error_code_for(ValidationError("x")) == "AC301"
    assert error_code_for(UsageRequested("x")) == "AC302"


def test_error_code_for_unknown_defaults_to_base() -> None:
    class CustomError(RuntimeError):
        pass

    assert error_code_for(CustomError("x")) == "AC000"


def test_error_code_catalog_uniqueness() -> None:
    catalog = error_code_catalog()
    codes = list(catalog.values())
    assert len(set(codes)) == len(codes)
    assert catalog["argcascade._internal.exceptions.ArgcascadeError"] == "AC000"
    assert catalog["argcascade.config.errors.UnknownConfigKeyError"] == "AC113"
