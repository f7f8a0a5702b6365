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

"""Unit tests for the private packages."""

from __future__ import annotations

import importlib

import pytest

import argcascade._infra as infra
import argcascade._internal.logging_utils

pytestmark = pytest.mark.unit


def test_infra_lazy_imports_error_codes() -> None:
    module = infra.error_codes
    assert module is infra.error_codes
    assert importlib.import_module("argcascade._infra.error_codes") is module


def test_internal_is_a_plain_package() -> None:
    assert argcascade._internal.logging_utils is importlib.import_module("argcascade._internal.logging_utils")
    assert not hasattr(argcascade._internal, "__getattr__")


def test_infra_dir_and_unknown_attribute() -> None:
    assert "error_codes" in dir(infra)
    with pytest.raises(AttributeError, match="has no attribute 'not_real'"):
        _ = infra.not_real
