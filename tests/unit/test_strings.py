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

"""Unit tests for string conversion helpers."""

from __future__ import annotations

import math

import pytest

from argcascade.exceptions import CLIException
from argcascade.strings import format_float, parse_range

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("text", "expected"),
    [("0..1", (0, 1)), ("3..17", (3, 17)), ("-4..+2", (-4, 2)), (" 5..5 ", (5, 5)), ("9..2", (9, 2))],
)
def test_parse_range(text: str, expected: tuple[int, int]) -> None:
    assert parse_range(text) == expected


@pytest.mark.parametrize("text", ["", "1..", "..2", "1...2", "a..b", "1-2"])
def test_parse_range_rejects_malformed_text(text: str) -> None:
    with pytest.raises(CLIException, match="ill-formatted range"):
        _ = parse_range(text)


def test_parse_range_custom_message() -> None:
    with pytest.raises(CLIException, match="bad window"):
        _ = parse_range("x", msg="bad window")


@pytest.mark.parametrize(
    ("value", "precision", "expected"),
    [
        (math.nan, 0, "nan"),
        (math.inf, 0, "inf"),
        (-math.inf, 2, "-inf"),
        (42.0, 0, "42"),
        (42.0, 1, "42.0"),
        (-13.37, 2, "-13.37"),
        (-13.37, 1, "-13.4"),
        (-13.37, 0, "-13"),
        (0.9, 1, "0.9"),
        (0.9, 0, "1"),
        (2.5, 0, "3"),
        (1.05, 2, "1.05"),
        (0.96, 1, "1.0"),
        (-0.5, 1, "-0.5"),
    ],
)
def test_format_float(value: float, precision: int, expected: str) -> None:
    assert format_float(value, precision) == expected
