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

"""Conversions between strings and values used by command-line options."""

from __future__ import annotations

import math
import re
from typing import Final

from argcascade._internal.exceptions import CLIException

__all__ = ["format_float", "parse_range"]

_RANGE_PATTERN: Final[re.Pattern[str]] = re.compile(r"([+-]?\d+)\.\.([+-]?\d+)")


def parse_range(text: str, msg: str = "ill-formatted range") -> tuple[int, int]:
    """Parse a range written as ``x..y``.

    Args:
        text: Range text, e.g. ``"3..17"``.
        msg: Message of the exception raised on malformed input.

    Returns:
        The two bounds in the order they are written.

    Raises:
        CLIException: If ``text`` is not of the form ``x..y``.
    """
    match = _RANGE_PATTERN.fullmatch(text.strip())
    if match is None:
        raise CLIException(msg)
    return int(match.group(1)), int(match.group(2))


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_float(value: float, precision: int) -> str:
    """Render ``value`` with exactly ``precision`` fractional digits.

    Halves round away from zero. ``nan``, ``inf`` and ``-inf`` are rendered
    by name.

    Args:
        value: Number to render.
        precision: Number of fractional digits; ``0`` renders an integer.

    Returns:
        The decimal text, e.g. ``format_float(-13.37, 1) == "-13.4"``.
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if precision <= 0:
        return str(_round_half_away(value))
    whole = int(value)
    scale = 10**precision
    fraction = _round_half_away(abs(value - whole) * scale)
    if fraction >= scale:
        whole += 1 if value > 0 else -1
        fraction -= scale
    sign = "-" if value < 0 and whole == 0 and fraction else ""
    return f"{sign}{whole}.{fraction:0{precision}d}"
