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

"""Shared constants for config file handling."""

from __future__ import annotations

from enum import IntEnum
from typing import Final

__all__ = [
    "CONFIG_COMMENT_PREFIX",
    "CONFIG_EMPTY_ARGUMENT",
    "MAX_CONFIG_SIZE",
    "SIZE_UNIT_BASE",
    "SizeUnit",
    "from_bytes",
    "to_bytes",
]

# String-typed argument values equal to this string are considered unset.
CONFIG_EMPTY_ARGUMENT: Final[str] = "-"
# Keys starting with this prefix are ignored entirely.
CONFIG_COMMENT_PREFIX: Final[str] = "//"
SIZE_UNIT_BASE: Final[int] = 2**10


class SizeUnit(IntEnum):
    """Binary size units; the value is the power of ``SIZE_UNIT_BASE``."""

    B = 0
    KIB = 1
    MIB = 2
    GIB = 3
    TIB = 4
    PIB = 5
    EIB = 6
    ZIB = 7
    YIB = 8

    @property
    def label(self) -> str:
        """Return the conventional unit label, e.g. ``MiB``."""
        if self is SizeUnit.B:
            return "B"
        return f"{self.name[0]}iB"


def to_bytes(value: int, unit: SizeUnit) -> int:
    """Convert ``value`` expressed in ``unit`` to a number of bytes.

    Args:
        value: Amount in the given unit.
        unit: Binary size unit.

    Returns:
        Number of bytes.
    """
    return value * SIZE_UNIT_BASE ** int(unit)


def from_bytes(size: int) -> tuple[float, SizeUnit]:
    """Express a byte count in the smallest unit that holds it.

    Args:
        size: Number of bytes.

    Returns:
        Tuple of the fractional amount and the selected unit. ``256 MiB``
        yields ``(256.0, SizeUnit.MIB)``.
    """
    selected = SizeUnit.YIB
    for unit in SizeUnit:
        if size <= SIZE_UNIT_BASE ** (int(unit) + 1):
            selected = unit
            break
    return size / SIZE_UNIT_BASE ** int(selected), selected


MAX_CONFIG_SIZE: Final[int] = to_bytes(256, SizeUnit.MIB)
