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

"""Free-standing validation helpers for option values.

Each helper raises ``ValidationError`` with the message
``invalid option <name>: <detail>.`` when its check fails. They combine with
field declarations through ``functools.partial``:

    >>> from functools import partial
    >>> @dataclass
    ... class Options:
    ...     num: int = option("num", default=1, validate=partial(validate_positive, "num"))
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Final, Protocol

from argcascade._internal.exceptions import CLIException, ValidationError

from .strings import parse_range

__all__ = [
    "VALIDATION_ERROR_FORMAT",
    "validate",
    "validate_file_exists",
    "validate_file_extension",
    "validate_file_writable",
    "validate_files_exist",
    "validate_positive",
    "validate_range_non_negative_ascending",
]

VALIDATION_ERROR_FORMAT: Final[str] = "invalid option {option}: {msg}."


class _SupportsGreaterThanZero(Protocol):
    def __gt__(self, other: int, /) -> bool: ...


def validate(option: str, is_valid: bool, msg: str = "must be greater than zero") -> None:  # noqa: FBT001  # JUSTIFIED: the predicate outcome is the subject of the call
    """Raise ``ValidationError`` for ``option`` unless ``is_valid``.

    Args:
        option: Option name used in the message.
        is_valid: Outcome of the check.
        msg: Failure detail.

    Raises:
        ValidationError: If ``is_valid`` is false.
    """
    if not is_valid:
        raise ValidationError(VALIDATION_ERROR_FORMAT.format(option=option, msg=msg))


def validate_positive(option: str, value: _SupportsGreaterThanZero, msg: str = "must be greater than zero") -> None:
    """Check that ``value`` is greater than zero."""
    validate(option, value > 0, msg)


def validate_range_non_negative_ascending(
    option: str,
    range_text: str | None,
    msg: str = "0 <= <from> < <to> must hold",
) -> None:
    """Check that a ``x..y`` range satisfies ``0 <= x < y``.

    A ``None`` range is not checked.

    Raises:
        CLIException: If the range is malformed.
        ValidationError: If the bounds are negative or not ascending.
    """
    if range_text is None:
        return
    start, stop = parse_range(range_text)
    validate(option, 0 <= start < stop, msg)


def validate_file_exists(option: str, file: str | Path, msg: str = "cannot open file `{}`") -> None:
    """Check that ``file`` exists."""
    validate(option, Path(file).exists(), msg.format(file))


def validate_files_exist(option: str, files: Iterable[str | Path], msg: str = "cannot open file `{}`") -> None:
    """Check that every file of ``files`` exists."""
    for file in files:
        validate_file_exists(option, file, msg)


def validate_file_extension(
    option: str,
    file: str | Path,
    extensions: Iterable[str],
    msg: str = "expected one of {extensions} but got {file}",
) -> None:
    """Check that ``file`` ends with one of ``extensions`` (dots included)."""
    allowed = tuple(extensions)
    name = str(file)
    validate(option, name.endswith(allowed), msg.format(extensions=", ".join(allowed), file=name))


def validate_file_writable(
    option: str,
    file: str | Path,
    msg: str = "cannot open file `{file}` for writing: {error}",
) -> None:
    """Check that ``file`` can be opened for appending.

    A file that did not exist before the check is removed again.

    Raises:
        CLIException: If the file cannot be opened for writing.
    """
    path = Path(file)
    created = not path.exists()
    try:
        with path.open("a", encoding="utf-8"):
            pass
    except OSError as exc:
        detail = msg.format(file=path, error=exc.strerror or exc)
        raise CLIException(VALIDATION_ERROR_FORMAT.format(option=option, msg=detail)) from exc
    if created:
        path.unlink()
