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

"""Structured logging utilities shared across argcascade components.

Every argcascade module logs through a child of the ``argcascade`` logger and
attaches a :class:`StructuredLogExtra` payload built by
:func:`structured_extra`. The formatters below render those payloads either
as a trailing ``key=value`` suffix (text) or as top-level JSON keys.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final, Literal, TypedDict, Unpack, cast, override

from argcascade.core.model_types import LogComponent, LogFormat
from argcascade.json import normalize_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "argcascade"
LOG_FORMAT_ENV: Final[str] = "ARGCASCADE_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "ARGCASCADE_LOG_LEVEL"

_LEVELS_BY_NAME: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = cast(
    "tuple[Literal['text', 'json'], ...]",
    tuple(format_.value for format_ in LogFormat),
)
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = cast(
    "tuple[Literal['debug', 'info', 'warning', 'error'], ...]",
    tuple(_LEVELS_BY_NAME),
)


def _as_path(value: object) -> str:
    return os.fspath(cast("str | os.PathLike[str]", value))


def _as_int(value: object) -> int:
    return int(cast("int | str", value))


# Ordered: JSON payloads and text suffixes list fields in this order.
_FIELD_CONVERTERS: Final[dict[str, Callable[[object], object]]] = {
    "path": _as_path,
    "key": str,
    "field": str,
    "hook": str,
    "priority": _as_int,
    "stage": str,
    "count": _as_int,
    "size": _as_int,
}
STRUCTURED_FIELDS: Final[tuple[str, ...]] = ("component", *_FIELD_CONVERTERS, "details")


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Logging setup applied by :func:`configure_logging`."""

    format: LogFormat
    level: int
    level_name: str


def _structured_items(record: logging.LogRecord) -> list[tuple[str, object]]:
    return [(name, getattr(record, name)) for name in STRUCTURED_FIELDS if hasattr(record, name)]


class JSONLogFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_structured_items(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """Single-line formatter: ``[LEVEL] message (component=..., field=...)``."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        items = [(name, value) for name, value in _structured_items(record) if name != "details"]
        if not items:
            return line
        head, sep, tail = line.partition("\n")
        suffix = ", ".join(f"{name}={value}" for name, value in items)
        return f"{head} ({suffix}){sep}{tail}"


def _resolve(explicit: object, env_name: str) -> object | None:
    if explicit is not None:
        return explicit
    return os.getenv(env_name) or None


def _level_from(value: object) -> tuple[int, str]:
    if isinstance(value, int):
        return value, logging.getLevelName(value).lower()
    name = str(value).strip().lower()
    if name not in _LEVELS_BY_NAME:
        msg = f"Unknown log level '{value}'"
        raise ValueError(msg)
    return _LEVELS_BY_NAME[name], name


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Install a single stream handler on the ``argcascade`` logger.

    Args:
        log_format: ``text`` or ``json``. ``None`` consults
            ``ARGCASCADE_LOG_FORMAT`` and falls back to ``text``.
        log_level: Level name or number. ``None`` consults
            ``ARGCASCADE_LOG_LEVEL`` and falls back to ``info``.

    Returns:
        The applied configuration.

    Raises:
        ValueError: If the format or level name is not recognised.
    """
    raw_format = _resolve(log_format, LOG_FORMAT_ENV)
    selected_format = LogFormat.from_str(str(raw_format)) if raw_format is not None else LogFormat.TEXT
    raw_level = _resolve(log_level, LOG_LEVEL_ENV)
    level, level_name = _level_from(raw_level if raw_level is not None else "info")

    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter() if selected_format is LogFormat.JSON else TextLogFormatter())
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False
    for component in LogComponent:
        logging.getLogger(f"{ROOT_LOGGER_NAME}.{component.value}").setLevel(level)
    return LogConfig(format=selected_format, level=level, level_name=level_name)


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Typed ``extra`` payload accepted by argcascade log records."""

    path: str
    key: str
    field: str
    hook: str
    priority: int
    stage: str
    count: int
    size: int
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    path: str | os.PathLike[str]
    key: str
    field: str
    hook: str
    priority: int
    stage: str
    count: int
    size: int
    details: Mapping[str, object]


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Build the ``extra`` mapping for a log call.

    ``None`` values and empty ``details`` are dropped; paths become strings
    and numeric fields become ``int``.

    Args:
        component: Component emitting the record.
        **kwargs: Optional structured fields.

    Returns:
        Mapping to pass as ``extra=`` to the logger.
    """
    payload: dict[str, object] = {"component": component}
    raw = cast("dict[str, object]", kwargs)
    for name, convert in _FIELD_CONVERTERS.items():
        value = raw.get(name)
        if value is not None:
            payload[name] = convert(value)
    details = raw.get("details")
    if isinstance(details, Mapping) and details:
        payload["details"] = dict(cast("Mapping[str, object]", details))
    return cast("StructuredLogExtra", payload)


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "JSONLogFormatter",
    "LogConfig",
    "StructuredLogExtra",
    "TextLogFormatter",
    "configure_logging",
    "structured_extra",
]
