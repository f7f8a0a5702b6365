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

"""Config documents: size-bounded, comment-stripped JSON objects."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Final

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from argcascade._internal.logging_utils import structured_extra
from argcascade.core.model_types import LogComponent
from argcascade.json import JSONValue

from .constants import CONFIG_COMMENT_PREFIX, MAX_CONFIG_SIZE
from .errors import ConfigFileTooLargeError, ConfigReadError, MalformedConfigDocumentError

__all__ = [
    "ConfigDocument",
    "load_config_file",
    "load_document",
    "read_config_file",
]

logger: logging.Logger = logging.getLogger("argcascade.config")

_JSON_ADAPTER: Final[TypeAdapter[JSONValue]] = TypeAdapter(JSONValue)
_ROOT_MESSAGE: Final[str] = "config must contain a single object"


def _is_comment(key: str) -> bool:
    return key.startswith(CONFIG_COMMENT_PREFIX)


@dataclass(slots=True, frozen=True, eq=False)
class ConfigDocument(Mapping[str, JSONValue]):
    """Parsed config file content.

    The mapping keeps the file's key order and never contains comment keys:
    they are dropped before their values are looked at.

    Attributes:
        entries: Read-only mapping of config keys to JSON values.
        source: File the document was read from, if any.
    """

    entries: Mapping[str, JSONValue] = field(default_factory=lambda: MappingProxyType({}))
    source: Path | None = None

    @classmethod
    def from_mapping(cls, data: object, *, source: Path | None = None) -> ConfigDocument:
        """Build a document from an in-memory tree.

        Values are checked to be JSON-compatible with pydantic's ``JsonValue``.

        Args:
            data: Mapping produced by a JSON parser or built in code.
            source: Optional origin of the data, used in messages.

        Returns:
            The document.

        Raises:
            MalformedConfigDocumentError: If ``data`` is not a string-keyed
                mapping of JSON values.
        """
        if isinstance(data, ConfigDocument):
            return data
        if not isinstance(data, Mapping):
            raise MalformedConfigDocumentError(_ROOT_MESSAGE, source)
        entries: dict[str, JSONValue] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                raise MalformedConfigDocumentError(f"config keys must be strings, got {key!r}", source)
            if _is_comment(key):
                continue
            try:
                entries[key] = _JSON_ADAPTER.validate_python(value)
            except PydanticValidationError as exc:
                detail = f"value of `{key}` is not JSON-compatible"
                raise MalformedConfigDocumentError(detail, source) from exc
        return cls(MappingProxyType(entries), source)

    def __getitem__(self, key: str) -> JSONValue:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def load_document(
    content: bytes | str,
    *,
    source: Path | None = None,
    max_size: int = MAX_CONFIG_SIZE,
) -> ConfigDocument:
    """Parse raw config content into a document.

    Args:
        content: UTF-8 encoded bytes, or already decoded text.
        source: Origin of the content, used in messages.
        max_size: Size cap in bytes, checked before parsing.

    Returns:
        The parsed document.

    Raises:
        ConfigFileTooLargeError: If the content exceeds ``max_size``.
        MalformedConfigDocumentError: If the content is not a JSON object.
    """
    raw = content.encode("utf-8") if isinstance(content, str) else content
    if len(raw) > max_size:
        raise ConfigFileTooLargeError(len(raw), max_size)
    try:
        parsed: object = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise MalformedConfigDocumentError(f"config is not valid UTF-8: {exc}", source) from exc
    except json.JSONDecodeError as exc:
        raise MalformedConfigDocumentError(f"config is not valid JSON: {exc}", source) from exc
    except (ValueError, RecursionError) as exc:
        # Integer-digit limit and nesting depth are not JSONDecodeError.
        raise MalformedConfigDocumentError(f"config cannot be parsed: {exc}", source) from exc
    if not isinstance(parsed, dict):
        raise MalformedConfigDocumentError(_ROOT_MESSAGE, source)
    entries = {key: value for key, value in parsed.items() if not _is_comment(key)}
    return ConfigDocument(MappingProxyType(entries), source)


def read_config_file(path: Path | str, *, max_size: int = MAX_CONFIG_SIZE) -> bytes:
    """Read a config file, rejecting oversized files before reading them.

    Args:
        path: Config file location.
        max_size: Size cap in bytes.

    Returns:
        Raw file content.

    Raises:
        ConfigFileTooLargeError: If the file exceeds ``max_size``.
        ConfigReadError: If the file cannot be read.
    """
    config_path = Path(path)
    try:
        size = config_path.stat().st_size
        if size > max_size:
            raise ConfigFileTooLargeError(size, max_size)
        with config_path.open("rb") as handle:
            content = handle.read(max_size + 1)
    except OSError as exc:
        raise ConfigReadError(config_path, exc) from exc
    if len(content) > max_size:
        raise ConfigFileTooLargeError(len(content), max_size)
    logger.debug(
        "Read config file %s (%d bytes)",
        config_path,
        len(content),
        extra=structured_extra(LogComponent.CONFIG, path=config_path, size=len(content)),
    )
    return content


def load_config_file(path: Path | str, *, max_size: int = MAX_CONFIG_SIZE) -> ConfigDocument:
    """Read and parse a config file.

    Args:
        path: Config file location.
        max_size: Size cap in bytes.

    Returns:
        The parsed document, remembering its source path.
    """
    config_path = Path(path)
    return load_document(read_config_file(config_path, max_size=max_size), source=config_path, max_size=max_size)
