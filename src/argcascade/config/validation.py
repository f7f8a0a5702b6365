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

"""Dry validation of config documents against an options schema."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from argcascade._internal.logging_utils import structured_extra
from argcascade.core.model_types import LogComponent
from argcascade.schema.registry import derive_schema

from .coercion import coerce_value
from .constants import MAX_CONFIG_SIZE
from .document import ConfigDocument, load_config_file
from .errors import CoercionError, ConfigFileError, InvalidConfigValueError, UnknownConfigKeyError

if TYPE_CHECKING:
    from argcascade.schema.registry import OptionsSchema

__all__ = ["collect_config_errors", "validate_config", "validate_config_file"]

logger: logging.Logger = logging.getLogger("argcascade.config")


def _check_entry(schema: OptionsSchema, key: str, value: object) -> ConfigFileError | None:
    entry = schema.field_for_name(key)
    if entry is None:
        return UnknownConfigKeyError(key)
    try:
        _ = coerce_value(entry.type_spec, value)
    except CoercionError as exc:
        error = InvalidConfigValueError(key, value, exc)
        error.__cause__ = exc
        return error
    return None


def collect_config_errors(options_type: type, config: ConfigDocument | Mapping[str, object]) -> list[ConfigFileError]:
    """Check every entry of a config document and report all problems.

    Args:
        options_type: Options dataclass the document is meant for.
        config: Parsed document or an equivalent mapping.

    Returns:
        One error per offending entry, in document order; empty when valid.

    Raises:
        MalformedConfigDocumentError: If ``config`` is not a JSON object.
    """
    schema = derive_schema(options_type)
    document = ConfigDocument.from_mapping(config)
    errors: list[ConfigFileError] = []
    for key, value in document.items():
        error = _check_entry(schema, key, value)
        if error is not None:
            errors.append(error)
    return errors


def validate_config(options_type: type, config: ConfigDocument | Mapping[str, object]) -> ConfigDocument:
    """Validate a config document without applying it.

    Comment keys (``//...``) are ignored. Every other key must be an external
    name of a field and its value must coerce to the field's type. Nothing
    is assigned; the options type is not even instantiated.

    Args:
        options_type: Options dataclass the document is meant for.
        config: Parsed document or an equivalent mapping.

    Returns:
        The validated document.

    Raises:
        MalformedConfigDocumentError: If ``config`` is not a JSON object.
        UnknownConfigKeyError: On the first key that matches no field.
        InvalidConfigValueError: On the first value that does not coerce.
    """
    schema = derive_schema(options_type)
    document = ConfigDocument.from_mapping(config)
    for key, value in document.items():
        error = _check_entry(schema, key, value)
        if error is not None:
            raise error from error.__cause__
    logger.debug(
        "Config document is valid for %s",
        options_type.__qualname__,
        extra=structured_extra(LogComponent.CONFIG, path=document.source, count=len(document)),
    )
    return document


def validate_config_file(
    options_type: type,
    path: Path | str,
    *,
    max_size: int = MAX_CONFIG_SIZE,
) -> ConfigDocument:
    """Read a config file and validate it without applying it.

    Args:
        options_type: Options dataclass the file is meant for.
        path: Config file location.
        max_size: Size cap in bytes.

    Returns:
        The validated document.
    """
    return validate_config(options_type, load_config_file(Path(path), max_size=max_size))
