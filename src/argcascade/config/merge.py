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

"""Applying config documents to options values.

Config values have the lowest precedence above the declared defaults: they
only fill fields that command-line parsing left untouched. Whether a field is
untouched is decided by the field's ``UnsetRule``, chosen once when the
schema is derived:

* argument strings are unset while they hold the ``-`` sentinel;
* argument string sequences are unset while every element is the sentinel;
* floats are unset while they equal the default, NaN included;
* fixed arrays and records are unset while structurally equal to the default;
* everything else is unset while identical or equal to the default.
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar, cast

from argcascade._internal.exceptions import ArgcascadeTypeError
from argcascade._internal.logging_utils import structured_extra
from argcascade.core.model_types import LogComponent
from argcascade.schema.registry import derive_schema
from argcascade.schema.types import TypeKind, UnsetRule

from .coercion import coerce_value
from .constants import CONFIG_EMPTY_ARGUMENT, MAX_CONFIG_SIZE
from .document import ConfigDocument, load_config_file
from .validation import validate_config

if TYPE_CHECKING:
    from argcascade.schema.registry import FieldSchema

__all__ = [
    "is_unset",
    "parse_config",
    "parse_config_file",
    "retro_init",
    "retro_init_from_config",
    "retro_init_from_config_file",
]

logger: logging.Logger = logging.getLogger("argcascade.config")

OptionsT = TypeVar("OptionsT")


def _is_nan(value: object) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_unset(rule: UnsetRule, current: object, default: object) -> bool:
    """Return whether ``current`` still holds the unset value for its rule.

    Args:
        rule: Predicate selected for the field at schema derivation.
        current: Value currently held by the field.
        default: Value the field holds on a freshly constructed options value.

    Returns:
        ``True`` when a config value may replace ``current``.
    """
    match rule:
        case UnsetRule.ARGUMENT_STRING:
            return current is None or current == CONFIG_EMPTY_ARGUMENT
        case UnsetRule.ARGUMENT_SEQUENCE:
            if current is None:
                return True
            return all(item == CONFIG_EMPTY_ARGUMENT for item in cast("Iterable[object]", current))
        case UnsetRule.FLOAT:
            # NaN never compares equal, so it is checked separately.
            return current == default or (_is_nan(current) and _is_nan(default))
        case UnsetRule.STRUCTURAL:
            return current == default
        case UnsetRule.IDENTITY:
            return current is default or (type(current) is type(default) and current == default)
        case UnsetRule.NEVER:
            return False


def _apply_entry(options: object, entry: FieldSchema, value: object) -> None:
    typed = coerce_value(entry.type_spec, value)
    match entry.type_spec.kind:
        case TypeKind.OPTION_HANDLER:
            handler = getattr(options, entry.field_id)
            for _ in range(cast("int", typed)):
                handler()
        case TypeKind.ARGUMENT_HANDLER:
            handler = getattr(options, entry.field_id)
            for item in cast("tuple[str, ...]", typed):
                handler(item)
        case _:
            setattr(options, entry.field_id, typed)


def parse_config(options_type: type[OptionsT], config: ConfigDocument | Mapping[str, object]) -> OptionsT:
    """Build an options value from the declared defaults and a config document.

    The document is validated in full before anything is assigned, so a
    malformed document never produces a partially configured value.

    Args:
        options_type: Options dataclass to instantiate.
        config: Parsed document or an equivalent mapping.

    Returns:
        A fresh options value with every present key applied.

    Raises:
        ConfigFileError: If the document is malformed, names an unknown key
            or holds a value that does not coerce.
    """
    document = validate_config(options_type, config)
    schema = derive_schema(options_type)
    options = cast("OptionsT", schema.defaults())
    for key, value in document.items():
        entry = schema.field_for_name(key)
        if entry is not None:
            _apply_entry(options, entry, value)
    return options


def parse_config_file(
    options_type: type[OptionsT],
    path: Path | str,
    *,
    max_size: int = MAX_CONFIG_SIZE,
) -> OptionsT:
    """Read a config file and build an options value from it."""
    return parse_config(options_type, load_config_file(Path(path), max_size=max_size))


def retro_init(current: OptionsT, from_config: OptionsT) -> OptionsT:
    """Fill the fields of ``current`` that are still unset from ``from_config``.

    Neither argument is modified.

    Args:
        current: Options value populated from defaults and the command line.
        from_config: Options value decoded purely from a config file.

    Returns:
        A copy of ``current`` where every unset field holds the config value.

    Raises:
        ArgcascadeTypeError: If the two values are of different types.
    """
    options_type = type(current)
    if type(from_config) is not options_type:
        message = (
            f"cannot merge {type(from_config).__qualname__} into {options_type.__qualname__}"
        )
        raise ArgcascadeTypeError(message)
    schema = derive_schema(options_type)
    defaults = schema.defaults()
    merged = copy.copy(current)
    for entry in schema.value_fields:
        value = getattr(current, entry.field_id)
        if not is_unset(entry.unset_rule, value, getattr(defaults, entry.field_id)):
            continue
        setattr(merged, entry.field_id, getattr(from_config, entry.field_id))
        logger.debug(
            "Field %s taken from config",
            entry.field_id,
            extra=structured_extra(LogComponent.CONFIG, field=entry.field_id, stage=entry.unset_rule),
        )
    return merged


def retro_init_from_config(
    options: OptionsT,
    config: OptionsT | ConfigDocument | Mapping[str, object],
) -> OptionsT:
    """Merge a config into an options value populated from the command line.

    Args:
        options: Options value populated from defaults and the command line.
        config: Another options value of the same type, or a config document
            (or mapping) that is parsed against the options type first.

    Returns:
        The merged copy of ``options``.
    """
    if isinstance(config, type(options)):
        return retro_init(options, config)
    from_config = parse_config(type(options), cast("ConfigDocument | Mapping[str, object]", config))
    return retro_init(options, from_config)


def retro_init_from_config_file(
    options: OptionsT,
    path: Path | str,
    *,
    max_size: int = MAX_CONFIG_SIZE,
) -> OptionsT:
    """Read a config file and merge it into ``options``."""
    document = load_config_file(Path(path), max_size=max_size)
    logger.info(
        "Applying config file %s",
        document.source,
        extra=structured_extra(LogComponent.CONFIG, path=document.source, count=len(document)),
    )
    return retro_init_from_config(options, document)
