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

"""End-to-end config resolution scenarios."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from argcascade import (
    ConfigFileError,
    cleanup_scope,
    load_config_file,
    parse_args,
    process_options,
    retro_init,
    retro_init_from_config,
    validate_config,
)
from argcascade.config import InvalidConfigValueError, TypeMismatchError, UnknownConfigKeyError
from tests.fixtures.options import HookedOptions, ScenarioOptions

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

pytestmark = pytest.mark.integration

DOCUMENT = '{"file": "/x", "num": 42}'


def test_config_fills_options_left_untouched_by_the_command_line(write_config: Callable[..., Path]) -> None:
    document = validate_config(ScenarioOptions, load_config_file(write_config(DOCUMENT)))
    cli = parse_args(ScenarioOptions, [])
    assert cli == ScenarioOptions(file="-", num=1337)
    assert retro_init_from_config(cli, document) == ScenarioOptions(file="/x", num=42)


def test_command_line_wins_over_config(write_config: Callable[..., Path]) -> None:
    document = load_config_file(write_config(DOCUMENT))
    cli = parse_args(ScenarioOptions, ["/cli/path", "--num", "13"])
    assert retro_init_from_config(cli, document) == ScenarioOptions(file="/cli/path", num=13)


def test_unknown_key_aborts_the_load(write_config: Callable[..., Path]) -> None:
    document = load_config_file(write_config('{"bogus_key": 1}'))
    with pytest.raises(UnknownConfigKeyError) as exc_info:
        _ = validate_config(ScenarioOptions, document)
    assert exc_info.value.key == "bogus_key"


def test_malformed_value_aborts_the_load(write_config: Callable[..., Path]) -> None:
    cli = ScenarioOptions()
    document = load_config_file(write_config('{"file": "/x", "num": "not-a-number"}'))
    with pytest.raises(InvalidConfigValueError) as exc_info:
        _ = retro_init_from_config(cli, document)
    error = exc_info.value
    assert (error.key, error.value) == ("num", "not-a-number")
    assert isinstance(error.cause, TypeMismatchError)
    assert cli == ScenarioOptions()


def test_config_errors_share_a_base_class() -> None:
    with pytest.raises(ConfigFileError):
        _ = validate_config(ScenarioOptions, {"bogus_key": 1})


def test_full_lifecycle() -> None:
    options = retro_init(HookedOptions(), HookedOptions())
    with cleanup_scope(process_options(options)) as resolved:
        assert resolved.events == ["pre-first", "pre-a", "pre-b", "P1", "P2", "P3"]
    assert options.events[-2:] == ["close", "close-last"]
