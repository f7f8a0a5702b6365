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

"""Pytest entry point that wires shared fixtures and markers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with the custom markers used by the test suite."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line(
        "markers",
        "integration: Integration tests (slower, multiple components)",
    )
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")


@pytest.fixture(autouse=True)
def reset_argcascade_logging() -> Generator[None, None, None]:
    logger = logging.getLogger("argcascade")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers.clear()
    logger.handlers.extend(handlers)
    logger.setLevel(level)
    logger.propagate = propagate
    for name in ("argcascade.cli", "argcascade.config", "argcascade.schema", "argcascade.hooks"):
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing config text to a temporary file.

    Returns:
        Callable taking the file content and returning its path.
    """

    def _write(content: str, name: str = "config.json") -> Path:
        path = tmp_path / name
        _ = path.write_text(content, encoding="utf-8")
        return path

    return _write
