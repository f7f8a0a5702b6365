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

"""Command-line support for argcascade.

``parser`` turns options schemas into ``argparse`` parsers for programs;
``app`` is the ``argcascade`` console script.
"""

from __future__ import annotations

from .app import load_options_type, main
from .parser import OptionsArgumentParser, build_parser, parse_args

__all__ = ["OptionsArgumentParser", "build_parser", "load_options_type", "main", "parse_args"]
