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

"""Strategies producing JSON trees and option values."""

from __future__ import annotations

from hypothesis import strategies as st

from argcascade.config.constants import CONFIG_COMMENT_PREFIX, CONFIG_EMPTY_ARGUMENT
from argcascade.json import JSONValue


def json_scalars() -> st.SearchStrategy[JSONValue]:
    """Return a strategy for JSON leaves (no NaN: JSON cannot encode it)."""
    return st.one_of(
        st.none(),
        st.booleans(),
        st.integers(min_value=-(2**53), max_value=2**53),
        st.floats(allow_nan=False, allow_infinity=False),
        st.text(max_size=10),
    )


def json_values(max_leaves: int = 10) -> st.SearchStrategy[JSONValue]:
    """Return a strategy for arbitrary, possibly nested JSON values.

    Args:
        max_leaves: Upper bound on the number of scalar leaves.

    Returns:
        Hypothesis strategy producing JSON-compatible Python objects.
    """
    return st.recursive(
        json_scalars(),
        lambda children: st.one_of(
            st.lists(children, max_size=4),
            st.dictionaries(st.text(max_size=6), children, max_size=4),
        ),
        max_leaves=max_leaves,
    )


def non_object_json() -> st.SearchStrategy[JSONValue]:
    """Return a strategy for JSON values whose root is not an object."""
    return st.one_of(json_scalars(), st.lists(json_values(), max_size=4))


def comment_keys() -> st.SearchStrategy[str]:
    """Return a strategy for keys that mark config comments."""
    return st.text(max_size=12).map(lambda suffix: f"{CONFIG_COMMENT_PREFIX}{suffix}")


def non_sentinel_strings() -> st.SearchStrategy[str]:
    """Return a strategy for strings other than the unset-argument sentinel."""
    return st.text(max_size=20).filter(lambda text: text != CONFIG_EMPTY_ARGUMENT)
