# Copyright 2026 Firefly Software Solutions Inc.
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
"""Candidate-name strategies: which bundle names to try for a resolution context."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pybundle.kernel.exceptions import ResourceConfigurationError

CandidateNameStrategy = Callable[[Any], Iterable[str]]


def qualified_name(context: Any) -> str:
    """Dotted name of a resolution context: ``package.module.ClassName``.

    Nested classes keep their qualified path (``module.Outer.Inner``). Nodes
    of an explicit type graph use ``str(node)``.
    """
    if context is None:
        raise ResourceConfigurationError("No resolution context to derive a bundle name from.")
    if isinstance(context, type):
        return f"{context.__module__}.{context.__qualname__}"
    return str(context)


def class_name_strategy(context: Any) -> list[str]:
    """The context's own qualified name."""
    return [qualified_name(context)]


CLASS_NAME_STRATEGY: CandidateNameStrategy = class_name_strategy


def for_base_names_then_class_name(*base_names: str) -> CandidateNameStrategy:
    """The given base names first, then the context's qualified name."""

    def strategy(context: Any) -> list[str]:
        return [*base_names, qualified_name(context)]

    return strategy


def for_class_name_then_base_names(*base_names: str) -> CandidateNameStrategy:
    """The context's qualified name first, then the given base names."""

    def strategy(context: Any) -> list[str]:
        return [qualified_name(context), *base_names]

    return strategy


def for_base_names(*base_names: str) -> CandidateNameStrategy:
    """Only the given base names, in place of the context's name.

    Called without names this falls back to the context name, and fails
    with :class:`ResourceConfigurationError` when there is no context.
    """
    if not base_names:
        return for_class_name_then_base_names()

    names = list(base_names)

    def strategy(context: Any) -> list[str]:  # noqa: ARG001
        return list(names)

    return strategy
