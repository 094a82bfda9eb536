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
"""Resources: immutable key lookups chained to an optional fallback.

A chain is built from the lowest-priority store upward, so every node can
point at the node built before it::

    BundleResources(Impl) -> BundleResources(BaseImpl) -> ... -> parent chain

Lookups check the local store first and then delegate down the chain. The
``find_*`` methods return ``None`` when nothing is found; the ``get_*``
methods raise :class:`MissingResourceKeyError` instead.
"""

from __future__ import annotations

import abc
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, TypeVar

from pybundle.kernel.exceptions import MissingResourceKeyError, ResourceConfigurationError

V = TypeVar("V")

_TRUE = frozenset({"true", "yes", "on", "1"})
_FALSE = frozenset({"false", "no", "off", "0"})


class Resources(abc.ABC):
    """Read-only resource access for one requesting type."""

    def __init__(self, context_type: Any, fallback: Resources | None = None) -> None:
        self._context_type = context_type
        self._fallback = fallback

    @property
    def context_type(self) -> Any:
        """The type the chain was requested for (used in diagnostics)."""
        return self._context_type

    @property
    def fallback(self) -> Resources | None:
        return self._fallback

    @abc.abstractmethod
    def find_local(self, key: str) -> Any | None:
        """Value stored in this node only, without consulting the fallback."""

    def has_local(self, key: str) -> bool:
        return self.find_local(key) is not None

    def chain(self) -> Iterator[Resources]:
        """This node followed by every fallback node, in lookup order."""
        node: Resources | None = self
        while node is not None:
            yield node
            node = node.fallback

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def find_object(self, key: str) -> Any | None:
        for node in self.chain():
            value = node.find_local(key)
            if value is not None:
                return value
        return None

    def get_object(self, key: str) -> Any:
        return self._require(self.find_object(key), key)

    def has_resource(self, key: str) -> bool:
        """Whether any node of the whole chain defines *key*."""
        return self.find_object(key) is not None

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def find_string(self, key: str, *args: Any) -> str | None:
        """The string for *key*, with ``{0}``, ``{1}``... replaced by *args*.

        Raises:
            ResourceConfigurationError: the nearest value for *key* is not a string.
        """
        value = self.find_object(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ResourceConfigurationError(
                f"Resource with key '{key}' is not a string: {type(value).__name__}",
                code="RESOURCE_NOT_STRING",
                context={"key": key},
            )
        return format_message(value, args) if args else value

    def get_string(self, key: str, *args: Any) -> str:
        return self._require(self.find_string(key, *args), key)

    # ------------------------------------------------------------------
    # Typed values parsed from strings
    # ------------------------------------------------------------------

    def find_bool(self, key: str) -> bool | None:
        return self._find_converted(key, _to_bool, "boolean")

    def get_bool(self, key: str) -> bool:
        return self._require(self.find_bool(key), key)

    def find_int(self, key: str) -> int | None:
        return self._find_converted(key, int, "integer")

    def get_int(self, key: str) -> int:
        return self._require(self.find_int(key), key)

    def find_float(self, key: str) -> float | None:
        return self._find_converted(key, float, "number")

    def get_float(self, key: str) -> float:
        return self._require(self.find_float(key), key)

    def find_path(self, key: str) -> Path | None:
        return self._find_converted(key, Path, "path")

    def get_path(self, key: str) -> Path:
        return self._require(self.find_path(key), key)

    # ------------------------------------------------------------------
    # Chaining
    # ------------------------------------------------------------------

    def with_fallback(self, fallback: Resources | None) -> Resources:
        """These resources falling back to *fallback*; ``self`` when it is ``None``."""
        if fallback is None:
            return self
        return ChildResources(self, fallback)

    def _find_converted(self, key: str, convert: Callable[[str], V], kind: str) -> V | None:
        text = self.find_string(key)
        if text is None:
            return None
        try:
            return convert(text.strip())
        except ValueError as exc:
            raise ResourceConfigurationError(
                f"Resource with key '{key}' is not a valid {kind}: '{text}'",
                code="RESOURCE_INVALID_VALUE",
                context={"key": key, "kind": kind},
            ) from exc

    def _require(self, value: V | None, key: str) -> V:
        if value is None:
            raise MissingResourceKeyError(key, self._context_type)
        return value


class BundleResources(Resources):
    """A node backed by one decoded bundle.

    *source* is the resolution context the bundle was loaded for, which may
    differ from *context_type* (an ancestor, an interface, or a fixed anchor).
    """

    def __init__(
        self,
        context_type: Any,
        values: Mapping[str, Any],
        source: Any = None,
        fallback: Resources | None = None,
    ) -> None:
        super().__init__(context_type, fallback)
        self._values: Mapping[str, Any] = MappingProxyType(dict(values))
        self._source = context_type if source is None else source

    @property
    def source(self) -> Any:
        return self._source

    @property
    def values(self) -> Mapping[str, Any]:
        return self._values

    def find_local(self, key: str) -> Any | None:
        return self._values.get(key)

    def __repr__(self) -> str:
        return f"BundleResources(source={self._source!r}, keys={len(self._values)})"


class ChildResources(Resources):
    """Decorates a whole chain so that it falls back to another chain."""

    def __init__(self, resources: Resources, fallback: Resources) -> None:
        super().__init__(resources.context_type, fallback)
        self._resources = resources

    def find_local(self, key: str) -> Any | None:
        return self._resources.find_object(key)


class EmptyResources(Resources):
    """Resources with no definitions: every lookup is absent."""

    def __init__(self, context_type: Any = None) -> None:
        super().__init__(context_type)

    def find_local(self, key: str) -> Any | None:  # noqa: ARG002
        return None

    def __repr__(self) -> str:
        return f"EmptyResources(context_type={self.context_type!r})"


def format_message(template: str, args: tuple[Any, ...]) -> str:
    """Replace ``{0}``, ``{1}``, ... placeholders with *args*."""
    result = template
    for idx, arg in enumerate(args):
        result = result.replace(f"{{{idx}}}", str(arg))
    return result


def _to_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(text)
