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
"""Resolution-context ordering over class/interface hierarchies.

A requesting type is expanded into the ordered, de-duplicated sequence of
types whose resource bundles are consulted for it:

1. the type itself;
2. its superclass chain, nearest first, excluding ``object``;
3. for each class of that chain in turn, its declared interfaces in
   declaration order, expanded breadth-first (a queued mixin contributes its
   own base first, then its interfaces), the queue draining before the next
   class is considered.

The first time a type is met fixes its position. Classes therefore outrank
interfaces, and every interface reachable from a subclass outranks the
interfaces reachable only from its superclasses, even when a superclass
re-declares one of them.

Traversal runs over a :class:`TypeGraph`, so the same algorithm serves live
Python classes (:class:`PythonTypeGraph`) and explicitly registered graphs
(:class:`StaticTypeGraph`).
"""

from __future__ import annotations

import abc
import typing
from collections import deque
from collections.abc import Hashable, Iterable, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", bound=type)

_INTERFACE_ATTR = "__pybundle_interface__"

# bases that carry no resources of their own
_IGNORED_BASES: frozenset[Any] = frozenset({object, typing.Protocol, typing.Generic, abc.ABC})


def interface(cls: T) -> T:
    """Mark a class as an interface for resource resolution.

    Interfaces never act as a superclass: they are ranked after the whole
    class chain, in the order the classes declare them.

    Usage:
        @interface
        class Greeter(abc.ABC):
            ...
    """
    setattr(cls, _INTERFACE_ATTR, True)
    return cls


def is_interface(cls: Any) -> bool:
    """Whether *cls* itself (not a base of it) is an interface or a Protocol."""
    if not isinstance(cls, type):
        return False
    return bool(vars(cls).get(_INTERFACE_ATTR)) or bool(vars(cls).get("_is_protocol"))


@runtime_checkable
class TypeGraph(Protocol):
    """Direct-supertype and direct-interface accessors over some type system."""

    def supertype(self, node: Any) -> Any | None: ...
    def interfaces(self, node: Any) -> Sequence[Any]: ...


class PythonTypeGraph:
    """TypeGraph over live Python classes.

    The supertype is the first direct base that is not an interface;
    ``object`` and typing plumbing (``Protocol``, ``Generic``, ``ABC``) are
    skipped. Every other direct base, interface or mixin, is reported by
    :meth:`interfaces` in declaration order. Interfaces have no supertype;
    a mixin keeps its own, which is expanded like one more interface.
    """

    def supertype(self, node: Any) -> type | None:
        if not isinstance(node, type) or is_interface(node):
            return None
        for base in node.__bases__:
            if base in _IGNORED_BASES or is_interface(base):
                continue
            return base
        return None

    def interfaces(self, node: Any) -> list[type]:
        if not isinstance(node, type):
            return []
        primary = self.supertype(node)
        return [base for base in node.__bases__ if base not in _IGNORED_BASES and base is not primary]


class StaticTypeGraph:
    """TypeGraph backed by an explicit registry of nodes.

    Useful for type systems that are described rather than reflected, e.g.
    schema names or generated models. Unregistered nodes have no supertype
    and no interfaces.
    """

    def __init__(self) -> None:
        self._supertypes: dict[Hashable, Hashable | None] = {}
        self._interfaces: dict[Hashable, tuple[Hashable, ...]] = {}

    def register(
        self,
        node: Hashable,
        supertype: Hashable | None = None,
        interfaces: Iterable[Hashable] = (),
    ) -> StaticTypeGraph:
        self._supertypes[node] = supertype
        self._interfaces[node] = tuple(interfaces)
        return self

    def supertype(self, node: Any) -> Hashable | None:
        return self._supertypes.get(node)

    def interfaces(self, node: Any) -> tuple[Hashable, ...]:
        return self._interfaces.get(node, ())


@runtime_checkable
class ContextOrderingStrategy(Protocol):
    """Turns a requesting type into its priority-ordered resolution contexts."""

    def resolving_contexts(self, requesting_type: Any) -> tuple[Any, ...]: ...


class HierarchyContextOrdering:
    """Type itself, then superclasses, then interfaces level by level."""

    def __init__(self, graph: TypeGraph | None = None) -> None:
        self._graph: TypeGraph = graph if graph is not None else PythonTypeGraph()

    @property
    def graph(self) -> TypeGraph:
        return self._graph

    def resolving_contexts(self, requesting_type: Any) -> tuple[Any, ...]:
        graph = self._graph

        class_chain: list[Any] = []
        current: Any | None = requesting_type
        while current is not None and current not in class_chain:
            class_chain.append(current)
            current = graph.supertype(current)

        # insertion-ordered set: the class chain takes priority
        resolving: dict[Any, None] = dict.fromkeys(class_chain)
        expanded: set[Any] = set()
        queue: deque[Any] = deque()
        for cls in class_chain:
            queue.extend(graph.interfaces(cls))
            while queue:
                iface = queue.popleft()
                resolving.setdefault(iface)
                if iface in expanded:
                    continue
                expanded.add(iface)
                # a mixin reached here still brings its own base along
                supertype = graph.supertype(iface)
                if supertype is not None:
                    queue.append(supertype)
                queue.extend(graph.interfaces(iface))

        return tuple(resolving)


class NoAncestorsOrdering:
    """Only the requesting type itself; no superclass or interface expansion."""

    def resolving_contexts(self, requesting_type: Any) -> tuple[Any, ...]:
        return (requesting_type,)


class FixedContextOrdering:
    """Orders by a fixed *anchor* type whatever type is requested.

    Pins the lookups of a whole hierarchy to one designated type's bundles.
    The resources built from the result still report the requested type as
    their context type.
    """

    def __init__(self, delegate: ContextOrderingStrategy, anchor: Any) -> None:
        self._delegate = delegate
        self._anchor = anchor

    @property
    def anchor(self) -> Any:
        return self._anchor

    def resolving_contexts(self, requesting_type: Any) -> tuple[Any, ...]:  # noqa: ARG002
        return self._delegate.resolving_contexts(self._anchor)


DEFAULT: ContextOrderingStrategy = HierarchyContextOrdering()

NO_ANCESTORS: ContextOrderingStrategy = NoAncestorsOrdering()


def for_fixed_context(anchor: Any, strategy: ContextOrderingStrategy = DEFAULT) -> FixedContextOrdering:
    return FixedContextOrdering(strategy, anchor)

