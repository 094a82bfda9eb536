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
"""Resources factories and the chain-building resolution engine."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


from pybundle.bundle import names
from pybundle.bundle.acquirer import StoreAcquirer
from pybundle.bundle.formats import DEFAULT_REGISTRY, FormatRegistry
from pybundle.bundle.hierarchy import DEFAULT, NO_ANCESTORS, ContextOrderingStrategy, for_fixed_context
from pybundle.bundle.locators import ResourceLocator
from pybundle.bundle.names import CandidateNameStrategy
from pybundle.bundle.resources import BundleResources, EmptyResources, Resources
from pybundle.i18n.locale import Locale
from pybundle.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ResourcesFactory(Protocol):
    """Creates the resources chain for a context type and locale."""

    def get_optional_resources(self, context_type: Any, locale: Locale | str) -> Resources | None: ...


class _NoResourcesFactory:
    def get_optional_resources(self, context_type: Any, locale: Locale | str) -> Resources | None:  # noqa: ARG002
        return None

    def __repr__(self) -> str:
        return "NONE"


NONE: ResourcesFactory = _NoResourcesFactory()
"""Factory that never provides resources."""


class _FunctionResourcesFactory:
    def __init__(self, func: Callable[[Any, Locale], Resources | None]) -> None:
        self._func = func

    def get_optional_resources(self, context_type: Any, locale: Locale | str) -> Resources | None:
        return self._func(context_type, Locale.parse(locale))


ParentFactory = ResourcesFactory | Callable[[Any, Locale], Resources | None]


def as_factory(parent: ParentFactory) -> ResourcesFactory:
    """Accept a factory object or a plain ``(context_type, locale)`` function."""
    if isinstance(parent, ResourcesFactory):
        return parent
    return _FunctionResourcesFactory(parent)


def get_resources(factory: ResourcesFactory, context_type: Any, locale: Locale | str) -> Resources:
    """The factory's resources, or :class:`EmptyResources` when it has none."""
    resources = factory.get_optional_resources(context_type, locale)
    return resources if resources is not None else EmptyResources(context_type)


class ResourceBundleResourcesFactory:
    """Builds resource chains from bundles found along a type's hierarchy.

    Contexts come from the *ordering* strategy; each is turned into at most
    one store by the :class:`StoreAcquirer`. Stores are chained from the
    lowest-priority context to the highest, on top of whatever the *parent*
    factory provides, so the parent is always the last fallback.

    To read a single named bundle regardless of the requesting type, use
    :meth:`for_fixed_context`.
    """

    def __init__(
        self,
        parent: ParentFactory = NONE,
        name_strategy: CandidateNameStrategy = names.CLASS_NAME_STRATEGY,
        ordering: ContextOrderingStrategy = DEFAULT,
        registry: FormatRegistry = DEFAULT_REGISTRY,
        locator: ResourceLocator | None = None,
    ) -> None:
        self._parent = as_factory(parent)
        self._ordering = ordering
        self._acquirer = StoreAcquirer(name_strategy, registry, locator)

    @classmethod
    def for_fixed_context(
        cls,
        anchor: Any,
        *base_names: str,
        resolve_ancestors: bool = False,
        parent: ParentFactory = NONE,
        registry: FormatRegistry = DEFAULT_REGISTRY,
        locator: ResourceLocator | None = None,
    ) -> ResourceBundleResourcesFactory:
        """Factory that always reads the bundles of *anchor*.

        Explicit *base_names* replace the anchor's own name. With
        *resolve_ancestors* the anchor's superclasses and interfaces are
        searched as well.
        """
        name_strategy = names.for_base_names(*base_names) if base_names else names.CLASS_NAME_STRATEGY
        ordering = for_fixed_context(anchor, DEFAULT if resolve_ancestors else NO_ANCESTORS)
        return cls(parent, name_strategy, ordering, registry, locator)

    @property
    def parent(self) -> ResourcesFactory:
        return self._parent

    @property
    def ordering(self) -> ContextOrderingStrategy:
        return self._ordering

    @property
    def acquirer(self) -> StoreAcquirer:
        return self._acquirer

    def get_optional_resources(
        self,
        context_type: Any,
        locale: Locale | str,
        reload: bool = False,
    ) -> Resources | None:
        """Chain of every bundle found for *context_type*, highest priority first.

        Returns the parent factory's resources unchanged when no context has
        a bundle, and ``None`` when the parent has none either.
        """
        locale = Locale.parse(locale)
        contexts = self._ordering.resolving_contexts(context_type)
        chain = self._parent.get_optional_resources(context_type, locale)

        loaded = 0
        for context in reversed(contexts):
            store = self._acquirer.acquire(context, locale, reload=reload)
            if store is None:
                continue
            chain = BundleResources(context_type, store, source=context, fallback=chain)
            loaded += 1

        logger.debug(
            "resources_resolved",
            context_type=names.qualified_name(context_type),
            locale=str(locale),
            contexts=len(contexts),
            bundles=loaded,
        )
        return chain

    def get_resources(self, context_type: Any, locale: Locale | str) -> Resources:
        return get_resources(self, context_type, locale)
