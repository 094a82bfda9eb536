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
"""StoreAcquirer: materializes the bundle of one resolution context."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


from pybundle.bundle.formats import DEFAULT_REGISTRY, FormatRegistry
from pybundle.bundle.locators import PackageResourceLocator, ResourceLocator, to_resource_name
from pybundle.bundle.names import CLASS_NAME_STRATEGY, CandidateNameStrategy
from pybundle.i18n.locale import Locale, to_bundle_name
from pybundle.logging import get_logger

logger = get_logger(__name__)


class StoreAcquirer:
    """Finds and decodes the first available bundle for a resolution context.

    Candidate names are tried in order and, for each, the registered formats
    in order. The first format with a resource in some locale tier yields the
    store: every tier found for it, merged with the most specific winning.
    Missing resources are skipped silently; resources that exist but cannot
    be decoded raise :class:`~pybundle.kernel.exceptions.ResourceDecodeError`.
    """

    def __init__(
        self,
        name_strategy: CandidateNameStrategy = CLASS_NAME_STRATEGY,
        registry: FormatRegistry = DEFAULT_REGISTRY,
        locator: ResourceLocator | None = None,
    ) -> None:
        self._name_strategy = name_strategy
        self._registry = registry
        self._locator: ResourceLocator = locator if locator is not None else PackageResourceLocator()

    @property
    def registry(self) -> FormatRegistry:
        return self._registry

    @property
    def locator(self) -> ResourceLocator:
        return self._locator

    def acquire(self, context: Any, locale: Locale | str, reload: bool = False) -> Mapping[str, Any] | None:
        """Return the decoded store for *context* in *locale*, or ``None``.

        The first format with a resource in any tier wins. Its less specific
        tiers are merged behind the most specific one found, so a partial
        translation still falls back to the untranslated keys.
        """
        boundary = self._locator.boundary(context)
        if boundary is None:
            return None

        tiers = Locale.parse(locale).candidates()
        for base_name in self._name_strategy(context):
            bundle_names = [to_bundle_name(base_name, tier) for tier in tiers]
            for format_id in self._registry.formats:
                found: list[tuple[str, bytes]] = []
                for bundle_name in bundle_names:
                    resource_name = to_resource_name(bundle_name, format_id)
                    data = self._locator.read(boundary, resource_name, reload=reload)
                    if data is not None:
                        found.append((resource_name, data))
                if not found:
                    continue

                store: dict[str, Any] = {}
                # least specific first, so more specific tiers overwrite
                for resource_name, data in reversed(found):
                    store.update(self._registry.decode(format_id, data, resource_name))
                logger.debug(
                    "bundle_loaded",
                    resource=found[0][0],
                    format=format_id,
                    tiers=len(found),
                    keys=len(store),
                )
                return store
        return None
