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
"""I18n subsystem auto-configuration from :class:`~pybundle.core.config.Config`.

Recognised keys (defaults in ``pybundle-defaults.yaml``)::

    pybundle:
      i18n:
        enabled: true
        base-path: ""              # empty: bundles live beside the classes
        default-locale: ""         # empty: platform locale
        base-names: []             # extra bundle names to try
        base-names-mode: after     # before | after | only
        resolve-ancestors: true
        formats: [properties.xml, yaml, json]
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from pybundle.bundle import names
from pybundle.bundle.concern import ResourceBundleResourceI18n, set_default_concern
from pybundle.bundle.factory import ResourceBundleResourcesFactory
from pybundle.bundle.formats import FormatRegistry
from pybundle.bundle.hierarchy import DEFAULT, NO_ANCESTORS
from pybundle.bundle.locators import DirectoryResourceLocator, PackageResourceLocator, ResourceLocator
from pybundle.core.config import Config, config_properties
from pybundle.i18n.adapters.resource_bundle import ResourceBundleMessageSource
from pybundle.i18n.locale import AcceptHeaderLocaleResolver
from pybundle.logging import get_logger

logger = get_logger(__name__)


@config_properties(prefix="pybundle.i18n")
class BundleProperties(BaseModel):
    """Bound view of the ``pybundle.i18n`` configuration section."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = True
    base_path: str = Field(default="", alias="base-path")
    default_locale: str = Field(default="", alias="default-locale")
    base_names: list[str] = Field(default_factory=list, alias="base-names")
    base_names_mode: Literal["before", "after", "only"] = Field(default="after", alias="base-names-mode")
    resolve_ancestors: bool = Field(default=True, alias="resolve-ancestors")
    formats: list[str] = Field(default_factory=lambda: ["properties.xml", "yaml", "json"])


def _name_strategy(props: BundleProperties) -> names.CandidateNameStrategy:
    if not props.base_names:
        return names.CLASS_NAME_STRATEGY
    if props.base_names_mode == "before":
        return names.for_base_names_then_class_name(*props.base_names)
    if props.base_names_mode == "only":
        return names.for_base_names(*props.base_names)
    return names.for_class_name_then_base_names(*props.base_names)


def create_resources_factory(props: BundleProperties) -> ResourceBundleResourcesFactory:
    locator: ResourceLocator = (
        DirectoryResourceLocator(props.base_path) if props.base_path else PackageResourceLocator()
    )
    return ResourceBundleResourcesFactory(
        name_strategy=_name_strategy(props),
        ordering=DEFAULT if props.resolve_ancestors else NO_ANCESTORS,
        registry=FormatRegistry.from_format_ids(props.formats),
        locator=locator,
    )


def configure_resources(config: Config, install: bool = True) -> ResourceBundleResourceI18n | None:
    """Build the resource concern described by *config*.

    Returns ``None`` when ``pybundle.i18n.enabled`` is false. With *install*
    the concern becomes the process default.
    """
    props = config.bind(BundleProperties)
    if not props.enabled:
        logger.info("i18n_disabled")
        return None

    concern = ResourceBundleResourceI18n(create_resources_factory(props))
    if props.default_locale:
        concern.set_locale(props.default_locale)
    if install:
        set_default_concern(concern)

    logger.info(
        "i18n_configured",
        base_path=props.base_path or "<packages>",
        formats=props.formats,
        resolve_ancestors=props.resolve_ancestors,
        locale=str(concern.get_locale()),
    )
    return concern


def create_message_source(config: Config) -> ResourceBundleMessageSource:
    base_path = str(config.get("pybundle.i18n.base-path") or "i18n/")
    default_locale = str(config.get("pybundle.i18n.default-locale") or "en")
    return ResourceBundleMessageSource(base_path=base_path, default_locale=default_locale)


def create_locale_resolver(config: Config) -> AcceptHeaderLocaleResolver:
    default_locale = str(config.get("pybundle.i18n.default-locale") or "en")
    return AcceptHeaderLocaleResolver(default_locale=default_locale)
