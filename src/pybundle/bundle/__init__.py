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
"""Resource bundle resolution along type hierarchies.

Typical use::

    from pybundle.bundle import ResourceBundleResourcesFactory

    resources = ResourceBundleResourcesFactory().get_resources(MyWidget, "pt-BR")
    resources.get_string("title")
"""

from pybundle.bundle.acquirer import StoreAcquirer
from pybundle.bundle.concern import (
    EMPTY_CONCERN,
    ResourceBundleResourceI18n,
    ResourceI18n,
    ResourcesMixin,
    concern_scope,
    get_concern,
    get_default_concern,
    get_locale,
    get_resources,
    set_default_concern,
    set_locale,
)
from pybundle.bundle.factory import NONE, ResourceBundleResourcesFactory, ResourcesFactory
from pybundle.bundle.formats import (
    DEFAULT_REGISTRY,
    PROPERTIES_FORMAT,
    XML_PROPERTIES_FORMAT,
    FormatLoader,
    FormatRegistry,
    JsonLoader,
    UtfPropertiesLoader,
    XmlPropertiesLoader,
    YamlLoader,
)
from pybundle.bundle.hierarchy import (
    DEFAULT,
    NO_ANCESTORS,
    ContextOrderingStrategy,
    FixedContextOrdering,
    HierarchyContextOrdering,
    NoAncestorsOrdering,
    PythonTypeGraph,
    StaticTypeGraph,
    TypeGraph,
    for_fixed_context,
    interface,
)
from pybundle.bundle.locators import DirectoryResourceLocator, PackageResourceLocator, ResourceLocator
from pybundle.bundle.names import (
    CLASS_NAME_STRATEGY,
    CandidateNameStrategy,
    for_base_names,
    for_base_names_then_class_name,
    for_class_name_then_base_names,
)
from pybundle.bundle.resources import BundleResources, ChildResources, EmptyResources, Resources

__all__ = [
    "CLASS_NAME_STRATEGY",
    "DEFAULT",
    "DEFAULT_REGISTRY",
    "EMPTY_CONCERN",
    "NONE",
    "NO_ANCESTORS",
    "PROPERTIES_FORMAT",
    "XML_PROPERTIES_FORMAT",
    "BundleResources",
    "CandidateNameStrategy",
    "ChildResources",
    "ContextOrderingStrategy",
    "DirectoryResourceLocator",
    "EmptyResources",
    "FixedContextOrdering",
    "FormatLoader",
    "FormatRegistry",
    "HierarchyContextOrdering",
    "JsonLoader",
    "NoAncestorsOrdering",
    "PackageResourceLocator",
    "PythonTypeGraph",
    "ResourceBundleResourceI18n",
    "ResourceBundleResourcesFactory",
    "ResourceI18n",
    "ResourceLocator",
    "Resources",
    "ResourcesFactory",
    "ResourcesMixin",
    "StaticTypeGraph",
    "StoreAcquirer",
    "TypeGraph",
    "UtfPropertiesLoader",
    "XmlPropertiesLoader",
    "YamlLoader",
    "concern_scope",
    "for_base_names",
    "for_base_names_then_class_name",
    "for_class_name_then_base_names",
    "for_fixed_context",
    "get_concern",
    "get_default_concern",
    "get_locale",
    "get_resources",
    "interface",
    "set_default_concern",
    "set_locale",
]
