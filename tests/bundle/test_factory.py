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
"""Tests for the resolution engine and resources factories."""

from pathlib import Path

from bundle_fixtures.hierarchy import AbstractImpl, BaseImpl, Impl, Interface, SubInterface, Unbundled

from pybundle.bundle.factory import NONE, ResourceBundleResourcesFactory, ResourcesFactory, as_factory
from pybundle.bundle.hierarchy import NO_ANCESTORS, HierarchyContextOrdering, StaticTypeGraph
from pybundle.bundle.locators import DirectoryResourceLocator
from pybundle.bundle.resources import BundleResources, EmptyResources
from pybundle.i18n.locale import Locale


class Lonely:
    pass


class Registry(dict):
    pass


class RecordingParent:
    def __init__(self) -> None:
        self.calls: list[tuple[object, Locale]] = []

    def get_optional_resources(self, context_type, locale):
        self.calls.append((context_type, locale))
        return BundleResources(context_type, {"parentOnly": "from parent", "shared": "parent"}, source="parent")


class TestHierarchyResolution:
    def test_abstract_impl_overrides_interface(self):
        factory = ResourceBundleResourcesFactory()
        assert factory.get_resources(AbstractImpl, "en").get_string("interfaceToOverride") == "A"

    def test_interface_resolves_own_value(self):
        factory = ResourceBundleResourcesFactory()
        assert factory.get_resources(Interface, "en").get_string("interfaceToOverride") == "I"

    def test_impl_sees_every_level(self):
        resources = ResourceBundleResourcesFactory().get_resources(Impl, "en")
        assert resources.get_string("implOnly") == "from Impl"
        assert resources.get_string("baseOnly") == "from BaseImpl"
        assert resources.get_string("abstractOnly") == "from AbstractImpl"
        assert resources.get_string("subInterfaceOnly") == "from SubInterface"
        assert resources.get_string("interfaceOnly") == "from Interface"
        assert resources.get_string("interfaceToOverride") == "A"
        assert resources.get_string("shared") == "Impl"

    def test_chain_mirrors_context_priority(self):
        resources = ResourceBundleResourcesFactory().get_resources(Impl, "en")
        sources = [node.source for node in resources.chain()]
        assert sources == [Impl, BaseImpl, AbstractImpl, SubInterface, Interface]

    def test_every_node_reports_requested_type(self):
        resources = ResourceBundleResourcesFactory().get_resources(Impl, "en")
        assert all(node.context_type is Impl for node in resources.chain())

    def test_interface_order_for_sub_interface(self):
        resources = ResourceBundleResourcesFactory().get_resources(SubInterface, "en")
        assert resources.get_string("shared") == "SubInterface"
        assert resources.get_string("interfaceOnly") == "from Interface"
        assert not resources.has_resource("implOnly")

    def test_subclass_without_bundle_inherits(self):
        resources = ResourceBundleResourcesFactory().get_resources(Unbundled, "en")
        assert resources.get_string("shared") == "Impl"
        assert resources.context_type is Unbundled

    def test_locale_specific_bundle(self):
        resources = ResourceBundleResourcesFactory().get_resources(Impl, Locale("pt", "BR"))
        assert resources.get_string("greeting", "Ana") == "Olá, Ana!"
        assert resources.get_string("baseOnly") == "from BaseImpl"

    def test_partial_translation_falls_back_to_root_bundle(self):
        resources = ResourceBundleResourcesFactory().get_resources(Impl, "pt")
        assert resources.find_string("enabled") == "yes"
        assert resources.get_int("retries") == 3
        assert resources.get_string("implOnly") == "de Impl"

    def test_builtin_ancestors_are_skipped(self):
        assert ResourceBundleResourcesFactory().get_optional_resources(Registry, "en") is None

    def test_no_ancestors(self):
        factory = ResourceBundleResourcesFactory(ordering=NO_ANCESTORS)
        resources = factory.get_resources(Impl, "en")
        assert resources.has_resource("implOnly")
        assert not resources.has_resource("baseOnly")


class TestParentChain:
    def test_parent_only_key_is_found(self):
        factory = ResourceBundleResourcesFactory(parent=RecordingParent())
        resources = factory.get_resources(Impl, "en")
        assert resources.get_string("parentOnly") == "from parent"
        assert resources.get_string("shared") == "Impl"

    def test_parent_is_last_fallback(self):
        factory = ResourceBundleResourcesFactory(parent=RecordingParent())
        nodes = list(factory.get_resources(Impl, "en").chain())
        assert nodes[-1].source == "parent"
        assert len(nodes) == 6

    def test_parent_consulted_once(self):
        parent = RecordingParent()
        ResourceBundleResourcesFactory(parent=parent).get_resources(Impl, "pt-BR")
        assert parent.calls == [(Impl, Locale("pt", "BR"))]

    def test_parent_alone(self):
        factory = ResourceBundleResourcesFactory(parent=RecordingParent())
        resources = factory.get_resources(Lonely, "en")
        assert resources.source == "parent"

    def test_function_parent(self):
        def parent(context_type, locale):
            return BundleResources(context_type, {"locale": str(locale)})

        factory = ResourceBundleResourcesFactory(parent=parent)
        assert factory.get_resources(Lonely, "pt-BR").get_string("locale") == "pt_BR"

    def test_as_factory_keeps_factories(self):
        factory = ResourceBundleResourcesFactory()
        assert as_factory(factory) is factory
        assert isinstance(as_factory(lambda context_type, locale: None), ResourcesFactory)


class TestEmptyResult:
    def test_nothing_found_is_none(self):
        assert ResourceBundleResourcesFactory().get_optional_resources(Lonely, "en") is None

    def test_get_resources_substitutes_empty(self):
        resources = ResourceBundleResourcesFactory().get_resources(Lonely, "en")
        assert isinstance(resources, EmptyResources)
        assert resources.context_type is Lonely

    def test_none_factory(self):
        assert NONE.get_optional_resources(Impl, "en") is None


class TestFixedContext:
    def test_named_bundle_for_any_type(self, tmp_path: Path):
        (tmp_path / "messages.properties").write_text("title=Inbox\n", encoding="utf-8")
        factory = ResourceBundleResourcesFactory.for_fixed_context(
            "messages", "messages", locator=DirectoryResourceLocator(tmp_path)
        )
        assert factory.get_resources(Impl, "en").get_string("title") == "Inbox"
        assert factory.get_resources(Lonely, "en").get_string("title") == "Inbox"

    def test_anchor_without_ancestors(self):
        factory = ResourceBundleResourcesFactory.for_fixed_context(BaseImpl)
        resources = factory.get_resources(Lonely, "en")
        assert resources.get_string("shared") == "BaseImpl"
        assert not resources.has_resource("abstractOnly")
        assert resources.context_type is Lonely

    def test_anchor_with_ancestors(self):
        factory = ResourceBundleResourcesFactory.for_fixed_context(BaseImpl, resolve_ancestors=True)
        resources = factory.get_resources(Lonely, "en")
        assert resources.get_string("abstractOnly") == "from AbstractImpl"
        assert resources.get_string("interfaceOnly") == "from Interface"


class TestExplicitTypeGraph:
    def test_registered_graph_with_directory_bundles(self, tmp_path: Path):
        (tmp_path / "app").mkdir()
        (tmp_path / "app" / "Interface.properties").write_text("interfaceToOverride=I\n", encoding="utf-8")
        (tmp_path / "app" / "AbstractImpl.properties").write_text("interfaceToOverride=A\n", encoding="utf-8")
        graph = (
            StaticTypeGraph()
            .register("app.Interface")
            .register("app.AbstractImpl", interfaces=["app.Interface"])
            .register("app.Impl", supertype="app.AbstractImpl")
        )
        factory = ResourceBundleResourcesFactory(
            ordering=HierarchyContextOrdering(graph),
            locator=DirectoryResourceLocator(tmp_path),
        )
        assert factory.get_resources("app.Impl", "en").get_string("interfaceToOverride") == "A"
        assert factory.get_resources("app.Interface", "en").get_string("interfaceToOverride") == "I"
