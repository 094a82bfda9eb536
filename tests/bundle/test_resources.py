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
"""Tests for resources chain nodes."""

from pathlib import Path

import pytest

from pybundle.bundle.resources import BundleResources, ChildResources, EmptyResources, format_message
from pybundle.kernel.exceptions import MissingResourceKeyError, ResourceConfigurationError


class Widget:
    pass


def _chain() -> BundleResources:
    parent = BundleResources(Widget, {"parentOnly": "from parent", "shared": "parent"})
    base = BundleResources(Widget, {"baseOnly": "from base", "shared": "base"}, fallback=parent)
    return BundleResources(Widget, {"own": "from widget", "shared": "widget"}, fallback=base)


class TestLookup:
    def test_local_value_wins(self):
        assert _chain().find_object("shared") == "widget"

    def test_falls_back_along_chain(self):
        chain = _chain()
        assert chain.find_object("baseOnly") == "from base"
        assert chain.find_object("parentOnly") == "from parent"

    def test_absent_key(self):
        assert _chain().find_object("missing") is None
        assert _chain().find_string("missing") is None

    def test_has_local_ignores_fallback(self):
        chain = _chain()
        assert chain.has_local("own")
        assert not chain.has_local("parentOnly")

    def test_has_resource_traverses_chain(self):
        chain = _chain()
        assert chain.has_resource("parentOnly")
        assert not chain.has_resource("missing")

    def test_chain_order(self):
        chain = _chain()
        nodes = list(chain.chain())
        assert len(nodes) == 3
        assert nodes[0] is chain
        assert nodes[-1].fallback is None

    def test_values_are_read_only(self):
        resources = BundleResources(Widget, {"k": "v"})
        with pytest.raises(TypeError):
            resources.values["k"] = "changed"  # type: ignore[index]

    def test_source_defaults_to_context_type(self):
        assert BundleResources(Widget, {}).source is Widget
        assert BundleResources(Widget, {}, source="Base").source == "Base"


class TestStrings:
    def test_format_arguments(self):
        resources = BundleResources(Widget, {"greeting": "Hello, {0}! You have {1} messages."})
        assert resources.get_string("greeting", "Ana", 3) == "Hello, Ana! You have 3 messages."

    def test_without_arguments_braces_are_kept(self):
        resources = BundleResources(Widget, {"greeting": "Hello, {0}!"})
        assert resources.get_string("greeting") == "Hello, {0}!"

    def test_composite_value_is_not_a_string(self):
        resources = BundleResources(Widget, {"items": ("a", "b")})
        with pytest.raises(ResourceConfigurationError) as exc_info:
            resources.find_string("items")
        assert exc_info.value.code == "RESOURCE_NOT_STRING"
        assert resources.get_object("items") == ("a", "b")

    def test_format_message(self):
        assert format_message("{1} and {0}", ("a", "b")) == "b and a"


class TestMissingKey:
    def test_get_string_raises_with_key_and_type(self):
        with pytest.raises(MissingResourceKeyError) as exc_info:
            _chain().get_string("missing")
        assert exc_info.value.key == "missing"
        assert exc_info.value.context_type is Widget
        assert "missing" in str(exc_info.value)
        assert "Widget" in str(exc_info.value)

    def test_is_a_key_error(self):
        with pytest.raises(KeyError):
            _chain().get_object("missing")

    def test_optional_lookups_never_raise(self):
        chain = _chain()
        assert chain.find_object("missing") is None
        assert chain.find_int("missing") is None
        assert chain.find_bool("missing") is None


class TestTypedValues:
    def test_bool(self):
        resources = BundleResources(Widget, {"on": "yes", "off": "False", "bad": "maybe"})
        assert resources.get_bool("on") is True
        assert resources.get_bool("off") is False
        with pytest.raises(ResourceConfigurationError) as exc_info:
            resources.get_bool("bad")
        assert exc_info.value.code == "RESOURCE_INVALID_VALUE"

    def test_int_and_float(self):
        resources = BundleResources(Widget, {"retries": " 3 ", "ratio": "0.25", "bad": "three"})
        assert resources.get_int("retries") == 3
        assert resources.get_float("ratio") == 0.25
        with pytest.raises(ResourceConfigurationError):
            resources.get_int("bad")

    def test_path(self):
        resources = BundleResources(Widget, {"icon": "icons/widget.png"})
        assert resources.get_path("icon") == Path("icons/widget.png")

    def test_missing_typed_value(self):
        with pytest.raises(MissingResourceKeyError):
            BundleResources(Widget, {}).get_int("retries")


class TestChaining:
    def test_with_fallback(self):
        primary = BundleResources(Widget, {"a": "1"})
        secondary = BundleResources(Widget, {"a": "ignored", "b": "2"})
        combined = primary.with_fallback(secondary)
        assert isinstance(combined, ChildResources)
        assert combined.get_string("a") == "1"
        assert combined.get_string("b") == "2"

    def test_with_none_fallback_is_identity(self):
        primary = BundleResources(Widget, {"a": "1"})
        assert primary.with_fallback(None) is primary


class TestEmptyResources:
    def test_everything_is_absent(self):
        empty = EmptyResources(Widget)
        assert empty.find_object("anything") is None
        assert not empty.has_resource("anything")
        assert empty.fallback is None

    def test_required_lookup_raises(self):
        with pytest.raises(MissingResourceKeyError) as exc_info:
            EmptyResources(Widget).get_string("title")
        assert exc_info.value.context_type is Widget

    def test_usable_as_fallback(self):
        chain = BundleResources(Widget, {"a": "1"}, fallback=EmptyResources(Widget))
        assert chain.get_string("a") == "1"
        assert chain.find_string("b") is None
