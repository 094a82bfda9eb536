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
"""Tests for format loaders and the format registry."""

import codecs
from collections.abc import Mapping
from typing import Any

import pytest

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
    flatten,
)
from pybundle.kernel.exceptions import ResourceConfigurationError, ResourceDecodeError

XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE properties SYSTEM "http://java.sun.com/dtd/properties.dtd">
<properties>
  <comment>greetings</comment>
  <entry key="hello">Hello</entry>
  <entry key="word">touch\xc3\xa9</entry>
  <entry key="empty"/>
</properties>
"""


class UpperLoader:
    """Test loader that upper-cases every value."""

    def __init__(self, *format_ids: str) -> None:
        self.format_ids = format_ids

    def load(self, data: bytes) -> Mapping[str, Any]:
        return {"value": data.decode("utf-8").strip().upper()}


class PropsLoader(UtfPropertiesLoader):
    format_ids = ("props",)


class TestLoaders:
    def test_loaders_conform_to_protocol(self):
        for loader in (UtfPropertiesLoader(), XmlPropertiesLoader(), YamlLoader(), JsonLoader(), UpperLoader("x")):
            assert isinstance(loader, FormatLoader)

    def test_properties_loader(self):
        assert UtfPropertiesLoader().load("word=touché".encode()) == {"word": "touché"}

    def test_properties_loader_does_not_fall_back(self):
        with pytest.raises(UnicodeDecodeError):
            UtfPropertiesLoader().load("word=touché".encode("iso-8859-1"))

    def test_xml_loader(self):
        assert XmlPropertiesLoader().load(XML) == {"hello": "Hello", "word": "touché", "empty": ""}

    def test_xml_loader_declared_encoding(self):
        data = '<?xml version="1.0" encoding="ISO-8859-1"?><properties><entry key="w">touché</entry></properties>'
        assert XmlPropertiesLoader().load(data.encode("iso-8859-1")) == {"w": "touché"}

    def test_xml_loader_rejects_other_root(self):
        with pytest.raises(ValueError, match="<properties>"):
            XmlPropertiesLoader().load(b"<settings/>")

    def test_xml_loader_requires_key(self):
        with pytest.raises(ValueError, match="key"):
            XmlPropertiesLoader().load(b"<properties><entry>v</entry></properties>")

    def test_yaml_loader_flattens(self):
        data = "greeting:\n  hello: Hello\n  count: 3\nflag: true\nitems: [a, b]\nnothing:\n".encode()
        assert YamlLoader().load(data) == {
            "greeting.hello": "Hello",
            "greeting.count": "3",
            "flag": "true",
            "items": ("a", "b"),
        }

    def test_yaml_loader_empty_document(self):
        assert YamlLoader().load(b"") == {}

    def test_yaml_loader_rejects_scalar_document(self):
        with pytest.raises(ValueError, match="mapping"):
            YamlLoader().load(b"just text")

    def test_json_loader(self):
        data = codecs.BOM_UTF8 + '{"errors": {"required": "{0} é obrigatório"}}'.encode()
        assert JsonLoader().load(data) == {"errors.required": "{0} é obrigatório"}


class TestFlatten:
    def test_nested(self):
        assert flatten({"a": {"b": {"c": 1}}, "d": False}) == {"a.b.c": "1", "d": "false"}


class TestFormatRegistry:
    def test_properties_is_preseeded(self):
        registry = FormatRegistry()
        assert registry.formats == (PROPERTIES_FORMAT,)
        assert isinstance(registry.loader(PROPERTIES_FORMAT), UtfPropertiesLoader)

    def test_custom_formats_come_first_in_registration_order(self):
        registry = FormatRegistry([UpperLoader("b"), UpperLoader("a")])
        assert registry.formats == ("b", "a", PROPERTIES_FORMAT)

    def test_last_registration_wins(self):
        first, second = UpperLoader("txt"), UpperLoader("txt")
        registry = FormatRegistry([first, second])
        assert registry.loader("txt") is second
        assert registry.formats == ("txt", PROPERTIES_FORMAT)

    def test_builtin_properties_can_be_replaced(self):
        custom = UpperLoader(PROPERTIES_FORMAT)
        registry = FormatRegistry([custom])
        assert registry.loader(PROPERTIES_FORMAT) is custom
        assert registry.formats == (PROPERTIES_FORMAT,)

    def test_multi_id_loader(self):
        registry = FormatRegistry([YamlLoader()])
        assert registry.formats == ("yaml", "yml", PROPERTIES_FORMAT)
        assert "yml" in registry
        assert "toml" not in registry

    def test_default_registry(self):
        assert DEFAULT_REGISTRY.formats == (XML_PROPERTIES_FORMAT, PROPERTIES_FORMAT)

    def test_from_format_ids(self):
        registry = FormatRegistry.from_format_ids(["yaml", "properties", "json"])
        assert registry.formats == ("yaml", "json", PROPERTIES_FORMAT)
        assert "yml" not in registry

    def test_from_unknown_format_id(self):
        with pytest.raises(ValueError, match="toml"):
            FormatRegistry.from_format_ids(["toml"])


class TestDecode:
    def test_legacy_format_retries_single_byte(self):
        data = "word=touché".encode("iso-8859-1")
        assert FormatRegistry().decode(PROPERTIES_FORMAT, data, "Legacy.properties") == {"word": "touché"}

    def test_replaced_legacy_loader_still_retries(self):
        registry = FormatRegistry([UtfPropertiesLoader()])
        data = "word=touché".encode("iso-8859-1")
        assert registry.decode(PROPERTIES_FORMAT, data, "Legacy.properties") == {"word": "touché"}

    def test_other_format_does_not_retry(self):
        registry = FormatRegistry([PropsLoader()])
        data = "word=touché".encode("iso-8859-1")
        with pytest.raises(ResourceDecodeError) as exc_info:
            registry.decode("props", data, "Legacy.props")
        assert exc_info.value.resource == "Legacy.props"
        assert exc_info.value.format_id == "props"
        assert exc_info.value.context == {"resource": "Legacy.props", "format": "props"}

    def test_malformed_xml_is_decode_error(self):
        with pytest.raises(ResourceDecodeError):
            DEFAULT_REGISTRY.decode(XML_PROPERTIES_FORMAT, b"<properties><entry", "Broken.properties.xml")

    def test_malformed_json_is_decode_error(self):
        registry = FormatRegistry([JsonLoader()])
        with pytest.raises(ResourceDecodeError):
            registry.decode("json", b"{not json", "Broken.json")

    def test_malformed_escape_after_retry_is_decode_error(self):
        data = "word=touché \\uZZZZ".encode("iso-8859-1")
        with pytest.raises(ResourceDecodeError):
            FormatRegistry().decode(PROPERTIES_FORMAT, data, "Broken.properties")

    def test_decode_error_is_configuration_error(self):
        assert issubclass(ResourceDecodeError, ResourceConfigurationError)
