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
"""Format loaders and the process-wide format registry.

A format is identified by a filename-suffix token: ``properties`` matches
``messages_fr.properties`` and ``properties.xml`` matches
``messages_fr.properties.xml``. Each :class:`FormatLoader` decodes the raw
bytes of one resource into a flat, string-keyed mapping.

The registry is built once from the caller's loaders; the legacy
``properties`` format is pre-seeded with :class:`UtfPropertiesLoader` and
only replaced when a caller registers a loader for that identifier.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

import yaml  # type: ignore[import-untyped]

from pybundle.bundle.properties import LEGACY_ENCODING, decode_text, parse_properties
from pybundle.kernel.exceptions import ResourceDecodeError
from pybundle.logging import get_logger

logger = get_logger(__name__)

PROPERTIES_FORMAT = "properties"

XML_PROPERTIES_FORMAT = "properties.xml"


@runtime_checkable
class FormatLoader(Protocol):
    """Decoder from raw bytes to a flat store, for one or more format ids."""

    @property
    def format_ids(self) -> tuple[str, ...]: ...

    def load(self, data: bytes) -> Mapping[str, Any]:
        """Decode *data*.

        Raises:
            UnicodeDecodeError: the bytes are not valid in the detected charset.
            ValueError: the decoded text is malformed for this format.
        """
        ...


class UtfPropertiesLoader:
    """Properties text in UTF-8 by default, or any BOM-marked UTF encoding.

    Invalid bytes raise ``UnicodeDecodeError``; this loader never falls back
    to a single-byte charset on its own.
    """

    format_ids: tuple[str, ...] = (PROPERTIES_FORMAT,)

    def load(self, data: bytes) -> Mapping[str, Any]:
        return parse_properties(decode_text(data))


class XmlPropertiesLoader:
    """Properties stored as XML: ``<properties><entry key="k">v</entry></properties>``.

    The XML declaration (or a BOM) selects the charset, UTF-8 otherwise.
    """

    format_ids: tuple[str, ...] = (XML_PROPERTIES_FORMAT,)

    def load(self, data: bytes) -> Mapping[str, Any]:
        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise ValueError(f"Malformed XML properties: {exc}") from exc
        if root.tag != "properties":
            raise ValueError(f"Expected <properties> root element, found <{root.tag}>")

        entries: dict[str, Any] = {}
        for element in root:
            if element.tag == "comment":
                continue
            if element.tag != "entry":
                raise ValueError(f"Unexpected <{element.tag}> element in XML properties")
            key = element.get("key")
            if key is None:
                raise ValueError("<entry> element without a 'key' attribute")
            entries[key] = element.text or ""
        return entries


class YamlLoader:
    """Nested YAML mappings, flattened to dot-separated keys.

    Scalars become strings; sequences are kept as tuples, i.e. composite
    values that cannot be read as a single string.
    """

    format_ids: tuple[str, ...] = ("yaml", "yml")

    def load(self, data: bytes) -> Mapping[str, Any]:
        try:
            document = yaml.safe_load(decode_text(data))
        except yaml.YAMLError as exc:
            raise ValueError(f"Malformed YAML: {exc}") from exc
        return flatten(_require_mapping(document, "YAML"))


class JsonLoader:
    """JSON objects, flattened like :class:`YamlLoader`."""

    format_ids: tuple[str, ...] = ("json",)

    def load(self, data: bytes) -> Mapping[str, Any]:
        document = json.loads(decode_text(data))
        return flatten(_require_mapping(document, "JSON"))


BUILTIN_LOADERS: Mapping[str, FormatLoader] = MappingProxyType({
    XML_PROPERTIES_FORMAT: XmlPropertiesLoader(),
    "yaml": YamlLoader(),
    "yml": YamlLoader(),
    "json": JsonLoader(),
})


class FormatRegistry:
    """Format id -> loader, in lookup order; read-only once built.

    Later registrations for the same id replace earlier ones. Lookup order is
    the caller's ids in registration order followed by the legacy
    ``properties`` id.
    """

    def __init__(self, loaders: Iterable[FormatLoader] = ()) -> None:
        registered: dict[str, FormatLoader] = {PROPERTIES_FORMAT: UtfPropertiesLoader()}
        for loader in loaders:
            for format_id in loader.format_ids:
                registered[format_id] = loader
        self._loaders: Mapping[str, FormatLoader] = MappingProxyType(registered)
        self._formats: tuple[str, ...] = (
            *(format_id for format_id in registered if format_id != PROPERTIES_FORMAT),
            PROPERTIES_FORMAT,
        )

    @classmethod
    def from_format_ids(cls, format_ids: Iterable[str]) -> FormatRegistry:
        """Registry of built-in loaders selected by id (e.g. from configuration)."""
        loaders: list[FormatLoader] = []
        for format_id in format_ids:
            if format_id == PROPERTIES_FORMAT:
                continue
            loader = BUILTIN_LOADERS.get(format_id)
            if loader is None:
                raise ValueError(f"No built-in loader for format '{format_id}'; expected one of {sorted(BUILTIN_LOADERS)}")
            loaders.append(_SingleFormat(format_id, loader))
        return cls(loaders)

    @property
    def formats(self) -> tuple[str, ...]:
        return self._formats

    def loader(self, format_id: str) -> FormatLoader:
        return self._loaders[format_id]

    def decode(self, format_id: str, data: bytes, resource: str) -> Mapping[str, Any]:
        """Decode *data* read from *resource* with the loader for *format_id*.

        Only for the legacy ``properties`` format, invalid UTF input is read
        again as ISO-8859-1, the traditional charset of such files.

        Raises:
            ResourceDecodeError: the bytes cannot be decoded.
        """
        loader = self._loaders[format_id]
        try:
            try:
                return loader.load(data)
            except UnicodeDecodeError as exc:
                if format_id != PROPERTIES_FORMAT:
                    raise
                logger.debug("bundle_decode_retry", resource=resource, encoding=LEGACY_ENCODING, reason=str(exc))
                return parse_properties(data.decode(LEGACY_ENCODING))
        except ValueError as exc:
            raise ResourceDecodeError(
                f"Cannot decode resource '{resource}' as '{format_id}': {exc}",
                resource=resource,
                format_id=format_id,
            ) from exc

    def __contains__(self, format_id: object) -> bool:
        return format_id in self._loaders

    def __repr__(self) -> str:
        return f"FormatRegistry(formats={list(self._formats)!r})"


class _SingleFormat:
    """Registers a multi-id loader under one chosen id only."""

    def __init__(self, format_id: str, loader: FormatLoader) -> None:
        self.format_ids = (format_id,)
        self._loader = loader

    def load(self, data: bytes) -> Mapping[str, Any]:
        return self._loader.load(data)


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten a nested mapping into dot-separated keys."""
    items: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            items.update(flatten(value, full_key))
        elif isinstance(value, list | tuple):
            items[full_key] = tuple(value)
        elif value is not None:
            items[full_key] = value if isinstance(value, str) else _scalar_text(value)
    return items


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _require_mapping(document: Any, kind: str) -> Mapping[str, Any]:
    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise ValueError(f"{kind} resource must contain a mapping at the top level, got {type(document).__name__}")
    return document


DEFAULT_REGISTRY = FormatRegistry([XmlPropertiesLoader()])
