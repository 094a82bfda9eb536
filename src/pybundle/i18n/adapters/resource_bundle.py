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
"""Resource-bundle message source: messages from one named family of bundle files."""

from __future__ import annotations

from typing import Any

from pybundle.bundle.factory import ResourceBundleResourcesFactory
from pybundle.bundle.formats import FormatRegistry, JsonLoader, YamlLoader
from pybundle.bundle.locators import DirectoryResourceLocator
from pybundle.bundle.resources import Resources, format_message
from pybundle.i18n.locale import Locale


class ResourceBundleMessageSource:
    """Resolves messages from locale-specific YAML, JSON or properties files.

    File naming convention, formats tried in this order::

        {base_path}/{base_name}_{locale}.yaml
        {base_path}/{base_name}_{locale}.yml
        {base_path}/{base_name}_{locale}.json
        {base_path}/{base_name}_{locale}.properties

    Within each format the locale tiers run from the requested locale
    (``messages_pt_BR``) through its language (``messages_pt``) to the root
    bundle (``messages``). The first format with any tier present wins, and
    its less specific tiers fill the codes its more specific ones lack; a
    later format is never consulted, so a root ``messages.yaml`` shadows
    ``messages_pt.json``. When the requested locale's chain lacks a code,
    the chain of *default_locale* is consulted.

    Nested keys are flattened with dots, so the YAML structure::

        greeting:
          hello: "Hello, {0}!"

    is accessed as ``get_message("greeting.hello", ("World",), "en")``.
    """

    def __init__(
        self,
        base_path: str = "i18n/",
        default_locale: Locale | str = "en",
        base_name: str = "messages",
        registry: FormatRegistry | None = None,
    ) -> None:
        self._base_name = base_name
        self._default_locale = Locale.parse(default_locale)
        registry = registry if registry is not None else FormatRegistry([YamlLoader(), JsonLoader()])
        locator = DirectoryResourceLocator(base_path)
        self._default_factory = ResourceBundleResourcesFactory.for_fixed_context(
            base_name, base_name, registry=registry, locator=locator
        )
        self._factory = ResourceBundleResourcesFactory.for_fixed_context(
            base_name,
            base_name,
            parent=self._default_chain,
            registry=registry,
            locator=locator,
        )

    # ------------------------------------------------------------------
    # Public API (MessageSource protocol)
    # ------------------------------------------------------------------

    def get_message(
        self,
        code: str,
        args: tuple[Any, ...] = (),
        locale: Locale | str = "en",
    ) -> str:
        """Resolve *code* for *locale*, substituting positional *args*.

        Raises :class:`~pybundle.kernel.exceptions.MissingResourceKeyError`
        (a ``KeyError``) when the code cannot be found in either locale.
        """
        return self.resources(locale).get_string(code, *args)

    def get_message_or_default(
        self,
        code: str,
        default: str,
        args: tuple[Any, ...] = (),
        locale: Locale | str = "en",
    ) -> str:
        message = self.resources(locale).find_string(code, *args)
        if message is None:
            return format_message(default, args)
        return message

    def resources(self, locale: Locale | str) -> Resources:
        """The resources chain backing *locale*'s messages."""
        return self._factory.get_resources(self._base_name, locale)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _default_chain(self, context_type: Any, locale: Locale) -> Resources | None:
        if locale == self._default_locale:
            return None
        return self._default_factory.get_optional_resources(context_type, self._default_locale)
