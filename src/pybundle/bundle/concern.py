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
"""Locale-aware access to resources, and the process-wide default concern.

A *concern* pairs a resources factory with a :class:`LocaleSelection`, so
callers can ask for resources without passing a locale every time::

    set_default_concern(ResourceBundleResourceI18n())

    class Greeter(ResourcesMixin):
        def greet(self, name: str) -> str:
            return self.get_resources().get_string("greeting", name)

Without a registered concern every lookup sees empty resources, and locale
reads fall through to the process defaults.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pybundle.bundle.factory import NONE, ResourceBundleResourcesFactory, ResourcesFactory, get_resources as _factory_resources
from pybundle.bundle.resources import Resources
from pybundle.i18n.locale import (
    Locale,
    LocaleCategory,
    LocaleSelection,
    default_locale,
    set_default_locale,
)


class ResourceI18n(LocaleSelection):
    """Resources for a context plus per-category locale selection."""

    def __init__(self, factory: ResourcesFactory = NONE) -> None:
        super().__init__()
        self._factory = factory

    @property
    def factory(self) -> ResourcesFactory:
        return self._factory

    def get_optional_resources(self, context: Any, locale: Locale | str | None = None) -> Resources | None:
        return self._factory.get_optional_resources(context_type_of(context), self._locale_or_display(locale))

    def get_resources(self, context: Any, locale: Locale | str | None = None) -> Resources:
        """Resources for *context* (a type or an instance of it).

        The DISPLAY locale is used when *locale* is not given. Never ``None``:
        with nothing found the result is empty resources.
        """
        return _factory_resources(self._factory, context_type_of(context), self._locale_or_display(locale))

    def _locale_or_display(self, locale: Locale | str | None) -> Locale:
        if locale is None:
            return self.get_locale(LocaleCategory.DISPLAY)
        return Locale.parse(locale)


class ResourceBundleResourceI18n(ResourceI18n):
    """Concern backed by a :class:`ResourceBundleResourcesFactory`."""

    def __init__(self, factory: ResourceBundleResourcesFactory | None = None) -> None:
        super().__init__(factory if factory is not None else ResourceBundleResourcesFactory())


EMPTY_CONCERN = ResourceI18n()
"""Concern that provides empty resources for everything."""


def context_type_of(context: Any) -> type:
    return context if isinstance(context, type) else type(context)


# ---------------------------------------------------------------------------
# Default and scoped concerns
# ---------------------------------------------------------------------------

_default_concern: ResourceI18n | None = None

_scoped_concern: contextvars.ContextVar[ResourceI18n | None] = contextvars.ContextVar(
    "pybundle_scoped_concern", default=None
)


def set_default_concern(concern: ResourceI18n | None) -> ResourceI18n | None:
    """Install *concern* as the process default; returns the previous one."""
    global _default_concern
    previous, _default_concern = _default_concern, concern
    return previous


def get_default_concern() -> ResourceI18n | None:
    return _default_concern


def _registered_concern() -> ResourceI18n | None:
    scoped = _scoped_concern.get()
    return scoped if scoped is not None else _default_concern


def get_concern() -> ResourceI18n:
    """The scoped concern, else the default one, else :data:`EMPTY_CONCERN`."""
    concern = _registered_concern()
    return concern if concern is not None else EMPTY_CONCERN


@contextmanager
def concern_scope(concern: ResourceI18n) -> Iterator[ResourceI18n]:
    """Use *concern* instead of the default for the current context."""
    token = _scoped_concern.set(concern)
    try:
        yield concern
    finally:
        _scoped_concern.reset(token)


def get_resources(context: Any, locale: Locale | str | None = None) -> Resources:
    return get_concern().get_resources(context, locale)


def get_locale(category: LocaleCategory = LocaleCategory.DISPLAY) -> Locale:
    """The registered concern's locale for *category*, else the process default."""
    concern = _registered_concern()
    if concern is None:
        return default_locale(category)
    return concern.get_locale(category)


def set_locale(locale: Locale | str, category: LocaleCategory | None = None) -> None:
    """Set the locale of the registered concern.

    The process default is updated as well when the concern in use is the
    default one, or when no concern is registered at all.
    """
    concern = _registered_concern()
    if concern is not None:
        concern.set_locale(locale, category)
    if concern is None or concern is _default_concern:
        set_default_locale(locale, category)


class ResourcesMixin:
    """Gives a class quick access to its own resources."""

    def get_resources(self, locale: Locale | str | None = None) -> Resources:
        return get_resources(self, locale)
