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
"""Locales, locale-specificity tiers, locale categories, and request resolvers."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, runtime_checkable

BUNDLE_NAME_SEPARATOR = "_"


@dataclass(frozen=True, slots=True)
class Locale:
    """An immutable language/region/variant triple.

    Language is stored lower-case and region upper-case; the variant is kept
    as given. The all-empty locale is :attr:`ROOT`, the locale-independent
    tier every lookup ends with.
    """

    language: str = ""
    region: str = ""
    variant: str = ""

    ROOT: ClassVar[Locale]

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", self.language.lower())
        object.__setattr__(self, "region", self.region.upper())

    @classmethod
    def parse(cls, tag: str | Locale | None) -> Locale:
        """Parse ``pt-BR``, ``pt_BR``, ``en_US_POSIX`` or ``en_US.UTF-8``.

        An empty tag, ``C``, ``POSIX`` and ``und`` all parse to :attr:`ROOT`.
        A four-letter script subtag is dropped: ``zh-Hant-TW`` is ``zh_TW``.
        """
        if isinstance(tag, Locale):
            return tag
        if not tag:
            return cls.ROOT
        tag = tag.split(".", 1)[0].split("@", 1)[0].strip()
        if tag in ("", "C", "POSIX"):
            return cls.ROOT
        language, *rest = tag.replace("-", "_").split("_")
        if language.lower() == "und":
            language = ""
        if rest and len(rest[0]) == 4 and rest[0].isalpha():
            rest = rest[1:]
        if not rest:
            return cls(language) if language else cls.ROOT
        return cls(language, rest[0], "_".join(rest[1:]))

    @property
    def is_root(self) -> bool:
        return not (self.language or self.region or self.variant)

    def candidates(self) -> list[Locale]:
        """Locale-specificity tiers, most specific first, ending with ROOT."""
        tiers: list[Locale] = []
        if self.variant:
            tiers.append(self)
        if self.region:
            tiers.append(Locale(self.language, self.region))
        if self.language:
            tiers.append(Locale(self.language))
        tiers.append(Locale.ROOT)
        # a variant-only or region-only locale may repeat a tier
        return list(dict.fromkeys(tiers))

    def to_tag(self) -> str:
        """BCP 47 style tag, e.g. ``pt-BR``; the root locale gives ``und``."""
        if self.is_root:
            return "und"
        return "-".join(part for part in (self.language, self.region, self.variant) if part)

    def __str__(self) -> str:
        if self.is_root:
            return ""
        if self.variant:
            return f"{self.language}_{self.region}_{self.variant}"
        if self.region:
            return f"{self.language}_{self.region}"
        return self.language


Locale.ROOT = Locale()


def to_bundle_name(base_name: str, locale: Locale) -> str:
    """Append the locale suffix to *base_name*: ``messages`` -> ``messages_pt_BR``.

    A locale with a variant but no region keeps the empty slot, giving
    ``messages_de__POSIX``.
    """
    if locale.is_root:
        return base_name
    return f"{base_name}{BUNDLE_NAME_SEPARATOR}{locale}"


# ---------------------------------------------------------------------------
# Locale categories
# ---------------------------------------------------------------------------


class LocaleCategory(enum.Enum):
    """What a locale is used for: showing text, or formatting values."""

    DISPLAY = "display"
    FORMAT = "format"


_process_defaults: dict[LocaleCategory, Locale] = {}


def _platform_default() -> Locale:
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value:
            return Locale.parse(value)
    return Locale.ROOT


def default_locale(category: LocaleCategory = LocaleCategory.DISPLAY) -> Locale:
    """Process-wide default locale for *category*, derived from the platform if unset."""
    return _process_defaults.get(category) or _platform_default()


def set_default_locale(locale: Locale | str, category: LocaleCategory | None = None) -> None:
    """Set the process default for one *category*, or for all when ``None``."""
    parsed = Locale.parse(locale)
    for cat in (category,) if category is not None else tuple(LocaleCategory):
        _process_defaults[cat] = parsed


def reset_default_locales() -> None:
    _process_defaults.clear()


class LocaleSelection:
    """Per-category locale storage falling back to the process defaults."""

    def __init__(self) -> None:
        self._locales: dict[LocaleCategory, Locale | None] = dict.fromkeys(LocaleCategory)

    def get_locale(self, category: LocaleCategory = LocaleCategory.DISPLAY) -> Locale:
        return self._locales[category] or default_locale(category)

    def set_locale(self, locale: Locale | str, category: LocaleCategory | None = None) -> None:
        """Set the locale for one *category*, or for all categories when ``None``."""
        parsed = Locale.parse(locale)
        for cat in (category,) if category is not None else tuple(LocaleCategory):
            self._locales[cat] = parsed


# ---------------------------------------------------------------------------
# Request locale resolution
# ---------------------------------------------------------------------------


@runtime_checkable
class LocaleResolver(Protocol):
    """Port for determining the locale from an incoming request."""

    def resolve_locale(self, request: Any) -> Locale: ...


class AcceptHeaderLocaleResolver:
    """Parses the ``Accept-Language`` header and returns the best match.

    The resolver picks the language tag with the highest quality value.
    When no header is present or parsing fails it falls back to
    *default_locale*.
    """

    def __init__(self, default_locale: Locale | str = "en") -> None:
        self._default = Locale.parse(default_locale)

    def resolve_locale(self, request: Any) -> Locale:
        header: str = getattr(request, "accept_language", "") or ""
        if not header:
            headers = getattr(request, "headers", None)
            if headers is not None:
                header = headers.get("accept-language", "")

        if not header:
            return self._default

        return _parse_accept_language(header, self._default)


class FixedLocaleResolver:
    """Always returns a pre-configured locale, ignoring the request."""

    def __init__(self, locale: Locale | str = "en") -> None:
        self._locale = Locale.parse(locale)

    def resolve_locale(self, request: Any) -> Locale:  # noqa: ARG002
        return self._locale


def _parse_accept_language(header: str, default: Locale) -> Locale:
    """Return the locale with the highest *q* value from *header*.

    Handles the standard ``Accept-Language`` format, e.g.
    ``pt-BR,pt;q=0.9,en;q=0.8``. The ``*`` wildcard is ignored.
    """
    best_locale = default
    best_quality = 0.0

    for part in header.split(","):
        part = part.strip()
        if not part:
            continue

        tag, _, params = part.partition(";")
        quality = 1.0
        params = params.strip()
        if params[:2].lower() == "q=":
            try:
                quality = float(params[2:].strip())
            except ValueError:
                continue

        tag = tag.strip()
        if tag == "*":
            continue
        if quality > best_quality:
            best_quality = quality
            best_locale = Locale.parse(tag)

    return best_locale
