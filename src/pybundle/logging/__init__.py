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
"""pybundle logging: structlog loggers that emit through stdlib logging.

Every library logger lives under the ``pybundle`` namespace and hands its
rendered event to the stdlib logger of the same name, so records reach
whatever handlers the host application installed. pybundle adds only a
``NullHandler`` and keeps the namespace at ``INFO`` unless the host (or
:func:`configure_logging`) sets another level; debug events such as
``bundle_loaded`` are dropped before rendering.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from pybundle.core.config import Config

ROOT_LOGGER = "pybundle"

_RENDERERS: dict[str, structlog.types.Processor] = {
    "console": structlog.processors.KeyValueRenderer(key_order=["event"]),
    "json": structlog.processors.JSONRenderer(),
}

_settings: dict[str, str] = {"format": "console"}


def _render(logger: Any, method_name: str, event_dict: structlog.types.EventDict) -> str:
    return _RENDERERS[_settings["format"]](logger, method_name, event_dict)  # type: ignore[return-value]


_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    _render,
]


def _install_library_defaults() -> None:
    root = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(handler, logging.NullHandler) for handler in root.handlers):
        root.addHandler(logging.NullHandler())
    if root.level == logging.NOTSET:
        root.setLevel(logging.INFO)


_install_library_defaults()


def get_logger(name: str) -> Any:
    """Structlog logger bound to the stdlib logger *name*.

    The processor chain is fixed here, so a host's global
    ``structlog.configure()`` does not redirect library output.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def set_level(name: str, level: str) -> None:
    """Set the log level for a specific stdlib logger."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger(name).setLevel(log_level)


def configure_logging(config: Config) -> None:
    """Apply the ``pybundle.logging`` section of *config*.

    ``level.root`` sets the ``pybundle`` namespace; any other key under
    ``level`` names a logger. ``format`` picks ``console`` (key=value) or
    ``json`` rendering of the event dict.
    """
    level_section = dict(config.get_section("pybundle.logging.level"))
    root_level = level_section.pop("root", None)
    if root_level is not None:
        set_level(ROOT_LOGGER, str(root_level))
    for name, level in level_section.items():
        set_level(name, str(level))

    fmt = str(config.get("pybundle.logging.format", "console")).lower()
    if fmt not in _RENDERERS:
        raise ValueError(f"Unknown logging format '{fmt}'; expected one of {sorted(_RENDERERS)}")
    _settings["format"] = fmt


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger", "set_level"]
