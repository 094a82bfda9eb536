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
"""Unified exception hierarchy for pybundle.

All library exceptions inherit from PyBundleException, enabling unified
error handling across modules.

Categories:
- ResourceConfigurationError: a stored value or a strategy is misconfigured
- ResourceDecodeError: a located resource could not be decoded
- MissingResourceKeyError: a required key is absent from the whole chain

"Resource not found" is deliberately not an exception: the store acquirer
recovers from it by continuing its search.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Base Exception
# =============================================================================


class PyBundleException(Exception):
    """Base exception for all pybundle errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "RESOURCE_DECODE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ResourceConfigurationError(PyBundleException):
    """A resource value or a lookup strategy is not of the required shape.

    Raised, for example, when a composite value is requested as a string, or
    when a candidate-name strategy has nothing to produce names from.
    """


class ResourceDecodeError(ResourceConfigurationError):
    """A resource was located but its bytes could not be decoded."""

    def __init__(
        self,
        message: str,
        resource: str,
        format_id: str,
        code: str | None = "RESOURCE_DECODE",
    ) -> None:
        super().__init__(message, code=code, context={"resource": resource, "format": format_id})
        self.resource = resource
        self.format_id = format_id


# =============================================================================
# Lookup Exceptions
# =============================================================================


class MissingResourceKeyError(PyBundleException, KeyError):
    """A required resource key was not found anywhere along the chain.

    Subclasses ``KeyError`` so callers that treat resources like a mapping
    can keep catching the builtin.
    """

    def __init__(self, key: str, context_type: Any = None, message: str | None = None) -> None:
        type_name = _type_name(context_type)
        if message is None:
            message = f"No resource found for key '{key}'"
            if type_name:
                message += f" (context: {type_name})"
        super().__init__(
            message,
            code="MISSING_RESOURCE_KEY",
            context={"key": key, "context_type": type_name},
        )
        self.key = key
        self.context_type = context_type

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


def _type_name(context_type: Any) -> str | None:
    if context_type is None:
        return None
    if isinstance(context_type, type):
        return f"{context_type.__module__}.{context_type.__qualname__}"
    return str(context_type)
