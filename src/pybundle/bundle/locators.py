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
"""Resource locators: where the bytes of a named bundle resource come from.

A locator first decides the *loading boundary* of a resolution context, the
root that resource names are resolved against. A context without a
boundary (a builtin type, a module with no file) contributes no resources.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResourceLocator(Protocol):
    """Finds resource bytes by slash-separated resource name."""

    def boundary(self, context: Any) -> Path | None:
        """Root directory for *context*'s resources, or ``None`` to skip it."""
        ...

    def read(self, boundary: Path, resource_name: str, reload: bool = False) -> bytes | None:
        """Bytes of *resource_name* under *boundary*, or ``None`` when absent.

        *reload* asks any cache the locator keeps to be bypassed.
        """
        ...


class _FileLocator:
    def read(self, boundary: Path, resource_name: str, reload: bool = False) -> bytes | None:  # noqa: ARG002
        candidate = (boundary / resource_name).resolve()
        # names come from type names and configuration; never leave the root
        if not candidate.is_relative_to(boundary.resolve()):
            return None
        if not candidate.is_file():
            return None
        return candidate.read_bytes()


class PackageResourceLocator(_FileLocator):
    """Resolves names against the import root of the context's module.

    For ``myapp.ui.widgets.Button`` defined in ``/srv/app/myapp/ui/widgets.py``
    the boundary is ``/srv/app``, so the bundle ``myapp.ui.widgets.Button_fr``
    is read from ``/srv/app/myapp/ui/widgets/Button_fr.properties``.
    """

    def boundary(self, context: Any) -> Path | None:
        module_name = getattr(context, "__module__", None)
        if not isinstance(context, type) or not module_name:
            return None
        module = sys.modules.get(module_name)
        module_file = getattr(module, "__file__", None)
        if module is None or not module_file:
            return None

        path = Path(module_file).resolve()
        depth = len(module_name.split("."))
        if path.stem != "__init__":
            depth -= 1
        root = path.parent
        for _ in range(depth):
            root = root.parent
        return root


class DirectoryResourceLocator(_FileLocator):
    """Resolves every context's names against one fixed directory."""

    def __init__(self, base_path: str | Path) -> None:
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def boundary(self, context: Any) -> Path | None:  # noqa: ARG002
        return self._base_path


def to_resource_name(bundle_name: str, suffix: str) -> str:
    """``pkg.mod.Cls_fr`` + ``properties`` -> ``pkg/mod/Cls_fr.properties``."""
    return f"{bundle_name.replace('.', '/')}.{suffix}"
