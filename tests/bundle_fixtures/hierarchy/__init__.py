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
"""A five-level hierarchy with bundles for every level.

``Impl -> BaseImpl -> AbstractImpl`` form the class chain; ``BaseImpl`` also
declares ``SubInterface``, which extends ``Interface``, the interface
``AbstractImpl`` declares.
"""

import abc

from pybundle.bundle.concern import ResourcesMixin
from pybundle.bundle.hierarchy import interface


@interface
class Interface(abc.ABC):
    pass


@interface
class SubInterface(Interface):
    pass


class AbstractImpl(Interface):
    pass


class BaseImpl(AbstractImpl, SubInterface):
    pass


class Impl(BaseImpl):
    pass


class Unbundled(Impl):
    pass


class Greeter(ResourcesMixin):
    def greet(self, name: str) -> str:
        return self.get_resources().get_string("greeting", name)
