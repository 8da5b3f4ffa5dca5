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
"""TranslatorPort — turns specification trees into backend-native filters.

Translators are separate passes over the exported expression tree; the
specification algebra itself knows nothing about any backend.

Type Parameters:
    Q: The backend filter representation (e.g., ``ColumnElement[bool]``, ``dict``).
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from speclogic.expression.nodes import Lambda
from speclogic.kernel.exceptions import InvalidArgumentException
from speclogic.specification.base import Specification

Q = TypeVar("Q", covariant=True)


@runtime_checkable
class TranslatorPort(Protocol[Q]):
    """Port defining the translation contract."""

    def translate(self, specification: Specification[Any] | Lambda, root: Any = None) -> Q: ...


def expression_of(specification: Specification[Any] | Lambda) -> Lambda:
    """Return the expression tree to translate."""
    if isinstance(specification, Specification):
        return specification.to_expression()
    if isinstance(specification, Lambda):
        return specification
    raise InvalidArgumentException(
        f"Expected a Specification or Lambda, got {type(specification).__name__}",
    )
