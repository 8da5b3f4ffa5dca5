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
"""Leaf specifications: atomic conditions supplied by the application."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from speclogic.expression.nodes import Call, Lambda, Parameter
from speclogic.kernel.exceptions import InvalidArgumentException, UnboundParameterException
from speclogic.specification.base import Specification

T = TypeVar("T")


@dataclass(frozen=True)
class ExpressionSpecification(Specification[T]):
    """Specification over a hand-built expression tree.

    The tree is validated once on construction: it must be a
    :class:`Lambda` without free parameters.
    """

    expression: Lambda

    def __post_init__(self) -> None:
        if not isinstance(self.expression, Lambda):
            raise InvalidArgumentException(
                f"ExpressionSpecification requires a Lambda, got {type(self.expression).__name__}",
            )
        free = self.expression.free_parameters()
        if free:
            names = ", ".join(sorted(p.name for p in free))
            raise UnboundParameterException(
                f"Expression references unbound parameter(s): {names}",
                context={"expression": str(self.expression)},
            )

    def to_expression(self) -> Lambda:
        return self.expression


@dataclass(frozen=True)
class PredicateSpecification(Specification[T]):
    """Specification wrapping an opaque Python predicate.

    Evaluates anywhere, but translators cannot look inside the callable,
    so it only exports as a ``Call`` node.
    """

    predicate: Callable[[T], Any]
    label: str | None = None
    _parameter: Parameter = field(default_factory=Parameter, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not callable(self.predicate):
            raise InvalidArgumentException(
                f"PredicateSpecification requires a callable, got {type(self.predicate).__name__}",
            )

    def to_expression(self) -> Lambda:
        return Lambda(self._parameter, Call(self.predicate, (self._parameter,), self.label))
