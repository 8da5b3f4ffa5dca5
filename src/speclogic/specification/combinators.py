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
"""Combinator nodes of the specification algebra.

Every binary combinator merges two independently built trees into one
lambda the same way:

1. take the left tree (negated for Nand / Nor),
2. take the right tree (negated for Nand / Nor),
3. rebind the right tree onto the left tree's parameter,
4. join the bodies with ``AndAlso`` or ``OrElse``,
5. wrap the result in a lambda over the left parameter.

Nand and Nor rely on De Morgan's laws: ``not (a and b) == not a or not b``
and ``not (a or b) == not a and not b``.

These nodes are normally created through :meth:`Specification.and_` and
friends, which also apply the identity short-circuit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, TypeVar

from speclogic.expression.nodes import AndAlso, Expression, Lambda, Not, OrElse
from speclogic.expression.rebinder import ParameterRebinder
from speclogic.specification.base import Specification, _require_specification

T = TypeVar("T")


def _merge(left: Lambda, right: Lambda, connective: type[AndAlso] | type[OrElse]) -> Lambda:
    right = ParameterRebinder(left.parameter).rebind(right)
    body: Expression = connective(left.body, right.body)
    return Lambda(left.parameter, body)


@dataclass(frozen=True)
class _BinarySpecification(Specification[T]):
    left: Specification[T]
    right: Specification[T]

    operation: ClassVar[str]

    def __post_init__(self) -> None:
        _require_specification(self.left, self.operation)
        _require_specification(self.right, self.operation)


@dataclass(frozen=True)
class AndSpecification(_BinarySpecification[T]):
    """Satisfied when both operands are."""

    operation = "and_"

    def to_expression(self) -> Lambda:
        return _merge(self.left.to_expression(), self.right.to_expression(), AndAlso)


@dataclass(frozen=True)
class OrSpecification(_BinarySpecification[T]):
    """Satisfied when at least one operand is."""

    operation = "or_"

    def to_expression(self) -> Lambda:
        return _merge(self.left.to_expression(), self.right.to_expression(), OrElse)


@dataclass(frozen=True)
class NandSpecification(_BinarySpecification[T]):
    """Satisfied unless both operands are: ``not left or not right``."""

    operation = "nand"

    def to_expression(self) -> Lambda:
        return _merge(self.left.not_().to_expression(), self.right.not_().to_expression(), OrElse)


@dataclass(frozen=True)
class NorSpecification(_BinarySpecification[T]):
    """Satisfied when neither operand is: ``not left and not right``."""

    operation = "nor"

    def to_expression(self) -> Lambda:
        return _merge(self.left.not_().to_expression(), self.right.not_().to_expression(), AndAlso)


@dataclass(frozen=True)
class NegatedSpecification(Specification[T]):
    """Logical complement of ``specification``.

    Reuses the operand's parameter. ``~~spec`` keeps both negations in the
    tree; it evaluates like ``spec`` but is not collapsed.
    """

    specification: Specification[T]

    def __post_init__(self) -> None:
        _require_specification(self.specification, "not_")

    def to_expression(self) -> Lambda:
        expression = self.specification.to_expression()
        return Lambda(expression.parameter, Not(expression.body))
