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
"""Composable predicate specifications.

A :class:`Specification` is a reusable boolean condition over entities of
type ``T``, kept as an inspectable expression tree rather than an opaque
function. Specifications combine with ``and_``, ``or_``, ``nand``, ``nor``
and ``not_`` (or ``&``, ``|``, ``~``); every combination allocates a new
immutable node and leaves its operands untouched, so operands can be reused
freely.

Example::

    is_adult = FilterOperator.gte("age", 18)
    has_license = FilterOperator.is_not_null("license")

    can_drive = is_adult & has_license
    can_drive.is_satisfied_by({"age": 20, "license": "X"})   # True

    can_drive.to_expression()   # lambda entity: ((entity.age >= 18) and ...)

:data:`Specification.IDENTITY` stands for "no constraint": combining it with
any specification under any of the four binary operators returns that
specification itself, Nand and Nor included.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from speclogic.expression.compiler import EvaluationProperties, ExpressionCompiler
from speclogic.expression.nodes import Constant, Lambda, Parameter
from speclogic.kernel.exceptions import InvalidArgumentException

T = TypeVar("T")


class Specification(ABC, Generic[T]):
    """Root of the specification algebra.

    Subclasses only implement :meth:`to_expression`; evaluation and
    composition are shared.
    """

    IDENTITY: ClassVar[Specification[Any]]

    @abstractmethod
    def to_expression(self) -> Lambda:
        """Return this specification as a single-parameter expression tree.

        Pure and deterministic: repeated calls return equal trees.
        """

    def is_satisfied_by(self, entity: T) -> bool:
        """Compile the tree and apply it to ``entity``."""
        predicate = ExpressionCompiler().compile(self.to_expression())
        return bool(predicate(entity))

    def compile(self, properties: EvaluationProperties | None = None) -> CompiledSpecification[T]:
        """Compile once for repeated evaluation."""
        return CompiledSpecification(self, properties)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def and_(self, other: Specification[T]) -> Specification[T]:
        """Both specifications must hold."""
        from speclogic.specification.combinators import AndSpecification

        return self._combine(other, AndSpecification, "and_")

    def or_(self, other: Specification[T]) -> Specification[T]:
        """At least one specification must hold."""
        from speclogic.specification.combinators import OrSpecification

        return self._combine(other, OrSpecification, "or_")

    def nand(self, other: Specification[T]) -> Specification[T]:
        """Not both specifications hold."""
        from speclogic.specification.combinators import NandSpecification

        return self._combine(other, NandSpecification, "nand")

    def nor(self, other: Specification[T]) -> Specification[T]:
        """Neither specification holds."""
        from speclogic.specification.combinators import NorSpecification

        return self._combine(other, NorSpecification, "nor")

    def not_(self) -> Specification[T]:
        """Logical complement of this specification."""
        from speclogic.specification.combinators import NegatedSpecification

        return NegatedSpecification(self)

    def _combine(
        self,
        other: Specification[T],
        node: Callable[[Specification[T], Specification[T]], Specification[T]],
        operation: str,
    ) -> Specification[T]:
        _require_specification(other, operation)
        if self is Specification.IDENTITY:
            return other
        if other is Specification.IDENTITY:
            return self
        return node(self, other)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __and__(self, other: Specification[T]) -> Specification[T]:
        return self.and_(other)

    def __or__(self, other: Specification[T]) -> Specification[T]:
        return self.or_(other)

    def __invert__(self) -> Specification[T]:
        return self.not_()


def _require_specification(operand: Any, operation: str) -> None:
    if operand is None:
        raise InvalidArgumentException(
            f"Specification.{operation}() requires an operand, got None",
            context={"operation": operation},
        )
    if not isinstance(operand, Specification):
        raise InvalidArgumentException(
            f"Specification.{operation}() requires a Specification, got {type(operand).__name__}",
            context={"operation": operation, "operand_type": type(operand).__name__},
        )


class IdentitySpecification(Specification[Any]):
    """Neutral element: satisfied by every entity.

    There is exactly one instance, :data:`Specification.IDENTITY`.
    """

    _instance: ClassVar[IdentitySpecification | None] = None

    def __new__(cls) -> IdentitySpecification:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._expression = Lambda(Parameter("entity"), Constant(True))
        return cls._instance

    def to_expression(self) -> Lambda:
        return self._expression

    def __repr__(self) -> str:
        return "Specification.IDENTITY"


Specification.IDENTITY = IdentitySpecification()


@dataclass(frozen=True, init=False)
class CompiledSpecification(Generic[T]):
    """A specification compiled once, callable as a plain predicate.

    Usage::

        adult = FilterOperator.gte("age", 18).compile()
        adults = adult.filter(people)
    """

    specification: Specification[T]
    _predicate: Callable[[T], Any]

    def __init__(
        self,
        specification: Specification[T],
        properties: EvaluationProperties | None = None,
    ) -> None:
        _require_specification(specification, "compile")
        predicate = ExpressionCompiler(properties).compile(specification.to_expression())
        object.__setattr__(self, "specification", specification)
        object.__setattr__(self, "_predicate", predicate)

    def __call__(self, entity: T) -> bool:
        return bool(self._predicate(entity))

    def filter(self, candidates: Iterable[T]) -> list[T]:
        """Candidates that satisfy the specification, in order."""
        return [candidate for candidate in candidates if self._predicate(candidate)]

    def count(self, candidates: Iterable[T]) -> int:
        """Number of candidates that satisfy the specification."""
        return sum(1 for candidate in candidates if self._predicate(candidate))
