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
"""Compile expression trees into Python callables.

The compiler walks a :class:`~speclogic.expression.nodes.Lambda` once and
turns every node into a small closure over an evaluation frame (a dict from
:class:`~speclogic.expression.nodes.Parameter` to its argument). The result
is an ordinary single-argument function that can be called any number of
times without touching the tree again.

Parameters are resolved against the lambdas enclosing them while compiling:
a reference to a parameter no enclosing lambda binds raises
:class:`~speclogic.kernel.exceptions.UnboundParameterException` before any
entity is evaluated.
"""

from __future__ import annotations

import functools
import logging
import operator
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from speclogic.core.config import config_properties
from speclogic.expression.nodes import (
    AndAlso,
    Call,
    Compare,
    CompareOperator,
    Conditional,
    Constant,
    Lambda,
    Member,
    Not,
    OrElse,
    Parameter,
)
from speclogic.expression.visitor import ExpressionVisitor
from speclogic.kernel.exceptions import InvalidArgumentException, UnboundParameterException

logger = logging.getLogger(__name__)

Frame = dict[Parameter, Any]
Thunk = Callable[[Frame], Any]

MISSING_MEMBER_POLICIES = ("raise", "none")


@config_properties(prefix="speclogic.evaluation")
@dataclass
class EvaluationProperties:
    """How compiled expressions read members off entities.

    Attributes:
        mapping_access: Read ``Member`` nodes as keys when the entity is a
            ``Mapping`` (``{"age": 20}``); otherwise always use attributes.
        missing_member: ``"raise"`` propagates ``AttributeError``/``KeyError``
            for absent members, ``"none"`` evaluates them to ``None``.
    """

    mapping_access: bool = True
    missing_member: str = "raise"

    def __post_init__(self) -> None:
        if self.missing_member not in MISSING_MEMBER_POLICIES:
            raise ValueError(
                f"missing_member must be one of {MISSING_MEMBER_POLICIES}, got '{self.missing_member}'"
            )


@functools.lru_cache(maxsize=256)
def like_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a SQL LIKE pattern (``%``, ``_``, ``\\`` escape) to a regex."""
    parts: list[str] = []
    escaped = False
    for ch in pattern:
        if escaped:
            parts.append(re.escape(ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    if escaped:
        parts.append(re.escape("\\"))
    return re.compile("".join(parts), re.DOTALL)


def _like(value: Any, pattern: Any) -> bool:
    if value is None or pattern is None:
        return False
    return like_to_regex(str(pattern)).fullmatch(str(value)) is not None


_COMPARATORS: dict[CompareOperator, Callable[[Any, Any], Any]] = {
    CompareOperator.EQ: operator.eq,
    CompareOperator.NE: operator.ne,
    CompareOperator.LT: operator.lt,
    CompareOperator.LE: operator.le,
    CompareOperator.GT: operator.gt,
    CompareOperator.GE: operator.ge,
    CompareOperator.IN: lambda a, b: a in b,
    CompareOperator.CONTAINS: operator.contains,
    CompareOperator.LIKE: _like,
    CompareOperator.IS: operator.is_,
    CompareOperator.IS_NOT: operator.is_not,
}


class ExpressionCompiler(ExpressionVisitor[Thunk]):
    """Compiles a :class:`Lambda` into a callable.

    Usage::

        fn = ExpressionCompiler().compile(spec.to_expression())
        fn({"age": 20})
    """

    def __init__(self, properties: EvaluationProperties | None = None) -> None:
        self._properties = properties or EvaluationProperties()
        self._scope: list[Parameter] = []

    @property
    def properties(self) -> EvaluationProperties:
        return self._properties

    def compile(self, expression: Lambda) -> Callable[[Any], Any]:
        """Compile ``expression`` into a single-argument function."""
        if not isinstance(expression, Lambda):
            raise InvalidArgumentException(
                f"Only lambdas can be compiled, got {type(expression).__name__}",
            )
        self._scope = []
        function = self.visit(expression)({})
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Compiled %s (%d nodes)", expression, sum(1 for _ in expression.walk()))
        return function

    # ------------------------------------------------------------------
    # Scope
    # ------------------------------------------------------------------

    def visit_lambda(self, node: Lambda) -> Thunk:
        parameter = node.parameter
        self._scope.append(parameter)
        try:
            body = self.visit(node.body)
        finally:
            self._scope.pop()

        def make_function(frame: Frame) -> Callable[[Any], Any]:
            def function(argument: Any) -> Any:
                inner = dict(frame)
                inner[parameter] = argument
                return body(inner)

            return function

        return make_function

    def visit_parameter(self, node: Parameter) -> Thunk:
        if not any(bound is node for bound in self._scope):
            raise UnboundParameterException(
                f"Parameter '{node.name}' is not bound by any enclosing lambda",
                context={"parameter": repr(node)},
            )
        return lambda frame: frame[node]

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def visit_constant(self, node: Constant) -> Thunk:
        value = node.value
        return lambda frame: value

    def visit_member(self, node: Member) -> Thunk:
        target = self.visit(node.target)
        getter = self._member_getter(node.name)
        return lambda frame: getter(target(frame))

    def visit_call(self, node: Call) -> Thunk:
        function = node.function
        arguments = tuple(self.visit(arg) for arg in node.arguments)
        return lambda frame: function(*(arg(frame) for arg in arguments))

    def visit_compare(self, node: Compare) -> Thunk:
        comparator = _COMPARATORS[node.operator]
        left, right = self.visit(node.left), self.visit(node.right)
        return lambda frame: comparator(left(frame), right(frame))

    # ------------------------------------------------------------------
    # Logic (native short-circuit semantics)
    # ------------------------------------------------------------------

    def visit_and_also(self, node: AndAlso) -> Thunk:
        left, right = self.visit(node.left), self.visit(node.right)
        return lambda frame: left(frame) and right(frame)

    def visit_or_else(self, node: OrElse) -> Thunk:
        left, right = self.visit(node.left), self.visit(node.right)
        return lambda frame: left(frame) or right(frame)

    def visit_not(self, node: Not) -> Thunk:
        operand = self.visit(node.operand)
        return lambda frame: not operand(frame)

    def visit_conditional(self, node: Conditional) -> Thunk:
        test = self.visit(node.test)
        if_true, if_false = self.visit(node.if_true), self.visit(node.if_false)
        return lambda frame: if_true(frame) if test(frame) else if_false(frame)

    def _member_getter(self, name: str) -> Callable[[Any], Any]:
        lenient = self._properties.missing_member == "none"
        mapping_access = self._properties.mapping_access

        def get(obj: Any) -> Any:
            if mapping_access and isinstance(obj, Mapping):
                return obj.get(name) if lenient else obj[name]
            if lenient:
                return getattr(obj, name, None)
            return getattr(obj, name)

        return get
