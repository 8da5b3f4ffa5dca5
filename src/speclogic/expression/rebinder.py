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
"""Parameter rebinding.

Two specifications built independently each own their own
:class:`~speclogic.expression.nodes.Parameter`. Before their bodies can sit
under one lambda, every reference to the right-hand parameter has to be
rewritten to the left-hand one. :class:`ParameterRebinder` performs that
rewrite on top of :class:`~speclogic.expression.visitor.ExpressionRewriter`,
so every node kind of the grammar is covered.

Example::

    left, right = adult.to_expression(), licensed.to_expression()
    right = ParameterRebinder(left.parameter).rebind(right)
    merged = Lambda(left.parameter, AndAlso(left.body, right.body))
"""

from __future__ import annotations

from speclogic.expression.nodes import Expression, Lambda, Parameter
from speclogic.expression.visitor import ExpressionRewriter
from speclogic.kernel.exceptions import InvalidArgumentException


class ParameterRebinder(ExpressionRewriter):
    """Rewrites references to one parameter into references to ``target``.

    A rebinder carries the parameter it replaces while a rebind is running,
    so each composition creates its own instance.
    """

    def __init__(self, target: Parameter) -> None:
        if not isinstance(target, Parameter):
            raise InvalidArgumentException(
                f"Rebind target must be a Parameter, got {type(target).__name__}",
            )
        self._target = target
        self._source: Parameter | None = None

    @property
    def target(self) -> Parameter:
        return self._target

    def rebind(self, expression: Lambda) -> Lambda:
        """Return ``expression`` re-expressed over the target parameter."""
        if not isinstance(expression, Lambda):
            raise InvalidArgumentException(
                f"Only lambdas can be rebound, got {type(expression).__name__}",
            )
        if expression.parameter is self._target:
            return expression
        return Lambda(self._target, self.replace(expression.parameter, expression.body))

    def replace(self, source: Parameter, node: Expression) -> Expression:
        """Rewrite every reference to ``source`` inside ``node``."""
        self._source = source
        try:
            return self.visit(node)
        finally:
            self._source = None

    def visit_parameter(self, node: Parameter) -> Expression:
        if node is self._source:
            return self._target
        return node
