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
"""Expression-tree traversal.

:class:`ExpressionVisitor` dispatches each node to ``visit_<kind>`` by the
node's exact class (see :data:`~speclogic.expression.nodes.NODE_KINDS`).
Nodes outside the grammar, and kinds a visitor does not implement, raise
:class:`~speclogic.kernel.exceptions.UnsupportedExpressionException` on the
spot instead of being skipped.

:class:`ExpressionRewriter` is the structure-preserving base for visitors
that produce a new tree: it handles every node kind and returns the very
same node object when none of its children changed.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Generic, TypeVar

from speclogic.expression.nodes import (
    NODE_KINDS,
    AndAlso,
    Call,
    Compare,
    Conditional,
    Constant,
    Expression,
    Lambda,
    Member,
    Not,
    OrElse,
    Parameter,
)
from speclogic.kernel.exceptions import UnsupportedExpressionException

R = TypeVar("R")


class ExpressionVisitor(Generic[R]):
    """Base visitor with exact-class dispatch."""

    def visit(self, node: Expression) -> R:
        kind = NODE_KINDS.get(type(node))
        if kind is None:
            raise UnsupportedExpressionException(
                f"{type(node).__name__} is not an expression node {type(self).__name__} can traverse",
                context={"node": repr(node), "visitor": type(self).__name__},
            )
        method = getattr(self, f"visit_{kind}", None)
        if method is None:
            raise UnsupportedExpressionException(
                f"{type(self).__name__} does not support '{kind}' expressions: {node}",
                context={"node": str(node), "kind": kind, "visitor": type(self).__name__},
            )
        return method(node)


class ExpressionRewriter(ExpressionVisitor[Expression]):
    """Rebuilds a tree node by node; override ``visit_*`` to rewrite."""

    def visit_parameter(self, node: Parameter) -> Expression:
        return node

    def visit_constant(self, node: Constant) -> Expression:
        return node

    def visit_member(self, node: Member) -> Expression:
        target = self.visit(node.target)
        if target is node.target:
            return node
        return replace(node, target=target)

    def visit_call(self, node: Call) -> Expression:
        arguments = tuple(self.visit(arg) for arg in node.arguments)
        if _same(arguments, node.arguments):
            return node
        return replace(node, arguments=arguments)

    def visit_compare(self, node: Compare) -> Expression:
        left, right = self.visit(node.left), self.visit(node.right)
        if left is node.left and right is node.right:
            return node
        return replace(node, left=left, right=right)

    def visit_and_also(self, node: AndAlso) -> Expression:
        return self._binary(node)

    def visit_or_else(self, node: OrElse) -> Expression:
        return self._binary(node)

    def visit_not(self, node: Not) -> Expression:
        operand = self.visit(node.operand)
        if operand is node.operand:
            return node
        return replace(node, operand=operand)

    def visit_conditional(self, node: Conditional) -> Expression:
        test = self.visit(node.test)
        if_true = self.visit(node.if_true)
        if_false = self.visit(node.if_false)
        if _same((test, if_true, if_false), node.children()):
            return node
        return replace(node, test=test, if_true=if_true, if_false=if_false)

    def visit_lambda(self, node: Lambda) -> Expression:
        parameter = self.visit(node.parameter)
        if not isinstance(parameter, Parameter):
            raise UnsupportedExpressionException(
                f"Lambda parameter rewritten to a non-parameter node: {parameter}",
                context={"node": str(node)},
            )
        body = self.visit(node.body)
        if parameter is node.parameter and body is node.body:
            return node
        return Lambda(parameter, body)

    def _binary(self, node: Any) -> Expression:
        left, right = self.visit(node.left), self.visit(node.right)
        if left is node.left and right is node.right:
            return node
        return replace(node, left=left, right=right)


def _same(new: tuple[Expression, ...], old: tuple[Expression, ...]) -> bool:
    return all(a is b for a, b in zip(new, old, strict=True))
