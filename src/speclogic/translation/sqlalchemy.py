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
"""SQLAlchemy translation of specification trees.

Turns a specification into a SQLAlchemy boolean clause over the mapped
columns of an entity class, so the same specification that evaluates in
memory can filter a ``Select``.

Example::

    translator = SqlAlchemyTranslator()
    spec = FilterOperator.eq("role", "admin") & ~FilterOperator.eq("active", False)

    clause = translator.translate(spec, User)      # ColumnElement[bool]
    stmt = translator.to_predicate(spec, User, select(User))

Supported nodes: member access on the parameter (one level), constants,
every :class:`~speclogic.expression.nodes.CompareOperator`, ``and`` /
``or`` / ``not`` and conditionals (``CASE``). Opaque ``Call`` nodes have no
SQL form and raise
:class:`~speclogic.kernel.exceptions.UnsupportedExpressionException`.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy import Select, and_, case, false, not_, or_, true
from sqlalchemy.orm import QueryableAttribute
from sqlalchemy.sql.elements import ColumnElement

from speclogic.expression.nodes import (
    AndAlso,
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
from speclogic.kernel.exceptions import InvalidArgumentException, UnsupportedExpressionException
from speclogic.specification.base import Specification
from speclogic.translation.port import expression_of

logger = logging.getLogger(__name__)

T = TypeVar("T")

_OPERATORS: dict[CompareOperator, Callable[[Any, Any], Any]] = {
    CompareOperator.EQ: operator.eq,
    CompareOperator.NE: operator.ne,
    CompareOperator.LT: operator.lt,
    CompareOperator.LE: operator.le,
    CompareOperator.GT: operator.gt,
    CompareOperator.GE: operator.ge,
    CompareOperator.IN: lambda column, values: column.in_(list(values)),
    CompareOperator.CONTAINS: lambda column, value: column.contains(value, autoescape=True),
    CompareOperator.LIKE: lambda column, pattern: column.like(pattern, escape="\\"),
    CompareOperator.IS: lambda column, value: column.is_(value),
    CompareOperator.IS_NOT: lambda column, value: column.is_not(value),
}

_REFLECTED = frozenset(
    {
        CompareOperator.EQ,
        CompareOperator.NE,
        CompareOperator.LT,
        CompareOperator.LE,
        CompareOperator.GT,
        CompareOperator.GE,
    }
)


class _ClauseBuilder(ExpressionVisitor[Any]):
    """Builds the clause for one lambda against one entity class."""

    def __init__(self, root: type[Any], parameter: Parameter) -> None:
        self._root = root
        self._parameter = parameter

    def visit_parameter(self, node: Parameter) -> Any:
        if node is not self._parameter:
            raise UnsupportedExpressionException(
                f"Parameter '{node.name}' is not the lambda parameter",
                context={"parameter": repr(node)},
            )
        return self._root

    def visit_constant(self, node: Constant) -> Any:
        return node.value

    def visit_member(self, node: Member) -> Any:
        if not isinstance(node.target, Parameter):
            raise UnsupportedExpressionException(
                f"Nested member access '{node}' has no column on {self._root.__name__}",
                context={"member": str(node)},
            )
        root = self.visit(node.target)
        column = getattr(root, node.name, None)
        if column is None:
            raise UnsupportedExpressionException(
                f"{self._root.__name__} has no mapped attribute '{node.name}'",
                context={"member": str(node), "root": self._root.__name__},
            )
        return column

    def visit_compare(self, node: Compare) -> Any:
        left, right = self.visit(node.left), self.visit(node.right)
        # Python reflects plain comparisons onto the column; the rest need it on the left.
        if isinstance(node.left, Constant) and node.operator not in _REFLECTED:
            raise UnsupportedExpressionException(
                f"Comparison '{node}' must have the column on the left",
                context={"node": str(node)},
            )
        return _OPERATORS[node.operator](left, right)

    def visit_and_also(self, node: AndAlso) -> Any:
        return and_(self.clause(node.left), self.clause(node.right))

    def visit_or_else(self, node: OrElse) -> Any:
        return or_(self.clause(node.left), self.clause(node.right))

    def visit_not(self, node: Not) -> Any:
        return not_(self.clause(node.operand))

    def visit_conditional(self, node: Conditional) -> Any:
        return case((self.clause(node.test), self.visit(node.if_true)), else_=self.visit(node.if_false))

    def clause(self, node: Any) -> ColumnElement[bool]:
        """Visit ``node`` in boolean position."""
        value = self.visit(node)
        if value is True:
            return true()
        if value is False:
            return false()
        if isinstance(value, QueryableAttribute):
            return value.expression
        if not isinstance(value, ColumnElement):
            raise UnsupportedExpressionException(
                f"'{node}' does not translate to a boolean clause",
                context={"node": str(node)},
            )
        return value


class SqlAlchemyTranslator:
    """Translate specifications into SQLAlchemy WHERE clauses."""

    def translate(self, specification: Specification[Any] | Lambda, root: Any = None) -> ColumnElement[bool]:
        """Return the boolean clause for ``specification`` over entity class ``root``."""
        if root is None:
            raise InvalidArgumentException("SqlAlchemyTranslator.translate() requires an entity class")
        expression = expression_of(specification)
        clause = _ClauseBuilder(root, expression.parameter).clause(expression.body)
        logger.debug("Translated %s for %s", expression, getattr(root, "__name__", root))
        return clause

    def to_predicate(self, specification: Specification[T] | Lambda, root: type[T], query: Select[Any]) -> Select[Any]:
        """Apply ``specification`` to ``query`` as a WHERE clause."""
        return query.where(self.translate(specification, root))
