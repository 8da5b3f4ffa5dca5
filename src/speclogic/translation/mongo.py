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
"""MongoDB translation of specification trees.

Mirrors :class:`~speclogic.translation.sqlalchemy.SqlAlchemyTranslator` but
produces MongoDB filter documents (``dict``).

Example::

    translator = MongoTranslator()
    translator.translate(FilterOperator.gte("age", 18) & FilterOperator.eq("role", "admin"))
    # {"$and": [{"age": {"$gte": 18}}, {"role": "admin"}]}

* ``a & b`` becomes ``$and`` (match-all operands are dropped),
* ``a | b`` becomes ``$or`` (a match-all operand makes the whole ``$or`` match all),
* ``~a`` becomes ``$nor``,
* :data:`Specification.IDENTITY` becomes ``{}``.

Comparisons must be ``field <op> constant``; nested members become dotted
paths (``address.city``). Opaque ``Call`` nodes and conditionals raise
:class:`~speclogic.kernel.exceptions.UnsupportedExpressionException`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from speclogic.core.config import config_properties
from speclogic.expression.compiler import like_to_regex
from speclogic.expression.nodes import (
    AndAlso,
    Compare,
    CompareOperator,
    Constant,
    Expression,
    Lambda,
    Member,
    Not,
    OrElse,
    Parameter,
)
from speclogic.expression.visitor import ExpressionVisitor
from speclogic.kernel.exceptions import UnsupportedExpressionException
from speclogic.specification.base import Specification
from speclogic.translation.port import expression_of

logger = logging.getLogger(__name__)

_MATCH_NOTHING: dict[str, Any] = {"$expr": False}

_MONGO_OPERATORS: dict[CompareOperator, str] = {
    CompareOperator.NE: "$ne",
    CompareOperator.LT: "$lt",
    CompareOperator.LE: "$lte",
    CompareOperator.GT: "$gt",
    CompareOperator.GE: "$gte",
}


@config_properties(prefix="speclogic.translation.mongo")
@dataclass
class MongoTranslationProperties:
    """Options for MongoDB filter documents.

    Attributes:
        regex_options: ``$options`` added to ``like``/``contains`` regexes
            (``"i"`` for case-insensitive matching). ``like`` also gets
            ``s`` so its wildcards match newlines.
    """

    regex_options: str = ""


class _FilterBuilder(ExpressionVisitor[dict[str, Any]]):
    """Builds the filter document for one lambda."""

    def __init__(self, parameter: Parameter, properties: MongoTranslationProperties) -> None:
        self._parameter = parameter
        self._properties = properties

    def visit_constant(self, node: Constant) -> dict[str, Any]:
        if node.value is True:
            return {}
        if node.value is False:
            return dict(_MATCH_NOTHING)
        raise UnsupportedExpressionException(
            f"Constant {node} is not a filter",
            context={"node": str(node)},
        )

    def visit_member(self, node: Member) -> dict[str, Any]:
        # A bare member in boolean position: ``entity.active``.
        return {self._path(node): True}

    def visit_compare(self, node: Compare) -> dict[str, Any]:
        if not isinstance(node.left, Member) or not isinstance(node.right, Constant):
            raise UnsupportedExpressionException(
                f"Comparison '{node}' must compare a field with a constant",
                context={"node": str(node)},
            )
        path, value = self._path(node.left), node.right.value
        op = node.operator

        if op in (CompareOperator.EQ, CompareOperator.IS):
            return {path: value}
        if op is CompareOperator.IS_NOT:
            return {path: {"$ne": value}}
        if op is CompareOperator.IN:
            return {path: {"$in": list(value)}}
        if op is CompareOperator.CONTAINS:
            return {path: self._regex(re.escape(str(value)))}
        if op is CompareOperator.LIKE:
            return {path: self._regex(f"^{like_to_regex(str(value)).pattern}$", dotall=True)}
        return {path: {_MONGO_OPERATORS[op]: value}}

    def visit_and_also(self, node: AndAlso) -> dict[str, Any]:
        left, right = self.visit(node.left), self.visit(node.right)
        if not left:
            return right
        if not right:
            return left
        return {"$and": [left, right]}

    def visit_or_else(self, node: OrElse) -> dict[str, Any]:
        left, right = self.visit(node.left), self.visit(node.right)
        if not left or not right:
            return {}
        return {"$or": [left, right]}

    def visit_not(self, node: Not) -> dict[str, Any]:
        operand = self.visit(node.operand)
        if not operand:
            return dict(_MATCH_NOTHING)
        return {"$nor": [operand]}

    def _path(self, node: Expression) -> str:
        names: list[str] = []
        while isinstance(node, Member):
            names.append(node.name)
            node = node.target
        if node is not self._parameter:
            raise UnsupportedExpressionException(
                f"Field path does not start at the lambda parameter: {node}",
                context={"node": str(node)},
            )
        return ".".join(reversed(names))

    def _regex(self, pattern: str, dotall: bool = False) -> dict[str, Any]:
        doc: dict[str, Any] = {"$regex": pattern}
        options = self._properties.regex_options
        # LIKE wildcards match newlines, as in the compiled predicate.
        if dotall and "s" not in options:
            options += "s"
        if options:
            doc["$options"] = options
        return doc


class MongoTranslator:
    """Translate specifications into MongoDB filter documents."""

    def __init__(self, properties: MongoTranslationProperties | None = None) -> None:
        self._properties = properties or MongoTranslationProperties()

    def translate(self, specification: Specification[Any] | Lambda, root: Any = None) -> dict[str, Any]:
        """Return the filter document for ``specification``.

        ``root`` is accepted for :class:`~speclogic.translation.port.TranslatorPort`
        conformance; MongoDB filters do not depend on the document class.
        """
        expression = expression_of(specification)
        document = _FilterBuilder(expression.parameter, self._properties).visit(expression.body)
        logger.debug("Translated %s to %s", expression, document)
        return document
