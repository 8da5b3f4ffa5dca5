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
"""Expression-tree grammar for specifications.

A specification exports its condition as a :class:`Lambda`: one formal
:class:`Parameter` plus a body built from the nodes below. Trees are
immutable and inspectable, so an external layer can translate them into a
native filter, and the :mod:`~speclogic.expression.compiler` turns them into
a plain Python callable.

Node Types:
    Parameter:   the formal parameter (compared by identity)
    Constant:    literal value
    Member:      attribute / field access, ``entity.age``
    Call:        invocation of an opaque Python callable
    Compare:     binary comparison, see :class:`CompareOperator`
    AndAlso:     short-circuit conjunction
    OrElse:      short-circuit disjunction
    Not:         logical complement
    Conditional: ``if_true if test else if_false``
    Lambda:      single-parameter tree, the exported artifact
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class CompareOperator(str, Enum):
    """Comparison operators understood by the compiler and translators."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    IN = "in"
    CONTAINS = "contains"
    LIKE = "like"
    IS = "is"
    IS_NOT = "is_not"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS: dict[CompareOperator, str] = {
    CompareOperator.EQ: "==",
    CompareOperator.NE: "!=",
    CompareOperator.LT: "<",
    CompareOperator.LE: "<=",
    CompareOperator.GT: ">",
    CompareOperator.GE: ">=",
    CompareOperator.IN: "in",
    CompareOperator.CONTAINS: "contains",
    CompareOperator.LIKE: "like",
    CompareOperator.IS: "is",
    CompareOperator.IS_NOT: "is not",
}


@dataclass(frozen=True, eq=False)
class Expression:
    """Base class for all expression-tree nodes."""

    def children(self) -> tuple[Expression, ...]:
        """Direct child nodes, left to right."""
        return ()

    def walk(self):
        """Yield this node and every descendant, depth-first."""
        stack: list[Expression] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))


@dataclass(frozen=True, eq=False)
class Parameter(Expression):
    """Formal parameter of a :class:`Lambda`.

    Two parameters are the same variable only if they are the same object,
    whatever their names.
    """

    name: str = "entity"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Parameter({self.name!r}, id=0x{id(self):x})"


@dataclass(frozen=True)
class Constant(Expression):
    value: Any

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class Member(Expression):
    """Access to a named member of ``target``."""

    target: Expression
    name: str

    def children(self) -> tuple[Expression, ...]:
        return (self.target,)

    def __str__(self) -> str:
        return f"{self.target}.{self.name}"


@dataclass(frozen=True)
class Call(Expression):
    """Call of an opaque Python callable with evaluated arguments."""

    function: Callable[..., Any]
    arguments: tuple[Expression, ...] = ()
    label: str | None = None

    def children(self) -> tuple[Expression, ...]:
        return self.arguments

    def __str__(self) -> str:
        name = self.label or getattr(self.function, "__name__", repr(self.function))
        args = ", ".join(str(a) for a in self.arguments)
        return f"{name}({args})"


@dataclass(frozen=True)
class Compare(Expression):
    operator: CompareOperator
    left: Expression
    right: Expression

    def __post_init__(self) -> None:
        # Accept plain strings ("ge") as well as enum members.
        object.__setattr__(self, "operator", CompareOperator(self.operator))

    def children(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"({self.left} {self.operator.symbol} {self.right})"


@dataclass(frozen=True)
class AndAlso(Expression):
    left: Expression
    right: Expression

    def children(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"({self.left} and {self.right})"


@dataclass(frozen=True)
class OrElse(Expression):
    left: Expression
    right: Expression

    def children(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"({self.left} or {self.right})"


@dataclass(frozen=True)
class Not(Expression):
    operand: Expression

    def children(self) -> tuple[Expression, ...]:
        return (self.operand,)

    def __str__(self) -> str:
        return f"not {self.operand}"


@dataclass(frozen=True)
class Conditional(Expression):
    test: Expression
    if_true: Expression
    if_false: Expression

    def children(self) -> tuple[Expression, ...]:
        return (self.test, self.if_true, self.if_false)

    def __str__(self) -> str:
        return f"({self.if_true} if {self.test} else {self.if_false})"


@dataclass(frozen=True)
class Lambda(Expression):
    """Single-parameter expression tree.

    The body may reference ``parameter`` any number of times; it must not
    reference any other parameter that is not bound by a nested lambda.
    """

    parameter: Parameter
    body: Expression

    def children(self) -> tuple[Expression, ...]:
        return (self.parameter, self.body)

    def free_parameters(self) -> set[Parameter]:
        """Parameters referenced in the body but bound by no enclosing lambda."""
        free: set[Parameter] = set()
        _collect_free(self.body, {self.parameter}, free)
        return free

    def __str__(self) -> str:
        return f"lambda {self.parameter}: {self.body}"


def _collect_free(node: Expression, bound: set[Parameter], free: set[Parameter]) -> None:
    if isinstance(node, Parameter):
        if node not in bound:
            free.add(node)
        return
    if isinstance(node, Lambda):
        _collect_free(node.body, bound | {node.parameter}, free)
        return
    for child in node.children():
        _collect_free(child, bound, free)


# Visitor dispatch table: exact node class -> ``visit_<kind>`` suffix.
NODE_KINDS: dict[type[Expression], str] = {
    Parameter: "parameter",
    Constant: "constant",
    Member: "member",
    Call: "call",
    Compare: "compare",
    AndAlso: "and_also",
    OrElse: "or_else",
    Not: "not",
    Conditional: "conditional",
    Lambda: "lambda",
}


def member_path(target: Expression, path: str) -> Expression:
    """Build nested :class:`Member` accesses for a dotted ``path``.

    ``member_path(p, "address.city")`` is ``Member(Member(p, "address"), "city")``.
    """
    node = target
    for name in path.split("."):
        node = Member(node, name)
    return node
