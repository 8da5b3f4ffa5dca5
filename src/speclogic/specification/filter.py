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
"""Field-level leaf factories and Query by Example helpers.

:class:`FilterOperator` builds one-comparison specifications whose trees
are plain member/constant comparisons, so they evaluate in memory *and*
translate to SQLAlchemy or MongoDB. :class:`FilterUtils` derives an
AND-combined specification from keyword arguments, dicts or example
objects.

Example::

    # From keyword arguments (eq by default, ANDed together)
    spec = FilterUtils.by(name="Alice", active=True)

    # From a dict (None values are skipped)
    spec = FilterUtils.from_dict({"role": "admin", "name": None})

    # From a partial entity / dataclass
    spec = FilterUtils.from_example(UserFilter(role="admin"))

    # Using operators directly for richer predicates
    spec = FilterOperator.gte("age", 18) & FilterOperator.lt("age", 65)

Field names may be dotted paths (``"address.city"``).
"""

from __future__ import annotations

import dataclasses
from typing import Any

from speclogic.expression.nodes import (
    AndAlso,
    Compare,
    CompareOperator,
    Constant,
    Expression,
    Lambda,
    Parameter,
    member_path,
)
from speclogic.kernel.exceptions import InvalidArgumentException
from speclogic.specification.base import Specification
from speclogic.specification.leaf import ExpressionSpecification


def _field_spec(field: str, build: Any) -> Specification[Any]:
    if not isinstance(field, str) or not field:
        raise InvalidArgumentException(f"Field name must be a non-empty string, got {field!r}")
    parameter = Parameter()
    body: Expression = build(member_path(parameter, field))
    return ExpressionSpecification(Lambda(parameter, body))


def _compare(field: str, operator: CompareOperator, value: Any) -> Specification[Any]:
    return _field_spec(field, lambda member: Compare(operator, member, Constant(value)))


class FilterOperator:
    """Filter operators for building field-level specifications.

    Each static method returns a :class:`Specification` comparing one field
    against a constant. Combine them with ``&`` (AND), ``|`` (OR), and
    ``~`` (NOT).
    """

    @staticmethod
    def eq(field: str, value: Any) -> Specification[Any]:
        """Equal to."""
        return _compare(field, CompareOperator.EQ, value)

    @staticmethod
    def neq(field: str, value: Any) -> Specification[Any]:
        """Not equal to."""
        return _compare(field, CompareOperator.NE, value)

    @staticmethod
    def gt(field: str, value: Any) -> Specification[Any]:
        """Greater than."""
        return _compare(field, CompareOperator.GT, value)

    @staticmethod
    def gte(field: str, value: Any) -> Specification[Any]:
        """Greater than or equal."""
        return _compare(field, CompareOperator.GE, value)

    @staticmethod
    def lt(field: str, value: Any) -> Specification[Any]:
        """Less than."""
        return _compare(field, CompareOperator.LT, value)

    @staticmethod
    def lte(field: str, value: Any) -> Specification[Any]:
        """Less than or equal."""
        return _compare(field, CompareOperator.LE, value)

    @staticmethod
    def like(field: str, pattern: str) -> Specification[Any]:
        """SQL LIKE pattern match (``%`` any run, ``_`` one character)."""
        return _compare(field, CompareOperator.LIKE, pattern)

    @staticmethod
    def contains(field: str, value: str) -> Specification[Any]:
        """String contains."""
        return _compare(field, CompareOperator.CONTAINS, value)

    @staticmethod
    def in_list(field: str, values: list[Any]) -> Specification[Any]:
        """Value is in list."""
        return _compare(field, CompareOperator.IN, tuple(values))

    @staticmethod
    def is_null(field: str) -> Specification[Any]:
        """Value is None."""
        return _compare(field, CompareOperator.IS, None)

    @staticmethod
    def is_not_null(field: str) -> Specification[Any]:
        """Value is not None."""
        return _compare(field, CompareOperator.IS_NOT, None)

    @staticmethod
    def between(field: str, low: Any, high: Any) -> Specification[Any]:
        """Value is between *low* and *high* (inclusive)."""
        return _field_spec(
            field,
            lambda member: AndAlso(
                Compare(CompareOperator.GE, member, Constant(low)),
                Compare(CompareOperator.LE, member, Constant(high)),
            ),
        )


class FilterUtils:
    """Generate Specifications dynamically from entities, dicts, or kwargs.

    An empty set of filters yields :data:`Specification.IDENTITY`, so the
    result can be combined further without special cases.
    """

    @classmethod
    def by(cls, **kwargs: Any) -> Specification[Any]:
        """Create a specification from keyword arguments (all eq, ANDed)."""
        specs = [FilterOperator.eq(field, value) for field, value in kwargs.items()]
        return cls._combine_and(specs)

    @classmethod
    def from_dict(cls, filters: dict[str, Any]) -> Specification[Any]:
        """Create a specification from a dict of field->value pairs (all eq, ANDed).

        ``None`` values are skipped.
        """
        if filters is None:
            raise InvalidArgumentException("FilterUtils.from_dict() requires a dict, got None")
        specs = [FilterOperator.eq(field, value) for field, value in filters.items() if value is not None]
        return cls._combine_and(specs)

    @classmethod
    def from_example(cls, example: Any) -> Specification[Any]:
        """Create a specification from an example entity/DTO.

        Extracts non-``None`` field values and creates eq filters for each.
        Supports dataclasses and any object with ``__dict__``.
        """
        if example is None:
            raise InvalidArgumentException("FilterUtils.from_example() requires an example, got None")
        if dataclasses.is_dataclass(example) and not isinstance(example, type):
            fields = {f.name: getattr(example, f.name) for f in dataclasses.fields(example)}
        else:
            fields = vars(example)

        specs = [FilterOperator.eq(field, value) for field, value in fields.items() if value is not None]
        return cls._combine_and(specs)

    @staticmethod
    def _combine_and(specs: list[Specification[Any]]) -> Specification[Any]:
        """AND-combine a list of specs. Returns the identity if empty."""
        result: Specification[Any] = Specification.IDENTITY
        for spec in specs:
            result = result & spec
        return result
