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
"""Tests for leaf specifications, FilterOperator and FilterUtils."""

from __future__ import annotations

import dataclasses
from types import SimpleNamespace

import pytest

from speclogic.expression.nodes import Call, Compare, CompareOperator, Constant, Lambda, Member, Parameter
from speclogic.kernel.exceptions import InvalidArgumentException, UnboundParameterException
from speclogic.specification.base import CompiledSpecification, Specification
from speclogic.specification.filter import FilterOperator, FilterUtils
from speclogic.specification.leaf import ExpressionSpecification, PredicateSpecification

# ---------------------------------------------------------------------------
# Test entities
# ---------------------------------------------------------------------------


@dataclasses.dataclass
class User:
    name: str
    role: str = "user"
    age: int = 25
    active: bool = True
    bio: str | None = None
    address: SimpleNamespace | None = None


@dataclasses.dataclass
class UserFilter:
    role: str | None = None
    active: bool | None = None


USERS = [
    User("Alice", role="admin", age=30, bio="likes SQL"),
    User("Bob", age=17, address=SimpleNamespace(city="Lisbon")),
    User("Charlie", role="admin", age=45, active=False),
    User("Diana", age=22, active=False, bio="writes Python"),
]


def _names(spec: Specification[User]) -> list[str]:
    return sorted(u.name for u in spec.compile().filter(USERS))


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


class TestExpressionSpecification:
    def test_wraps_tree(self):
        p = Parameter("user")
        tree = Lambda(p, Compare(CompareOperator.EQ, Member(p, "role"), Constant("admin")))
        spec = ExpressionSpecification(tree)
        assert spec.to_expression() is tree
        assert _names(spec) == ["Alice", "Charlie"]

    def test_rejects_free_parameters(self):
        p, stray = Parameter("p"), Parameter("stray")
        with pytest.raises(UnboundParameterException):
            ExpressionSpecification(Lambda(p, Member(stray, "role")))

    def test_rejects_non_lambda(self):
        with pytest.raises(InvalidArgumentException):
            ExpressionSpecification(Constant(True))  # type: ignore[arg-type]


class TestPredicateSpecification:
    def test_exports_call_node(self):
        def is_senior(user: User) -> bool:
            return user.age >= 40

        spec = PredicateSpecification(is_senior)
        tree = spec.to_expression()
        assert isinstance(tree.body, Call)
        assert tree.body.arguments == (tree.parameter,)
        assert str(tree) == "lambda entity: is_senior(entity)"
        assert _names(spec) == ["Charlie"]

    def test_to_expression_is_deterministic(self):
        spec = PredicateSpecification(lambda u: u.active, label="active")
        assert spec.to_expression() == spec.to_expression()

    def test_rejects_non_callable(self):
        with pytest.raises(InvalidArgumentException):
            PredicateSpecification(42)  # type: ignore[arg-type]

    def test_mixes_with_field_specs(self):
        spec = FilterOperator.eq("role", "admin") & PredicateSpecification(lambda u: u.active)
        assert _names(spec) == ["Alice"]


# ---------------------------------------------------------------------------
# FilterOperator
# ---------------------------------------------------------------------------


class TestFilterOperator:
    def test_eq(self):
        assert _names(FilterOperator.eq("role", "admin")) == ["Alice", "Charlie"]

    def test_neq(self):
        assert _names(FilterOperator.neq("role", "admin")) == ["Bob", "Diana"]

    def test_gt_gte_lt_lte(self):
        assert _names(FilterOperator.gt("age", 30)) == ["Charlie"]
        assert _names(FilterOperator.gte("age", 30)) == ["Alice", "Charlie"]
        assert _names(FilterOperator.lt("age", 22)) == ["Bob"]
        assert _names(FilterOperator.lte("age", 22)) == ["Bob", "Diana"]

    def test_like(self):
        assert _names(FilterOperator.like("name", "%li%")) == ["Alice", "Charlie"]

    def test_contains(self):
        assert _names(FilterOperator.contains("name", "an")) == ["Diana"]

    def test_in_list(self):
        assert _names(FilterOperator.in_list("name", ["Bob", "Diana", "Zed"])) == ["Bob", "Diana"]

    def test_is_null_and_is_not_null(self):
        assert _names(FilterOperator.is_null("bio")) == ["Bob", "Charlie"]
        assert _names(FilterOperator.is_not_null("bio")) == ["Alice", "Diana"]

    def test_between_is_inclusive(self):
        assert _names(FilterOperator.between("age", 22, 30)) == ["Alice", "Diana"]

    def test_dotted_path(self):
        spec = FilterOperator.is_not_null("address") & FilterOperator.eq("address.city", "Lisbon")
        assert _names(spec) == ["Bob"]

    def test_combined_range(self):
        assert _names(FilterOperator.gte("age", 18) & FilterOperator.lt("age", 40)) == ["Alice", "Diana"]

    def test_empty_field_rejected(self):
        with pytest.raises(InvalidArgumentException):
            FilterOperator.eq("", 1)


# ---------------------------------------------------------------------------
# FilterUtils
# ---------------------------------------------------------------------------


class TestFilterUtils:
    def test_by_kwargs(self):
        assert _names(FilterUtils.by(role="admin", active=True)) == ["Alice"]

    def test_by_single_kwarg_returns_leaf(self):
        spec = FilterUtils.by(role="admin")
        assert isinstance(spec, ExpressionSpecification)

    def test_by_nothing_is_identity(self):
        assert FilterUtils.by() is Specification.IDENTITY

    def test_from_dict_skips_none(self):
        assert _names(FilterUtils.from_dict({"role": "admin", "name": None})) == ["Alice", "Charlie"]

    def test_from_dict_all_none_is_identity(self):
        assert FilterUtils.from_dict({"role": None}) is Specification.IDENTITY

    def test_from_example_dataclass(self):
        assert _names(FilterUtils.from_example(UserFilter(active=False))) == ["Charlie", "Diana"]

    def test_from_example_plain_object(self):
        example = SimpleNamespace(role="user", active=True)
        assert _names(FilterUtils.from_example(example)) == ["Bob"]

    def test_none_inputs_rejected(self):
        with pytest.raises(InvalidArgumentException):
            FilterUtils.from_dict(None)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentException):
            FilterUtils.from_example(None)


# ---------------------------------------------------------------------------
# CompiledSpecification
# ---------------------------------------------------------------------------


class TestCompiledSpecification:
    def test_callable_filter_and_count(self):
        compiled = FilterOperator.eq("role", "admin").compile()
        assert isinstance(compiled, CompiledSpecification)
        assert compiled(USERS[0]) is True
        assert compiled(USERS[1]) is False
        assert compiled.count(USERS) == 2
        assert [u.name for u in compiled.filter(USERS)] == ["Alice", "Charlie"]

    def test_matches_is_satisfied_by(self):
        spec = FilterOperator.gte("age", 18).nand(FilterOperator.eq("active", True))
        compiled = spec.compile()
        for user in USERS:
            assert compiled(user) == spec.is_satisfied_by(user)

    def test_compile_none_rejected(self):
        with pytest.raises(InvalidArgumentException):
            CompiledSpecification(None)  # type: ignore[arg-type]
