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
"""Tests for the expression-tree grammar."""

from __future__ import annotations

import pytest

from speclogic.expression.nodes import (
    NODE_KINDS,
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
    member_path,
)


class TestParameterIdentity:
    def test_same_name_different_objects_are_different_parameters(self):
        a, b = Parameter("entity"), Parameter("entity")
        assert a != b
        assert a == a
        assert len({a, b}) == 2

    def test_nodes_compare_parameters_by_identity(self):
        p, q = Parameter(), Parameter()
        assert Member(p, "age") == Member(p, "age")
        assert Member(p, "age") != Member(q, "age")


class TestStructuralEquality:
    def test_equal_trees(self):
        p = Parameter()
        left = Lambda(p, Compare(CompareOperator.GE, Member(p, "age"), Constant(18)))
        right = Lambda(p, Compare(CompareOperator.GE, Member(p, "age"), Constant(18)))
        assert left == right

    def test_compare_accepts_string_operator(self):
        p = Parameter()
        node = Compare("ge", Member(p, "age"), Constant(18))
        assert node.operator is CompareOperator.GE

    def test_compare_rejects_unknown_operator(self):
        with pytest.raises(ValueError):
            Compare("approximately", Constant(1), Constant(2))

    def test_nodes_are_immutable(self):
        node = Constant(1)
        with pytest.raises(AttributeError):
            node.value = 2  # type: ignore[misc]


class TestRendering:
    def test_lambda_str(self):
        p = Parameter("person")
        tree = Lambda(
            p,
            AndAlso(
                Compare(CompareOperator.GE, Member(p, "age"), Constant(18)),
                Not(Compare(CompareOperator.IS, Member(p, "license"), Constant(None))),
            ),
        )
        assert str(tree) == "lambda person: ((person.age >= 18) and not (person.license is None))"

    def test_call_uses_label_then_function_name(self):
        p = Parameter()

        def is_vip(entity):
            return True

        assert str(Call(is_vip, (p,))) == "is_vip(entity)"
        assert str(Call(is_vip, (p,), label="vip")) == "vip(entity)"

    def test_conditional_and_or(self):
        p = Parameter()
        node = Conditional(Member(p, "flag"), Constant(1), OrElse(Constant(True), Constant(False)))
        assert str(node) == "(1 if entity.flag else (True or False))"


class TestTraversalHelpers:
    def test_member_path_builds_nested_members(self):
        p = Parameter()
        assert member_path(p, "address.city") == Member(Member(p, "address"), "city")

    def test_walk_visits_every_node(self):
        p = Parameter()
        tree = Lambda(p, AndAlso(Member(p, "a"), Not(Member(p, "b"))))
        kinds = [NODE_KINDS[type(node)] for node in tree.walk()]
        assert kinds == ["lambda", "parameter", "and_also", "member", "parameter", "not", "member", "parameter"]

    def test_free_parameters(self):
        p, stray = Parameter("p"), Parameter("stray")
        assert Lambda(p, Member(p, "a")).free_parameters() == set()
        assert Lambda(p, AndAlso(Member(p, "a"), Member(stray, "b"))).free_parameters() == {stray}

    def test_nested_lambda_binds_its_own_parameter(self):
        outer, inner = Parameter("outer"), Parameter("inner")
        tree = Lambda(outer, Call(any, (Lambda(inner, Member(inner, "x")),)))
        assert tree.free_parameters() == set()

    def test_every_concrete_node_has_a_kind(self):
        assert set(NODE_KINDS) == {
            Parameter, Constant, Member, Call, Compare, AndAlso, OrElse, Not, Conditional, Lambda,
        }
