"""speclogic Expression — inspectable expression trees, traversal and compilation."""

from speclogic.expression.compiler import EvaluationProperties, ExpressionCompiler, like_to_regex
from speclogic.expression.nodes import (
    AndAlso,
    Call,
    Compare,
    CompareOperator,
    Conditional,
    Constant,
    Expression,
    Lambda,
    Member,
    Not,
    OrElse,
    Parameter,
    member_path,
)
from speclogic.expression.rebinder import ParameterRebinder
from speclogic.expression.visitor import ExpressionRewriter, ExpressionVisitor

__all__ = [
    # Nodes
    "AndAlso",
    "Call",
    "Compare",
    "CompareOperator",
    "Conditional",
    "Constant",
    "Expression",
    "Lambda",
    "Member",
    "Not",
    "OrElse",
    "Parameter",
    "member_path",
    # Traversal
    "ExpressionRewriter",
    "ExpressionVisitor",
    "ParameterRebinder",
    # Compilation
    "EvaluationProperties",
    "ExpressionCompiler",
    "like_to_regex",
]
