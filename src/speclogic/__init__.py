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
"""speclogic — composable predicate specifications as inspectable expression trees.

Specifications are combined with ``&``, ``|``, ``~`` (or ``and_``, ``or_``,
``nand``, ``nor``, ``not_``), evaluated in memory with ``is_satisfied_by``,
and exported with ``to_expression`` for translation into SQLAlchemy
clauses or MongoDB filter documents.
"""

from speclogic.expression import EvaluationProperties, ExpressionCompiler, Lambda, ParameterRebinder
from speclogic.kernel import (
    InvalidArgumentException,
    SpecLogicException,
    UnboundParameterException,
    UnsupportedExpressionException,
)
from speclogic.specification import (
    CompiledSpecification,
    ExpressionSpecification,
    FilterOperator,
    FilterUtils,
    PredicateSpecification,
    Specification,
)

__version__ = "0.1.0"

__all__ = [
    "CompiledSpecification",
    "EvaluationProperties",
    "ExpressionCompiler",
    "ExpressionSpecification",
    "FilterOperator",
    "FilterUtils",
    "InvalidArgumentException",
    "Lambda",
    "ParameterRebinder",
    "PredicateSpecification",
    "SpecLogicException",
    "Specification",
    "UnboundParameterException",
    "UnsupportedExpressionException",
    "__version__",
]
