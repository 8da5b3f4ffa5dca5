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
"""speclogic Specification — the composable predicate algebra."""

from speclogic.specification.base import CompiledSpecification, IdentitySpecification, Specification
from speclogic.specification.combinators import (
    AndSpecification,
    NandSpecification,
    NegatedSpecification,
    NorSpecification,
    OrSpecification,
)
from speclogic.specification.filter import FilterOperator, FilterUtils
from speclogic.specification.leaf import ExpressionSpecification, PredicateSpecification

__all__ = [
    "Specification",
    "IdentitySpecification",
    "CompiledSpecification",
    # Combinators
    "AndSpecification",
    "OrSpecification",
    "NandSpecification",
    "NorSpecification",
    "NegatedSpecification",
    # Leaves
    "ExpressionSpecification",
    "PredicateSpecification",
    "FilterOperator",
    "FilterUtils",
]
