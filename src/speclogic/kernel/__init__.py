"""speclogic kernel — foundation layer with zero external dependencies."""

from speclogic.kernel.exceptions import (
    ExpressionException,
    InvalidArgumentException,
    SpecLogicException,
    UnboundParameterException,
    UnsupportedExpressionException,
    ValidationException,
)

__all__ = [
    # Base
    "SpecLogicException",
    # Validation
    "ValidationException",
    "InvalidArgumentException",
    # Expression
    "ExpressionException",
    "UnsupportedExpressionException",
    "UnboundParameterException",
]
