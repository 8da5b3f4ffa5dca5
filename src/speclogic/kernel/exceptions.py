"""Unified exception hierarchy for speclogic.

All library exceptions inherit from SpecLogicException, enabling unified
error handling across modules.

Categories:
- ValidationException: invalid arguments handed to the specification algebra
- ExpressionException: expression trees that cannot be traversed, compiled
  or translated
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class SpecLogicException(Exception):
    """Base exception for all speclogic errors.

    Carries an optional error code and context dict for structured error data.
    Catch SpecLogicException to handle every library error, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "EXPR_UNSUPPORTED_NODE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationException(SpecLogicException):
    """Input validation failures."""


class InvalidArgumentException(ValidationException):
    """A missing or mistyped operand was passed to a specification operator."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="SPEC_INVALID_ARGUMENT", context=context)


# =============================================================================
# Expression Exceptions
# =============================================================================


class ExpressionException(SpecLogicException):
    """Expression trees that cannot be traversed, compiled or translated."""


class UnsupportedExpressionException(ExpressionException):
    """A visitor met a node kind it cannot handle."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="EXPR_UNSUPPORTED_NODE", context=context)


class UnboundParameterException(ExpressionException):
    """A parameter is referenced outside of the lambda that binds it."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="EXPR_UNBOUND_PARAMETER", context=context)
