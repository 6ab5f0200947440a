"""
Exception types raised by the metric algebra package.

All errors derive from MetricAlgebraError and also from the closest
builtin exception, so callers can catch either.
"""

from __future__ import annotations

from typing import Any, Optional


class MetricAlgebraError(Exception):
    """Base class for all metric algebra errors."""


class UnknownMetric(MetricAlgebraError, KeyError):
    """
    Raised when a metric name is not present in the registry.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown metric: {self.name!r}"


class InvalidMetricExpression(MetricAlgebraError, ValueError):
    """
    Raised when a formula uses symbols other than the four base counts,
    or when a metric name is defined twice.
    """


class SimplificationError(MetricAlgebraError, RuntimeError):
    """
    Raised when the algebra backend fails or the expression is malformed.
    """


class DivisionByZero(MetricAlgebraError, ZeroDivisionError):
    """
    Raised when evaluating an expression at a degenerate confusion matrix.
    """

    def __init__(self, message: str, matrix: Optional[Any] = None) -> None:
        self.matrix = matrix
        super().__init__(message)
