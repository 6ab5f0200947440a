"""
Numeric evaluation of symbolic metrics.

This module turns registry formulas into plain Python callables over
(tp, fp, fn, tn) and evaluates them at concrete confusion matrices.

The compiled functions use ordinary Python arithmetic, so a zero
denominator raises ZeroDivisionError; we report it as DivisionByZero
carrying the offending matrix.

The helpers here are used by:
- metric_algebra.data.sweep
- metric_algebra.evaluation.analysis
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

import sympy

from metric_algebra.data.confusion import ConfusionMatrix
from metric_algebra.errors import DivisionByZero
from metric_algebra.formulas.registry import BASE_SYMBOLS, MetricRegistry, build_default_registry


MetricFunction = Callable[[int, int, int, int], float]


def compile_metric(expression: sympy.Expr) -> MetricFunction:
    """
    Compile a symbolic metric into a callable f(tp, fp, fn, tn).

    Parameters
    ----------
    expression : sympy.Expr
        Formula over the base count symbols.

    Returns
    -------
    MetricFunction
        Function evaluating the formula with Python arithmetic.
    """
    return sympy.lambdify(BASE_SYMBOLS, expression, modules="math")


def evaluate_metric(fn: MetricFunction, matrix: ConfusionMatrix) -> float:
    """
    Evaluate a compiled metric at a confusion matrix.

    Raises
    ------
    DivisionByZero
        If a denominator vanishes at this matrix.
    """
    try:
        return float(fn(*matrix.as_tuple()))
    except ZeroDivisionError as exc:
        raise DivisionByZero(
            f"Zero denominator at {matrix}", matrix=matrix
        ) from exc


def compute_metric_values(
    matrix: ConfusionMatrix,
    names: Sequence[str],
    registry: Optional[MetricRegistry] = None,
) -> Dict[str, Optional[float]]:
    """
    Compute several registered metrics at one confusion matrix.

    Parameters
    ----------
    matrix : ConfusionMatrix
        Counts to evaluate at.
    names : Sequence[str]
        Metric names to look up in the registry.
    registry : Optional[MetricRegistry]
        Registry to use. Defaults to build_default_registry().

    Returns
    -------
    Dict[str, Optional[float]]
        Metric name -> value, or None where the metric is undefined
        (zero denominator) at this matrix.
    """
    if registry is None:
        registry = build_default_registry()

    values: Dict[str, Optional[float]] = {}
    for name in names:
        fn = compile_metric(registry.lookup(name))
        try:
            values[name] = evaluate_metric(fn, matrix)
        except DivisionByZero:
            values[name] = None
    return values
