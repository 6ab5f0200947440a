"""
Symbolic metric formulas over the four confusion-matrix counts.

This module provides:

- the four base count symbols (tp, fp, fn, tn)
- MetricRegistry, a name -> sympy expression store
- build_default_registry(), which defines every supported metric:
    * Sensitivity, Specificity, Prevalence
    * PPV and NPV (composed from Sensitivity, Specificity, Prevalence)
    * DetectionRate, DetectionPrevalence, Accuracy, BalancedAccuracy
    * TPR, FPR, FNR, TNR, Recall, Precision, F1
    * ScoreTrueGTFalse and AUC (hard classifier)
    * Informedness, Markedness, F1Direct

Formulas are purely symbolic. Numeric evaluation lives in
metric_algebra.evaluation.metrics.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

import sympy

from metric_algebra.errors import InvalidMetricExpression, UnknownMetric


TP, FP, FN, TN = sympy.symbols("tp fp fn tn", integer=True, nonnegative=True)

BASE_SYMBOLS: Tuple[sympy.Symbol, ...] = (TP, FP, FN, TN)

# Exact one-half keeps symbolic differences free of float residue.
HALF = sympy.Rational(1, 2)


def metric_symbols() -> Tuple[sympy.Symbol, sympy.Symbol, sympy.Symbol, sympy.Symbol]:
    """
    Return the base count symbols in the order (tp, fp, fn, tn).
    """
    return TP, FP, FN, TN


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class MetricRegistry:
    """
    Store of named metric formulas.

    Formulas are immutable once defined: a name can only be defined once.
    Each expression may reference only the four base count symbols, so
    composed metrics are built by looking up earlier definitions and
    combining the returned expressions.
    """

    def __init__(self) -> None:
        self._formulas: Dict[str, sympy.Expr] = {}

    def define(self, name: str, expression) -> sympy.Expr:
        """
        Register a formula under `name` and return the stored expression.

        Parameters
        ----------
        name : str
            Metric name, e.g. "Sensitivity".
        expression : sympy.Expr or number
            Formula over tp, fp, fn, tn.

        Raises
        ------
        InvalidMetricExpression
            If the name is empty or already defined, or the expression
            contains free symbols other than the base counts.
        """
        if not name:
            raise InvalidMetricExpression("Metric name must be a non-empty string.")
        if name in self._formulas:
            raise InvalidMetricExpression(f"Metric {name!r} is already defined.")

        try:
            expr = sympy.sympify(expression)
        except (sympy.SympifyError, TypeError) as exc:
            raise InvalidMetricExpression(
                f"Cannot interpret formula for {name!r}: {expression!r}"
            ) from exc

        extra = expr.free_symbols - set(BASE_SYMBOLS)
        if extra:
            raise InvalidMetricExpression(
                f"Formula for {name!r} uses unknown symbols: "
                f"{sorted(str(s) for s in extra)}. "
                f"Only {[str(s) for s in BASE_SYMBOLS]} are allowed."
            )

        self._formulas[name] = expr
        return expr

    def lookup(self, name: str) -> sympy.Expr:
        try:
            return self._formulas[name]
        except KeyError:
            raise UnknownMetric(name) from None

    def names(self) -> List[str]:
        return list(self._formulas)

    def __contains__(self, name: object) -> bool:
        return name in self._formulas

    def __len__(self) -> int:
        return len(self._formulas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._formulas)


# ---------------------------------------------------------------------------
# Default definitions
# ---------------------------------------------------------------------------


def f_beta_expression(precision: sympy.Expr, recall: sympy.Expr, beta=1) -> sympy.Expr:
    """
    Weighted harmonic mean of precision and recall.

    F_beta = (1 + beta^2) * P * R / (beta^2 * P + R)
    """
    beta = sympy.sympify(beta)
    if not beta.is_positive:
        raise InvalidMetricExpression(f"beta must be positive, got {beta}")
    b2 = beta ** 2
    return (1 + b2) * precision * recall / (b2 * precision + recall)


def define_f_beta(registry: MetricRegistry, beta, name: Optional[str] = None) -> sympy.Expr:
    """
    Define an F-beta metric from the registry's Precision and Recall.

    The metric is stored as "F<beta>" unless `name` is given.
    """
    name = name or f"F{beta}"
    expr = f_beta_expression(registry.lookup("Precision"), registry.lookup("Recall"), beta)
    return registry.define(name, expr)


def build_default_registry() -> MetricRegistry:
    """
    Build a registry holding every supported metric.

    Returns
    -------
    MetricRegistry
        Registry in definition order. Treat it as read-only afterwards.
    """
    A, B, C, D = TP, FP, FN, TN
    N = A + B + C + D

    reg = MetricRegistry()
    reg.define("Sensitivity", A / (A + C))
    reg.define("Specificity", D / (B + D))
    reg.define("Prevalence", (A + C) / N)

    sens = reg.lookup("Sensitivity")
    spec = reg.lookup("Specificity")
    prev = reg.lookup("Prevalence")

    # Bayes' rule forms of the predictive values
    reg.define(
        "PPV",
        sens * prev / (sens * prev + (1 - spec) * (1 - prev)),
    )
    reg.define(
        "NPV",
        spec * (1 - prev) / ((1 - sens) * prev + spec * (1 - prev)),
    )

    reg.define("DetectionRate", A / N)
    reg.define("DetectionPrevalence", (A + B) / N)
    reg.define("BalancedAccuracy", (sens + spec) / 2)

    reg.define("TPR", A / (A + C))
    reg.define("FPR", B / (B + D))
    reg.define("FNR", C / (A + C))
    reg.define("TNR", D / (B + D))
    reg.define("Recall", A / (A + C))
    reg.define("Precision", A / (A + B))
    reg.define("Accuracy", (A + D) / N)

    # Probability a true instance outscores a false one, ties count half.
    reg.define(
        "ScoreTrueGTFalse",
        (A * D + HALF * A * B + HALF * C * D + 0 * C * B) / ((A + C) * (B + D)),
    )

    fpr = reg.lookup("FPR")
    tpr = reg.lookup("TPR")
    reg.define(
        "AUC",
        HALF * fpr * tpr + HALF * (1 - fpr) * (1 - tpr) + (1 - fpr) * tpr,
    )

    define_f_beta(reg, 1, name="F1")
    reg.define("F1Direct", 2 * A / (2 * A + B + C))

    reg.define("Informedness", tpr + reg.lookup("TNR") - 1)
    reg.define("Markedness", reg.lookup("Precision") + reg.lookup("NPV") - 1)

    return reg
