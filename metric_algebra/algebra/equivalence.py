"""
Symbolic equivalence checking for registered metrics.

Two metrics are equivalent when their difference simplifies to the exact
constant 0 for all values of (tp, fp, fn, tn). Agreement at a handful of
sample matrices is only evidence; the symbolic zero test is proof.

Usage examples (Python):

    from metric_algebra.algebra.equivalence import EquivalenceChecker
    from metric_algebra.algebra.simplifier import SympySimplifier
    from metric_algebra.formulas.registry import build_default_registry

    checker = EquivalenceChecker(build_default_registry(), SympySimplifier())
    result = checker.are_equivalent("ScoreTrueGTFalse", "AUC")
    assert result.equivalent

    result = checker.are_equivalent("Precision", "Specificity", find_witness=True)
    print(result.residual, result.witness, result.witness_value)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple

import sympy

from metric_algebra.algebra.simplifier import Simplifier, SympySimplifier
from metric_algebra.data.confusion import ConfusionMatrix
from metric_algebra.data.sweep import enumerate_confusion_matrices
from metric_algebra.errors import DivisionByZero
from metric_algebra.formulas.registry import BASE_SYMBOLS, MetricRegistry, build_default_registry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonResult:
    metric_a: str
    metric_b: str
    equivalent: bool
    residual: sympy.Expr
    witness: Optional[ConfusionMatrix] = None
    witness_value: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        """
        Flat representation for tables and JSON/CSV output.
        """
        row: Dict[str, Any] = {
            "metric_a": self.metric_a,
            "metric_b": self.metric_b,
            "equivalent": self.equivalent,
            "residual": str(self.residual),
            "witness_value": self.witness_value,
        }
        for key in ("tp", "fp", "fn", "tn"):
            row[key] = getattr(self.witness, key) if self.witness is not None else None
        return row


# ---------------------------------------------------------------------------
# Numeric witnesses
# ---------------------------------------------------------------------------


def witness_difference(residual: sympy.Expr, counts: ConfusionMatrix) -> float:
    """
    Evaluate a residual expression exactly at a concrete confusion matrix.

    Parameters
    ----------
    residual : sympy.Expr
        Expression over the base count symbols, typically the simplified
        difference of two metrics.
    counts : ConfusionMatrix
        Counts to substitute.

    Returns
    -------
    float
        Value of the residual at `counts`.

    Raises
    ------
    DivisionByZero
        If a denominator vanishes at `counts`. Pick a non-degenerate
        matrix instead.
    ValueError
        If the residual contains symbols other than the base counts.
    """
    expr = sympy.sympify(residual)
    extra = expr.free_symbols - set(BASE_SYMBOLS)
    if extra:
        raise ValueError(
            f"Residual uses symbols other than the base counts: "
            f"{sorted(str(s) for s in extra)}"
        )

    # xreplace rebuilds bottom-up, so 0/0 becomes nan instead of being
    # short-circuited to 0 by sequential substitution.
    value = expr.xreplace(counts.as_substitution())
    if value.is_finite is not True:
        raise DivisionByZero(
            f"Residual is undefined at {counts} (evaluates to {value})",
            matrix=counts,
        )
    return float(value)


def find_witness(
    residual: sympy.Expr,
    max_total_true: int = 5,
    max_total_false: int = 5,
) -> Optional[Tuple[ConfusionMatrix, float]]:
    """
    Search the bounded grid, in sweep order, for the first matrix where
    the residual is defined and non-zero.

    Returns
    -------
    Optional[Tuple[ConfusionMatrix, float]]
        (matrix, value), or None if the residual vanishes (or is
        undefined) everywhere on the grid.
    """
    for matrix in enumerate_confusion_matrices(max_total_true, max_total_false):
        try:
            value = witness_difference(residual, matrix)
        except DivisionByZero:
            continue
        if value != 0:
            logger.debug("Witness for %s found at %s (value=%s)", residual, matrix, value)
            return matrix, value
    logger.debug("No witness for %s within bounds (%d, %d)", residual, max_total_true, max_total_false)
    return None


# ---------------------------------------------------------------------------
# Checker
# ---------------------------------------------------------------------------


class EquivalenceChecker:
    """
    Decides whether two registered metrics are identical functions of the
    four base counts.

    Parameters
    ----------
    registry : MetricRegistry
        Source of metric formulas.
    simplifier : Simplifier
        External algebra capability. Its SimplificationError is never
        caught here.
    """

    def __init__(self, registry: MetricRegistry, simplifier: Simplifier) -> None:
        self.registry = registry
        self.simplifier = simplifier

    def are_equivalent(
        self,
        name_a: str,
        name_b: str,
        find_witness: bool = False,
        max_total_true: int = 5,
        max_total_false: int = 5,
    ) -> ComparisonResult:
        expr_a = self.registry.lookup(name_a)
        expr_b = self.registry.lookup(name_b)

        residual = self.simplifier.simplify(expr_a - expr_b)

        if residual == 0:
            logger.debug("%s == %s (residual simplifies to 0)", name_a, name_b)
            return ComparisonResult(name_a, name_b, True, sympy.S.Zero)

        logger.debug("%s != %s (residual: %s)", name_a, name_b, residual)
        witness = None
        witness_value = None
        if find_witness:
            found = _find_witness(residual, max_total_true, max_total_false)
            if found is not None:
                witness, witness_value = found

        return ComparisonResult(
            name_a,
            name_b,
            False,
            residual,
            witness=witness,
            witness_value=witness_value,
        )

    def witness_difference(self, residual: sympy.Expr, counts: ConfusionMatrix) -> float:
        return witness_difference(residual, counts)

    def find_witness(
        self,
        residual: sympy.Expr,
        max_total_true: int = 5,
        max_total_false: int = 5,
    ) -> Optional[Tuple[ConfusionMatrix, float]]:
        return _find_witness(residual, max_total_true, max_total_false)

    def check_pairs(
        self,
        pairs: Iterable[Sequence[str]],
        find_witness: bool = False,
        max_total_true: int = 5,
        max_total_false: int = 5,
    ) -> Iterator[ComparisonResult]:
        """
        Check each (name_a, name_b) pair in turn.
        """
        for name_a, name_b in pairs:
            yield self.are_equivalent(
                name_a,
                name_b,
                find_witness=find_witness,
                max_total_true=max_total_true,
                max_total_false=max_total_false,
            )


# The method parameter `find_witness` shadows the module function.
_find_witness = find_witness


# ---------------------------------------------------------------------------
# Convenience API
# ---------------------------------------------------------------------------


def default_checker() -> EquivalenceChecker:
    """
    Fresh checker over the default registry with sympy.simplify.

    A new registry is built on every call, so metrics defined on one
    checker never leak into another.
    """
    return EquivalenceChecker(build_default_registry(), SympySimplifier())


def are_equivalent(name_a: str, name_b: str, find_witness: bool = False) -> ComparisonResult:
    return default_checker().are_equivalent(name_a, name_b, find_witness=find_witness)
