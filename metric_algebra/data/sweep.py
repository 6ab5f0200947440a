"""
Bounded enumeration of confusion matrices and two-metric sweeps.

The enumeration order is fixed, so fixtures are reproducible:

    TotalTrue  in 1..max_total_true      (outermost)
    TotalFalse in 1..max_total_false
    tp         in 0..TotalTrue
    tn         in 0..TotalFalse          (innermost)

with fp = TotalFalse - tn and fn = TotalTrue - tp.

A sweep evaluates two registered metrics at each matrix and yields
SweepPoint(value_a, value_b, matrix) triples. Points where either metric
has a zero denominator (e.g. Precision for a classifier that predicts
no positives) are skipped and counted, not raised.
"""

from __future__ import annotations

import logging
from typing import Iterator, NamedTuple, Optional

from metric_algebra.data.confusion import ConfusionMatrix
from metric_algebra.errors import DivisionByZero
from metric_algebra.evaluation.metrics import compile_metric, evaluate_metric
from metric_algebra.formulas.registry import MetricRegistry, build_default_registry


logger = logging.getLogger(__name__)


class SweepPoint(NamedTuple):
    value_a: float
    value_b: float
    matrix: ConfusionMatrix


def _check_bound(name: str, value: int) -> int:
    if int(value) != value or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def enumerate_confusion_matrices(
    max_total_true: int,
    max_total_false: int,
) -> Iterator[ConfusionMatrix]:
    """
    Lazily enumerate every confusion matrix with
    1 <= tp + fn <= max_total_true and 1 <= fp + tn <= max_total_false.
    """
    max_total_true = _check_bound("max_total_true", max_total_true)
    max_total_false = _check_bound("max_total_false", max_total_false)

    for total_true in range(1, max_total_true + 1):
        for total_false in range(1, max_total_false + 1):
            for tp in range(total_true + 1):
                for tn in range(total_false + 1):
                    yield ConfusionMatrix(
                        tp=tp,
                        fp=total_false - tn,
                        fn=total_true - tp,
                        tn=tn,
                    )


class ConfusionMatrixSweep:
    """
    Restartable sweep of two metrics over a bounded grid.

    Every iteration starts a fresh pass over the grid. `excluded` and
    `candidates` describe the most recently completed (or current) pass.
    """

    def __init__(
        self,
        metric_a: str,
        metric_b: str,
        max_total_true: int,
        max_total_false: int,
        registry: Optional[MetricRegistry] = None,
    ) -> None:
        self.metric_a = metric_a
        self.metric_b = metric_b
        self.max_total_true = _check_bound("max_total_true", max_total_true)
        self.max_total_false = _check_bound("max_total_false", max_total_false)

        if registry is None:
            registry = build_default_registry()
        # Look up eagerly so unknown names fail at construction.
        self._fn_a = compile_metric(registry.lookup(metric_a))
        self._fn_b = compile_metric(registry.lookup(metric_b))

        self.candidates = 0
        self.excluded = 0

    def __iter__(self) -> Iterator[SweepPoint]:
        self.candidates = 0
        self.excluded = 0
        for matrix in enumerate_confusion_matrices(self.max_total_true, self.max_total_false):
            self.candidates += 1
            try:
                value_a = evaluate_metric(self._fn_a, matrix)
                value_b = evaluate_metric(self._fn_b, matrix)
            except DivisionByZero:
                self.excluded += 1
                logger.debug("Excluding degenerate matrix %s", matrix)
                continue
            yield SweepPoint(value_a, value_b, matrix)

        logger.debug(
            "Sweep %s vs %s: %d candidates, %d excluded",
            self.metric_a,
            self.metric_b,
            self.candidates,
            self.excluded,
        )

    def __repr__(self) -> str:
        return (
            f"ConfusionMatrixSweep({self.metric_a!r}, {self.metric_b!r}, "
            f"max_total_true={self.max_total_true}, max_total_false={self.max_total_false})"
        )


def sweep(
    metric_a: str,
    metric_b: str,
    max_total_true: int,
    max_total_false: int,
    registry: Optional[MetricRegistry] = None,
) -> ConfusionMatrixSweep:
    """
    Build a lazy sweep of `metric_a` and `metric_b` over the bounded grid.

    Raises
    ------
    UnknownMetric
        If either metric is not registered.
    ValueError
        If a bound is not a positive integer.
    """
    return ConfusionMatrixSweep(
        metric_a,
        metric_b,
        max_total_true,
        max_total_false,
        registry=registry,
    )
