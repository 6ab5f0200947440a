"""
Tests for the metric formula registry.

These tests validate that:

- every required metric is defined over the four base counts only
- lookup of an unregistered name raises UnknownMetric
- formulas are immutable once defined
- composed formulas evaluate to the expected values
"""

from __future__ import annotations

import pytest
import sympy

from metric_algebra.data.confusion import ConfusionMatrix
from metric_algebra.errors import InvalidMetricExpression, UnknownMetric
from metric_algebra.evaluation.metrics import compute_metric_values
from metric_algebra.formulas.registry import (
    BASE_SYMBOLS,
    FN,
    TN,
    TP,
    MetricRegistry,
    define_f_beta,
    metric_symbols,
)


REQUIRED_METRICS = [
    "Sensitivity",
    "Specificity",
    "Prevalence",
    "PPV",
    "NPV",
    "DetectionRate",
    "DetectionPrevalence",
    "BalancedAccuracy",
    "TPR",
    "FPR",
    "FNR",
    "TNR",
    "Recall",
    "Precision",
    "Accuracy",
    "ScoreTrueGTFalse",
    "AUC",
    "F1",
]


def test_default_registry_defines_required_metrics(registry):
    for name in REQUIRED_METRICS:
        assert name in registry, f"{name} missing from default registry"
        expr = registry.lookup(name)
        assert expr.free_symbols <= set(BASE_SYMBOLS)


def test_default_registry_keeps_definition_order(registry):
    names = registry.names()
    assert names[:3] == ["Sensitivity", "Specificity", "Prevalence"]
    assert names.index("PPV") > names.index("Prevalence")
    assert len(registry) == len(names) == 21


def test_metric_symbols_order():
    tp, fp, fn, tn = metric_symbols()
    assert [str(s) for s in (tp, fp, fn, tn)] == ["tp", "fp", "fn", "tn"]


def test_lookup_unknown_metric_raises(registry):
    with pytest.raises(UnknownMetric) as excinfo:
        registry.lookup("Youden")
    assert excinfo.value.name == "Youden"
    # Also catchable as a KeyError
    with pytest.raises(KeyError):
        registry.lookup("Youden")


def test_define_rejects_foreign_symbols():
    reg = MetricRegistry()
    x = sympy.Symbol("x")
    with pytest.raises(InvalidMetricExpression):
        reg.define("Bad", TP / (TP + x))


def test_define_is_immutable():
    reg = MetricRegistry()
    reg.define("Recall", TP / (TP + FN))
    with pytest.raises(InvalidMetricExpression):
        reg.define("Recall", TN / (TN + FN))
    assert reg.lookup("Recall") == TP / (TP + FN)


def test_define_rejects_empty_name():
    with pytest.raises(InvalidMetricExpression):
        MetricRegistry().define("", TP)


def test_define_accepts_constants():
    reg = MetricRegistry()
    expr = reg.define("One", 1)
    assert expr == sympy.Integer(1)


def test_metric_values_at_known_matrix(registry):
    matrix = ConfusionMatrix(tp=3, fp=1, fn=2, tn=4)
    values = compute_metric_values(
        matrix,
        ["Sensitivity", "Specificity", "Prevalence", "Precision", "Accuracy", "F1", "DetectionRate"],
        registry,
    )
    assert values["Sensitivity"] == pytest.approx(3 / 5)
    assert values["Specificity"] == pytest.approx(4 / 5)
    assert values["Prevalence"] == pytest.approx(5 / 10)
    assert values["Precision"] == pytest.approx(3 / 4)
    assert values["Accuracy"] == pytest.approx(7 / 10)
    assert values["DetectionRate"] == pytest.approx(3 / 10)
    assert values["F1"] == pytest.approx(2 * 3 / (2 * 3 + 1 + 2))


def test_undefined_metric_value_is_none(registry):
    # A classifier that predicts no positives has no precision.
    matrix = ConfusionMatrix(tp=0, fp=0, fn=3, tn=2)
    values = compute_metric_values(matrix, ["Precision", "Specificity"], registry)
    assert values["Precision"] is None
    assert values["Specificity"] == pytest.approx(1.0)


def test_define_f_beta(registry):
    expr = define_f_beta(registry, 2)
    assert "F2" in registry
    assert registry.lookup("F2") == expr

    matrix = ConfusionMatrix(tp=1, fp=1, fn=1, tn=0)
    values = compute_metric_values(matrix, ["F2"], registry)
    # P = R = 0.5 -> (1 + 4) * 0.25 / (4 * 0.5 + 0.5)
    assert values["F2"] == pytest.approx(0.5)


def test_define_f_beta_rejects_non_positive_beta(registry):
    with pytest.raises(InvalidMetricExpression):
        define_f_beta(registry, 0, name="F0")
