"""
Symbolic metric formulas.

This subpackage provides:
- the four base count symbols (tp, fp, fn, tn)
- the MetricRegistry name -> expression store
- build_default_registry() with every supported metric definition.
"""

from metric_algebra.formulas.registry import (  # noqa: F401
    BASE_SYMBOLS,
    FN,
    FP,
    TN,
    TP,
    MetricRegistry,
    build_default_registry,
    define_f_beta,
    metric_symbols,
)
