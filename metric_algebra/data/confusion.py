"""
Concrete confusion matrices.

A ConfusionMatrix is one assignment of the four base counts. It is the
unit the sweep enumerates and the argument of every numeric evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import sympy

from metric_algebra.formulas.registry import FN, FP, TN, TP


@dataclass(frozen=True)
class ConfusionMatrix:
    tp: int
    fp: int
    fn: int
    tn: int

    def __post_init__(self) -> None:
        for field_name in ("tp", "fp", "fn", "tn"):
            value = getattr(self, field_name)
            if int(value) != value or value < 0:
                raise ValueError(
                    f"Confusion matrix counts must be non-negative integers, "
                    f"got {field_name}={value!r}"
                )

    @property
    def total_true(self) -> int:
        """Number of truly positive instances (tp + fn)."""
        return self.tp + self.fn

    @property
    def total_false(self) -> int:
        """Number of truly negative instances (fp + tn)."""
        return self.fp + self.tn

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.fn + self.tn

    def as_tuple(self):
        return self.tp, self.fp, self.fn, self.tn

    def as_dict(self) -> Dict[str, int]:
        return {"tp": self.tp, "fp": self.fp, "fn": self.fn, "tn": self.tn}

    def as_substitution(self) -> Dict[sympy.Symbol, int]:
        """
        Map each base count symbol to this matrix's value, for use with
        sympy's xreplace(), which rebuilds the expression bottom-up so
        that 0/0 evaluates to nan rather than collapsing to 0.
        """
        return {TP: self.tp, FP: self.fp, FN: self.fn, TN: self.tn}
