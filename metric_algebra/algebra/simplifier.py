"""
Pluggable symbolic simplification.

The equivalence checker never simplifies expressions itself; it asks a
Simplifier. SympySimplifier delegates to one of sympy's normalization
routines, selected by name from config/algebra.yaml:

    simplifier:
      strategy: simplify   # or: cancel, ratsimp, together
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Dict, Optional

import sympy

from metric_algebra.errors import SimplificationError


logger = logging.getLogger(__name__)


_STRATEGIES: Dict[str, Callable[[sympy.Expr], sympy.Expr]] = {
    "simplify": sympy.simplify,
    "cancel": sympy.cancel,
    "ratsimp": sympy.ratsimp,
    "together": lambda e: sympy.cancel(sympy.together(e)),
}


class Simplifier(abc.ABC):
    """External algebra capability with a single operation."""

    @abc.abstractmethod
    def simplify(self, expression: sympy.Expr) -> sympy.Expr:
        pass


class SympySimplifier(Simplifier):
    """
    Simplifier backed by sympy.

    Any failure inside sympy is reported as SimplificationError; the
    original exception is kept as __cause__.
    """

    def __init__(self, strategy: str = "simplify") -> None:
        if strategy not in _STRATEGIES:
            raise ValueError(
                f"Unknown simplifier strategy {strategy!r}. "
                f"Expected one of: {sorted(_STRATEGIES)}"
            )
        self.strategy = strategy
        self._fn = _STRATEGIES[strategy]

    def simplify(self, expression: sympy.Expr) -> sympy.Expr:
        try:
            expr = sympy.sympify(expression, strict=True)
        except (sympy.SympifyError, TypeError) as exc:
            raise SimplificationError(f"Malformed expression: {expression!r}") from exc

        if not isinstance(expr, sympy.Expr):
            raise SimplificationError(
                f"Expected a sympy expression, got {type(expr).__name__}"
            )

        logger.debug("Simplifying with %s: %s", self.strategy, expr)
        try:
            result = self._fn(expr)
        except Exception as exc:
            raise SimplificationError(
                f"sympy {self.strategy} failed on {expr}: {exc}"
            ) from exc
        logger.debug("Simplified result: %s", result)
        return result

    def __repr__(self) -> str:
        return f"SympySimplifier(strategy={self.strategy!r})"


def build_simplifier(config: Optional[Dict[str, Any]] = None) -> Simplifier:
    """
    Build the simplifier described by the "simplifier" config section.

    Parameters
    ----------
    config : Optional[Dict[str, Any]]
        Full algebra configuration. If None, sympy.simplify is used.
    """
    simplifier_cfg = (config or {}).get("simplifier", {}) or {}
    strategy = str(simplifier_cfg.get("strategy", "simplify")).lower()
    return SympySimplifier(strategy=strategy)
