"""
Plotting utilities for metric sweeps.

This module provides a scatter comparison of two metrics evaluated over
a confusion-matrix sweep (see metric_algebra.data.sweep and
metric_algebra.evaluation.analysis.sweep_to_frame).

If matplotlib is not installed, an informative ImportError is raised
when plotting.
"""

from __future__ import annotations

from typing import Optional, Tuple

import pandas as pd

try:
    import matplotlib.pyplot as plt  # type: ignore

    _HAS_MPL = True
except ImportError:  # pragma: no cover
    plt = None  # type: ignore
    _HAS_MPL = False


def _ensure_matplotlib() -> None:
    if not _HAS_MPL:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install it with `pip install matplotlib`."
        )


def plot_metric_scatter(
    df: pd.DataFrame,
    metric_a: str,
    metric_b: str,
    figsize: Tuple[float, float] = (6.0, 6.0),
    alpha: float = 0.5,
    show_diagonal: bool = True,
    title: Optional[str] = None,
    out_path: Optional[str] = None,
    show: bool = True,
):
    """
    Scatter plot of metric_a (x) against metric_b (y) over a sweep.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame as produced by `sweep_to_frame`.
    metric_a : str
        Column plotted on the x axis.
    metric_b : str
        Column plotted on the y axis.
    figsize : Tuple[float, float]
        Figure size in inches.
    alpha : float
        Marker transparency; repeated points show up darker.
    show_diagonal : bool
        If True, draw the y = x reference line.
    title : Optional[str]
        Title for the plot. If None, a default is constructed.
    out_path : Optional[str]
        If provided, save the figure to this path (e.g., PNG).
    show : bool
        If True, call plt.show(). If False, close the figure and return it.

    Returns
    -------
    (fig, ax)
        Matplotlib Figure and Axes objects.
    """
    _ensure_matplotlib()

    if df.empty:
        raise ValueError("Sweep DataFrame is empty; nothing to plot.")

    for col in (metric_a, metric_b):
        if col not in df.columns:
            raise ValueError(
                f"Metric '{col}' not found in DataFrame columns. "
                f"Available columns: {list(df.columns)}"
            )

    x = pd.to_numeric(df[metric_a], errors="coerce")
    y = pd.to_numeric(df[metric_b], errors="coerce")

    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(x, y, alpha=alpha, s=18)

    if show_diagonal:
        lo = float(min(x.min(), y.min(), 0.0))
        hi = float(max(x.max(), y.max(), 1.0))
        ax.plot([lo, hi], [lo, hi], linestyle="--", color="grey", linewidth=1)

    ax.set_xlabel(metric_a)
    ax.set_ylabel(metric_b)
    ax.set_title(title if title is not None else f"{metric_b} vs {metric_a} ({len(df)} matrices)")

    fig.tight_layout()

    if out_path is not None:
        fig.savefig(out_path, dpi=300, bbox_inches="tight")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig, ax
