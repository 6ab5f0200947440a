"""
Sweep and equivalence result analysis utilities.

This module provides helpers to:
- turn sweep points into a pandas DataFrame
- find empirical evidence that two metrics are not functions of each other
- check the sanity invariant between two metrics over a sweep
- measure the numeric gap between two metrics
- tabulate equivalence check results
- save tables as CSV for reporting
"""

from __future__ import annotations

import os
from typing import Iterable, List

import numpy as np
import pandas as pd

from metric_algebra.algebra.equivalence import ComparisonResult
from metric_algebra.data.sweep import SweepPoint
from metric_algebra.utils.config_utils import ensure_dir_exists


COUNT_COLUMNS = ["tp", "fp", "fn", "tn"]


def sweep_to_frame(
    points: Iterable[SweepPoint],
    metric_a: str,
    metric_b: str,
) -> pd.DataFrame:
    """
    Materialize sweep points into a DataFrame.

    Parameters
    ----------
    points : Iterable[SweepPoint]
        Output of metric_algebra.data.sweep.sweep (or any iterable of
        SweepPoint triples).
    metric_a, metric_b : str
        Column names for the two metric values.

    Returns
    -------
    pd.DataFrame
        Columns [metric_a, metric_b, "tp", "fp", "fn", "tn"], one row
        per point, in enumeration order.
    """
    if metric_a == metric_b:
        raise ValueError("metric_a and metric_b must have different names.")

    records = []
    for value_a, value_b, matrix in points:
        row = {metric_a: value_a, metric_b: value_b}
        row.update(matrix.as_dict())
        records.append(row)

    return pd.DataFrame(records, columns=[metric_a, metric_b] + COUNT_COLUMNS)


def find_divergent_groups(
    df: pd.DataFrame,
    key_metric: str,
    other_metric: str,
    decimals: int = 9,
) -> List[pd.DataFrame]:
    """
    Return groups of rows sharing a `key_metric` value but taking more
    than one distinct `other_metric` value.

    A non-empty result shows `other_metric` is not a function of
    `key_metric` on the swept grid. Values are rounded to `decimals`
    places before grouping to absorb floating noise.
    """
    for col in (key_metric, other_metric):
        if col not in df.columns:
            raise ValueError(
                f"Column '{col}' not found in DataFrame. "
                f"Available columns: {list(df.columns)}"
            )

    if df.empty:
        return []

    keyed = df.assign(
        _key=df[key_metric].round(decimals),
        _other=df[other_metric].round(decimals),
    )

    groups = []
    for _, group in keyed.groupby("_key", sort=True):
        if group["_other"].nunique() > 1:
            groups.append(group.drop(columns=["_key", "_other"]))
    return groups


def sanity_violations(
    df: pd.DataFrame,
    metric_a: str,
    metric_b: str,
    a_max: float = 0.0,
    b_min: float = 0.5,
) -> pd.DataFrame:
    """
    Rows where metric_a <= a_max while metric_b > b_min.

    For F1 against BalancedAccuracy this is expected to be empty.
    """
    mask = (df[metric_a] <= a_max) & (df[metric_b] > b_min)
    return df[mask]


def max_abs_difference(df: pd.DataFrame, metric_a: str, metric_b: str) -> float:
    """
    Largest |metric_a - metric_b| over the frame (0.0 if empty).
    """
    if df.empty:
        return 0.0
    diff = np.abs(df[metric_a].to_numpy(dtype=float) - df[metric_b].to_numpy(dtype=float))
    return float(diff.max())


def equivalence_table(results: Iterable[ComparisonResult]) -> pd.DataFrame:
    """
    Tabulate equivalence results, one row per compared pair.
    """
    rows = [r.as_dict() for r in results]
    columns = ["metric_a", "metric_b", "equivalent", "residual", "witness_value"] + COUNT_COLUMNS
    return pd.DataFrame(rows, columns=columns)


def save_frame(df: pd.DataFrame, results_dir: str, filename: str) -> str:
    """
    Save a DataFrame as CSV under `results_dir` and return the path.
    """
    ensure_dir_exists(results_dir)
    out_path = os.path.join(results_dir, filename)
    df.to_csv(out_path, index=False)
    return out_path
