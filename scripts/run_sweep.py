"""
Brute-force comparison of metric pairs over a bounded confusion-matrix grid.

For each pair under "sweep.pairs" in config/algebra.yaml this script:

1) sweeps every confusion matrix within the configured totals
2) reports how many degenerate matrices were excluded
3) checks whether the second metric is a function of the first
4) saves the sweep table (CSV) and a scatter plot (PNG)

Usage (from the project root):

    python -m scripts.run_sweep

or:

    python scripts/run_sweep.py --max-total-true 8 --max-total-false 8
"""

from __future__ import annotations

import argparse
import os

import matplotlib

matplotlib.use("Agg")

from metric_algebra.data.sweep import sweep  # noqa: E402
from metric_algebra.evaluation.analysis import (  # noqa: E402
    find_divergent_groups,
    save_frame,
    sweep_to_frame,
)
from metric_algebra.evaluation.plots import plot_metric_scatter  # noqa: E402
from metric_algebra.formulas.registry import build_default_registry  # noqa: E402
from metric_algebra.utils.config_utils import (  # noqa: E402
    ensure_dir_exists,
    get_logger,
    load_algebra_config,
    resolve_sweep_bounds,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sweep metric pairs over bounded confusion matrices."
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/algebra.yaml",
        help="Path to algebra config YAML (default: config/algebra.yaml).",
    )
    parser.add_argument("--max-total-true", type=int, default=None)
    parser.add_argument("--max-total-false", type=int, default=None)
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    cfg = load_algebra_config(args.config)
    logger = get_logger(name="run_sweep", config=cfg, log_file_suffix="sweep")

    sweep_cfg = cfg["sweep"]
    paths_cfg = cfg["paths"]
    max_total_true, max_total_false = resolve_sweep_bounds(
        sweep_cfg, args.max_total_true, args.max_total_false
    )
    results_dir = paths_cfg.get("results_dir", "experiments/results")
    figures_dir = paths_cfg.get("figures_dir", "experiments/figures")
    ensure_dir_exists(figures_dir)

    registry = build_default_registry()

    for metric_a, metric_b in sweep_cfg.get("pairs", []):
        logger.info("=" * 80)
        logger.info(
            "Sweeping %s vs %s (max_total_true=%d, max_total_false=%d).",
            metric_a,
            metric_b,
            max_total_true,
            max_total_false,
        )

        points = sweep(metric_a, metric_b, max_total_true, max_total_false, registry=registry)
        df = sweep_to_frame(points, metric_a, metric_b)
        logger.info(
            "%d of %d matrices evaluated; %d excluded (zero denominator).",
            len(df),
            points.candidates,
            points.excluded,
        )

        groups = find_divergent_groups(df, key_metric=metric_b, other_metric=metric_a)
        if groups:
            logger.info(
                "%s is not a function of %s: %d %s value(s) map to several %s values.",
                metric_a,
                metric_b,
                len(groups),
                metric_b,
                metric_a,
            )
        else:
            logger.info("No divergence between %s and %s on this grid.", metric_a, metric_b)

        stem = f"sweep_{metric_a}_vs_{metric_b}"
        csv_path = save_frame(df, results_dir, f"{stem}.csv")
        png_path = os.path.join(figures_dir, f"{stem}.png")
        if not df.empty:
            plot_metric_scatter(df, metric_a, metric_b, out_path=png_path, show=False)
            logger.info("Saved %s and %s", csv_path, png_path)
        else:
            logger.warning("Sweep produced no points; skipped plot.")

    logger.info("Sweeps completed.")


if __name__ == "__main__":
    main()
