"""
Prove or disprove metric equivalences listed in the config.

This script:

- builds the default metric registry
- builds the simplifier configured in config/algebra.yaml
- checks every pair under "equivalence.pairs"
- searches for a witness confusion matrix for non-equivalent pairs
- writes the results table under experiments/results/

Usage (from project root):

    python -m scripts.run_equivalence_checks
    # or
    python scripts/run_equivalence_checks.py --pair F1 BalancedAccuracy
"""

from __future__ import annotations

import argparse

from metric_algebra.algebra.equivalence import EquivalenceChecker
from metric_algebra.algebra.simplifier import build_simplifier
from metric_algebra.evaluation.analysis import equivalence_table, save_frame
from metric_algebra.formulas.registry import build_default_registry
from metric_algebra.utils.config_utils import get_logger, load_algebra_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check symbolic equivalence of classifier metrics."
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/algebra.yaml",
        help="Path to algebra config YAML (default: config/algebra.yaml).",
    )
    parser.add_argument(
        "--pair",
        nargs=2,
        action="append",
        metavar=("METRIC_A", "METRIC_B"),
        help="Metric pair to check; may be repeated. Overrides the config pairs.",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write the results CSV.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    cfg = load_algebra_config(args.config)
    logger = get_logger(
        name="run_equivalence_checks",
        config=cfg,
        log_file_suffix="equivalence",
    )

    equivalence_cfg = cfg.get("equivalence", {}) or {}
    sweep_cfg = cfg["sweep"]
    pairs = args.pair or equivalence_cfg.get("pairs", [])
    if not pairs:
        logger.warning("No metric pairs to check.")
        return

    registry = build_default_registry()
    simplifier = build_simplifier(cfg)
    checker = EquivalenceChecker(registry, simplifier)

    logger.info("=" * 80)
    logger.info("Checking %d metric pair(s) with %r.", len(pairs), simplifier)

    results = []
    for result in checker.check_pairs(
        pairs,
        find_witness=bool(equivalence_cfg.get("find_witness", True)),
        max_total_true=int(sweep_cfg.get("max_total_true", 5)),
        max_total_false=int(sweep_cfg.get("max_total_false", 5)),
    ):
        if result.equivalent:
            logger.info("%s == %s", result.metric_a, result.metric_b)
        else:
            logger.info(
                "%s != %s; residual: %s; witness: %s (difference %s)",
                result.metric_a,
                result.metric_b,
                result.residual,
                result.witness,
                result.witness_value,
            )
        results.append(result)

    table = equivalence_table(results)
    logger.info("Summary:\n%s", table[["metric_a", "metric_b", "equivalent"]].to_string(index=False))

    if not args.no_save:
        out_path = save_frame(table, cfg["paths"].get("results_dir", "experiments/results"), "equivalence_results.csv")
        logger.info("Saved results to %s", out_path)

    logger.info("Equivalence checks completed.")


if __name__ == "__main__":
    main()
