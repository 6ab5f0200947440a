"""
Tests for configuration loading and logger construction.
"""

from __future__ import annotations

import logging
import os

import pytest

from metric_algebra.utils.config_utils import (
    ensure_dir_exists,
    get_logger,
    load_algebra_config,
    resolve_sweep_bounds,
)


def test_load_algebra_config_has_required_sections(config_path):
    cfg = load_algebra_config(config_path)

    for section in ("simplifier", "sweep", "paths", "logging", "equivalence"):
        assert section in cfg

    assert cfg["simplifier"]["strategy"] in {"simplify", "cancel", "ratsimp", "together"}
    assert cfg["sweep"]["max_total_true"] >= 1
    assert all(len(pair) == 2 for pair in cfg["sweep"]["pairs"])
    assert all(len(pair) == 2 for pair in cfg["equivalence"]["pairs"])


def test_config_pairs_name_registered_metrics(config_path, registry):
    cfg = load_algebra_config(config_path)
    for a, b in cfg["equivalence"]["pairs"] + cfg["sweep"]["pairs"]:
        assert a in registry
        assert b in registry


def test_load_algebra_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_algebra_config(str(tmp_path / "nope.yaml"))


def test_load_algebra_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_algebra_config(str(path))


def test_load_algebra_config_missing_section(tmp_path):
    path = tmp_path / "partial.yaml"
    path.write_text("simplifier:\n  strategy: cancel\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_algebra_config(str(path))


def test_ensure_dir_exists(tmp_path):
    target = tmp_path / "a" / "b"
    ensure_dir_exists(str(target))
    assert target.is_dir()
    # Idempotent
    ensure_dir_exists(str(target))


def test_get_logger_console_only():
    cfg = {"logging": {"level": "debug", "to_file": False}}
    logger = get_logger("test_get_logger_console_only", cfg)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    # Second call must not attach more handlers.
    assert get_logger("test_get_logger_console_only", cfg) is logger
    assert len(logger.handlers) == 1


def test_get_logger_writes_file(tmp_path):
    logs_dir = tmp_path / "logs"
    cfg = {
        "logging": {"level": "INFO", "to_file": True, "file_prefix": "algebra"},
        "paths": {"logs_dir": str(logs_dir)},
    }
    logger = get_logger("test_get_logger_writes_file", cfg, log_file_suffix="unit")
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()

    log_path = logs_dir / "algebra_unit.log"
    assert os.path.exists(log_path)
    assert "hello" in log_path.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_get_logger_unknown_level_defaults_to_info():
    logger = get_logger("test_get_logger_unknown_level", {"logging": {"level": "loud", "to_file": False}})
    assert logger.level == logging.INFO


def test_resolve_sweep_bounds_falls_back_to_config():
    assert resolve_sweep_bounds({"max_total_true": 3, "max_total_false": 4}) == (3, 4)
    assert resolve_sweep_bounds({}) == (5, 5)


def test_resolve_sweep_bounds_explicit_values_override_config():
    sweep_cfg = {"max_total_true": 3, "max_total_false": 4}
    assert resolve_sweep_bounds(sweep_cfg, 8, None) == (8, 4)
    assert resolve_sweep_bounds(sweep_cfg, None, 2) == (3, 2)


@pytest.mark.parametrize("overrides", [(0, None), (None, 0), (-1, None)])
def test_resolve_sweep_bounds_rejects_explicit_non_positive(overrides):
    with pytest.raises(ValueError):
        resolve_sweep_bounds({"max_total_true": 5, "max_total_false": 5}, *overrides)
