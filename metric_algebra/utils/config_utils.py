"""
Configuration and logging helpers.

This module centralizes common functionality used by the runner scripts:

- loading the algebra configuration (config/algebra.yaml)
- resolving sweep bounds from CLI overrides and config
- ensuring directories exist before writing files
- constructing loggers that respect the config's logging settings
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

import yaml


DEFAULT_ALGEBRA_CONFIG_PATH = "config/algebra.yaml"

REQUIRED_SECTIONS = ("simplifier", "sweep", "paths", "logging")


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def load_algebra_config(
    config_path: str = DEFAULT_ALGEBRA_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Load and return the algebra configuration dictionary.

    Parameters
    ----------
    config_path : str
        Path to the algebra YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Parsed configuration with sections such as "simplifier", "sweep",
        "equivalence", "paths" and "logging".

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    KeyError
        If a required section is missing.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Algebra config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Algebra config file is empty or invalid: {config_path}")

    for section in REQUIRED_SECTIONS:
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in algebra config: {config_path}')

    return cfg


def resolve_sweep_bounds(
    sweep_cfg: Dict[str, Any],
    max_total_true: Optional[int] = None,
    max_total_false: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Pick the sweep totals from explicit overrides, falling back to the
    "sweep" config section (default 5 each).

    Raises
    ------
    ValueError
        If a resolved bound is not a positive integer. An explicit 0 is
        rejected, not replaced by the config value.
    """
    bounds = []
    for key, override in (("max_total_true", max_total_true), ("max_total_false", max_total_false)):
        value = override if override is not None else sweep_cfg.get(key, 5)
        if isinstance(value, bool) or int(value) != value or value < 1:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")
        bounds.append(int(value))
    return bounds[0], bounds[1]


# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------


def ensure_dir_exists(path: str) -> None:
    """
    Ensure that a directory exists (create it if necessary).
    """
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------


def _parse_log_level(level_str: str) -> int:
    """
    Convert a string log level into a logging module constant.

    Unknown names fall back to INFO.
    """
    level_str = (level_str or "INFO").upper()
    return {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }.get(level_str, logging.INFO)


def get_logger(
    name: str,
    config: Dict[str, Any],
    log_file_suffix: Optional[str] = None,
) -> logging.Logger:
    """
    Construct and return a logger that respects the logging section of
    the algebra config.

    Parameters
    ----------
    name : str
        Logger name.
    config : Dict[str, Any]
        Algebra configuration.
    log_file_suffix : Optional[str]
        Optional suffix appended to the log file name (e.g., "sweep").

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # If the logger already has handlers, assume it's already configured.
    if logger.handlers:
        return logger

    logging_cfg = config.get("logging", {}) or {}
    paths_cfg = config.get("paths", {}) or {}

    level = _parse_log_level(logging_cfg.get("level", "INFO"))
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if bool(logging_cfg.get("to_file", True)):
        logs_dir = paths_cfg.get("logs_dir", "experiments/logs")
        ensure_dir_exists(logs_dir)

        file_prefix = logging_cfg.get("file_prefix", "algebra_log")
        if log_file_suffix:
            filename = f"{file_prefix}_{log_file_suffix}.log"
        else:
            filename = f"{file_prefix}.log"

        file_handler = logging.FileHandler(os.path.join(logs_dir, filename), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
