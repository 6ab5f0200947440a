"""
Shared fixtures for the metric algebra test suite.
"""

from __future__ import annotations

import os

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from metric_algebra.algebra.equivalence import EquivalenceChecker  # noqa: E402
from metric_algebra.algebra.simplifier import SympySimplifier  # noqa: E402
from metric_algebra.formulas.registry import build_default_registry  # noqa: E402


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "algebra.yaml")


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def checker(registry):
    return EquivalenceChecker(registry, SympySimplifier())


@pytest.fixture
def config_path():
    return CONFIG_PATH
