"""Shared test fixtures for evointegration tests."""

import numpy as np
import pandas as pd
import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def clique(n: int) -> np.ndarray:
    """Complete graph on n nodes."""
    return np.ones((n, n)) - np.eye(n)


def star(n: int) -> np.ndarray:
    """Hub (node 0) connected to n-1 leaves."""
    matrix = np.zeros((n, n))
    matrix[0, 1:] = 1
    matrix[1:, 0] = 1
    return matrix


@pytest.fixture
def complete_graph():
    """Complete graph on 5 nodes: every degree equal."""
    return clique(5)


@pytest.fixture
def star_graph():
    """Star graph: one hub and four leaves."""
    return star(5)


@pytest.fixture
def empty_graph():
    """Three nodes, no edges."""
    return np.zeros((3, 3))


@pytest.fixture
def viability_table():
    """Three components with cohesion 0.9, 0.5 and 0.1."""
    return pd.DataFrame(
        {
            "component_id": ["a", "b", "c"],
            "viability_isolated": [0.1, 0.5, 0.9],
            "viability_integrated": [1.0, 1.0, 1.0],
        }
    )


@pytest.fixture
def breakpoint_dataset():
    """Flat then steep outcome with a kink at 0.73, mild noise."""
    rng = np.random.default_rng(42)
    x = np.linspace(0.0, 1.0, 101)
    y = 0.2 * x + 3.0 * np.maximum(x - 0.73, 0.0) + rng.normal(0.0, 0.01, x.size)
    return pd.DataFrame({"Cohesion_Coefficient_C": x, "Reversible": y})


@pytest.fixture
def linear_dataset():
    """Exactly linear outcome: no regime change to find."""
    x = np.linspace(0.0, 1.0, 30)
    return pd.DataFrame({"Cohesion_Coefficient_C": x, "Reversible": 2.0 * x + 1.0})


@pytest.fixture
def constant_predictor_dataset():
    """Every observation at the same cohesion value."""
    return pd.DataFrame(
        {
            "Cohesion_Coefficient_C": [0.5] * 10,
            "Reversible": [0, 1] * 5,
        }
    )
