import itertools
from pathlib import Path

import numpy as np
import pytest
from typer.testing import CliRunner

from scgOpt.partition.cost import make_kernel


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--work-dir",
        action="store",
        default=None,
        help="Path to working directory for test outputs (defaults to a temporary directory)",
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test that runs many randomized partitions"
    )


# ---------------------------------------------------------------------------
# Reference implementation
# ---------------------------------------------------------------------------


def brute_force_partition(values, n_groups, matrix_type="symmetric", weights=None):
    """Minimal cost over every split of the sorted values into n_groups runs."""
    values = np.asarray(values, dtype=np.float64)
    order = np.argsort(values, kind="stable")
    sorted_values = values[order]
    sorted_weights = np.asarray(weights, dtype=np.float64)[order] if weights is not None else None
    kernel = make_kernel(matrix_type, sorted_values, sorted_weights)

    n = len(values)
    best = np.inf
    for cuts in itertools.combinations(range(1, n), n_groups - 1):
        bounds = (0,) + cuts + (n,)
        total = sum(
            kernel.interval_cost(start, end - 1) for start, end in zip(bounds[:-1], bounds[1:])
        )
        best = min(best, total)
    return best


@pytest.fixture(scope="session")
def brute_force():
    return brute_force_partition


@pytest.fixture
def rng():
    return np.random.default_rng(20081124)


# ---------------------------------------------------------------------------
# Work directory & CLI runner
# ---------------------------------------------------------------------------


@pytest.fixture
def work_dir(request, tmp_path, monkeypatch):
    """Working directory for test outputs; the CLI writes its logs here."""
    custom_dir = request.config.getoption("--work-dir")
    if custom_dir:
        d = Path(custom_dir)
        d.mkdir(parents=True, exist_ok=True)
    else:
        d = tmp_path
    monkeypatch.chdir(d)
    return d


@pytest.fixture(scope="session")
def cli_runner():
    """Typer CliRunner instance."""
    return CliRunner()
