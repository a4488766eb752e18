"""
Shared fixtures: a synthetic data set for all fifteen functions.
"""

import pytest

from lsgo_bench.data.generator import write_all
from lsgo_bench.functions.benchmarks import clear_cache


@pytest.fixture(scope="session")
def data_dir(tmp_path_factory):
    """Data files for F1-F15 in the reference layout."""
    path = tmp_path_factory.mktemp("cdatafiles")
    write_all(path, seed=2013)
    return path


@pytest.fixture(autouse=True)
def _fresh_benchmarks():
    clear_cache()
    yield
    clear_cache()
