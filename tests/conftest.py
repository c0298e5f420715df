"""Shared test fixtures for circos-scene."""

import numpy as np
import pandas as pd
import pytest

from circos_scene.core.genome import CoordinateSystem


@pytest.fixture
def two_segment_genome():
    """{A: 10, B: 20}: offsets 0 and 10, total 30."""
    return CoordinateSystem.build({"A": 10, "B": 20})


@pytest.fixture
def small_genome():
    """Three numbered chromosomes of unequal length."""
    return CoordinateSystem.build({"1": 100, "2": 50, "3": 150})


@pytest.fixture
def snp_df():
    """Point data on the small genome."""
    return pd.DataFrame({
        "chrom": ["1", "2", "3", "3"],
        "pos": [10.0, 25.0, 0.0, 150.0],
        "score": [0.0, 0.5, 1.0, 2.0],
        "gene": ["TP53", "EGFR", "MYC", "KRAS"],
    })


@pytest.fixture
def interval_df():
    """Interval data with values on the small genome."""
    return pd.DataFrame({
        "chromosomes": ["1", "1", "2"],
        "starts": [0.0, 40.0, 10.0],
        "ends": [20.0, 60.0, 30.0],
        "values": [1.0, 3.0, 2.0],
    })


@pytest.fixture
def rng():
    return np.random.default_rng(42)
