"""
Shared fixtures for ANOVA tests.

Provides reusable observation matrices (rows = treatments, columns =
replications) for CRD, RBD and LSD scenarios.
"""

import numpy as np
import pytest

from pyfieldstat.anova.datasets import load_example


# =====================================================================
# Worked examples
# =====================================================================


@pytest.fixture
def crd_matrix():
    """4 treatments x 3 replications, significant treatment effect."""
    return load_example('CRD')


@pytest.fixture
def rbd_matrix():
    """4 treatments x 4 blocks, perfectly additive (zero residual)."""
    return load_example('RBD')


@pytest.fixture
def lsd_matrix():
    """3 x 3 Latin square."""
    return load_example('LSD')


# =====================================================================
# Simulated designs
# =====================================================================


@pytest.fixture
def rbd_noisy():
    """5 treatments x 4 blocks with treatment and block effects plus noise."""
    rng = np.random.default_rng(7)
    treatment_effect = np.array([0.0, 1.5, 3.0, 0.5, 2.0])[:, None]
    block_effect = np.array([0.0, -1.0, 0.8, 0.3])[None, :]
    return 20.0 + treatment_effect + block_effect + rng.normal(0.0, 0.4, (5, 4))


@pytest.fixture
def rbd_no_effect():
    """4 treatments x 5 blocks drawn from a single distribution."""
    rng = np.random.default_rng(99)
    return rng.normal(50.0, 2.0, (4, 5))


@pytest.fixture
def lsd_noisy():
    """
    5 x 5 Latin square on the cyclic layout with row, column and
    treatment effects.

    Returns (matrix, columns).
    """
    rng = np.random.default_rng(2024)
    n = 5
    idx = np.arange(n)
    columns = (idx[:, None] + idx[None, :]) % n
    treatment_effect = np.array([0.0, 2.0, 4.0, 1.0, 3.0])[:, None]
    row_effect = np.array([0.0, 0.5, -0.5, 1.0, -1.0])[None, :]
    column_effect = np.array([0.0, 1.2, -0.7, 0.4, -0.9])[columns]
    y = 30.0 + treatment_effect + row_effect + column_effect + rng.normal(0.0, 0.5, (n, n))
    return y, columns


@pytest.fixture
def lsd_2x2():
    """2 x 2 Latin square: zero error degrees of freedom."""
    return np.array([[1.0, 2.0], [3.0, 4.0]])
