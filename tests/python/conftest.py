"""
Pytest configuration and shared fixtures for dfmkit tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import scipy.sparse as sp

import dfmkit
from dfmkit.sparse import DocumentFeatureMatrix, ResampledDocumentFeatureMatrix


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts from the default configuration."""
    dfmkit.config.reset()
    yield
    dfmkit.config.reset()


@pytest.fixture
def animals_dfm():
    """The three-document example.

    Matrix (documents x features):
              the  cat  dog
        d1  [  5,   1,   2 ]
        d2  [  3,   0,   2 ]
        d3  [  0,   0,   2 ]
    """
    return DocumentFeatureMatrix.from_dense(
        [[5, 1, 2],
         [3, 0, 2],
         [0, 0, 2]],
        docnames=["d1", "d2", "d3"],
        features=["the", "cat", "dog"],
    )


@pytest.fixture
def small_dfm():
    """A 4 x 6 matrix with distinct column and row totals.

    Column totals:  a=1, b=10, c=4, d=7, e=2, f=6
    Doc frequency:  a=1, b=4,  c=3, d=2, e=1, f=2
    Row totals:     doc1=6, doc2=13, doc3=3, doc4=8
    """
    dense = np.array([
        [1, 2, 0, 3, 0, 0],
        [0, 5, 1, 4, 2, 1],
        [0, 1, 2, 0, 0, 0],
        [0, 2, 1, 0, 0, 5],
    ])
    return DocumentFeatureMatrix.from_dense(
        dense,
        docnames=["doc1", "doc2", "doc3", "doc4"],
        features=["a", "b", "c", "d", "e", "f"],
        weighting="frequency",
        settings={"stem": False},
    )


@pytest.fixture
def tied_dfm():
    """Features with tied totals to check stable ordering.

    Column totals: w=3, x=5, y=3, z=5
    """
    return DocumentFeatureMatrix.from_dense(
        [[1, 2, 3, 0],
         [2, 3, 0, 5]],
        docnames=["p", "q"],
        features=["w", "x", "y", "z"],
    )


@pytest.fixture
def resampled_dfm():
    """Three replicates of a 2 x 3 matrix.

    Replicate column totals:
        rep0: the=8, cat=1, dog=4
        rep1: the=6, cat=3, dog=4
        rep2: the=10, cat=0, dog=5
    """
    reps = [
        [[5, 1, 2], [3, 0, 2]],
        [[4, 2, 2], [2, 1, 2]],
        [[6, 0, 3], [4, 0, 2]],
    ]
    return ResampledDocumentFeatureMatrix.from_replicates(
        reps,
        docnames=["d1", "d2"],
        features=["the", "cat", "dog"],
        weighting="frequency",
        settings={"resample": "bootstrap"},
    )


@pytest.fixture
def random_dfm():
    """A larger random count matrix for property checks."""
    rng = np.random.default_rng(42)
    mat = sp.random(
        30, 80, density=0.2, format="csr", random_state=42,
        data_rvs=lambda k: rng.integers(1, 6, size=k),
    )
    return DocumentFeatureMatrix.from_scipy(mat)


# =============================================================================
# Helper Functions
# =============================================================================

def assert_array_equal(a1, a2, rtol=1e-7, atol=0):
    """Assert two arrays are approximately equal."""
    np.testing.assert_allclose(np.asarray(a1), np.asarray(a2), rtol=rtol, atol=atol)


def column_dict(x):
    """Map feature label -> dense column (list) for order-independent checks."""
    dense = x.to_dense()
    return {f: dense[:, j].tolist() for j, f in enumerate(x.features)}
