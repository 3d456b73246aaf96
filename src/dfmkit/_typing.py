"""
dfmkit Type Definitions and Input Coercion.

This module provides type aliases and utility functions used by every
operation to accept the same family of inputs:

    - dfmkit types (DocumentFeatureMatrix, ResampledDocumentFeatureMatrix)
    - SciPy sparse matrices (any format, canonicalized to CSR)
    - NumPy arrays and nested sequences
    - pandas DataFrames

Example:
    >>> from dfmkit._typing import ensure_csr, ensure_labels
    >>>
    >>> csr = ensure_csr([[1, 0], [0, 2]])
    >>> labels = ensure_labels(None, 2, prefix="doc")
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    List,
    Optional,
    Sequence,
    Union,
)

import numpy as np
from scipy import sparse as sp

from dfmkit.error import InvalidArgumentError

if TYPE_CHECKING:
    import pandas as pd
    from dfmkit.sparse import DocumentFeatureMatrix, ResampledDocumentFeatureMatrix


# =============================================================================
# Type Aliases
# =============================================================================

DenseInput = Union[
    "np.ndarray",
    Sequence[Sequence[float]],
]

MatrixInput = Union[
    "sp.spmatrix",
    "sp.sparray",
    DenseInput,
]

DfmInput = Union[
    "DocumentFeatureMatrix",
    "ResampledDocumentFeatureMatrix",
]

LabelInput = Optional[Sequence[str]]

SeedInput = Union[None, int, "np.random.Generator"]

# Row/column selector: int, slice, boolean mask, positions or labels
IndexInput = Union[int, slice, Sequence[int], Sequence[bool], Sequence[str], "np.ndarray"]


# =============================================================================
# Format Detection
# =============================================================================

def is_scipy_sparse(obj: Any) -> bool:
    """Check if object is any scipy sparse matrix or array."""
    return sp.issparse(obj)


def is_numpy_array(obj: Any) -> bool:
    """Check if object is a numpy ndarray."""
    return isinstance(obj, np.ndarray)


def is_data_frame(obj: Any) -> bool:
    """Check if object is a pandas DataFrame without importing pandas eagerly."""
    try:
        import pandas as pd
    except ImportError:
        return False
    return isinstance(obj, pd.DataFrame)


def get_format(obj: Any) -> str:
    """Detect the format of a matrix-like input.

    Args:
        obj: Matrix object.

    Returns:
        Format string: 'dfm', 'resampled', 'scipy_csr', 'scipy_other',
        'numpy', 'frame', 'sequence', or 'unknown'.
    """
    from dfmkit.sparse import DocumentFeatureMatrix, ResampledDocumentFeatureMatrix

    if isinstance(obj, ResampledDocumentFeatureMatrix):
        return "resampled"
    elif isinstance(obj, DocumentFeatureMatrix):
        return "dfm"
    elif is_scipy_sparse(obj):
        return "scipy_csr" if obj.format == "csr" else "scipy_other"
    elif is_numpy_array(obj):
        return "numpy"
    elif is_data_frame(obj):
        return "frame"
    elif isinstance(obj, (list, tuple)):
        return "sequence"
    else:
        return "unknown"


# =============================================================================
# Conversion Functions
# =============================================================================

def ensure_csr(mat: MatrixInput, copy: bool = False) -> "sp.csr_matrix":
    """Convert any matrix input to a canonical scipy CSR matrix.

    Canonical means sorted indices and no explicitly stored zeros, so that
    ``indptr`` differences count non-zero cells.

    Args:
        mat: scipy sparse matrix, 2-D numpy array or nested sequence.
        copy: If True, never share buffers with ``mat``.

    Returns:
        scipy.sparse.csr_matrix.

    Raises:
        InvalidArgumentError: If the input is not two-dimensional.
        TypeError: If the input type is not supported.
    """
    fmt = get_format(mat)

    if fmt == "scipy_csr":
        # Canonicalizing works in place, so never touch the caller's buffers
        dirty = not mat.has_canonical_format or bool(np.any(mat.data == 0))
        csr = sp.csr_matrix(mat, copy=copy or dirty)
    elif fmt == "scipy_other":
        csr = sp.csr_matrix(mat.tocsr(), copy=True)
    elif fmt in ("numpy", "sequence"):
        dense = np.asarray(mat)
        if dense.ndim != 2:
            raise InvalidArgumentError(
                f"Expected a 2-D matrix, got an array with {dense.ndim} dimension(s)"
            )
        csr = sp.csr_matrix(dense)
    else:
        raise TypeError(
            f"Cannot convert {type(mat).__name__} to a sparse matrix. "
            f"Supported types: scipy.sparse, numpy.ndarray, nested sequences"
        )

    if not csr.has_canonical_format:
        csr.sum_duplicates()
    csr.eliminate_zeros()
    return csr


def ensure_labels(
    labels: LabelInput,
    size: int,
    prefix: str,
    unique: bool = True,
) -> "np.ndarray":
    """Validate a label vector, or generate ``prefix1..prefixN`` when absent.

    Args:
        labels: Sequence of labels or None.
        size: Expected number of labels.
        prefix: Prefix for generated labels.
        unique: If True, duplicated labels are rejected.

    Returns:
        1-D numpy object array of str labels.

    Raises:
        InvalidArgumentError: On length mismatch or duplicates.
    """
    if labels is None:
        return np.array([f"{prefix}{i + 1}" for i in range(size)], dtype=object)

    result = np.array([str(label) for label in labels], dtype=object)
    if result.size != size:
        raise InvalidArgumentError(
            f"Number of {prefix} labels ({result.size}) != matrix dimension ({size})"
        )
    if unique and len(set(result.tolist())) != result.size:
        raise InvalidArgumentError(f"{prefix.capitalize()} labels must be unique")
    return result


def ensure_rng(seed: SeedInput = None) -> "np.random.Generator":
    """Return a numpy Generator for ``seed``.

    A Generator is passed through so callers can share one stream across
    several draws; None falls back to the configured default seed.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None:
        from dfmkit._config import config
        seed = config.seed
    return np.random.default_rng(seed)


def ensure_prob(prob: Optional[Sequence[float]], size: int) -> Optional["np.ndarray"]:
    """Validate selection weights and normalize them to probabilities.

    Args:
        prob: Non-negative weights, one per unit, or None for uniform.
        size: Number of units.

    Returns:
        Probability vector summing to one, or None.
    """
    if prob is None:
        return None

    weights = np.asarray(prob, dtype=np.float64).ravel()
    if weights.size != size:
        raise InvalidArgumentError(
            f"prob has {weights.size} entries, expected {size}"
        )
    if np.any(~np.isfinite(weights)) or np.any(weights < 0):
        raise InvalidArgumentError("prob must contain finite, non-negative weights")
    total = weights.sum()
    if total <= 0:
        raise InvalidArgumentError("prob must contain at least one positive weight")
    return weights / total


def to_position_list(
    selector: IndexInput,
    labels: "np.ndarray",
    axis_name: str,
) -> List[int]:
    """Resolve a row/column selector into integer positions.

    Accepts an int, a slice, a boolean mask, integer positions or labels.
    Label lookups resolve to the first occurrence of each label.
    """
    size = labels.size

    if isinstance(selector, slice):
        return list(range(size))[selector]

    if isinstance(selector, (int, np.integer)):
        selector = [int(selector)]
    elif isinstance(selector, str):
        selector = [selector]

    arr = np.asarray(selector)
    if arr.size == 0:
        return []

    if arr.dtype == bool:
        if arr.size != size:
            raise InvalidArgumentError(
                f"Boolean mask of length {arr.size} does not match {size} {axis_name}"
            )
        return np.flatnonzero(arr).tolist()

    if np.issubdtype(arr.dtype, np.integer):
        positions = arr.ravel().tolist()
        for pos in positions:
            if pos < -size or pos >= size:
                raise IndexError(f"{axis_name} index {pos} out of range for size {size}")
        return [pos % size for pos in positions]

    lookup = {}
    for pos, label in enumerate(labels.tolist()):
        lookup.setdefault(label, pos)
    positions = []
    for label in arr.ravel().tolist():
        if label not in lookup:
            raise KeyError(f"Unknown {axis_name} label: {label!r}")
        positions.append(lookup[label])
    return positions


__all__ = [
    "DenseInput",
    "MatrixInput",
    "DfmInput",
    "LabelInput",
    "SeedInput",
    "IndexInput",
    "is_scipy_sparse",
    "is_numpy_array",
    "is_data_frame",
    "get_format",
    "ensure_csr",
    "ensure_labels",
    "ensure_rng",
    "ensure_prob",
    "to_position_list",
]
