"""
Threshold-Based Feature Selection for Document-Feature Matrices.

This module reduces a dfm to the features that are frequent enough, in
enough documents, optionally followed by random subsampling.

Implemented Operations:
    - trim: Frequency / document-frequency thresholds, random subsample
    - docfreq: Number of documents containing each feature

Trimming is based on the values in the matrix. Selecting features by
properties of the labels themselves (patterns, stopword lists) is a
different operation and is not provided here.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from dfmkit._config import config
from dfmkit._typing import SeedInput, ensure_csr, get_format
from dfmkit.error import (
    EmptyResultError,
    InvalidArgumentError,
    SampleSizeWarning,
)
from dfmkit.preprocessing import sample_dfm, sort_dfm
from dfmkit.sparse import DfmBase

if TYPE_CHECKING:
    from dfmkit._typing import DfmInput

logger = logging.getLogger("dfmkit.feature")


# =============================================================================
# Document Frequency
# =============================================================================

def docfreq(x: Any) -> np.ndarray:
    """Number of documents in which each feature has a non-zero count.

    Args:
        x: DocumentFeatureMatrix, ResampledDocumentFeatureMatrix (replicate 0
            is used), scipy sparse matrix or 2-D array.

    Returns:
        Integer array of length nfeature(x).

    Examples:
        >>> docfreq(x)
        array([2, 1, 3])
    """
    if isinstance(x, DfmBase):
        return x.docfreq()
    csr = ensure_csr(x)
    return np.asarray(csr.getnnz(axis=0)).ravel()


# =============================================================================
# Trim
# =============================================================================

def _report(verbose: bool, msg: str, **facts) -> None:
    if verbose:
        logger.info(msg, extra=facts)


def _resolve_min_doc(min_doc: float, sparsity: Optional[float], verbose: bool) -> float:
    if sparsity is None:
        return min_doc

    if not 0 <= sparsity < 1:
        raise InvalidArgumentError(f"sparsity must lie in [0, 1), got {sparsity}")

    converted = 1 - sparsity
    if min_doc != 1 and not math.isclose(min_doc, converted):
        raise InvalidArgumentError(
            "min_doc and sparsity both refer to a document threshold, "
            "both should not be specified"
        )

    _report(
        verbose,
        f"Note: converting sparsity into min_doc = 1 - {sparsity:g} = {converted:g}.",
        stage="sparsity", threshold=converted,
    )
    return converted


def trim(
    x: "DfmInput",
    min_count: float = 1,
    min_doc: float = 1,
    sparsity: Optional[float] = None,
    nsample: Optional[int] = None,
    verbose: Optional[bool] = None,
    *,
    seed: SeedInput = None,
) -> "DfmInput":
    """Trim a dfm using threshold-based or random feature selection.

    A feature is kept when its total count is at least ``min_count`` AND it
    occurs in at least ``min_doc`` documents.

    Threshold Interpretation:
        - A value below 1 is a fraction: ``min_count`` is multiplied by the
          number of features, ``min_doc`` by the number of documents.
        - A value of 1 or more (including exactly ``1.0``) is an absolute
          count.

    Args:
        x: DocumentFeatureMatrix or ResampledDocumentFeatureMatrix. For a
            resampled matrix thresholds are evaluated on replicate 0 and
            the same features are kept in every replicate.
        min_count: Minimum total count, or fraction (see above).
        min_doc: Minimum number of documents, or fraction (see above).
        sparsity: Equivalent to ``1 - min_doc``; the maximum fraction of
            documents a feature may be absent from. Only one of
            ``min_doc``/``sparsity`` may be set.
        nsample: Keep a uniform random sample of this many of the retained
            features. Larger values are clamped with a SampleSizeWarning.
        verbose: Log progress on the ``dfmkit.feature`` logger. Defaults to
            ``config.verbose``.
        seed: None, an int seed or a numpy Generator (used with ``nsample``).

    Returns:
        New matrix with the retained features, sorted by decreasing feature
        total, and the same documents and metadata as ``x``.

    Raises:
        InvalidArgumentError: Non-positive threshold, out-of-range or
            conflicting ``sparsity``.
        EmptyResultError: No feature passes both thresholds.

    Examples:
        >>> # only words occurring >= 10 times and in >= 2 docs
        >>> trim(x, min_count=10, min_doc=2)
        >>> # only words occurring >= 10 times and in at least 40% of documents
        >>> trim(x, min_count=10, min_doc=0.4)
        >>> # same document rule, tm style
        >>> trim(x, sparsity=0.6)
        >>> # sample 50 words occurring at least 20 times each
        >>> trim(x, min_count=20, nsample=50, seed=1)
    """
    if not isinstance(x, DfmBase):
        raise TypeError(f"trim() expects a dfm, got {get_format(x)}")
    if not (min_count > 0 and min_doc > 0):
        raise InvalidArgumentError(
            f"min_count and min_doc must be positive, got {min_count} and {min_doc}"
        )
    if verbose is None:
        verbose = config.verbose

    min_doc = _resolve_min_doc(min_doc, sparsity, verbose)

    n_feat = x.nfeature
    n_doc = x.ndoc

    count_expr = ""
    if min_count < 1:
        count_expr = f"{min_count:g} * {n_feat} = "
        min_count = n_feat * min_count
    doc_expr = ""
    if min_doc < 1:
        doc_expr = f"{min_doc:g} * {n_doc} = "
        min_doc = n_doc * min_doc

    above_count = x.colsums() >= min_count
    if min_count != 1:
        removed = int(n_feat - np.count_nonzero(above_count))
        _report(
            verbose,
            f"Removing features occurring fewer than {count_expr}{min_count:g} times: {removed}",
            stage="min_count", threshold=min_count, removed=removed,
        )

    above_doc = x.docfreq() >= min_doc
    if min_doc != 1:
        removed = int(n_feat - np.count_nonzero(above_doc))
        _report(
            verbose,
            f"Removing features occurring in fewer than {doc_expr}{min_doc:g} documents: {removed}",
            stage="min_doc", threshold=min_doc, removed=removed,
        )

    keep = np.flatnonzero(above_count & above_doc)
    if keep.size == 0:
        raise EmptyResultError("No features left after trimming.")

    x = x._take(None, keep.tolist())

    if nsample is not None:
        if nsample > x.nfeature:
            warnings.warn(
                f"Retained features ({x.nfeature}) fewer than sample size ({nsample}); "
                f"resetting nsample to {x.nfeature}",
                SampleSizeWarning,
                stacklevel=2,
            )
        nsample = min(x.nfeature, int(nsample))
        x = sample_dfm(x, size=nsample, what="features", seed=seed)
        _report(
            verbose,
            f"Retaining a random sample of {nsample} words",
            stage="nsample", retained=nsample,
        )

    return sort_dfm(x, decreasing=True, margin="features")


def trimdfm(x: "DfmInput", **kwargs) -> "DfmInput":
    """Deprecated alias of :func:`trim`."""
    warnings.warn(
        "trimdfm is deprecated: use trim instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    return trim(x, **kwargs)


__all__ = [
    "docfreq",
    "trim",
    "trimdfm",
]
