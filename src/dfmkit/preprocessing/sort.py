"""Sorting a document-feature matrix by its marginal totals."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from dfmkit.error import InvalidArgumentError
from dfmkit.sparse import DfmBase

if TYPE_CHECKING:
    from dfmkit._typing import DfmInput

logger = logging.getLogger("dfmkit.preprocessing")

__all__ = ['sort_dfm', 'rank_order', 'MARGINS']


MARGINS = ("features", "docs", "both")


def rank_order(values: np.ndarray, decreasing: bool = True) -> np.ndarray:
    """Stable ordering of ``values``; ties keep their original relative order."""
    values = np.asarray(values, dtype=np.float64)
    key = -values if decreasing else values
    return np.argsort(key, kind="stable")


def sort_dfm(
    x: "DfmInput",
    decreasing: bool = True,
    margin: str = "features",
) -> "DfmInput":
    """Sort a dfm by total feature frequency, total document length, or both.

    Args:
        x: DocumentFeatureMatrix or ResampledDocumentFeatureMatrix.
        decreasing: If True (default) largest totals come first.
        margin: "features" orders columns by column sums, "docs" orders rows
            by row sums, "both" does each independently.

    Returns:
        New matrix with the same values and labels, reordered. For a
        resampled matrix the order comes from replicate 0 and is applied to
        every replicate.

    Raises:
        InvalidArgumentError: If ``margin`` is not recognized.

    Examples:
        >>> sort_dfm(x)[:, 0:3].features          # three most frequent
        >>> sort_dfm(x, decreasing=False, margin="docs")
        >>> sort_dfm(x, True, "both")
    """
    if margin not in MARGINS:
        raise InvalidArgumentError(f"margin must be one of {MARGINS}, got '{margin}'")
    if not isinstance(x, DfmBase):
        raise TypeError(f"sort_dfm() expects a dfm, got {type(x).__name__}")

    rows = None
    cols = None
    if margin in ("docs", "both"):
        rows = rank_order(x.rowsums(), decreasing).tolist()
    if margin in ("features", "both"):
        cols = rank_order(x.colsums(), decreasing).tolist()

    logger.debug(f"sort_dfm: margin={margin}, decreasing={decreasing}, shape={x.shape}")
    return x._take(rows, cols)
