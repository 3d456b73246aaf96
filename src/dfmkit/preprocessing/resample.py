"""Random sampling of documents or features from a document-feature matrix.

High-level API for drawing rows or columns, with or without replacement.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from dfmkit._typing import SeedInput, ensure_prob, ensure_rng
from dfmkit.error import InvalidArgumentError
from dfmkit.sparse import DfmBase

if TYPE_CHECKING:
    from dfmkit._typing import DfmInput

logger = logging.getLogger("dfmkit.preprocessing")

__all__ = ['sample_dfm', 'SAMPLE_UNITS']


SAMPLE_UNITS = ("documents", "features")


def sample_dfm(
    x: "DfmInput",
    size: Optional[int] = None,
    replace: bool = False,
    prob: Optional[Sequence[float]] = None,
    what: str = "documents",
    *,
    seed: SeedInput = None,
) -> "DfmInput":
    """Randomly sample documents or features from a dfm.

    Args:
        x: DocumentFeatureMatrix or ResampledDocumentFeatureMatrix.
        size: Number of units to draw. Defaults to every document (or
            feature), i.e. a random permutation.
        replace: Sample with replacement. Drawn duplicates appear as
            separate rows/columns sharing the same label.
        prob: Optional non-negative selection weights, one per unit.
        what: "documents" (rows) or "features" (columns).
        seed: None, an int seed or a numpy Generator.

    Returns:
        New matrix restricted to the drawn units, in drawn order, with the
        metadata of ``x``.

    Raises:
        InvalidArgumentError: If ``what`` is not recognized, ``size`` is
            negative or fractional, ``prob`` is malformed, or ``size``
            exceeds the number of units (with positive weight) when
            ``replace`` is False.

    Example:
        >>> sample_dfm(x, seed=42).docnames               # shuffled documents
        >>> sample_dfm(x, replace=True, seed=42)          # bootstrap rows
        >>> sample_dfm(x, size=2, what="features", seed=42)
    """
    if what not in SAMPLE_UNITS:
        raise InvalidArgumentError(f"what must be one of {SAMPLE_UNITS}, got '{what}'")
    if not isinstance(x, DfmBase):
        raise TypeError(f"sample_dfm() expects a dfm, got {type(x).__name__}")

    population = x.ndoc if what == "documents" else x.nfeature
    if size is None:
        size = population
    if int(size) != size:
        raise InvalidArgumentError(f"size must be a whole number, got {size}")
    size = int(size)
    if size < 0:
        raise InvalidArgumentError(f"size must be non-negative, got {size}")

    p = ensure_prob(prob, population)

    if not replace:
        available = population if p is None else int(np.count_nonzero(p))
        if size > available:
            raise InvalidArgumentError(
                f"size cannot exceed the number of {what} ({available})"
            )
    elif size > 0 and population == 0:
        raise InvalidArgumentError(f"cannot sample from zero {what}")

    rng = ensure_rng(seed)
    drawn = rng.choice(population, size=size, replace=replace, p=p).tolist()
    logger.debug(f"sample_dfm: drew {size} of {population} {what} (replace={replace})")

    if what == "documents":
        return x._take(drawn, None)
    return x._take(None, drawn)
