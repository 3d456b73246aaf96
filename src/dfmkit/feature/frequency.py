"""
Frequency Summaries for Document-Feature Matrices.

``top_features`` lists the most (or least) frequent features. For a
resampled matrix it also reports, per feature, a confidence interval built
from the spread of that feature's total across replicates:

    ci_low  = quantile(totals over replicates, (1 - ci) / 2)
    ci_high = quantile(totals over replicates, 1 - (1 - ci) / 2)

with linear interpolation between order statistics. ``freq`` is the total
in replicate 0, not the replicate mean, so it may fall outside the interval.
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Any, Optional, Union

import numpy as np
import pandas as pd

from dfmkit._config import config
from dfmkit._typing import get_format
from dfmkit.error import InvalidArgumentError, UnusedArgumentWarning
from dfmkit.preprocessing.sort import rank_order
from dfmkit.sparse import DocumentFeatureMatrix, ResampledDocumentFeatureMatrix

if TYPE_CHECKING:
    from dfmkit._typing import DfmInput

logger = logging.getLogger("dfmkit.feature")

_UNSET = object()


def _warn_unused(kwargs: dict) -> None:
    if not kwargs:
        return
    names = ", ".join(kwargs)
    noun = "Arguments" if len(kwargs) > 1 else "Argument"
    warnings.warn(f"{noun} {names} not used.", UnusedArgumentWarning, stacklevel=3)


def _clamp_n(n: Optional[int], n_feat: int) -> int:
    if n is None:
        return n_feat
    n = int(n)
    if n < 0:
        raise InvalidArgumentError(f"n must be non-negative, got {n}")
    return min(n, n_feat)


def top_features(
    x: Union["DfmInput", Any],
    n: Optional[int] = _UNSET,
    decreasing: bool = True,
    ci: Optional[float] = None,
    **kwargs,
) -> Union["pd.Series", "pd.DataFrame"]:
    """List the most frequently occurring features.

    Args:
        x: DocumentFeatureMatrix, ResampledDocumentFeatureMatrix, or a raw
            scipy sparse matrix (column positions are used as labels).
        n: How many features to return; clamped to the number of features.
            None returns all of them. Defaults to ``config.summary.n`` (10)
            for dfm objects and to all features for raw matrices.
        decreasing: If True the ``n`` most frequent features, otherwise the
            ``n`` least frequent.
        ci: Confidence level in [0, 1] used for resampled matrices; 1 gives
            the min/max interval and 0 the median. Ignored for plain
            matrices. Defaults to ``config.summary.ci`` (0.95).
        **kwargs: Not used; passing anything emits UnusedArgumentWarning.

    Returns:
        - Plain matrix: ``pandas.Series`` of feature totals indexed by
          feature, in rank order.
        - Resampled matrix: ``pandas.DataFrame`` indexed by feature with
          columns ``freq``, ``ci_low`` and ``ci_high``, in rank order of
          replicate 0.

    Examples:
        >>> top_features(x)
        >>> top_features(x, decreasing=False)      # least frequent
        >>> top_features(boot, n=5, ci=0.9)        # with intervals
    """
    _warn_unused(kwargs)

    fmt = get_format(x)

    if fmt == "resampled":
        if n is _UNSET:
            n = config.summary.n
        if ci is None:
            ci = config.summary.ci
        if not 0 <= ci <= 1:
            raise InvalidArgumentError(f"ci must lie in [0, 1], got {ci}")
        return _top_features_resampled(x, n, decreasing, ci)

    if fmt == "dfm":
        if n is _UNSET:
            n = config.summary.n
        totals = x.colsums()
        labels = x.features
    elif fmt in ("scipy_csr", "scipy_other"):
        if n is _UNSET:
            n = None
        totals = np.asarray(x.sum(axis=0)).ravel()
        labels = list(range(totals.size))
    else:
        raise TypeError(f"top_features() not defined for {type(x).__name__}")

    n = _clamp_n(n, totals.size)
    order = rank_order(totals, decreasing)[:n]
    return pd.Series(
        totals[order],
        index=pd.Index([labels[i] for i in order], name="feature"),
        name="freq",
    )


def _top_features_resampled(
    x: ResampledDocumentFeatureMatrix,
    n: Optional[int],
    decreasing: bool,
    ci: float,
) -> "pd.DataFrame":
    """Top features of replicate 0 with quantile intervals over replicates."""
    n = _clamp_n(n, x.nfeature)
    order = rank_order(x.colsums(), decreasing)[:n]
    top = x._take(None, order.tolist())

    # (nreplicate, n) totals; only the top n columns are ever reduced
    totals = top.replicate_colsums()
    alpha = (1 - ci) / 2
    ci_low = np.quantile(totals, alpha, axis=0, method="linear")
    ci_high = np.quantile(totals, 1 - alpha, axis=0, method="linear")

    logger.debug(
        f"top_features: {n} features over {x.nreplicate} replicates, ci={ci}"
    )
    return pd.DataFrame(
        {
            "freq": totals[0],
            "ci_low": ci_low,
            "ci_high": ci_high,
        },
        index=pd.Index(top.features, name="feature"),
    )


# Older spelling
topfeatures = top_features


__all__ = [
    "top_features",
    "topfeatures",
]
