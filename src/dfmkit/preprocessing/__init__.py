"""
dfmkit Preprocessing Module.

Reordering and resampling of document-feature matrices.

Submodules:
    - sort: Order documents/features by marginal totals
    - resample: Random draws of documents or features

Both accept a DocumentFeatureMatrix or a ResampledDocumentFeatureMatrix and
return a new value of the same type carrying the input's metadata.

Example:
    >>> import dfmkit.preprocessing as pp
    >>>
    >>> ordered = pp.sort_dfm(x, margin="both")
    >>> shuffled = pp.sample_dfm(x, seed=1)
"""

from dfmkit.preprocessing.sort import (
    sort_dfm,
    rank_order,
)

from dfmkit.preprocessing.resample import (
    sample_dfm,
)

__all__ = [
    # Sorting
    "sort_dfm",
    "rank_order",
    # Resampling
    "sample_dfm",
]
