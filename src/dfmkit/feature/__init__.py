"""
dfmkit Feature Module.

Feature-level analysis of document-feature matrices.

Submodules:
    - selection: Threshold trimming and document frequencies
    - frequency: Most/least frequent features, with replicate intervals

Example:
    >>> import dfmkit.feature as feat
    >>>
    >>> # Keep words used at least 10 times in at least 2 documents
    >>> small = feat.trim(x, min_count=10, min_doc=2)
    >>>
    >>> # Ten most frequent remaining words
    >>> feat.top_features(small)
"""

from dfmkit.feature.selection import (
    docfreq,
    trim,
    trimdfm,
)

from dfmkit.feature.frequency import (
    top_features,
    topfeatures,
)

__all__ = [
    # Selection
    "docfreq",
    "trim",
    "trimdfm",
    # Frequency
    "top_features",
    "topfeatures",
]
