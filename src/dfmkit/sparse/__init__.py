"""dfmkit Sparse Matrix Module.

Labelled sparse matrix types for text analysis and the functions that read
or build them.

Type Hierarchy:

    DfmBase (ABC)
    ├── DocumentFeatureMatrix            # scipy CSR + document/feature labels
    └── ResampledDocumentFeatureMatrix   # R replicates sharing the labels

Quick Start:
    >>> from dfmkit.sparse import DocumentFeatureMatrix, features, ndoc
    >>>
    >>> x = DocumentFeatureMatrix.from_dense(
    ...     [[5, 1, 2], [3, 0, 2], [0, 0, 2]],
    ...     docnames=['d1', 'd2', 'd3'],
    ...     features=['the', 'cat', 'dog'],
    ... )
    >>> features(x)
    ['the', 'cat', 'dog']
    >>> ndoc(x)
    3
    >>> x[:, ['dog']].colsums()
    array([6])

Key Functions:
    - features, docnames, nfeature, ndoc: metadata accessors
    - is_dfm, is_resampled, as_dfm: type checks and coercion
    - from_scipy, from_dense, from_frame, from_anndata, to_scipy: interop
"""

from ._base import DfmBase, DEFAULT_WEIGHTING
from ._dfm import DocumentFeatureMatrix
from ._resampled import ResampledDocumentFeatureMatrix
from ._ops import (
    features,
    docnames,
    nfeature,
    ndoc,
    is_dfm,
    is_resampled,
    as_dfm,
    from_scipy,
    from_dense,
    from_frame,
    from_anndata,
    to_scipy,
)

__all__ = [
    # Types
    'DfmBase',
    'DocumentFeatureMatrix',
    'ResampledDocumentFeatureMatrix',
    'DEFAULT_WEIGHTING',
    # Accessors
    'features',
    'docnames',
    'nfeature',
    'ndoc',
    # Type checks
    'is_dfm',
    'is_resampled',
    'as_dfm',
    # Interop
    'from_scipy',
    'from_dense',
    'from_frame',
    'from_anndata',
    'to_scipy',
]
