"""
dfmkit - Document-Feature Matrix Toolkit

Manipulation utilities for sparse document-feature matrices:
- Threshold trimming by feature frequency and document frequency
- Random sampling of documents or features
- Sorting by marginal totals
- Top/bottom frequency features, with intervals for resampled matrices

Modules:
- sparse: Labelled matrix types, accessors and interop
- feature: trim, docfreq, top_features
- preprocessing: sort_dfm, sample_dfm
- error: Exceptions and warnings
- config: Defaults (verbosity, seed, summary parameters)

Architecture:
    ┌──────────────────────────────────────────────┐
    │   DocumentFeatureMatrix / Resampled (R reps) │
    ├──────────────────────────────────────────────┤
    │  scipy.sparse CSR  +  docnames / features    │
    └──────────────────────────────────────────────┘

Example:
    >>> import dfmkit
    >>>
    >>> x = dfmkit.from_dense(
    ...     [[5, 1, 2], [3, 0, 2], [0, 0, 2]],
    ...     docnames=['d1', 'd2', 'd3'],
    ...     features=['the', 'cat', 'dog'],
    ... )
    >>> dfmkit.trim(x, min_count=2, min_doc=2).features
    ['the', 'dog']
    >>> dfmkit.top_features(x, n=2)
"""

__version__ = '0.1.0'

from . import sparse
from . import feature
from . import preprocessing
from . import error
from ._config import (
    config,
    get_config,
    set_verbose,
    set_seed,
    ReportConfig,
    RandomConfig,
    SummaryConfig,
)

from .sparse import (
    # Types
    DocumentFeatureMatrix,
    ResampledDocumentFeatureMatrix,

    # Accessors
    features,
    docnames,
    nfeature,
    ndoc,

    # Type checks
    is_dfm,
    is_resampled,
    as_dfm,

    # Interop
    from_scipy,
    from_dense,
    from_frame,
    from_anndata,
    to_scipy,
)

from .feature import (
    docfreq,
    trim,
    trimdfm,
    top_features,
    topfeatures,
)

from .preprocessing import (
    sort_dfm,
    sample_dfm,
)

from .error import (
    DfmError,
    InvalidArgumentError,
    EmptyResultError,
    NotImplementedFeatureError,
    DfmWarning,
    UnusedArgumentWarning,
    SampleSizeWarning,
)

__all__ = [
    # Version
    '__version__',

    # Modules
    'sparse',
    'feature',
    'preprocessing',
    'error',

    # Config
    'config',
    'get_config',
    'set_verbose',
    'set_seed',
    'ReportConfig',
    'RandomConfig',
    'SummaryConfig',

    # Types
    'DocumentFeatureMatrix',
    'ResampledDocumentFeatureMatrix',

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

    # Operations
    'docfreq',
    'trim',
    'trimdfm',
    'top_features',
    'topfeatures',
    'sort_dfm',
    'sample_dfm',

    # Errors
    'DfmError',
    'InvalidArgumentError',
    'EmptyResultError',
    'NotImplementedFeatureError',
    'DfmWarning',
    'UnusedArgumentWarning',
    'SampleSizeWarning',
]
