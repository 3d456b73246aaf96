"""
Accessors, Type Checks and Conversions for DFM Objects.

Accessors dispatch on the type of their argument with an explicit switch:

    DfmBase               -> read labels / shape
    corpus-like           -> documents are countable, features are not
                             (they only exist after tokenization)
    anything else         -> TypeError
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Optional

import numpy as np

from dfmkit._typing import LabelInput, get_format
from dfmkit.error import InvalidArgumentError, NotImplementedFeatureError
from ._base import DfmBase
from ._dfm import DocumentFeatureMatrix
from ._resampled import ResampledDocumentFeatureMatrix

logger = logging.getLogger("dfmkit.sparse")

__all__ = [
    'features',
    'docnames',
    'nfeature',
    'ndoc',
    'is_dfm',
    'is_resampled',
    'as_dfm',
    'from_scipy',
    'from_dense',
    'from_frame',
    'from_anndata',
    'to_scipy',
]


# =============================================================================
# Type Checks
# =============================================================================

def is_dfm(x: Any) -> bool:
    """True if ``x`` is a document-feature matrix (resampled or not)."""
    return isinstance(x, DfmBase)


def is_resampled(x: Any) -> bool:
    """True if ``x`` carries resampled replicates."""
    return isinstance(x, ResampledDocumentFeatureMatrix)


def _is_corpus_like(x: Any) -> bool:
    """A mapping of document name to text, or a plain sequence of texts."""
    if isinstance(x, Mapping):
        return all(isinstance(v, str) for v in x.values())
    if isinstance(x, (list, tuple)):
        return all(isinstance(v, str) for v in x)
    return False


# =============================================================================
# Accessors
# =============================================================================

def features(x: Any) -> List[str]:
    """Feature labels (column names) of a document-feature matrix.

    Examples:
        >>> features(x)[:3]
        ['the', 'cat', 'dog']
        >>> sorted(features(x))[:3]        # alphabetical
    """
    if isinstance(x, DfmBase):
        return x.features
    if _is_corpus_like(x):
        raise NotImplementedFeatureError(
            "features not yet implemented for corpus objects: tokenize into a dfm first"
        )
    raise TypeError(f"features() not defined for {type(x).__name__}")


def docnames(x: Any) -> List[str]:
    """Document labels (row names) of a document-feature matrix or corpus."""
    if isinstance(x, DfmBase):
        return x.docnames
    if _is_corpus_like(x):
        if isinstance(x, Mapping):
            return [str(k) for k in x.keys()]
        return [f"text{i + 1}" for i in range(len(x))]
    raise TypeError(f"docnames() not defined for {type(x).__name__}")


def nfeature(x: Any) -> int:
    """Number of features (columns).

    For a corpus, features are only defined through tokenization, so this
    raises NotImplementedFeatureError.
    """
    if isinstance(x, DfmBase):
        return x.nfeature
    if _is_corpus_like(x):
        raise NotImplementedFeatureError("nfeature not yet implemented for corpus objects")
    raise TypeError(f"nfeature() not defined for {type(x).__name__}")


def ndoc(x: Any) -> int:
    """Number of documents (rows) of a document-feature matrix or corpus."""
    if isinstance(x, DfmBase):
        return x.ndoc
    if _is_corpus_like(x):
        return len(x)
    raise TypeError(f"ndoc() not defined for {type(x).__name__}")


# =============================================================================
# Construction
# =============================================================================

def as_dfm(x: Any) -> DocumentFeatureMatrix:
    """Coerce a matrix-like object into a DocumentFeatureMatrix.

    Accepts a 2-D numpy array, a scipy sparse matrix or a pandas DataFrame
    (whose index and columns become the labels). A DocumentFeatureMatrix is
    returned unchanged.

    Raises:
        InvalidArgumentError: If ``x`` is not matrix-like.
    """
    fmt = get_format(x)
    logger.debug(f"as_dfm: input format '{fmt}'")

    if fmt == "dfm":
        return x
    if fmt == "frame":
        return DocumentFeatureMatrix.from_frame(x)
    if fmt in ("scipy_csr", "scipy_other"):
        return DocumentFeatureMatrix.from_scipy(x)
    if fmt == "numpy" and x.ndim == 2:
        return DocumentFeatureMatrix.from_dense(x)
    raise InvalidArgumentError("as_dfm only applicable to matrix(-like) objects")


def from_scipy(
    mat: Any,
    docnames: LabelInput = None,
    features: LabelInput = None,
    **metadata,
) -> DocumentFeatureMatrix:
    """Create a DocumentFeatureMatrix from a scipy sparse matrix (copied)."""
    return DocumentFeatureMatrix.from_scipy(mat, docnames, features, **metadata)


def from_dense(
    dense: Any,
    docnames: LabelInput = None,
    features: LabelInput = None,
    **metadata,
) -> DocumentFeatureMatrix:
    """Create a DocumentFeatureMatrix from a dense 2-D array or nested list."""
    return DocumentFeatureMatrix.from_dense(dense, docnames, features, **metadata)


def from_frame(frame: Any, **metadata) -> DocumentFeatureMatrix:
    """Create a DocumentFeatureMatrix from a pandas DataFrame."""
    return DocumentFeatureMatrix.from_frame(frame, **metadata)


def from_anndata(
    adata: Any,
    layer: Optional[str] = None,
    **metadata,
) -> DocumentFeatureMatrix:
    """Create a DocumentFeatureMatrix from AnnData X or a layer.

    Optional interop for count matrices stored as ``.h5ad`` files; needs the
    ``anndata`` extra (``pip install dfmkit[anndata]``). AnnData rows are
    read as documents and columns as features: ``obs_names`` become
    docnames and ``var_names`` become features. The data is copied.

    Args:
        adata: AnnData object with a sparse or dense count matrix.
        layer: Name of a layer to read instead of ``adata.X``.
        **metadata: ``weighting`` / ``settings`` for the new matrix.

    Raises:
        TypeError: If the selected data is neither scipy sparse nor numpy.

    Example:
        >>> import anndata
        >>> adata = anndata.read_h5ad("counts.h5ad")
        >>> x = from_anndata(adata)
    """
    from scipy import sparse as sp

    data = adata.layers[layer] if layer is not None else adata.X

    if not (sp.issparse(data) or isinstance(data, np.ndarray)):
        raise TypeError(f"Unknown data type in AnnData: {type(data)}")

    return DocumentFeatureMatrix(
        data,
        docnames=[str(n) for n in adata.obs_names],
        features=[str(n) for n in adata.var_names],
        copy=True,
        **metadata,
    )


def to_scipy(x: DocumentFeatureMatrix, format: str = 'csr') -> Any:
    """Copy of the values of ``x`` as a scipy sparse matrix."""
    if not isinstance(x, DocumentFeatureMatrix):
        raise TypeError(f"to_scipy() expects a DocumentFeatureMatrix, got {type(x).__name__}")
    return x.to_scipy(format)
