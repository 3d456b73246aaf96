"""
DocumentFeatureMatrix - Labelled Sparse Count Matrix

A thin wrapper around a canonical ``scipy.sparse.csr_matrix`` that keeps
the document and feature labels in lockstep with the matrix dimensions.
All reductions and slicing are delegated to scipy, so no dense copy of the
matrix is ever built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import numpy as np
from scipy import sparse as sp

from dfmkit._typing import LabelInput, MatrixInput, ensure_csr, ensure_labels
from dfmkit.error import DFM_ERROR_DIMENSION_MISMATCH, InvalidArgumentError
from ._base import DEFAULT_WEIGHTING, DfmBase

if TYPE_CHECKING:
    import pandas as pd

__all__ = ['DocumentFeatureMatrix']


class DocumentFeatureMatrix(DfmBase):
    """
    Sparse document-feature matrix with named rows and columns.

    Attributes:
        docnames: Document labels (rows)
        features: Feature labels (columns)
        weighting: Weighting annotation carried through transformations
        settings: Settings annotation carried through transformations

    Example:
        >>> x = DocumentFeatureMatrix.from_dense(
        ...     [[5, 1, 2], [3, 0, 2], [0, 0, 2]],
        ...     docnames=['d1', 'd2', 'd3'],
        ...     features=['the', 'cat', 'dog'],
        ... )
        >>> x.shape
        (3, 3)
        >>> x.colsums()
        array([8, 1, 6])
    """

    def __init__(
        self,
        matrix: MatrixInput,
        docnames: LabelInput = None,
        features: LabelInput = None,
        weighting: str = DEFAULT_WEIGHTING,
        settings: Optional[Dict[str, Any]] = None,
        *,
        copy: bool = False,
        _validate_labels: bool = True,
    ):
        """Create a labelled matrix.

        Args:
            matrix: scipy sparse matrix, 2-D numpy array or nested sequence.
            docnames: Row labels. Defaults to ``text1..textN``.
            features: Column labels. Defaults to ``feature1..featureN``.
            weighting: Weighting annotation.
            settings: Settings annotation.
            copy: If True, never share buffers with ``matrix``.
        """
        csr = ensure_csr(matrix, copy=copy)
        n_docs, n_feats = csr.shape
        if _validate_labels:
            docnames = ensure_labels(docnames, n_docs, prefix='text')
            features = ensure_labels(features, n_feats, prefix='feature')
        elif docnames.size != n_docs or features.size != n_feats:
            raise InvalidArgumentError(
                f"Labels ({docnames.size}, {features.size}) do not match shape {csr.shape}",
                code=DFM_ERROR_DIMENSION_MISMATCH,
            )
        super().__init__(docnames, features, weighting=weighting, settings=settings)
        self._matrix = csr

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_scipy(
        cls,
        mat: Any,
        docnames: LabelInput = None,
        features: LabelInput = None,
        copy: bool = True,
        **metadata,
    ) -> 'DocumentFeatureMatrix':
        """Create from any scipy sparse matrix."""
        if not sp.issparse(mat):
            raise TypeError(f"Expected a scipy sparse matrix, got {type(mat).__name__}")
        return cls(mat, docnames, features, copy=copy, **metadata)

    @classmethod
    def from_dense(
        cls,
        dense: Any,
        docnames: LabelInput = None,
        features: LabelInput = None,
        **metadata,
    ) -> 'DocumentFeatureMatrix':
        """Create from a dense 2-D array or nested list."""
        return cls(np.asarray(dense), docnames, features, **metadata)

    @classmethod
    def from_frame(cls, frame: 'pd.DataFrame', **metadata) -> 'DocumentFeatureMatrix':
        """Create from a pandas DataFrame (index = documents, columns = features)."""
        return cls(
            frame.to_numpy(),
            docnames=[str(i) for i in frame.index],
            features=[str(c) for c in frame.columns],
            **metadata,
        )

    def _with_matrix(
        self,
        matrix: 'sp.csr_matrix',
        docnames: np.ndarray,
        features: np.ndarray,
    ) -> 'DocumentFeatureMatrix':
        # Labels may repeat after sampling with replacement
        return DocumentFeatureMatrix(
            matrix, docnames, features,
            _validate_labels=False,
            **self._metadata(),
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def matrix(self) -> 'sp.csr_matrix':
        """Underlying scipy CSR matrix (do not modify in place)."""
        return self._matrix

    @property
    def nnz(self) -> int:
        return int(self._matrix.nnz)

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    # =========================================================================
    # Reductions
    # =========================================================================

    def colsums(self) -> np.ndarray:
        """Total count of each feature across documents."""
        return np.asarray(self._matrix.sum(axis=0)).ravel()

    def rowsums(self) -> np.ndarray:
        """Total count of each document across features."""
        return np.asarray(self._matrix.sum(axis=1)).ravel()

    def docfreq(self) -> np.ndarray:
        """Number of documents in which each feature has a non-zero count."""
        return np.asarray(self._matrix.getnnz(axis=0)).ravel()

    def total(self) -> float:
        """Sum of all cells."""
        return self._matrix.sum()

    # =========================================================================
    # Slicing
    # =========================================================================

    def _take(
        self,
        rows: Optional[List[int]],
        cols: Optional[List[int]],
    ) -> 'DocumentFeatureMatrix':
        mat = self._matrix
        if rows is not None:
            mat = mat[rows, :]
        if cols is not None:
            mat = mat[:, cols]
        docnames, features = self._take_labels(rows, cols)
        return self._with_matrix(sp.csr_matrix(mat), docnames, features)

    # =========================================================================
    # Conversion
    # =========================================================================

    def to_scipy(self, format: str = 'csr') -> 'sp.spmatrix':
        """Return a copy of the values as a scipy sparse matrix."""
        return self._matrix.asformat(format, copy=True)

    def to_dense(self) -> np.ndarray:
        """Dense copy of the values. Only for small matrices."""
        return self._matrix.toarray()

    def to_frame(self) -> 'pd.DataFrame':
        """Dense pandas DataFrame indexed by document, one column per feature."""
        import pandas as pd

        return pd.DataFrame(
            self.to_dense(),
            index=pd.Index(self.docnames, name='document'),
            columns=pd.Index(self.features, name='feature'),
        )

    def copy(self) -> 'DocumentFeatureMatrix':
        return self._with_matrix(self._matrix.copy(), self._docnames.copy(), self._features.copy())

    # =========================================================================
    # Comparison
    # =========================================================================

    def equals(self, other: Any) -> bool:
        """True if values, labels and metadata are identical."""
        if not isinstance(other, DocumentFeatureMatrix):
            return False
        if self.shape != other.shape:
            return False
        if self.docnames != other.docnames or self.features != other.features:
            return False
        if self._metadata() != other._metadata():
            return False
        return (self._matrix != other._matrix).nnz == 0

    def __repr__(self) -> str:
        return (
            f"DocumentFeatureMatrix(ndoc={self.ndoc}, nfeature={self.nfeature}, "
            f"nnz={self.nnz}, weighting='{self.weighting}')"
        )
