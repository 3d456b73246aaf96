"""
ResampledDocumentFeatureMatrix - Stack of Bootstrap Replicates

Holds R >= 1 sparse matrices of identical shape that share document and
feature labels. Replicate 0 is the observed matrix and defines every rank
order (sorting, trimming, top features); the remaining replicates only
contribute to sampling-variability estimates.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from scipy import sparse as sp

from dfmkit._typing import LabelInput, ensure_csr, ensure_labels
from dfmkit.error import DFM_ERROR_DIMENSION_MISMATCH, InvalidArgumentError
from ._base import DEFAULT_WEIGHTING, DfmBase
from ._dfm import DocumentFeatureMatrix

__all__ = ['ResampledDocumentFeatureMatrix']


class ResampledDocumentFeatureMatrix(DfmBase):
    """
    Document-feature matrix with resampled replicates.

    Example:
        >>> observed = [[5, 1], [3, 0]]
        >>> boot = [[4, 2], [3, 1]]
        >>> x = ResampledDocumentFeatureMatrix.from_replicates(
        ...     [observed, boot], docnames=['d1', 'd2'], features=['the', 'cat'])
        >>> x.nreplicate
        2
        >>> x.replicate_colsums()
        array([[8, 1],
               [7, 3]])
    """

    def __init__(
        self,
        replicates: Sequence[Any],
        docnames: LabelInput = None,
        features: LabelInput = None,
        weighting: Optional[str] = None,
        settings: Optional[Dict[str, Any]] = None,
        *,
        _validate_labels: bool = True,
    ):
        """Create from a non-empty sequence of equally-shaped matrices.

        Args:
            replicates: scipy matrices, dense arrays or DocumentFeatureMatrix
                values. Replicate 0 is the observed matrix.
            docnames: Row labels. Defaults to the labels of a first
                DocumentFeatureMatrix replicate, or ``text1..textN``.
            features: Column labels, same defaulting rule.
            weighting: Weighting annotation. Defaults to that of a first
                DocumentFeatureMatrix replicate, or ``"frequency"``.
            settings: Settings annotation, same defaulting rule.

        Raises:
            InvalidArgumentError: If there are no replicates, shapes differ, or
                a DocumentFeatureMatrix replicate carries labels in a
                different order from the shared ones.
        """
        if len(replicates) == 0:
            raise InvalidArgumentError("A resampled matrix needs at least one replicate")

        first = replicates[0]
        if isinstance(first, DocumentFeatureMatrix):
            if docnames is None:
                docnames = first.docnames
            if features is None:
                features = first.features
            if weighting is None:
                weighting = first.weighting
            if settings is None:
                settings = first.settings
        if weighting is None:
            weighting = DEFAULT_WEIGHTING

        mats = [
            r.matrix if isinstance(r, DocumentFeatureMatrix) else ensure_csr(r)
            for r in replicates
        ]
        shape = mats[0].shape
        for i, m in enumerate(mats):
            if m.shape != shape:
                raise InvalidArgumentError(
                    f"Replicate {i} has shape {m.shape}, expected {shape}",
                    code=DFM_ERROR_DIMENSION_MISMATCH,
                )

        if _validate_labels:
            docnames = ensure_labels(docnames, shape[0], prefix='text')
            features = ensure_labels(features, shape[1], prefix='feature')

        shared_docs = list(docnames)
        shared_feats = list(features)
        for i, r in enumerate(replicates):
            if not isinstance(r, DocumentFeatureMatrix):
                continue
            if r.docnames != shared_docs or r.features != shared_feats:
                raise InvalidArgumentError(
                    f"Replicate {i} labels differ from the shared docnames/features",
                    code=DFM_ERROR_DIMENSION_MISMATCH,
                )

        super().__init__(docnames, features, weighting=weighting, settings=settings)
        self._replicates: List[sp.csr_matrix] = mats

    @classmethod
    def from_replicates(
        cls,
        replicates: Sequence[Any],
        docnames: LabelInput = None,
        features: LabelInput = None,
        **metadata,
    ) -> 'ResampledDocumentFeatureMatrix':
        """Stack replicates into a resampled matrix."""
        return cls(replicates, docnames, features, **metadata)

    def _with_replicates(
        self,
        replicates: List['sp.csr_matrix'],
        docnames: np.ndarray,
        features: np.ndarray,
    ) -> 'ResampledDocumentFeatureMatrix':
        return ResampledDocumentFeatureMatrix(
            replicates, docnames, features,
            _validate_labels=False,
            **self._metadata(),
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def nreplicate(self) -> int:
        return len(self._replicates)

    def replicate(self, i: int) -> DocumentFeatureMatrix:
        """Replicate ``i`` as a DocumentFeatureMatrix with the shared labels."""
        return DocumentFeatureMatrix(
            self._replicates[i], self._docnames, self._features,
            _validate_labels=False,
            **self._metadata(),
        )

    @property
    def observed(self) -> DocumentFeatureMatrix:
        """The rank-defining replicate (replicate 0)."""
        return self.replicate(0)

    # =========================================================================
    # Reductions
    # =========================================================================

    def colsums(self) -> np.ndarray:
        """Feature totals of replicate 0."""
        return np.asarray(self._replicates[0].sum(axis=0)).ravel()

    def rowsums(self) -> np.ndarray:
        """Document totals of replicate 0."""
        return np.asarray(self._replicates[0].sum(axis=1)).ravel()

    def docfreq(self) -> np.ndarray:
        """Document frequencies of replicate 0."""
        return np.asarray(self._replicates[0].getnnz(axis=0)).ravel()

    def replicate_colsums(self) -> np.ndarray:
        """Feature totals of every replicate, shape (nreplicate, nfeature)."""
        return np.vstack([
            np.asarray(m.sum(axis=0)).ravel() for m in self._replicates
        ])

    # =========================================================================
    # Slicing
    # =========================================================================

    def _take(
        self,
        rows: Optional[List[int]],
        cols: Optional[List[int]],
    ) -> 'ResampledDocumentFeatureMatrix':
        mats = []
        for m in self._replicates:
            if rows is not None:
                m = m[rows, :]
            if cols is not None:
                m = m[:, cols]
            mats.append(sp.csr_matrix(m))
        docnames, features = self._take_labels(rows, cols)
        return self._with_replicates(mats, docnames, features)

    def equals(self, other: Any) -> bool:
        """True if every replicate, the labels and the metadata are identical."""
        if not isinstance(other, ResampledDocumentFeatureMatrix):
            return False
        if self.nreplicate != other.nreplicate or self.shape != other.shape:
            return False
        return all(
            self.replicate(i).equals(other.replicate(i))
            for i in range(self.nreplicate)
        )

    def __repr__(self) -> str:
        return (
            f"ResampledDocumentFeatureMatrix(ndoc={self.ndoc}, nfeature={self.nfeature}, "
            f"nreplicate={self.nreplicate}, weighting='{self.weighting}')"
        )
