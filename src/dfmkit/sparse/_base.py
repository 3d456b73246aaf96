"""
Document-Feature Matrix Base Class

This module defines the abstract base class shared by the two matrix types
of dfmkit. It owns the labels and the non-structural metadata, and provides
label-aware subsetting on top of a single primitive, ``_take``.

Type Hierarchy:

    DfmBase (ABC)
    ├── DocumentFeatureMatrix            # One sparse count matrix
    └── ResampledDocumentFeatureMatrix   # R replicates sharing labels

Metadata:

    ``weighting`` and ``settings`` describe how the counts were produced.
    They are never derived from the values, so every transformation copies
    them forward unchanged through ``_metadata()``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from dfmkit._typing import IndexInput, to_position_list

__all__ = [
    'DfmBase',
    'DEFAULT_WEIGHTING',
]


DEFAULT_WEIGHTING = 'frequency'


class DfmBase(ABC):
    """
    Abstract base class for document-feature matrices.

    Rows are documents and columns are features. Subclasses store the
    values; this class stores the row labels (``docnames``), the column
    labels (``features``) and the metadata.

    Required Methods (subclasses must implement):
        colsums(): Per-feature totals (rank-defining values)
        rowsums(): Per-document totals (rank-defining values)
        _take(rows, cols): New matrix restricted to integer positions
    """

    def __init__(
        self,
        docnames: np.ndarray,
        features: np.ndarray,
        weighting: str = DEFAULT_WEIGHTING,
        settings: Optional[Dict[str, Any]] = None,
    ):
        self._docnames = docnames
        self._features = features
        self._weighting = weighting
        self._settings = dict(settings) if settings else {}

    # =========================================================================
    # Labels and Metadata
    # =========================================================================

    @property
    def docnames(self) -> List[str]:
        """Document (row) labels in order."""
        return self._docnames.tolist()

    @property
    def features(self) -> List[str]:
        """Feature (column) labels in order."""
        return self._features.tolist()

    @property
    def ndoc(self) -> int:
        return int(self._docnames.size)

    @property
    def nfeature(self) -> int:
        return int(self._features.size)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.ndoc, self.nfeature)

    @property
    def weighting(self) -> str:
        """Weighting scheme annotation ('frequency' for raw counts)."""
        return self._weighting

    @property
    def settings(self) -> Dict[str, Any]:
        """Construction settings annotation (copy)."""
        return dict(self._settings)

    def _metadata(self) -> Dict[str, Any]:
        return {
            'weighting': self._weighting,
            'settings': dict(self._settings),
        }

    # =========================================================================
    # Abstract Interface
    # =========================================================================

    @abstractmethod
    def colsums(self) -> np.ndarray:
        """Per-feature totals."""
        ...

    @abstractmethod
    def rowsums(self) -> np.ndarray:
        """Per-document totals."""
        ...

    @abstractmethod
    def _take(self, rows: Optional[List[int]], cols: Optional[List[int]]) -> 'DfmBase':
        """Restrict to row/column positions, in the given order.

        None keeps the whole dimension. Repeated positions are allowed.
        """
        ...

    # =========================================================================
    # Subsetting
    # =========================================================================

    def __getitem__(self, key: Any) -> 'DfmBase':
        """Subset by documents and/or features.

        Examples:
            >>> x[0:2]                      # first two documents
            >>> x[:, ['the', 'dog']]        # two features by label
            >>> x[x.rowsums() > 10, :]      # boolean mask
        """
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError(f"Expected at most 2 indices, got {len(key)}")
            row_key, col_key = key
        else:
            row_key, col_key = key, slice(None)

        rows = self._resolve(row_key, self._docnames, 'document')
        cols = self._resolve(col_key, self._features, 'feature')
        return self._take(rows, cols)

    @staticmethod
    def _resolve(key: IndexInput, labels: np.ndarray, axis_name: str) -> Optional[List[int]]:
        if isinstance(key, slice) and key == slice(None):
            return None
        return to_position_list(key, labels, axis_name)

    def _take_labels(
        self,
        rows: Optional[List[int]],
        cols: Optional[List[int]],
    ) -> Tuple[np.ndarray, np.ndarray]:
        docnames = self._docnames if rows is None else self._docnames[rows]
        features = self._features if cols is None else self._features[cols]
        return docnames, features
