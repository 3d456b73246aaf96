"""
Tests for the exception hierarchy.
"""

import pytest

from dfmkit.error import (
    DFM_ERROR_EMPTY_RESULT,
    DFM_ERROR_INVALID_ARGUMENT,
    DFM_ERROR_NOT_IMPLEMENTED,
    DfmError,
    DfmWarning,
    EmptyResultError,
    InvalidArgumentError,
    NotImplementedFeatureError,
    SampleSizeWarning,
    UnusedArgumentWarning,
)


class TestErrorCodes:
    def test_default_codes(self):
        assert InvalidArgumentError().code == DFM_ERROR_INVALID_ARGUMENT
        assert EmptyResultError().code == DFM_ERROR_EMPTY_RESULT
        assert NotImplementedFeatureError().code == DFM_ERROR_NOT_IMPLEMENTED

    def test_message(self):
        err = InvalidArgumentError("min_doc must be positive")
        assert err.message == "min_doc must be positive"
        assert str(err) == "DFM Error 10: min_doc must be positive"

    def test_generic_message(self):
        assert EmptyResultError().message == "Empty result"

    def test_from_code(self):
        err = DfmError.from_code(DFM_ERROR_NOT_IMPLEMENTED, "nfeature")
        assert err.code == DFM_ERROR_NOT_IMPLEMENTED
        assert err.message == "nfeature: Not implemented"


class TestHierarchy:
    @pytest.mark.parametrize("cls,builtin", [
        (InvalidArgumentError, ValueError),
        (EmptyResultError, ValueError),
        (NotImplementedFeatureError, NotImplementedError),
    ])
    def test_builtin_bases(self, cls, builtin):
        assert issubclass(cls, DfmError)
        assert issubclass(cls, builtin)

    def test_warnings(self):
        assert issubclass(UnusedArgumentWarning, DfmWarning)
        assert issubclass(SampleSizeWarning, DfmWarning)
        assert issubclass(DfmWarning, UserWarning)
