"""
Tests for threshold trimming and document frequencies.
"""

import logging
import warnings

import pytest
import numpy as np
import scipy.sparse as sp

import dfmkit
from dfmkit.feature import docfreq, trim, trimdfm
from dfmkit.error import (
    EmptyResultError,
    InvalidArgumentError,
    SampleSizeWarning,
)

from conftest import column_dict


class TestDocfreq:
    """Test document frequency computation."""

    def test_dfm(self, small_dfm):
        np.testing.assert_array_equal(docfreq(small_dfm), [1, 4, 3, 2, 1, 2])

    def test_scipy(self):
        mat = sp.csc_matrix([[1, 0, 3], [0, 0, 1]])
        np.testing.assert_array_equal(docfreq(mat), [1, 0, 2])

    def test_resampled_uses_first_replicate(self, resampled_dfm):
        np.testing.assert_array_equal(docfreq(resampled_dfm), [2, 1, 2])


class TestTrimThresholds:
    """Absolute and fractional thresholds."""

    def test_worked_example(self, animals_dfm):
        out = trim(animals_dfm, min_count=2, min_doc=2, verbose=False)
        assert out.features == ["the", "dog"]
        assert out.docnames == ["d1", "d2", "d3"]

    def test_defaults_drop_nothing_but_sort(self, small_dfm):
        out = trim(small_dfm, verbose=False)
        assert out.features == ["b", "d", "f", "c", "e", "a"]

    def test_min_count_only(self, small_dfm):
        out = trim(small_dfm, min_count=5, verbose=False)
        assert out.features == ["b", "d", "f"]

    def test_min_doc_only(self, small_dfm):
        out = trim(small_dfm, min_doc=3, verbose=False)
        assert out.features == ["b", "c"]

    def test_intersection(self, small_dfm):
        # min_count=5 keeps b, d, f; min_doc=3 keeps b, c
        out = trim(small_dfm, min_count=5, min_doc=3, verbose=False)
        assert out.features == ["b"]

    def test_fractional_min_doc(self, small_dfm):
        # 0.5 * 4 documents = 2
        out = trim(small_dfm, min_doc=0.5, verbose=False)
        assert set(out.features) == {"b", "c", "d", "f"}

    def test_fractional_min_count(self, small_dfm):
        # 0.5 * 6 features = 3
        out = trim(small_dfm, min_count=0.5, verbose=False)
        assert out.features == trim(small_dfm, min_count=3, verbose=False).features

    def test_one_is_absolute(self, small_dfm):
        # 1.0 means a count of one, not 100% of the documents
        out = trim(small_dfm, min_doc=1.0, verbose=False)
        assert out.nfeature == small_dfm.nfeature

    def test_values_preserved(self, small_dfm):
        out = trim(small_dfm, min_count=5, verbose=False)
        original = column_dict(small_dfm)
        for feature, column in column_dict(out).items():
            assert column == original[feature]

    def test_metadata_carried(self, small_dfm):
        out = trim(small_dfm, min_count=2, verbose=False)
        assert out.weighting == "frequency"
        assert out.settings == {"stem": False}

    @pytest.mark.parametrize("min_count,min_doc", [(1, 1), (2, 1), (3, 2), (0.05, 0.1), (5, 0.2)])
    def test_retained_iff_both_thresholds(self, random_dfm, min_count, min_doc):
        eff_count = min_count * random_dfm.nfeature if min_count < 1 else min_count
        eff_doc = min_doc * random_dfm.ndoc if min_doc < 1 else min_doc
        totals = dict(zip(random_dfm.features, random_dfm.colsums()))
        dfreq = dict(zip(random_dfm.features, random_dfm.docfreq()))
        expected = {
            f for f in random_dfm.features
            if totals[f] >= eff_count and dfreq[f] >= eff_doc
        }
        if not expected:
            with pytest.raises(EmptyResultError):
                trim(random_dfm, min_count=min_count, min_doc=min_doc, verbose=False)
            return

        out = trim(random_dfm, min_count=min_count, min_doc=min_doc, verbose=False)
        assert set(out.features) == expected
        totals_out = out.colsums()
        assert all(totals_out[i] >= totals_out[i + 1] for i in range(len(totals_out) - 1))


class TestTrimSparsity:
    """sparsity is the complement of a fractional min_doc."""

    def test_sparsity(self, small_dfm):
        out = trim(small_dfm, sparsity=0.5, verbose=False)
        assert out.features == trim(small_dfm, min_doc=0.5, verbose=False).features

    def test_conflict(self, small_dfm):
        with pytest.raises(InvalidArgumentError, match="both"):
            trim(small_dfm, min_doc=3, sparsity=0.5)

    def test_consistent_pair_allowed(self, small_dfm):
        out = trim(small_dfm, min_doc=0.5, sparsity=0.5, verbose=False)
        assert set(out.features) == {"b", "c", "d", "f"}

    @pytest.mark.parametrize("sparsity", [1, 1.5, -0.1])
    def test_out_of_range(self, small_dfm, sparsity):
        with pytest.raises(InvalidArgumentError):
            trim(small_dfm, sparsity=sparsity)


class TestTrimErrors:
    """Fatal conditions."""

    @pytest.mark.parametrize("kwargs", [{"min_doc": 0}, {"min_count": 0}, {"min_count": -1}])
    def test_non_positive(self, animals_dfm, kwargs):
        with pytest.raises(InvalidArgumentError):
            trim(animals_dfm, **kwargs)

    def test_invalid_is_value_error(self, animals_dfm):
        with pytest.raises(ValueError):
            trim(animals_dfm, min_doc=0)

    def test_empty_result(self, animals_dfm):
        with pytest.raises(EmptyResultError, match="No features left"):
            trim(animals_dfm, min_count=100, verbose=False)

    def test_not_a_dfm(self):
        with pytest.raises(TypeError):
            trim(np.ones((2, 2)))


class TestTrimSample:
    """Random subsampling of retained features."""

    def test_nsample(self, random_dfm):
        out = trim(random_dfm, nsample=10, seed=3, verbose=False)
        assert out.nfeature == 10
        assert len(set(out.features)) == 10
        assert set(out.features) <= set(random_dfm.features)
        totals = out.colsums()
        assert all(totals[i] >= totals[i + 1] for i in range(len(totals) - 1))

    def test_nsample_reproducible(self, random_dfm):
        a = trim(random_dfm, min_count=2, nsample=5, seed=11, verbose=False)
        b = trim(random_dfm, min_count=2, nsample=5, seed=11, verbose=False)
        assert a.equals(b)

    def test_nsample_clamped(self, animals_dfm):
        with pytest.warns(SampleSizeWarning):
            out = trim(animals_dfm, min_count=2, nsample=10, seed=0, verbose=False)
        assert set(out.features) == {"the", "dog"}

    def test_nsample_within_range_no_warning(self, animals_dfm):
        with warnings.catch_warnings():
            warnings.simplefilter("error", SampleSizeWarning)
            out = trim(animals_dfm, nsample=2, seed=0, verbose=False)
        assert out.nfeature == 2


class TestTrimResampled:
    """Resampled matrices are trimmed on replicate 0."""

    def test_same_columns_in_every_replicate(self, resampled_dfm):
        out = trim(resampled_dfm, min_count=2, verbose=False)
        assert out.features == ["the", "dog"]
        assert out.nreplicate == 3
        np.testing.assert_array_equal(
            out.replicate_colsums(), [[8, 4], [6, 4], [10, 5]]
        )


class TestTrimReporting:
    """Progress goes to the dfmkit.feature logger."""

    def test_messages(self, animals_dfm, caplog):
        with caplog.at_level(logging.INFO, logger="dfmkit.feature"):
            trim(animals_dfm, min_count=2, min_doc=2)
        messages = [r.getMessage() for r in caplog.records]
        assert "Removing features occurring fewer than 2 times: 1" in messages
        assert "Removing features occurring in fewer than 2 documents: 1" in messages

    def test_structured_facts(self, small_dfm, caplog):
        with caplog.at_level(logging.INFO, logger="dfmkit.feature"):
            trim(small_dfm, min_doc=0.5)
        record = next(r for r in caplog.records if getattr(r, "stage", None) == "min_doc")
        assert record.threshold == pytest.approx(2.0)
        assert record.removed == 2

    def test_fraction_expression(self, small_dfm, caplog):
        with caplog.at_level(logging.INFO, logger="dfmkit.feature"):
            trim(small_dfm, min_count=0.5)
        assert any("0.5 * 6 = 3" in r.getMessage() for r in caplog.records)

    def test_sparsity_note(self, small_dfm, caplog):
        with caplog.at_level(logging.INFO, logger="dfmkit.feature"):
            trim(small_dfm, sparsity=0.75)
        assert any("converting sparsity" in r.getMessage() for r in caplog.records)

    def test_sample_message(self, random_dfm, caplog):
        with caplog.at_level(logging.INFO, logger="dfmkit.feature"):
            trim(random_dfm, nsample=4, seed=1)
        assert any("random sample of 4" in r.getMessage() for r in caplog.records)

    def test_quiet(self, animals_dfm, caplog):
        with caplog.at_level(logging.INFO, logger="dfmkit.feature"):
            trim(animals_dfm, min_count=2, min_doc=2, verbose=False)
        assert caplog.records == []

    def test_verbose_default_from_config(self, animals_dfm, caplog):
        dfmkit.set_verbose(False)
        with caplog.at_level(logging.INFO, logger="dfmkit.feature"):
            trim(animals_dfm, min_count=2)
        assert caplog.records == []

    def test_quiet_result_identical(self, small_dfm):
        loud = trim(small_dfm, min_count=3, min_doc=2, verbose=True)
        quiet = trim(small_dfm, min_count=3, min_doc=2, verbose=False)
        assert loud.equals(quiet)


class TestTrimDfm:
    """Deprecated alias."""

    def test_deprecated_alias(self, animals_dfm):
        with pytest.warns(DeprecationWarning):
            out = trimdfm(animals_dfm, min_count=2, min_doc=2, verbose=False)
        assert out.features == ["the", "dog"]
