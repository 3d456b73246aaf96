"""
Tests for the features/docnames/nfeature/ndoc accessors.
"""

import pytest
import numpy as np

import dfmkit
from dfmkit.sparse import docnames, features, ndoc, nfeature
from dfmkit.error import NotImplementedFeatureError


class TestDfmAccessors:
    """Accessors on document-feature matrices."""

    def test_features(self, animals_dfm):
        assert features(animals_dfm) == ["the", "cat", "dog"]

    def test_docnames(self, animals_dfm):
        assert docnames(animals_dfm) == ["d1", "d2", "d3"]

    def test_counts(self, small_dfm):
        assert nfeature(small_dfm) == 6
        assert ndoc(small_dfm) == 4

    def test_resampled(self, resampled_dfm):
        assert features(resampled_dfm) == ["the", "cat", "dog"]
        assert docnames(resampled_dfm) == ["d1", "d2"]
        assert nfeature(resampled_dfm) == 3
        assert ndoc(resampled_dfm) == 2

    def test_follow_subsetting(self, small_dfm):
        sub = small_dfm[["doc3", "doc1"], ["f", "a", "b"]]
        assert docnames(sub) == ["doc3", "doc1"]
        assert features(sub) == ["f", "a", "b"]
        assert nfeature(sub) == 3

    def test_returns_copy(self, animals_dfm):
        labels = features(animals_dfm)
        labels[0] = "changed"
        assert features(animals_dfm)[0] == "the"

    def test_top_level_exports(self, animals_dfm):
        assert dfmkit.features(animals_dfm) == features(animals_dfm)
        assert dfmkit.ndoc(animals_dfm) == 3


class TestCorpusAccessors:
    """Corpus-like inputs have documents but no features yet."""

    def test_ndoc_mapping(self):
        corpus = {"a": "one text", "b": "another text"}
        assert ndoc(corpus) == 2
        assert docnames(corpus) == ["a", "b"]

    def test_ndoc_sequence(self):
        corpus = ["one text", "another text", "third"]
        assert ndoc(corpus) == 3
        assert docnames(corpus) == ["text1", "text2", "text3"]

    def test_nfeature_not_implemented(self):
        with pytest.raises(NotImplementedFeatureError):
            nfeature({"a": "one text"})

    def test_nfeature_is_builtin_not_implemented(self):
        with pytest.raises(NotImplementedError):
            nfeature(["one text"])

    def test_features_not_implemented(self):
        with pytest.raises(NotImplementedFeatureError):
            features(["one text"])


class TestUnsupportedInputs:
    """Other types are rejected."""

    @pytest.mark.parametrize("func", [features, docnames, nfeature, ndoc])
    def test_type_error(self, func):
        with pytest.raises(TypeError):
            func(np.zeros((2, 2)))
