"""Tests for dataset inspection and the numpy-backed TableDataset.

Run:  python -m pytest tests/test_facts.py -v
"""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from visparams import DatasetFacts, InvalidDatasetHandleError, TableDataset, inspect_dataset


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class DuckHandle:
    """Minimal handle that is not a TableDataset."""

    n_rows = 2
    n_cols = 3
    selected_assay = None

    def row_names(self):
        return ["g1", "g2"]

    def column_names(self):
        return ["s1", "s2", "s3"]

    def row_metadata_fields(self):
        return ["biotype"]

    def column_metadata_fields(self):
        return []

    def is_categorical(self, axis, field):
        return True

    def assay_names(self):
        return ["logcounts"]

    def is_discrete_assay(self, name):
        return False


def _dataset(**kwargs):
    rng = np.random.default_rng(0)
    defaults = dict(
        assays={
            "counts": rng.integers(0, 10, size=(4, 3)),
            "logcounts": rng.normal(size=(4, 3)),
            "calls": np.array([["A", "B", "A"]] * 4),
        },
        row_data={
            "biotype": np.array(["coding", "coding", "lnc", "mt"]),
            "mean": np.array([1.0, 2.0, 3.0, 4.0]),
        },
        col_data={
            "depth": np.array([100, 200, 300]),
            "batch": np.array(["b1", "b2", "b1"], dtype=object),
            "qc_pass": np.array([True, False, True]),
        },
    )
    defaults.update(kwargs)
    return TableDataset(**defaults)


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------

class TestInspectTableDataset:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.facts = inspect_dataset(_dataset())

    def test_counts(self):
        assert self.facts.feature_count == 4
        assert self.facts.sample_count == 3
        assert self.facts.has_features and self.facts.has_samples

    def test_default_names(self):
        assert self.facts.feature_names == ("row_0", "row_1", "row_2", "row_3")
        assert self.facts.sample_names == ("col_0", "col_1", "col_2")

    def test_metadata_fields_keep_order(self):
        assert self.facts.row_metadata == ("biotype", "mean")
        assert self.facts.column_metadata == ("depth", "batch", "qc_pass")

    def test_categorical_classification(self):
        assert self.facts.row_categorical == ("biotype",)
        assert self.facts.column_categorical == ("batch", "qc_pass")
        assert self.facts.column_continuous == ("depth",)
        assert self.facts.row_continuous == ("mean",)

    def test_discrete_assays(self):
        # Integer counts are continuous; strings are discrete.
        assert self.facts.assay_names == ("counts", "logcounts", "calls")
        assert self.facts.discrete_assays == ("calls",)

    def test_selected_assay_defaults_to_first(self):
        assert self.facts.selected_assay == "counts"
        assert not self.facts.selected_assay_is_discrete

    def test_selected_discrete_assay(self):
        facts = inspect_dataset(_dataset().with_selected_assay("calls"))
        assert facts.selected_assay == "calls"
        assert facts.selected_assay_is_discrete

    def test_facts_are_frozen(self):
        with pytest.raises(AttributeError):
            self.facts.feature_count = 10


class TestEmptyDataset:
    def test_everything_false(self):
        facts = inspect_dataset(TableDataset())
        assert facts == DatasetFacts()
        assert not facts.has_row_metadata
        assert not facts.has_column_metadata
        assert not facts.has_categorical_row_metadata
        assert not facts.has_categorical_column_metadata
        assert not facts.has_features
        assert not facts.has_samples
        assert not facts.has_assays
        assert facts.selected_assay is None
        assert not facts.selected_assay_is_discrete

    def test_shape_without_assays(self):
        facts = inspect_dataset(TableDataset(shape=(5, 0)))
        assert facts.feature_count == 5
        assert facts.sample_count == 0
        assert not facts.has_assays


class TestHandleValidation:
    def test_duck_typed_handle(self):
        facts = inspect_dataset(DuckHandle())
        assert facts.feature_names == ("g1", "g2")
        assert facts.row_categorical == ("biotype",)
        assert facts.selected_assay == "logcounts"

    def test_missing_accessor(self):
        class Broken:
            n_rows = 1
            n_cols = 1

        with pytest.raises(InvalidDatasetHandleError, match="assay_names"):
            inspect_dataset(Broken())

    def test_negative_dimensions(self):
        handle = DuckHandle()
        handle.n_rows = -1
        with pytest.raises(InvalidDatasetHandleError, match="negative"):
            inspect_dataset(handle)

    def test_unknown_selected_assay(self):
        handle = DuckHandle()
        handle.selected_assay = "gone"
        with pytest.raises(InvalidDatasetHandleError, match="gone"):
            inspect_dataset(handle)


class TestTableDatasetConstruction:
    def test_assay_shape_mismatch(self):
        with pytest.raises(ValueError, match="shape"):
            TableDataset(assays={"a": np.zeros((2, 2)), "b": np.zeros((2, 3))})

    def test_field_length_mismatch(self):
        with pytest.raises(ValueError, match="length 2"):
            TableDataset(assays={"a": np.zeros((2, 2))},
                         row_data={"x": [1, 2, 3]})

    def test_unknown_selected_assay(self):
        with pytest.raises(ValueError, match="unknown assay"):
            TableDataset(assays={"a": np.zeros((2, 2))}, selected_assay="b")

    def test_explicit_names(self):
        ds = TableDataset(assays={"a": np.zeros((2, 1))},
                          row_names=["x", "y"], col_names=["z"])
        assert ds.row_names() == ["x", "y"]
        assert ds.column_names() == ["z"]
