"""Tests for the option catalog: colouring modes and offered categories.

Run:  python -m pytest tests/test_catalog.py -v
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from visparams import DatasetFacts
from visparams._axis import COLUMN_ROLE, ROW_ROLE, AxisRole
from visparams._catalog import (
    HEATMAP_CATEGORIES, color_choices, dot_categories, heatmap_categories,
    size_choices,
)


def _facts(**kwargs):
    base = dict(
        feature_count=50, sample_count=10,
        feature_names=tuple(f"g{i}" for i in range(50)),
        sample_names=tuple(f"s{i}" for i in range(10)),
        assay_names=("counts",),
        selected_assay="counts",
    )
    base.update(kwargs)
    return DatasetFacts(**base)


# ---------------------------------------------------------------------------
# Colouring modes
# ---------------------------------------------------------------------------

class TestColorChoices:
    def test_row_scenario_without_samples(self):
        facts = _facts(
            sample_count=0, sample_names=(),
            row_metadata=("biotype", "mean", "var"),
            row_categorical=("biotype",))
        assert color_choices(facts, ROW_ROLE) == (
            "None", "Row data", "Feature name", "Row selection")

    def test_column_full(self):
        facts = _facts(column_metadata=("batch",))
        assert color_choices(facts, COLUMN_ROLE) == (
            "None", "Column data", "Feature name", "Sample name",
            "Column selection")

    def test_row_full(self):
        facts = _facts(row_metadata=("biotype",))
        assert color_choices(facts, ROW_ROLE) == (
            "None", "Row data", "Feature name", "Sample name",
            "Row selection")

    def test_metadata_mode_omitted_without_fields(self):
        facts = _facts(row_metadata=("biotype",))
        assert "Column data" not in color_choices(facts, COLUMN_ROLE)
        assert "Row data" not in color_choices(
            _facts(column_metadata=("batch",)), ROW_ROLE)

    def test_continuous_field_is_enough(self):
        facts = _facts(column_metadata=("depth",))
        assert "Column data" in color_choices(facts, COLUMN_ROLE)

    def test_opposite_axis_needs_assays(self):
        facts = _facts(assay_names=(), selected_assay=None)
        # Column plots colour by feature expression; row plots by sample.
        assert color_choices(facts, COLUMN_ROLE) == (
            "None", "Sample name", "Column selection")
        assert color_choices(facts, ROW_ROLE) == (
            "None", "Feature name", "Row selection")

    def test_empty_dataset(self):
        for role in (COLUMN_ROLE, ROW_ROLE):
            choices = color_choices(DatasetFacts(), role)
            assert choices == ("None", role.selection_title)

    def test_selection_always_last(self):
        facts = _facts(column_metadata=("a",), row_metadata=("b",))
        for role in (COLUMN_ROLE, ROW_ROLE):
            assert color_choices(facts, role)[-1] == role.selection_title
            assert color_choices(facts, role)[0] == "None"


class TestSizeChoices:
    def test_needs_continuous_field(self):
        facts = _facts(column_metadata=("batch",), column_categorical=("batch",))
        assert size_choices(facts, COLUMN_ROLE) == ("None",)

    def test_with_continuous_field(self):
        facts = _facts(column_metadata=("depth",))
        assert size_choices(facts, COLUMN_ROLE) == ("None", "Column data")


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class TestCategories:
    def test_dot_without_categorical(self):
        facts = _facts(column_metadata=("depth",))
        assert dot_categories(facts, COLUMN_ROLE) == (
            "Color", "Size", "Point", "Text", "Other")

    def test_dot_with_categorical(self):
        facts = _facts(column_metadata=("batch",), column_categorical=("batch",))
        assert dot_categories(facts, COLUMN_ROLE) == (
            "Color", "Shape", "Size", "Point", "Facet", "Text", "Other")

    def test_categorical_on_other_axis_only(self):
        facts = _facts(row_metadata=("biotype",), row_categorical=("biotype",))
        assert "Shape" not in dot_categories(facts, COLUMN_ROLE)
        assert "Shape" in dot_categories(facts, ROW_ROLE)

    def test_heatmap_is_fixed(self):
        assert heatmap_categories(DatasetFacts()) == HEATMAP_CATEGORIES
        assert heatmap_categories(_facts()) == (
            "Annotations", "Transform", "Color scale", "Labels", "Legend")


class TestAxisRole:
    def test_titles(self):
        assert COLUMN_ROLE.metadata_title == "Column data"
        assert ROW_ROLE.selection_title == "Row selection"
        assert COLUMN_ROLE.opposite == "row"

    def test_rejects_unknown_axis(self):
        with pytest.raises(ValueError):
            AxisRole("depth")
