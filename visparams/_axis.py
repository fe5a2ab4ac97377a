"""Axis roles — which matrix axis a dot-plot panel draws as points.

A column-based panel draws one point per sample (column), a row-based panel
one point per feature (row).  Everything else about the two families is
the same algorithm with the axes swapped.
"""
from __future__ import annotations

from dataclasses import dataclass

from ._facts import COLUMN, ROW

FEATURE_AXIS = ROW
SAMPLE_AXIS = COLUMN

_IDENTITY_STEMS = {ROW: "feature", COLUMN: "sample"}
_IDENTITY_TITLES = {ROW: "Feature name", COLUMN: "Sample name"}


@dataclass(frozen=True)
class AxisRole:
    own: str

    def __post_init__(self):
        if self.own not in (ROW, COLUMN):
            raise ValueError(f"axis must be {ROW!r} or {COLUMN!r}, got {self.own!r}")

    @property
    def opposite(self) -> str:
        return COLUMN if self.own == ROW else ROW

    @property
    def title(self) -> str:
        return self.own.capitalize()

    @property
    def metadata_title(self) -> str:
        return f"{self.title} data"

    @property
    def selection_title(self) -> str:
        return f"{self.title} selection"

    @property
    def metadata_suffix(self) -> str:
        return f"{self.own}_data"

    def is_own(self, axis: str) -> bool:
        return axis == self.own


def identity_stem(axis: str) -> str:
    return _IDENTITY_STEMS[axis]


def identity_title(axis: str) -> str:
    return _IDENTITY_TITLES[axis]


COLUMN_ROLE = AxisRole(COLUMN)
ROW_ROLE = AxisRole(ROW)
