"""Row- and column-based dot plots — one parameterised panel, two axis roles."""
from __future__ import annotations

import numpy as np

from .._axis import (
    COLUMN_ROLE, FEATURE_AXIS, ROW_ROLE, SAMPLE_AXIS,
    AxisRole, identity_stem, identity_title,
)
from .._catalog import (
    COLOR_TITLE, FACET_TITLE, NOTHING_TITLE, OTHER_TITLE, POINT_TITLE,
    SHAPE_TITLE, SIZE_TITLE, TEXT_TITLE,
    color_choices, dot_categories, identity_available, size_choices,
)
from .._color_utils import DEFAULT_CONTOUR_COLOR, DEFAULT_HIGHLIGHT_COLOR
from .._rules import CategorySpec, OptionSpec
from .._types import ControlKind, PanelFamily
from ._base import VisualPanel

K = ControlKind

NO_SOURCE = "---"
LEGEND_POSITIONS = ("Bottom", "Right")

DEFAULT_POINT_ALPHA = 0.5
DEFAULT_POINT_SIZE = 1.0
DEFAULT_DOWNSAMPLE_RESOLUTION = 200
DEFAULT_FONT_SIZE = 1.0
DEFAULT_LEGEND_POINT_SIZE = 1.0

_POSITIVE = (0.0, np.inf)


def _first(choices):
    return choices[0] if choices else None


class DotPanel(VisualPanel):
    """Visual parameters for plots with one point per row or column."""

    role: AxisRole

    def categories(self) -> tuple[CategorySpec, ...]:
        builders = {
            COLOR_TITLE: self._color_options,
            SHAPE_TITLE: self._shape_options,
            SIZE_TITLE: self._size_options,
            POINT_TITLE: self._point_options,
            FACET_TITLE: self._facet_options,
            TEXT_TITLE: self._text_options,
            OTHER_TITLE: self._other_options,
        }
        return tuple(CategorySpec(title, builders[title]())
                     for title in dot_categories(self._facts, self.role))

    # -- helpers -----------------------------------------------------------

    def _field_select(self, key, label, fields) -> OptionSpec:
        return OptionSpec(key, K.SINGLE_SELECT, label,
                          default=_first(fields), choices=tuple(fields))

    def _by_metadata(self, stem, label, fields) -> OptionSpec:
        """``None`` / own-axis-data radio revealing a field select."""
        role = self.role
        return OptionSpec(
            stem, K.RADIO, label,
            default=NOTHING_TITLE,
            choices=(NOTHING_TITLE, role.metadata_title),
            reveals=((role.metadata_title, (
                self._field_select(f"{stem}_{role.metadata_suffix}",
                                   f"{label[:-1]} {role.own} data:", fields),
            )),))

    # -- Color -------------------------------------------------------------

    def _identity_options(self, axis) -> tuple[OptionSpec, ...]:
        """Sub-controls for colouring by one feature or sample."""
        facts = self._facts
        stem = f"color_by_{identity_stem(axis)}"
        names = facts.names(axis)
        noun = identity_stem(axis)
        options = [
            OptionSpec(f"{stem}_name", K.SINGLE_SELECT, f"{noun.capitalize()}:",
                       default=_first(names), accepted=frozenset(names)),
            OptionSpec(f"{stem}_source", K.SINGLE_SELECT,
                       "Use selection from:", default=NO_SOURCE,
                       choices=(NO_SOURCE,) + self._sources.for_axis(axis)),
        ]
        if self.role.is_own(axis):
            options.append(OptionSpec(
                f"{stem}_color", K.COLOR_PICKER, f"{noun.capitalize()} color:",
                default=DEFAULT_HIGHLIGHT_COLOR))
        else:
            options.append(self._field_select(
                f"{stem}_assay", "Assay:", facts.assay_names))
        return tuple(options)

    def _color_options(self) -> tuple[OptionSpec, ...]:
        facts, role = self._facts, self.role
        choices = color_choices(facts, role)
        reveals = []
        if role.metadata_title in choices:
            reveals.append((role.metadata_title, (self._field_select(
                f"color_by_{role.metadata_suffix}",
                f"Color by {role.own} data:", facts.metadata(role.own)),)))
        for axis in (FEATURE_AXIS, SAMPLE_AXIS):
            if identity_available(facts, role, axis):
                reveals.append(
                    (identity_title(axis), self._identity_options(axis)))
        return (OptionSpec("color_by", K.RADIO, "Color by:",
                           default=NOTHING_TITLE, choices=choices,
                           reveals=tuple(reveals)),)

    # -- Shape / Size ------------------------------------------------------

    def _shape_options(self) -> tuple[OptionSpec, ...]:
        return (self._by_metadata("shape_by", "Shape by:",
                                  self._facts.categorical(self.role.own)),)

    def _size_options(self) -> tuple[OptionSpec, ...]:
        role = self.role
        choices = size_choices(self._facts, role)
        reveals = [(NOTHING_TITLE, (OptionSpec(
            "point_size", K.NUMERIC, "Point size:",
            default=DEFAULT_POINT_SIZE, bounds=_POSITIVE),))]
        if role.metadata_title in choices:
            reveals.append((role.metadata_title, (self._field_select(
                f"size_by_{role.metadata_suffix}", f"Size by {role.own} data:",
                self._facts.continuous(role.own)),)))
        return (OptionSpec("size_by", K.RADIO, "Size by:",
                           default=NOTHING_TITLE, choices=choices,
                           reveals=tuple(reveals)),)

    # -- Point -------------------------------------------------------------

    def _point_options(self) -> tuple[OptionSpec, ...]:
        return (
            OptionSpec("point_alpha", K.SLIDER, "Point opacity",
                       default=DEFAULT_POINT_ALPHA, bounds=(0.1, 1.0)),
            OptionSpec("downsample", K.TOGGLE, "Downsample points for speed",
                       default=False,
                       reveals=((True, (OptionSpec(
                           "downsample_resolution", K.NUMERIC,
                           "Sampling resolution:",
                           default=DEFAULT_DOWNSAMPLE_RESOLUTION,
                           bounds=(1.0, np.inf)),)),)),
        )

    # -- Facet -------------------------------------------------------------

    def _facet_options(self) -> tuple[OptionSpec, ...]:
        fields = self._facts.categorical(self.role.own)
        return (
            self._by_metadata("facet_row_by", "Facet rows by:", fields),
            self._by_metadata("facet_column_by", "Facet columns by:", fields),
        )

    # -- Text / Other ------------------------------------------------------

    def _text_options(self) -> tuple[OptionSpec, ...]:
        return (
            OptionSpec("font_size", K.NUMERIC, "Font size:",
                       default=DEFAULT_FONT_SIZE, bounds=_POSITIVE),
            OptionSpec("legend_point_size", K.NUMERIC, "Legend point size:",
                       default=DEFAULT_LEGEND_POINT_SIZE, bounds=_POSITIVE),
            OptionSpec("legend_position", K.RADIO, "Legend position:",
                       default=LEGEND_POSITIONS[0], choices=LEGEND_POSITIONS),
            OptionSpec("custom_labels", K.TOGGLE, "Custom labels",
                       default=False,
                       reveals=((True, (OptionSpec(
                           "custom_labels_text", K.TEXT,
                           f"{self.role.title} names:", default=""),)),)),
        )

    def _other_options(self) -> tuple[OptionSpec, ...]:
        return (
            OptionSpec("contour_add", K.TOGGLE, "Add contour (scatter only)",
                       default=False,
                       reveals=((True, (OptionSpec(
                           "contour_color", K.COLOR_PICKER, "Contour color",
                           default=DEFAULT_CONTOUR_COLOR),)),)),
        )


class ColumnDotPanel(DotPanel):
    family = PanelFamily.COLUMN
    role = COLUMN_ROLE


class RowDotPanel(DotPanel):
    family = PanelFamily.ROW
    role = ROW_ROLE
