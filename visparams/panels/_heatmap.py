"""Heatmap controls — annotations, row transforms, colour scale, labels, legend."""
from __future__ import annotations

from .._catalog import (
    COLORSCALE_TITLE, LABELS_TITLE, LEGEND_TITLE, METADATA_TITLE,
    TRANSFORM_TITLE, heatmap_categories,
)
from .._color_utils import DIVERGENT_COLORMAPS
from .._facts import DatasetFacts
from .._rules import CategorySpec, OptionSpec
from .._types import ControlKind, PanelFamily
from ._base import VisualPanel
from ._dot import LEGEND_POSITIONS

K = ControlKind

SHOW_NAMES = ("Rows", "Columns")
LEGEND_DIRECTIONS = ("Horizontal", "Vertical")


def _transformable(facts: DatasetFacts) -> bool:
    """Centring, scaling and custom bounds need a continuous assay."""
    return facts.selected_assay is not None and not facts.selected_assay_is_discrete


class HeatmapPanel(VisualPanel):
    """Visual parameters for the matrix (heatmap) family."""

    family = PanelFamily.MATRIX

    def categories(self) -> tuple[CategorySpec, ...]:
        builders = {
            METADATA_TITLE: self._annotation_options,
            TRANSFORM_TITLE: self._transform_options,
            COLORSCALE_TITLE: self._colorscale_options,
            LABELS_TITLE: self._label_options,
            LEGEND_TITLE: self._legend_options,
        }
        return tuple(CategorySpec(title, builders[title]())
                     for title in heatmap_categories(self._facts))

    def _annotation_options(self):
        facts = self._facts
        return (
            OptionSpec("column_data", K.MULTI_SELECT, "Column annotations:",
                       default=(), choices=facts.column_metadata),
            OptionSpec("row_data", K.MULTI_SELECT, "Row annotations:",
                       default=(), choices=facts.row_metadata),
            OptionSpec("show_column_selection", K.TOGGLE,
                       "Show column selection", default=True),
            OptionSpec("order_column_selection", K.TOGGLE,
                       "Order by column selection", default=True),
        )

    def _transform_options(self):
        return (
            OptionSpec(
                "center_rows", K.TOGGLE, "Center", default=False,
                requires=_transformable,
                reveals=((True, (
                    OptionSpec("scale_rows", K.TOGGLE, "Scale", default=False),
                    OptionSpec("divergent_colormap", K.SINGLE_SELECT,
                               "Centered assay colormap:",
                               default=DIVERGENT_COLORMAPS[0],
                               choices=DIVERGENT_COLORMAPS),
                )),)),
        )

    def _colorscale_options(self):
        return (
            OptionSpec(
                "custom_bounds", K.TOGGLE, "Use custom colorscale bounds",
                default=False, requires=_transformable,
                reveals=((True, (
                    OptionSpec("lower_bound", K.NUMERIC, "Lower bound"),
                    OptionSpec("upper_bound", K.NUMERIC, "Upper bound"),
                )),)),
        )

    def _label_options(self):
        return (
            OptionSpec("show_dimnames", K.TOGGLE_GROUP, "Show names:",
                       default=SHOW_NAMES[:1], choices=SHOW_NAMES),
        )

    def _legend_options(self):
        return (
            OptionSpec("legend_position", K.RADIO, "Legend position:",
                       default=LEGEND_POSITIONS[0], choices=LEGEND_POSITIONS),
            OptionSpec("legend_direction", K.RADIO, "Legend direction:",
                       default=LEGEND_DIRECTIONS[0], choices=LEGEND_DIRECTIONS),
        )
