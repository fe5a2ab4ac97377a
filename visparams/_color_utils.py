"""Shared colour constants and colour-value validation."""
from __future__ import annotations

from typing import Any

from matplotlib.colors import is_color_like, to_hex

# Diverging colormaps offered once heatmap rows are centred.
DIVERGENT_COLORMAPS = (
    "purple < black < yellow",
    "blue < white < orange",
    "blue < white < red",
    "green < white < red",
)

DEFAULT_HIGHLIGHT_COLOR = "#ff0000"
DEFAULT_CONTOUR_COLOR = "#0000ff"


def normalize_color(value: Any) -> str | None:
    """Return ``value`` as ``#rrggbb``, or None if it is not a colour.

    Accepts anything matplotlib does: names, hex strings, RGB(A) tuples.
    Alpha is dropped.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, list):
        value = tuple(value)
    try:
        if not is_color_like(value):
            return None
        return to_hex(value, keep_alpha=False)
    except (TypeError, ValueError):
        return None
