"""Option catalog — which categories and colouring modes a panel offers.

Everything here is a pure function of the panel family (or axis role) and
the DatasetFacts; persisted selections never influence availability.
"""
from __future__ import annotations

from ._axis import FEATURE_AXIS, SAMPLE_AXIS, AxisRole, identity_title
from ._facts import DatasetFacts

# Dot-plot categories, in display order.
COLOR_TITLE = "Color"
SHAPE_TITLE = "Shape"
SIZE_TITLE = "Size"
POINT_TITLE = "Point"
FACET_TITLE = "Facet"
TEXT_TITLE = "Text"
OTHER_TITLE = "Other"

# Heatmap categories, in display order.
METADATA_TITLE = "Annotations"
TRANSFORM_TITLE = "Transform"
COLORSCALE_TITLE = "Color scale"
LABELS_TITLE = "Labels"
LEGEND_TITLE = "Legend"

HEATMAP_CATEGORIES = (
    METADATA_TITLE, TRANSFORM_TITLE, COLORSCALE_TITLE,
    LABELS_TITLE, LEGEND_TITLE,
)

NOTHING_TITLE = "None"


def identity_available(facts: DatasetFacts, role: AxisRole, axis: str) -> bool:
    """Colouring by one entry of ``axis``.

    On the panel's own axis this highlights one point; on the opposite
    axis it colours by that entry's assay values, so assays must exist.
    """
    if facts.count(axis) == 0:
        return False
    return role.is_own(axis) or facts.has_assays


def color_choices(facts: DatasetFacts, role: AxisRole) -> tuple[str, ...]:
    """Colouring modes in display order."""
    choices = [NOTHING_TITLE]
    if facts.metadata(role.own):
        choices.append(role.metadata_title)
    for axis in (FEATURE_AXIS, SAMPLE_AXIS):
        if identity_available(facts, role, axis):
            choices.append(identity_title(axis))
    choices.append(role.selection_title)
    return tuple(choices)


def size_choices(facts: DatasetFacts, role: AxisRole) -> tuple[str, ...]:
    if facts.continuous(role.own):
        return (NOTHING_TITLE, role.metadata_title)
    return (NOTHING_TITLE,)


def dot_categories(facts: DatasetFacts, role: AxisRole) -> tuple[str, ...]:
    """Top-level categories for a row- or column-based dot plot.

    Shape and facet need a categorical field on the panel's own axis and
    are left out entirely without one.
    """
    categorical = bool(facts.categorical(role.own))
    titles = [COLOR_TITLE]
    if categorical:
        titles.append(SHAPE_TITLE)
    titles += [SIZE_TITLE, POINT_TITLE]
    if categorical:
        titles.append(FACET_TITLE)
    titles += [TEXT_TITLE, OTHER_TITLE]
    return tuple(titles)


def heatmap_categories(facts: DatasetFacts) -> tuple[str, ...]:
    # Fixed; per-field dataset dependence lives inside each category.
    return HEATMAP_CATEGORIES
