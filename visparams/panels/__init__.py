"""Panel registry — maps PanelFamily to panel class, plus factory function."""
from __future__ import annotations

from .._config import PanelConfig, SelectionSources
from .._facts import DatasetFacts
from .._types import PanelFamily
from ._base import VisualPanel
from ._dot import ColumnDotPanel, DotPanel, RowDotPanel
from ._heatmap import HeatmapPanel

PANEL_REGISTRY: dict[PanelFamily, type[VisualPanel]] = {
    PanelFamily.COLUMN: ColumnDotPanel,
    PanelFamily.ROW: RowDotPanel,
    PanelFamily.MATRIX: HeatmapPanel,
}

__all__ = [
    "PANEL_REGISTRY", "ColumnDotPanel", "DotPanel", "HeatmapPanel",
    "RowDotPanel", "VisualPanel", "create_panel",
]


def create_panel(family: PanelFamily, facts: DatasetFacts,
                 config: PanelConfig,
                 sources: SelectionSources | None = None) -> VisualPanel:
    """Create the visual parameter panel for a family."""
    cls = PANEL_REGISTRY.get(family)
    if cls is None:
        raise ValueError(f"no visual panel registered for {family!r}")
    return cls(facts, config, sources)
