"""visparams — visual parameter boxes for data-visualisation panels.

Usage:
    from visparams import PanelConfig, TableDataset, compose

    data = TableDataset(assays={"counts": counts},
                        col_data={"cluster": clusters})
    config = PanelConfig("ColumnDataPlot1", {"color_by": "Column data"},
                         visual_choices=("Color",))
    tree = compose(config, data, "column")
    tree.find("ColumnDataPlot1_color_by_column_data").choices
"""
from __future__ import annotations

__version__ = "0.1.0"

from ._api import compose
from ._config import PanelConfig, SelectionSources, snapshot_config
from ._errors import (
    CompositionError, IdentityCollisionError, InvalidDatasetHandleError,
    VisibilityReferenceError, VisParamsError,
)
from ._facts import DatasetFacts, DatasetHandle, TableDataset, inspect_dataset
from ._types import (
    ConfigMismatch, ControlKind, ControlNode, ControlTree, Disabled, Enabled,
    PanelFamily, VisibleWhen,
)

__all__ = [
    "compose",
    "CompositionError", "ConfigMismatch", "ControlKind", "ControlNode",
    "ControlTree", "DatasetFacts", "DatasetHandle", "Disabled", "Enabled",
    "IdentityCollisionError", "InvalidDatasetHandleError", "PanelConfig",
    "PanelFamily", "SelectionSources", "TableDataset",
    "VisibilityReferenceError", "VisibleWhen", "VisParamsError",
    "inspect_dataset", "snapshot_config",
]
