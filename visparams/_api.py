"""Composition entry point — dataset + panel config -> control tree."""
from __future__ import annotations

import logging
from typing import Any

from ._config import PanelConfig, SelectionSources
from ._facts import inspect_dataset
from ._types import ControlTree, PanelFamily
from .panels import create_panel

logger = logging.getLogger(__name__)


def compose(config: PanelConfig, dataset: Any,
            family: PanelFamily | str,
            sources: SelectionSources | None = None) -> ControlTree:
    """Build the visual parameter tree of one panel.

    Parameters
    ----------
    config : PanelConfig
        Persisted values of the panel.  Never modified.
    dataset : DatasetHandle
        Anything exposing the accessors of ``visparams.DatasetHandle``.
    family : PanelFamily or {"column", "row", "matrix"}
    sources : SelectionSources, optional
        Panels that can transmit a single row/column selection, offered in
        the "Use selection from" dropdowns.

    Returns
    -------
    ControlTree
        Equal (``==``) trees for equal inputs.  Persisted values the dataset
        no longer supports are replaced by defaults and listed in
        ``tree.mismatches``.

    Raises
    ------
    InvalidDatasetHandleError
        The dataset lacks a required accessor.
    IdentityCollisionError, VisibilityReferenceError
        The option declarations are inconsistent.
    """
    if not isinstance(config, PanelConfig):
        raise TypeError(
            f"compose() expects a PanelConfig, got {type(config).__name__}")
    family = PanelFamily(family)
    facts = inspect_dataset(dataset)
    panel = create_panel(family, facts, config, sources)
    tree = panel.build()
    logger.debug("composed %s panel %s: %d categories, %d mismatches",
                 family.value, config.panel_id, len(tree.categories),
                 len(tree.mismatches))
    return tree
