"""Base class for per-family visual parameter panels."""
from __future__ import annotations

import abc

from .._config import PanelConfig, SelectionSources
from .._facts import DatasetFacts
from .._rules import CategorySpec, build_tree
from .._types import ControlTree, PanelFamily


class VisualPanel(abc.ABC):
    """Abstract base for the visual parameter box of one panel family."""

    family: PanelFamily

    def __init__(self, facts: DatasetFacts, config: PanelConfig,
                 sources: SelectionSources | None = None):
        self._facts = facts
        self._config = config
        self._sources = sources or SelectionSources()

    @abc.abstractmethod
    def categories(self) -> tuple[CategorySpec, ...]:
        """Offered categories with their option declarations, in order."""

    def build(self) -> ControlTree:
        return build_tree(self.family, self._config, self._facts,
                          self.categories())
