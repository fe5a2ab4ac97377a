"""Panel family / control kind enums and the composed control tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping


class PanelFamily(Enum):
    COLUMN = "column"
    ROW = "row"
    MATRIX = "matrix"


class ControlKind(Enum):
    TOGGLE_GROUP = "toggle-group"
    SINGLE_SELECT = "single-select"
    MULTI_SELECT = "multi-select"
    NUMERIC = "numeric"
    SLIDER = "slider"
    COLOR_PICKER = "color-picker"
    RADIO = "radio"
    TOGGLE = "toggle"
    TEXT = "text"
    GROUP = "group"


MULTI_VALUED = (ControlKind.TOGGLE_GROUP, ControlKind.MULTI_SELECT)


@dataclass(frozen=True)
class Enabled:
    """Value of an interactive control."""

    value: Any


@dataclass(frozen=True)
class Disabled:
    """Value held by a control the dataset makes inapplicable.

    The last known value is kept so re-enabling shows it again.
    """

    value: Any


@dataclass(frozen=True)
class VisibleWhen:
    """Node is shown when ``node_id`` currently holds ``value``.

    ``mode="equals"`` compares the selection directly (radio, select,
    toggle); ``mode="contains"`` tests membership (toggle groups).
    """

    node_id: str
    value: Any
    mode: str = "equals"

    def holds(self, selections: Mapping[str, Any]) -> bool:
        current = selections.get(self.node_id)
        if self.mode == "contains":
            return current is not None and self.value in current
        return current == self.value


@dataclass(frozen=True)
class ControlNode:
    """One control (or category container) in the visual parameter tree."""

    id: str
    key: str
    kind: ControlKind
    label: str
    state: Enabled | Disabled
    choices: tuple[str, ...] = ()
    visible_when: VisibleWhen | None = None
    children: tuple["ControlNode", ...] = ()
    bounds: tuple[float, float] | None = None
    server_side: bool = False

    @property
    def enabled(self) -> bool:
        return isinstance(self.state, Enabled)

    @property
    def initial_value(self) -> Any:
        return self.state.value

    def walk(self) -> Iterator["ControlNode"]:
        """Depth-first, pre-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class ConfigMismatch:
    """A persisted value that the live dataset no longer supports."""

    key: str
    value: Any
    reason: str


@dataclass(frozen=True)
class ControlTree:
    """Result of one composition call.

    ``selector`` is the top-level toggle group of category titles and
    ``categories`` holds one container per offered category, in display
    order.  ``mismatches`` does not take part in equality so that a tree
    composed from a stale config equals the tree composed from its
    cleaned snapshot.
    """

    family: PanelFamily
    box_id: str
    box_open: bool
    selector: ControlNode
    categories: tuple[ControlNode, ...]
    mismatches: tuple[ConfigMismatch, ...] = field(default=(), compare=False)

    def walk(self) -> Iterator[ControlNode]:
        yield from self.selector.walk()
        for category in self.categories:
            yield from category.walk()

    def find(self, node_id: str) -> ControlNode:
        for node in self.walk():
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def find_key(self, key: str) -> ControlNode:
        for node in self.walk():
            if node.key == key:
                return node
        raise KeyError(key)

    @property
    def category_titles(self) -> tuple[str, ...]:
        return self.selector.choices

    def selections(self) -> dict[str, Any]:
        """Map node id -> initial value for every valued node."""
        return {n.id: n.initial_value for n in self.walk()
                if n.kind is not ControlKind.GROUP}

    def is_visible(self, node_id: str,
                   selections: Mapping[str, Any] | None = None) -> bool:
        """Whether ``node_id`` is shown given the current selections.

        A node is visible when its own condition and the conditions of
        all its ancestors hold.  Defaults to the initial values.
        """
        if selections is None:
            selections = self.selections()
        for root in (self.selector,) + self.categories:
            path = _path_to(root, node_id)
            if path is not None:
                return all(n.visible_when is None
                           or n.visible_when.holds(selections)
                           for n in path)
        raise KeyError(node_id)


def _path_to(node: ControlNode, node_id: str) -> list[ControlNode] | None:
    if node.id == node_id:
        return [node]
    for child in node.children:
        sub = _path_to(child, node_id)
        if sub is not None:
            return [node] + sub
    return None
