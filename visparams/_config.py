"""Persisted panel configuration records and snapshot extraction."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from ._facts import ROW
from ._types import ControlKind, ControlTree


def _freeze(value: Any) -> Any:
    """Lists become tuples and mappings frozensets of items, so configs
    hash and compare by value."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, Mapping):
        return frozenset((str(k), _freeze(v)) for k, v in value.items())
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    if isinstance(value, frozenset):
        return {k: _thaw(v) for k, v in value}
    return value


@dataclass(frozen=True)
class PanelConfig:
    """Last known visual parameter values of one panel instance.

    ``values`` maps option key -> value; ``visual_choices`` lists the
    checked categories; ``box_open`` is the state of the collapsible box.
    """

    panel_id: str
    values: Mapping[str, Any] = field(default_factory=dict)
    visual_choices: tuple[str, ...] = ()
    box_open: bool = False

    def __post_init__(self):
        if not self.panel_id:
            raise ValueError("panel_id must be a non-empty string")
        frozen = {str(k): _freeze(v) for k, v in dict(self.values).items()}
        object.__setattr__(self, "values", MappingProxyType(frozen))
        object.__setattr__(self, "visual_choices",
                           tuple(self.visual_choices))

    def __eq__(self, other):
        if not isinstance(other, PanelConfig):
            return NotImplemented
        return (self.panel_id == other.panel_id
                and dict(self.values) == dict(other.values)
                and self.visual_choices == other.visual_choices
                and self.box_open == other.box_open)

    def __hash__(self):
        return hash((self.panel_id, tuple(sorted(self.values.items())),
                     self.visual_choices, self.box_open))

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def with_values(self, **values: Any) -> "PanelConfig":
        """Return a copy with some option values replaced."""
        merged = dict(self.values)
        merged.update(values)
        return PanelConfig(self.panel_id, merged, self.visual_choices,
                           self.box_open)

    def with_choices(self, visual_choices: Sequence[str]) -> "PanelConfig":
        return PanelConfig(self.panel_id, self.values, tuple(visual_choices),
                           self.box_open)

    # -- dict round trip -----------------------------------------------------

    def to_dict(self) -> dict:
        """JSON-compatible representation."""
        return {
            "panel_id": self.panel_id,
            "values": {k: _thaw(v) for k, v in self.values.items()},
            "visual_choices": list(self.visual_choices),
            "box_open": self.box_open,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PanelConfig":
        if "panel_id" not in data:
            raise ValueError("panel config record has no 'panel_id'")
        return cls(
            panel_id=data["panel_id"],
            values=data.get("values", {}),
            visual_choices=tuple(data.get("visual_choices", ())),
            box_open=bool(data.get("box_open", False)),
        )


@dataclass(frozen=True)
class SelectionSources:
    """Names of panels that transmit single row / column selections."""

    row: tuple[str, ...] = ()
    column: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "row", tuple(self.row))
        object.__setattr__(self, "column", tuple(self.column))

    def for_axis(self, axis: str) -> tuple[str, ...]:
        return self.row if axis == ROW else self.column


def snapshot_config(tree: ControlTree, panel_id: str) -> PanelConfig:
    """Read back a PanelConfig holding only values of offered nodes."""
    prefix = f"{panel_id}_"
    values: dict[str, Any] = {}
    for node in tree.walk():
        if node is tree.selector or node.kind is ControlKind.GROUP:
            continue
        if not node.id.startswith(prefix):
            raise ValueError(f"node {node.id!r} does not belong to {panel_id!r}")
        values[node.key] = node.initial_value
    return PanelConfig(
        panel_id=panel_id,
        values=values,
        visual_choices=tuple(tree.selector.initial_value),
        box_open=tree.box_open,
    )
