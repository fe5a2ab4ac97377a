"""Rule engine — expand declarative option specs into a gated control tree.

Option declarations are plain data: each one names its key, kind, label,
choices and documented default, which DatasetFacts predicate it needs to
be interactive, and which children each of its values reveals.  The
engine turns them into ControlNodes:

* visibility: a revealed child carries ``VisibleWhen(parent, value)``;
  nesting gives any gating depth without special cases.
* enablement: a node is enabled iff its parent is and its own predicate
  holds.  Disabled nodes keep their resolved value.
* values: read from the PanelConfig by key and validated against the
  node; anything unusable falls back to the default and is reported as a
  ConfigMismatch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

import numpy as np

from ._color_utils import normalize_color
from ._config import PanelConfig
from ._errors import IdentityCollisionError, VisibilityReferenceError
from ._facts import DatasetFacts
from ._types import (
    MULTI_VALUED, ConfigMismatch, ControlKind, ControlNode, ControlTree,
    Disabled, Enabled, PanelFamily, VisibleWhen,
)

logger = logging.getLogger(__name__)

SELECTOR_KEY = "visual_choices"
BOX_KEY = "visual_box_open"

_SELECTS = (ControlKind.SINGLE_SELECT, ControlKind.RADIO)
_NUMBERS = (ControlKind.NUMERIC, ControlKind.SLIDER)
# JSON-representable numbers; Fraction, Decimal and the like are rejected.
_PLAIN_NUMBERS = (int, float, np.integer, np.floating)

_UNSET = object()


@dataclass(frozen=True)
class OptionSpec:
    """Declaration of one control.

    ``reveals`` is an ordered sequence of ``(value, children)``: the
    children are shown while this control holds ``value`` (or, for
    multi-valued kinds, while ``value`` is among its selections).
    ``accepted`` marks a server-side select whose choices the host fills
    in; persisted values are validated against it instead of ``choices``.
    """

    key: str
    kind: ControlKind
    label: str
    default: Any = None
    choices: tuple[str, ...] = ()
    bounds: tuple[float, float] | None = None
    reveals: tuple[tuple[Any, tuple["OptionSpec", ...]], ...] = ()
    requires: Callable[[DatasetFacts], bool] | None = field(
        default=None, compare=False)
    accepted: frozenset | None = field(default=None, compare=False)


@dataclass(frozen=True)
class CategorySpec:
    title: str
    options: tuple[OptionSpec, ...]

    @property
    def slug(self) -> str:
        return self.title.lower().replace(" ", "_")


# ---------------------------------------------------------------------------
# Value validation
# ---------------------------------------------------------------------------

def _validate(spec: OptionSpec, raw: Any) -> tuple[Any, list[str]]:
    """Return (usable value or _UNSET, reasons for rejected parts)."""
    kind = spec.kind
    if kind in _SELECTS:
        offered = spec.accepted if spec.accepted is not None else spec.choices
        if isinstance(raw, str) and raw in offered:
            return raw, []
        return _UNSET, [f"{raw!r} is not an offered choice"]

    if kind in MULTI_VALUED:
        if isinstance(raw, str) or not isinstance(raw, (list, tuple)):
            return _UNSET, [f"expected a sequence, got {type(raw).__name__}"]
        kept: list[str] = []
        reasons = []
        for item in raw:
            if item in spec.choices:
                if item not in kept:
                    kept.append(item)
            else:
                reasons.append(f"{item!r} is not an offered choice")
        return tuple(kept), reasons

    if kind is ControlKind.TOGGLE:
        if isinstance(raw, (bool, np.bool_)):
            return bool(raw), []
        return _UNSET, [f"expected a bool, got {raw!r}"]

    if kind in _NUMBERS:
        if raw is None and spec.default is None:
            return None, []
        if (isinstance(raw, (bool, np.bool_))
                or not isinstance(raw, _PLAIN_NUMBERS)):
            return _UNSET, [f"expected a finite number, got {raw!r}"]
        try:
            number = float(raw)
        except OverflowError:
            return _UNSET, ["number is out of float range"]
        if not np.isfinite(number):
            return _UNSET, [f"expected a finite number, got {raw!r}"]
        if spec.bounds is not None:
            lo, hi = spec.bounds
            if not lo <= number <= hi:
                return _UNSET, [f"{raw!r} is outside [{lo}, {hi}]"]
        return raw, []

    if kind is ControlKind.COLOR_PICKER:
        color = normalize_color(raw)
        if color is None:
            return _UNSET, [f"{raw!r} is not a colour"]
        return color, []

    if kind is ControlKind.TEXT:
        if isinstance(raw, str):
            return raw, []
        return _UNSET, [f"expected text, got {type(raw).__name__}"]

    raise ValueError(f"{kind} controls carry no value")


def _check_trigger(spec: OptionSpec, trigger: Any) -> None:
    if spec.kind in _SELECTS or spec.kind in MULTI_VALUED:
        ok = trigger in spec.choices
    elif spec.kind is ControlKind.TOGGLE:
        ok = isinstance(trigger, bool)
    else:
        ok = False
    if not ok:
        raise VisibilityReferenceError(
            f"{spec.key!r} ({spec.kind.value}) can never hold {trigger!r}")


# ---------------------------------------------------------------------------
# Tree construction
# ---------------------------------------------------------------------------

class _Builder:
    """State of one composition call.  Never shared between calls."""

    def __init__(self, config: PanelConfig, facts: DatasetFacts):
        self._config = config
        self._facts = facts
        self._ids: set[str] = set()
        self._keys: set[str] = set()
        self.mismatches: list[ConfigMismatch] = []

    def node_id(self, key: str) -> str:
        node_id = f"{self._config.panel_id}_{key}"
        if node_id in self._ids:
            raise IdentityCollisionError(
                f"two controls of panel {self._config.panel_id!r} "
                f"resolve to id {node_id!r}")
        self._ids.add(node_id)
        self._keys.add(key)
        return node_id

    def mismatch(self, key: str, value: Any, reason: str) -> None:
        logger.warning("panel %s: ignoring %s=%r (%s)",
                       self._config.panel_id, key, value, reason)
        self.mismatches.append(ConfigMismatch(key, value, reason))

    def resolve(self, spec: OptionSpec, stored: Any = _UNSET) -> Any:
        if stored is _UNSET:
            stored = self._config.values.get(spec.key, _UNSET)
        if stored is _UNSET:
            return spec.default
        value, reasons = _validate(spec, stored)
        for reason in reasons:
            self.mismatch(spec.key, stored, reason)
        return spec.default if value is _UNSET else value

    def option(self, spec: OptionSpec, parent_enabled: bool,
               visible_when: VisibleWhen | None) -> ControlNode:
        node_id = self.node_id(spec.key)
        enabled = parent_enabled and (
            spec.requires is None or bool(spec.requires(self._facts)))
        value = self.resolve(spec)

        mode = "contains" if spec.kind in MULTI_VALUED else "equals"
        children = []
        for trigger, child_specs in spec.reveals:
            _check_trigger(spec, trigger)
            gate = VisibleWhen(node_id, trigger, mode)
            children.extend(self.option(child, enabled, gate)
                            for child in child_specs)

        return ControlNode(
            id=node_id,
            key=spec.key,
            kind=spec.kind,
            label=spec.label,
            state=Enabled(value) if enabled else Disabled(value),
            choices=tuple(spec.choices),
            visible_when=visible_when,
            children=tuple(children),
            bounds=spec.bounds,
            server_side=spec.accepted is not None,
        )

    def category(self, spec: CategorySpec, selector_id: str) -> ControlNode:
        node_id = self.node_id(f"category_{spec.slug}")
        return ControlNode(
            id=node_id,
            key=f"category_{spec.slug}",
            kind=ControlKind.GROUP,
            label=spec.title,
            state=Enabled(None),
            visible_when=VisibleWhen(selector_id, spec.title, "contains"),
            children=tuple(self.option(o, True, None) for o in spec.options),
        )

    def unused_keys(self) -> list[str]:
        return sorted(k for k in self._config.values if k not in self._keys)


def build_tree(family: PanelFamily, config: PanelConfig, facts: DatasetFacts,
               categories: Sequence[CategorySpec]) -> ControlTree:
    """Compose the full tree for one panel from its category specs."""
    builder = _Builder(config, facts)
    box_id = builder.node_id(BOX_KEY)
    titles = tuple(c.title for c in categories)

    selector_spec = OptionSpec(
        SELECTOR_KEY, ControlKind.TOGGLE_GROUP, "", default=(), choices=titles)
    selector_id = builder.node_id(SELECTOR_KEY)
    selector = ControlNode(
        id=selector_id,
        key=SELECTOR_KEY,
        kind=ControlKind.TOGGLE_GROUP,
        label="",
        state=Enabled(builder.resolve(selector_spec, config.visual_choices)),
        choices=titles,
    )
    subtrees = tuple(builder.category(c, selector_id) for c in categories)

    for key in builder.unused_keys():
        builder.mismatch(key, config.values[key], "not offered for this dataset")

    tree = ControlTree(
        family=family,
        box_id=box_id,
        box_open=bool(config.box_open),
        selector=selector,
        categories=subtrees,
        mismatches=tuple(builder.mismatches),
    )
    check_visibility((selector,) + subtrees)
    return tree


def check_visibility(roots: Sequence[ControlNode]) -> None:
    """Every ``visible_when`` must name an ancestor or an earlier sibling
    of the node or of one of its ancestors."""

    def visit(siblings: Sequence[ControlNode], scope: frozenset) -> None:
        placed: set[str] = set()
        for node in siblings:
            cond = node.visible_when
            if cond is not None and cond.node_id not in scope | placed:
                raise VisibilityReferenceError(
                    f"{node.id!r} depends on {cond.node_id!r}, "
                    "which is neither an ancestor nor placed before it")
            visit(node.children, scope | placed | {node.id})
            placed.add(node.id)

    visit(roots, frozenset())
