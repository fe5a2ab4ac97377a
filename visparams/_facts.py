"""Dataset inspection — derive availability facts from a dataset handle."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

import numpy as np

from ._errors import InvalidDatasetHandleError

ROW = "row"
COLUMN = "column"


class DatasetHandle(Protocol):
    """What the inspector needs from a dataset.

    ``selected_assay`` is the assay a heatmap panel currently shows; ``None``
    means the first assay.
    """

    n_rows: int
    n_cols: int
    selected_assay: str | None

    def row_names(self) -> Sequence[str]: ...
    def column_names(self) -> Sequence[str]: ...
    def row_metadata_fields(self) -> Sequence[str]: ...
    def column_metadata_fields(self) -> Sequence[str]: ...
    def is_categorical(self, axis: str, field: str) -> bool: ...
    def assay_names(self) -> Sequence[str]: ...
    def is_discrete_assay(self, name: str) -> bool: ...


_REQUIRED_ACCESSORS = (
    "row_names", "column_names",
    "row_metadata_fields", "column_metadata_fields",
    "is_categorical", "assay_names", "is_discrete_assay",
)


# ---------------------------------------------------------------------------
# Facts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatasetFacts:
    """Immutable snapshot of what the dataset makes possible."""

    feature_count: int = 0
    sample_count: int = 0
    feature_names: tuple[str, ...] = ()
    sample_names: tuple[str, ...] = ()
    row_metadata: tuple[str, ...] = ()
    column_metadata: tuple[str, ...] = ()
    row_categorical: tuple[str, ...] = ()
    column_categorical: tuple[str, ...] = ()
    assay_names: tuple[str, ...] = ()
    discrete_assays: tuple[str, ...] = ()
    selected_assay: str | None = None

    @property
    def row_continuous(self) -> tuple[str, ...]:
        return tuple(f for f in self.row_metadata
                     if f not in self.row_categorical)

    @property
    def column_continuous(self) -> tuple[str, ...]:
        return tuple(f for f in self.column_metadata
                     if f not in self.column_categorical)

    @property
    def has_row_metadata(self) -> bool:
        return len(self.row_metadata) > 0

    @property
    def has_column_metadata(self) -> bool:
        return len(self.column_metadata) > 0

    @property
    def has_categorical_row_metadata(self) -> bool:
        return len(self.row_categorical) > 0

    @property
    def has_categorical_column_metadata(self) -> bool:
        return len(self.column_categorical) > 0

    @property
    def has_features(self) -> bool:
        return self.feature_count > 0

    @property
    def has_samples(self) -> bool:
        return self.sample_count > 0

    @property
    def has_assays(self) -> bool:
        return len(self.assay_names) > 0

    @property
    def selected_assay_is_discrete(self) -> bool:
        return (self.selected_assay is not None
                and self.selected_assay in self.discrete_assays)

    # -- axis lookups (used by AxisRole) ------------------------------------

    def metadata(self, axis: str) -> tuple[str, ...]:
        return self.row_metadata if axis == ROW else self.column_metadata

    def categorical(self, axis: str) -> tuple[str, ...]:
        return self.row_categorical if axis == ROW else self.column_categorical

    def continuous(self, axis: str) -> tuple[str, ...]:
        return self.row_continuous if axis == ROW else self.column_continuous

    def count(self, axis: str) -> int:
        return self.feature_count if axis == ROW else self.sample_count

    def names(self, axis: str) -> tuple[str, ...]:
        return self.feature_names if axis == ROW else self.sample_names


def inspect_dataset(handle: Any) -> DatasetFacts:
    """Compute DatasetFacts from a handle.  Pure; never fails on empty data."""
    missing = [name for name in _REQUIRED_ACCESSORS
               if not callable(getattr(handle, name, None))]
    for attr in ("n_rows", "n_cols"):
        if not hasattr(handle, attr):
            missing.append(attr)
    if missing:
        raise InvalidDatasetHandleError(
            f"{type(handle).__name__} is missing {', '.join(missing)}")

    n_rows = int(handle.n_rows)
    n_cols = int(handle.n_cols)
    if n_rows < 0 or n_cols < 0:
        raise InvalidDatasetHandleError(
            f"negative dimensions ({n_rows}, {n_cols})")

    row_fields = tuple(str(f) for f in handle.row_metadata_fields())
    col_fields = tuple(str(f) for f in handle.column_metadata_fields())
    assays = tuple(str(a) for a in handle.assay_names())

    selected = getattr(handle, "selected_assay", None)
    if selected is None and assays:
        selected = assays[0]
    elif selected is not None and selected not in assays:
        raise InvalidDatasetHandleError(
            f"selected assay {selected!r} is not one of {list(assays)}")

    return DatasetFacts(
        feature_count=n_rows,
        sample_count=n_cols,
        feature_names=tuple(str(n) for n in handle.row_names()),
        sample_names=tuple(str(n) for n in handle.column_names()),
        row_metadata=row_fields,
        column_metadata=col_fields,
        row_categorical=tuple(
            f for f in row_fields if handle.is_categorical(ROW, f)),
        column_categorical=tuple(
            f for f in col_fields if handle.is_categorical(COLUMN, f)),
        assay_names=assays,
        discrete_assays=tuple(a for a in assays if handle.is_discrete_assay(a)),
        selected_assay=selected,
    )


# ---------------------------------------------------------------------------
# Reference handle
# ---------------------------------------------------------------------------

def _is_categorical_array(values: np.ndarray) -> bool:
    """Booleans, strings and objects are categorical; other numbers are not."""
    return values.dtype.kind in "bOSU" or not np.issubdtype(
        values.dtype, np.number)


def _is_discrete_array(values: np.ndarray) -> bool:
    # Integer counts stay continuous for colour scaling.
    return values.dtype.kind in "bOSU"


class TableDataset:
    """A matrix-with-annotations dataset backed by numpy arrays.

    Parameters
    ----------
    assays : mapping of name -> 2-D array, all of shape (n_rows, n_cols)
    row_data, col_data : mapping of field -> 1-D array of length n_rows /
        n_cols.  Insertion order is the field display order.
    row_names, col_names : optional names; default to ``"row_<i>"`` /
        ``"col_<j>"``.
    shape : required only when there are no assays.
    """

    def __init__(self, assays: Mapping[str, Any] | None = None,
                 row_data: Mapping[str, Any] | None = None,
                 col_data: Mapping[str, Any] | None = None,
                 row_names: Sequence[str] | None = None,
                 col_names: Sequence[str] | None = None,
                 shape: tuple[int, int] | None = None,
                 selected_assay: str | None = None):
        self._assays = {name: np.asarray(a) for name, a in (assays or {}).items()}
        if shape is None:
            if self._assays:
                shape = next(iter(self._assays.values())).shape
            else:
                shape = (
                    len(row_names) if row_names is not None
                    else _first_len(row_data),
                    len(col_names) if col_names is not None
                    else _first_len(col_data))
        if len(shape) != 2:
            raise ValueError(f"shape must be 2-D, got {shape}")
        self.n_rows, self.n_cols = int(shape[0]), int(shape[1])

        for name, arr in self._assays.items():
            if arr.shape != (self.n_rows, self.n_cols):
                raise ValueError(
                    f"assay {name!r} has shape {arr.shape}, "
                    f"expected {(self.n_rows, self.n_cols)}")
        self._row_data = _check_fields(row_data, self.n_rows, "row")
        self._col_data = _check_fields(col_data, self.n_cols, "column")

        self._row_names = (list(row_names) if row_names is not None
                           else [f"row_{i}" for i in range(self.n_rows)])
        self._col_names = (list(col_names) if col_names is not None
                           else [f"col_{j}" for j in range(self.n_cols)])
        if len(self._row_names) != self.n_rows:
            raise ValueError("row_names length does not match n_rows")
        if len(self._col_names) != self.n_cols:
            raise ValueError("col_names length does not match n_cols")

        if selected_assay is not None and selected_assay not in self._assays:
            raise ValueError(f"unknown assay {selected_assay!r}")
        self.selected_assay = selected_assay

    def with_selected_assay(self, name: str | None) -> "TableDataset":
        """Copy of this dataset showing a different assay."""
        return TableDataset(self._assays, self._row_data, self._col_data,
                            self._row_names, self._col_names,
                            shape=(self.n_rows, self.n_cols),
                            selected_assay=name)

    def row_names(self) -> list[str]:
        return list(self._row_names)

    def column_names(self) -> list[str]:
        return list(self._col_names)

    def row_metadata_fields(self) -> list[str]:
        return list(self._row_data)

    def column_metadata_fields(self) -> list[str]:
        return list(self._col_data)

    def is_categorical(self, axis: str, field: str) -> bool:
        table = self._row_data if axis == ROW else self._col_data
        return _is_categorical_array(table[field])

    def assay_names(self) -> list[str]:
        return list(self._assays)

    def is_discrete_assay(self, name: str) -> bool:
        return _is_discrete_array(self._assays[name])


def _first_len(data: Mapping[str, Any] | None) -> int:
    if not data:
        return 0
    return len(next(iter(data.values())))


def _check_fields(data: Mapping[str, Any] | None, n: int,
                  axis: str) -> dict[str, np.ndarray]:
    out: dict[str, np.ndarray] = {}
    for name, values in (data or {}).items():
        arr = np.asarray(values)
        if arr.ndim != 1 or len(arr) != n:
            raise ValueError(
                f"{axis} field {name!r} must be 1-D of length {n}, "
                f"got shape {arr.shape}")
        out[str(name)] = arr
    return out
