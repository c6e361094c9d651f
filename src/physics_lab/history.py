# MIT License (see LICENSE)
"""
Bounded time-series buffers feeding the line graphs.

A HistorySeries is an ordered FIFO of samples (plain dicts sharing the same
keys). Appending beyond ``maxlen`` evicts the oldest sample. Series can be
frozen, after which appends are ignored; simulators freeze their series when
they reach equilibrium so the graph stops growing.

Example:
    h = HistorySeries(maxlen=3, fields=("t", "Ta", "Tb"))
    for i in range(5):
        h.append(t=i, Ta=100 - i, Tb=20 + i)
    h.column("t")   # array([2., 3., 4.])
"""
from __future__ import annotations
from collections import deque
from typing import Iterator

import numpy as np


class HistorySeries:
    """
    Fixed-capacity FIFO of samples with numpy column access.

    Attributes:
        maxlen: Capacity; the oldest sample is evicted on overflow.
        fields: Ordered field names every sample must provide.
        frozen: When True, append() is a no-op until clear().
    """

    def __init__(self, maxlen: int, fields: tuple[str, ...]):
        if maxlen <= 0:
            raise ValueError(f"maxlen must be positive, got {maxlen}")
        self.maxlen = int(maxlen)
        self.fields = tuple(fields)
        self.frozen = False
        self._samples: deque[dict[str, float]] = deque(maxlen=self.maxlen)

    def append(self, **sample: float) -> bool:
        """
        Append one sample. Returns False if the series is frozen.

        Raises:
            KeyError: If a declared field is missing from the sample.
        """
        if self.frozen:
            return False
        missing = [f for f in self.fields if f not in sample]
        if missing:
            raise KeyError(f"Sample missing fields {missing}")
        self._samples.append({f: float(sample[f]) for f in self.fields})
        return True

    def freeze(self) -> None:
        self.frozen = True

    def clear(self) -> None:
        """Drop all samples and unfreeze."""
        self._samples.clear()
        self.frozen = False

    def column(self, name: str) -> np.ndarray:
        """Return one field as a float64 array, oldest first."""
        if name not in self.fields:
            raise KeyError(f"Unknown field '{name}'")
        return np.fromiter((s[name] for s in self._samples), dtype=np.float64, count=len(self._samples))

    def as_arrays(self) -> dict[str, np.ndarray]:
        return {f: self.column(f) for f in self.fields}

    def last(self) -> dict[str, float] | None:
        return dict(self._samples[-1]) if self._samples else None

    def to_list(self) -> list[dict[str, float]]:
        return [dict(s) for s in self._samples]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[dict[str, float]]:
        return iter(self._samples)

    def __bool__(self) -> bool:
        return bool(self._samples)


class Trail:
    """
    Bounded FIFO of (x, y) points, e.g. the path of a double pendulum bob.

    ``maxlen=None`` keeps every point (projectile trajectories are unbounded
    within one flight and cleared on reset).
    """

    def __init__(self, maxlen: int | None = None):
        self.maxlen = maxlen
        self._points: deque[tuple[float, float]] = deque(maxlen=maxlen)

    def append(self, x: float, y: float) -> None:
        self._points.append((float(x), float(y)))

    def clear(self) -> None:
        self._points.clear()

    def as_array(self) -> np.ndarray:
        """Points as an [N, 2] float64 array."""
        if not self._points:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array(self._points, dtype=np.float64)

    def __getitem__(self, i: int) -> tuple[float, float]:
        return self._points[i]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(self._points)
