"""Bounded trajectory history backed by a fixed-capacity ring buffer."""

from __future__ import annotations

import numpy as np

from chaos_lab.errors import InvalidParameter


class TrailBuffer:
    """Insertion-ordered, capacity-bounded sequence of points.

    Points live in a preallocated ``(capacity, dim)`` array. ``_head`` is the
    slot of the oldest point and ``_length`` the number of live points; a push
    into a full buffer overwrites the oldest slot, so push and evict are O(1).
    """

    def __init__(self, capacity: int, dim: int) -> None:
        if capacity < 1:
            raise InvalidParameter(
                f"trail capacity must be >= 1, got {capacity}", field="trail_length"
            )
        self._data = np.zeros((capacity, dim), dtype=np.float64)
        self._head = 0
        self._length = 0

    @property
    def capacity(self) -> int:
        return self._data.shape[0]

    @property
    def dim(self) -> int:
        return self._data.shape[1]

    def __len__(self) -> int:
        return self._length

    def push(self, point: np.ndarray) -> None:
        """Append a point, dropping the oldest one when full."""
        capacity = self.capacity
        if self._length < capacity:
            self._data[(self._head + self._length) % capacity] = point
            self._length += 1
        else:
            self._data[self._head] = point
            self._head = (self._head + 1) % capacity

    def clear(self) -> None:
        self._head = 0
        self._length = 0

    def to_array(self) -> np.ndarray:
        """Copy of the live points, oldest first."""
        idx = (self._head + np.arange(self._length)) % self.capacity
        return self._data[idx].copy()

    def recent(self, count: int) -> np.ndarray:
        """The newest ``count`` points, oldest first."""
        count = max(0, min(count, self._length))
        return self.to_array()[self._length - count:]

    def latest(self) -> np.ndarray | None:
        if self._length == 0:
            return None
        return self._data[(self._head + self._length - 1) % self.capacity].copy()

    def truncate(self, max_length: int) -> None:
        """Keep only the newest ``max_length`` points. Capacity is unchanged."""
        max_length = max(0, max_length)
        if self._length > max_length:
            drop = self._length - max_length
            self._head = (self._head + drop) % self.capacity
            self._length = max_length
            if self._length == 0:
                self._head = 0

    def resize(self, capacity: int) -> None:
        """Change the capacity, keeping the newest points that still fit."""
        if capacity < 1:
            raise InvalidParameter(
                f"trail capacity must be >= 1, got {capacity}", field="trail_length"
            )
        if capacity == self.capacity:
            return
        kept = self.recent(capacity)
        self._data = np.zeros((capacity, self.dim), dtype=np.float64)
        self._data[: len(kept)] = kept
        self._head = 0
        self._length = len(kept)
