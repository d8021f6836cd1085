"""Fixed-capacity heaps and a pooled singly linked list."""

from __future__ import annotations

import operator
from typing import Any


class CapacityError(Exception):
    """Raised when a fixed-capacity structure is full."""


class MinHeap:
    """Binary heap of fixed capacity with the smallest value at the top."""

    _before = staticmethod(operator.lt)

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"negative capacity: {capacity}")
        self.capacity = capacity
        self._data: list[Any] = []

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Remove all values."""
        self._data.clear()

    def push(self, value: Any) -> None:
        """Insert a value; raises CapacityError when the heap is full."""
        d = self._data
        if len(d) >= self.capacity:
            raise CapacityError("heap full")
        before = self._before
        d.append(value)
        c = len(d) - 1
        while c:
            p = (c - 1) // 2
            if before(d[p], value):
                return
            d[c] = d[p]
            d[p] = value
            c = p

    def pop(self) -> Any:
        """Remove and return the top value."""
        d = self._data
        if not d:
            raise IndexError("pop from empty heap")
        top = d[0]
        last = d.pop()
        if d:
            d[0] = last
            self._sift_down()
        return top

    def _sift_down(self) -> None:
        d = self._data
        before = self._before
        n = len(d)
        pn = n // 2
        p = 0
        while p + 1 < pn:
            cm = 2 * p + 1
            if before(d[cm + 1], d[cm]):
                cm += 1
            if before(d[p], d[cm]):
                return
            d[p], d[cm] = d[cm], d[p]
            p = cm
        if p + 1 == pn:
            cm = 2 * p + 1
            c2 = cm + 1
            if c2 < n and before(d[c2], d[cm]):
                cm = c2
            if before(d[p], d[cm]):
                return
            d[p], d[cm] = d[cm], d[p]

    def get(self, index: int) -> Any:
        """Return the value stored at a position of the heap array."""
        if not 0 <= index < len(self._data):
            raise IndexError(f"heap index out of range: {index}")
        return self._data[index]

    def top(self) -> Any:
        """Return the top value without removing it."""
        return self.get(0)


class MaxHeap(MinHeap):
    """Binary heap of fixed capacity with the largest value at the top."""

    _before = staticmethod(operator.gt)

    def push(self, value: Any) -> None:
        """Insert a value; raises CapacityError when the heap is full."""
        super().push(value)

    def pop(self) -> Any:
        """Remove and return the largest value."""
        return super().pop()


class LinkedListPool:
    """A pool of list nodes of fixed capacity.

    Each node holds a value and an optional child node id. Node ids are
    assigned in insertion order starting at 0; None means no child.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"negative capacity: {capacity}")
        self.capacity = capacity
        self._child: list[int | None] = []
        self._value: list[Any] = []

    def __len__(self) -> int:
        return len(self._value)

    def clear(self) -> None:
        """Remove all nodes."""
        self._child.clear()
        self._value.clear()

    def _check(self, node: int) -> None:
        if not 0 <= node < len(self._value):
            raise IndexError(f"node id out of range: {node}")

    def insert(self, value: Any) -> int:
        """Add a node with no child and return its id."""
        if len(self._value) >= self.capacity:
            raise CapacityError("linked list full")
        self._value.append(value)
        self._child.append(None)
        return len(self._value) - 1

    def insert_after(self, node: int, value: Any) -> int:
        """Add a node between ``node`` and its child and return its id."""
        self._check(node)
        new = self.insert(value)
        self._child[new] = self._child[node]
        self._child[node] = new
        return new

    def insert_before(self, node: int | None, value: Any) -> int:
        """Add a node whose child is ``node`` and return its id.

        The parent of ``node``, if any, is left unchanged.
        """
        if node is not None:
            self._check(node)
        new = self.insert(value)
        self._child[new] = node
        return new

    def child(self, node: int) -> int | None:
        """Return the id of the child of ``node``, or None."""
        self._check(node)
        return self._child[node]

    def value(self, node: int) -> Any:
        """Return the value held by ``node``."""
        self._check(node)
        return self._value[node]