"""Incremental cycle detection with a maintained topological order.

Arcs are added one at a time; an arc that would close a directed cycle is
refused. A bidirectional vertex-guided search decides this, and a
topological order of the vertices is kept up to date.
"""

from __future__ import annotations

import numpy as np

from .general_alg import categorize_embed
from .structures import CapacityError, LinkedListPool, MaxHeap, MinHeap


class CycleDetector:
    """A directed acyclic graph that grows by arcs which keep it acyclic.

    ``max_in`` and ``max_out`` limit the in- and out-degree of every vertex
    when set to an integer; None means unlimited.
    """

    def __init__(self, dim: int, max_arcs: int) -> None:
        if dim < 0 or max_arcs < 0:
            raise ValueError("dimension and arc limit must be non-negative")
        self.dim = dim
        self.max_arcs = max_arcs
        self.max_in: int | None = None
        self.max_out: int | None = None
        self._out = LinkedListPool(max_arcs)
        self._in = LinkedListPool(max_arcs)
        self._fwd_heap = MinHeap(dim)
        self._bwd_heap = MaxHeap(dim)
        self.clear()

    def clear(self) -> None:
        """Remove all arcs and reset the order to 0, 1, ..., dim-1."""
        n = self.dim
        self.arc_count = 0
        self._out.clear()
        self._in.clear()
        self._out_head: list[int | None] = [None] * n
        self._in_head: list[int | None] = [None] * n
        self._n_in = [0] * n
        self._n_out = [0] * n
        self._pos = list(range(n))
        self._at = list(range(n))
        self._fwd_heap.clear()
        self._bwd_heap.clear()
        self._fwd = [0] * n
        self._bwd = [0] * n

    def _check_vertex(self, v: int) -> None:
        if not 0 <= v < self.dim:
            raise IndexError(f"vertex out of range: {v}")

    def add_arc(self, v1: int, v2: int) -> bool:
        """Add arc v1->v2 without checking for cycles.

        Returns False, adding nothing, when an arc or degree limit is reached.
        """
        self._check_vertex(v1)
        self._check_vertex(v2)
        if self.max_out is not None and self._n_out[v1] >= self.max_out:
            return False
        if self.max_in is not None and self._n_in[v2] >= self.max_in:
            return False
        try:
            out_node = self._out.insert_before(self._out_head[v1], v2)
            in_node = self._in.insert_before(self._in_head[v2], v1)
        except CapacityError:
            return False
        self._out_head[v1] = out_node
        self._in_head[v2] = in_node
        self.arc_count += 1
        self._n_out[v1] += 1
        self._n_in[v2] += 1
        return True

    def add(self, v1: int, v2: int) -> bool:
        """Try to add arc v1->v2.

        Returns True when added, False when it would close a cycle or a
        limit is reached.
        """
        self._check_vertex(v1)
        self._check_vertex(v2)
        if v1 == v2:
            raise ValueError(f"self loop on vertex {v1}")
        if self.arc_count >= self.max_arcs:
            return False
        pos, at = self._pos, self._at
        if pos[v1] < pos[v2]:
            return self.add_arc(v1, v2)

        n = self.dim
        fheap, bheap = self._fwd_heap, self._bwd_heap
        fheap.clear()
        bheap.clear()
        fwd = self._fwd = [0] * n
        bwd = self._bwd = [0] * n
        out_cur: list[int | None] = [None] * n
        in_cur: list[int | None] = [None] * n
        out_pool, in_pool = self._out, self._in
        out_head, in_head = self._out_head, self._in_head

        fwd[v2] = 1
        bwd[v1] = 1
        out_cur[v2] = out_head[v2]
        in_cur[v1] = in_head[v1]
        if out_head[v2] is not None:
            fheap.push(pos[v2])
        if in_head[v1] is not None:
            bheap.push(pos[v1])

        while len(fheap) and len(bheap):
            pu = fheap.top()
            pz = bheap.top()
            if pu >= pz:
                break
            vu = at[pu]
            vz = at[pz]
            vx = out_pool.value(out_cur[vu])
            vy = in_pool.value(in_cur[vz])
            out_cur[vu] = out_pool.child(out_cur[vu])
            in_cur[vz] = in_pool.child(in_cur[vz])
            if out_cur[vu] is None:
                fheap.pop()
            if in_cur[vz] is None:
                bheap.pop()
            if bwd[vx]:
                return False
            if not fwd[vx]:
                fwd[vx] = 1
                if out_head[vx] is not None:
                    out_cur[vx] = out_head[vx]
                    fheap.push(pos[vx])
            if fwd[vy]:
                return False
            if not bwd[vy]:
                bwd[vy] = 1
                if in_head[vy] is not None:
                    in_cur[vy] = in_head[vy]
                    bheap.push(pos[vy])

        if not self.add_arc(v1, v2):
            return False
        self._restore_order(v1)
        return True

    def _restore_order(self, source: int) -> None:
        """Rebuild the order after adding a backward arc from ``source``."""
        at = self._at
        t = self._pos[source]
        use_bwd = False
        if len(self._fwd_heap):
            top = self._fwd_heap.top()
            if top < t:
                t = top
                use_bwd = True

        f0, f1 = categorize_embed(at[:t], self._fwd, 2)
        if use_bwd:
            b0, b1 = categorize_embed(at[t + 1:], self._bwd, 2)
            new = f0 + b1 + f1 + [at[t]] + b0
        else:
            new = f0 + [at[t]] + f1 + at[t + 1:]
        self._at = new
        for i, v in enumerate(new):
            self._pos[v] = i

    def extract_graph(self) -> np.ndarray:
        """Return the adjacency matrix: entry (i, j) is 1 if arc i->j exists."""
        g = np.zeros((self.dim, self.dim), dtype=np.uint8)
        for i, head in enumerate(self._out_head):
            node = head
            while node is not None:
                g[i, self._out.value(node)] = 1
                node = self._out.child(node)
        return g

    def order(self) -> list[int]:
        """Return the vertices in the current topological order."""
        return list(self._at)