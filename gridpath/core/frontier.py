# gridpath/core/frontier.py
#!/usr/bin/env python3
"""
Open set for A*: an indexed binary min-heap over grid coordinates.

Entries are ordered by (f, h, seq):
- lower f first,
- then lower h (closer to the goal),
- then FIFO by seq, the order in which a coordinate first entered the heap.

Each coordinate is stored at most once. Pushing a coordinate that is already
queued re-keys it in place (decrease-key) instead of adding a stale copy.
heapq has no decrease-key, so the sift code is written out here.
"""

from typing import Dict, List, Tuple

from gridpath.core.types import Coord

Key = Tuple[int, int, int]  # (f, h, seq)


class Frontier:
    def __init__(self) -> None:
        self._heap: List[Tuple[Key, Coord]] = []
        self._index: Dict[Coord, int] = {}  # coord -> slot in _heap
        self._counter = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, c: Coord) -> bool:
        return c in self._index

    def push(self, c: Coord, f: int, h: int) -> None:
        """Insert ``c`` or move it to its new priority if already queued."""
        if c in self._index:
            i = self._index[c]
            old_key = self._heap[i][0]
            new_key = (f, h, old_key[2])
            self._heap[i] = (new_key, c)
            if new_key < old_key:
                self._sift_up(i)
            else:
                self._sift_down(i)
            return

        self._counter += 1
        self._heap.append(((f, h, self._counter), c))
        self._index[c] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> Coord:
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        last = self._heap.pop()
        if not self._heap:
            del self._index[last[1]]
            return last[1]
        top = self._heap[0]
        self._heap[0] = last
        self._index[last[1]] = 0
        del self._index[top[1]]
        self._sift_down(0)
        return top[1]

    def clear(self) -> None:
        self._heap.clear()
        self._index.clear()
        self._counter = 0

    def coords(self) -> List[Coord]:
        return [c for _, c in self._heap]

    # -------------------- heap plumbing --------------------

    def _swap(self, i: int, j: int) -> None:
        h = self._heap
        h[i], h[j] = h[j], h[i]
        self._index[h[i][1]] = i
        self._index[h[j][1]] = j

    def _sift_up(self, i: int) -> None:
        h = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if h[i][0] < h[parent][0]:
                self._swap(i, parent)
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        h = self._heap
        n = len(h)
        while True:
            left = 2 * i + 1
            right = left + 1
            smallest = i
            if left < n and h[left][0] < h[smallest][0]:
                smallest = left
            if right < n and h[right][0] < h[smallest][0]:
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest
