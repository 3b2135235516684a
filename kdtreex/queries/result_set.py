from __future__ import annotations

import heapq
import math
from typing import Dict, Iterator, List, Optional, Tuple

from kdtreex.core.node import KDNode


class ResultSet:
    """Best-k candidates keyed by node identity with squared distances.

    Holds at most ``k`` entries, except that candidates exactly tied with the
    current worst distance are admitted on top of ``k``. A tied group is only
    evicted once ``k`` strictly closer entries are present, so the set always
    equals the ``k`` nearest candidates seen so far plus every tie at the
    boundary distance.

    A max-heap of ``(-distance, order, node)`` sits beside the mapping so the
    worst entry is found without scanning; evicted nodes are dropped from the
    heap lazily.
    """

    __slots__ = ("k", "_entries", "_heap", "_order")

    def __init__(self, k: int) -> None:
        self.k = int(k)
        self._entries: Dict[KDNode, float] = {}
        self._heap: List[Tuple[float, int, KDNode]] = []
        self._order = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, node: object) -> bool:
        return node in self._entries

    def __iter__(self) -> Iterator[Tuple[KDNode, float]]:
        return iter(self._entries.items())

    def is_full(self) -> bool:
        return len(self._entries) >= self.k

    def worst(self) -> Tuple[Optional[KDNode], float]:
        """Return the entry with the largest distance, or ``(None, inf)``."""

        heap = self._heap
        while heap and heap[0][2] not in self._entries:
            heapq.heappop(heap)
        if not heap:
            return None, math.inf
        neg_distance, _, node = heap[0]
        return node, -neg_distance

    def bound(self) -> float:
        """Squared pruning radius: the worst distance once full, else ``inf``."""

        if not self.is_full():
            return math.inf
        return self.worst()[1]

    def offer(self, node: KDNode, distance: float) -> bool:
        """Apply the admission policy to a candidate; return whether it was kept."""

        if not self._entries:
            self._admit(node, distance)
            return True
        _, worst = self.worst()
        if distance < worst:
            self._admit(node, distance)
            if len(self._entries) > self.k:
                self._evict(worst)
            return True
        if distance == worst and node not in self._entries:
            self._admit(node, distance)
            return True
        if len(self._entries) < self.k:
            self._admit(node, distance)
            return True
        return False

    def _admit(self, node: KDNode, distance: float) -> None:
        self._entries[node] = distance
        heapq.heappush(self._heap, (-distance, self._order, node))
        self._order += 1

    def _evict(self, worst: float) -> None:
        tied = []
        while self._heap and -self._heap[0][0] == worst:
            entry = heapq.heappop(self._heap)
            if entry[2] in self._entries:
                tied.append(entry)
        group = {node for _, _, node in tied}
        if len(self._entries) - len(group) < self.k:
            for entry in tied:
                heapq.heappush(self._heap, entry)
            return
        for node in group:
            del self._entries[node]

    def sorted_entries(self) -> List[Tuple[KDNode, float]]:
        # sorted() is stable, so ties keep insertion order.
        return sorted(self._entries.items(), key=lambda item: item[1])


__all__ = ["ResultSet"]
