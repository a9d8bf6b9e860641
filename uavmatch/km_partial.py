"""Kuhn-Munkres variant for rectangular matrices that tolerates unmatched vertices.

A weight of zero means that the edge does not exist. The result is a
matching that stops as soon as labels can no longer be adjusted, which is
not always the maximum one.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .kuhn_munkres import parse_edges

_MIN_INT32 = -(2**31)


class KuhnMunkresZero:
    """Matching between n left and m right vertices; some may stay unmatched."""

    def __init__(self, graph: Sequence[Sequence[int]], m: int | None = None) -> None:
        self.graph = [list(row) for row in graph]
        self.n = len(self.graph)
        if m is None:
            m = len(self.graph[0]) if self.graph else 0
        if any(len(row) != m for row in self.graph):
            raise ValueError(f"every row must have {m} columns")
        self.m = m
        self.a = [max(row, default=_MIN_INT32) for row in self.graph]
        self.b = [0] * m
        self.match_u = [-1] * self.n
        self.match_v = [-1] * m
        self._visited_u = [False] * self.n
        self._visited_v = [False] * m
        self._slack: list[float] = [math.inf] * m

    def max_weight_matching(self) -> int:
        """Run the algorithm and return the total weight of the matched edges."""
        while True:
            self._visited_u = [False] * self.n
            self._visited_v = [False] * self.m
            self._slack = [math.inf] * self.m
            found = False
            for u in range(self.n):
                if self.match_u[u] == -1 and self._find(u):
                    found = True
            if found:
                continue
            if self._adjust() == 0:
                break
        return sum(self.graph[u][v] for u, v in enumerate(self.match_u) if v != -1)

    def _find(self, root: int) -> bool:
        """Depth-first search for an augmenting path from a free left vertex."""
        self._visited_u[root] = True
        stack = [[root, 0]]
        chosen: list[int] = []
        while stack:
            u, start = stack[-1]
            descended = False
            for v in range(start, self.m):
                weight = self.graph[u][v]
                if weight == 0 or self._visited_v[v]:
                    continue
                diff = self.a[u] + self.b[v] - weight
                if diff < self._slack[v]:
                    self._slack[v] = diff
                if diff != 0:
                    continue
                self._visited_v[v] = True
                owner = self.match_v[v]
                chosen.append(v)
                if owner == -1:
                    for (fu, _), fv in zip(stack, chosen):
                        self.match_u[fu] = fv
                        self.match_v[fv] = fu
                    return True
                stack[-1][1] = v + 1
                self._visited_u[owner] = True
                stack.append([owner, 0])
                descended = True
                break
            if not descended:
                stack.pop()
                if chosen:
                    chosen.pop()
        return False

    def _adjust(self) -> int:
        """Shift the labels by the smallest slack; return 0 when nothing can move."""
        min_d = min(
            (s for s, seen in zip(self._slack, self._visited_v) if not seen),
            default=math.inf,
        )
        if min_d == math.inf:
            return 0
        for u, seen in enumerate(self._visited_u):
            if seen:
                self.a[u] -= min_d
        for v, seen in enumerate(self._visited_v):
            if seen:
                self.b[v] += min_d
            else:
                self._slack[v] -= min_d
        return int(min_d)


def solve(text: str) -> str:
    """Solve an edge-list problem; unmatched right vertices are reported as 0."""
    km = KuhnMunkresZero(parse_edges(text))
    total = km.max_weight_matching()
    return f"{total}\n" + " ".join(str(u + 1) for u in km.match_v)