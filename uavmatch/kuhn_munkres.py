"""Kuhn-Munkres maximum-weight perfect matching on a square weight matrix.

A weight of zero means that the edge does not exist.
"""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Sequence


class KuhnMunkres:
    """Maximum-weight perfect matching where zero weights are missing edges."""

    def __init__(self, graph: Sequence[Sequence[int]]) -> None:
        self.graph = [list(row) for row in graph]
        self.n = len(self.graph)
        if any(len(row) != self.n for row in self.graph):
            raise ValueError("weight matrix must be square")
        self.a = [max((w for w in row if w != 0), default=0) for row in self.graph]
        self.b = [0] * self.n
        self.match_u = [-1] * self.n
        self.match_v = [-1] * self.n
        self._visited_u = [False] * self.n
        self._visited_v = [False] * self.n
        self._slack: list[float] = [math.inf] * self.n

    def max_weight_matching(self) -> int:
        """Run the algorithm and return the total weight of the matching.

        Raises ValueError when the existing edges admit no perfect matching.
        """
        n = self.n
        while True:
            self._visited_u = [False] * n
            self._visited_v = [False] * n
            self._slack = [math.inf] * n
            found = True
            for u in range(n):
                if self.match_u[u] == -1:
                    found = self._find(u)
                    if not found:
                        break
            if found:
                break
            self._adjust()
        return sum(
            self.graph[u][v]
            for u, v in enumerate(self.match_u)
            if v != -1 and self.graph[u][v] != 0
        )

    def _find(self, root: int) -> bool:
        """Depth-first search for an augmenting path from a free left vertex."""
        self._visited_u[root] = True
        stack = [[root, 0]]
        chosen: list[int] = []
        while stack:
            u, start = stack[-1]
            descended = False
            for v in range(start, self.n):
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

    def _adjust(self) -> None:
        min_d = min(
            (s for s, seen in zip(self._slack, self._visited_v) if not seen),
            default=math.inf,
        )
        if min_d == math.inf:
            raise ValueError("weight matrix admits no perfect matching")
        for u, seen in enumerate(self._visited_u):
            if seen:
                self.a[u] -= min_d
        for v, seen in enumerate(self._visited_v):
            if seen:
                self.b[v] += min_d
            else:
                self._slack[v] -= min_d


def parse_edges(text: str) -> list[list[int]]:
    """Parse "n m" followed by m triples "u v w" (1-based) into an n x n matrix."""
    tokens = text.split()
    try:
        numbers = [int(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"expected integers: {exc}") from None
    if len(numbers) < 2:
        raise ValueError("missing vertex and edge counts")
    n, m = numbers[0], numbers[1]
    if n < 0 or m < 0:
        raise ValueError("counts must not be negative")
    edges = numbers[2:]
    if len(edges) < 3 * m:
        raise ValueError(f"expected {m} edges, found {len(edges) // 3}")
    graph = [[0] * n for _ in range(n)]
    for index in range(m):
        u, v, weight = edges[3 * index : 3 * index + 3]
        if not (1 <= u <= n and 1 <= v <= n):
            raise ValueError(f"edge {index + 1} has a vertex out of range")
        graph[u - 1][v - 1] = weight
    return graph


def _format_output(total: int, match_v: list[int]) -> str:
    return f"{total}\n" + " ".join(str(u + 1) for u in match_v)


def solve(text: str) -> str:
    """Solve an edge-list problem; return the total and each right vertex's partner."""
    km = KuhnMunkres(parse_edges(text))
    total = km.max_weight_matching()
    return _format_output(total, km.match_v)


def main(argv: list[str] | None = None) -> int:
    """Read an edge list from a file or standard input and print the matching."""
    parser = argparse.ArgumentParser(description="Maximum-weight perfect matching.")
    parser.add_argument("input", nargs="?", help="edge-list file; standard input if omitted")
    args = parser.parse_args(argv)
    try:
        if args.input is None:
            text = sys.stdin.read()
        else:
            with open(args.input, encoding="utf-8") as handle:
                text = handle.read()
        output = solve(text)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(output)
    return 0