"""Grouping of tasks and UAVs by k-means before matching inside each group.

Tasks linked by upstream/downstream references form connected components.
Components, not single tasks, are clustered, so a chain of tasks always
lands in one group.
"""

from __future__ import annotations

import random
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(eq=False)
class ClusterTask:
    """A task as seen by the clustering step."""

    task_id: str
    prev: str = ""
    next: str = ""
    priority: float = 0.0
    need_resources: dict[int, float] = field(default_factory=dict)


@dataclass(eq=False)
class ClusterUav:
    """A UAV as seen by the clustering step."""

    uid: str
    resources: dict[int, float] = field(default_factory=dict)
    next_uavs: dict[str, float] = field(default_factory=dict)


def task_components(tasks: Sequence[ClusterTask]) -> list[list[ClusterTask]]:
    """Split tasks into groups connected through their prev/next references."""
    index_of = {task.task_id: i for i, task in enumerate(tasks)}
    adjacency: dict[int, list[int]] = defaultdict(list)
    for i, task in enumerate(tasks):
        for linked in (task.prev, task.next):
            if linked and linked in index_of:
                j = index_of[linked]
                adjacency[i].append(j)
                adjacency[j].append(i)

    visited = [False] * len(tasks)
    components: list[list[ClusterTask]] = []
    for root in range(len(tasks)):
        if visited[root]:
            continue
        visited[root] = True
        stack = [root]
        members = [root]
        while stack:
            u = stack.pop()
            for v in adjacency[u]:
                if not visited[v]:
                    visited[v] = True
                    stack.append(v)
                    members.append(v)
        components.append([tasks[i] for i in members])
    return components


def component_features(components: Sequence[Sequence[ClusterTask]]) -> list[list[float]]:
    """Per component: summed need of each resource type, then mean priority.

    Resource types are taken in ascending order.
    """
    res_keys = sorted({r for comp in components for t in comp for r in t.need_resources})
    features: list[list[float]] = []
    for comp in components:
        feat = [sum(t.need_resources.get(r, 0.0) for t in comp) for r in res_keys]
        priority = sum(t.priority for t in comp)
        if comp:
            priority /= len(comp)
        feat.append(priority)
        features.append(feat)
    return features


def uav_features(uavs: Sequence[ClusterUav]) -> list[list[float]]:
    """Per UAV: each resource type's amount, then the sum of its link strengths.

    Resource types are taken in ascending order.
    """
    res_keys = sorted({r for uav in uavs for r in uav.resources})
    return [
        [uav.resources.get(r, 0.0) for r in res_keys] + [sum(uav.next_uavs.values())]
        for uav in uavs
    ]


def k_means(
    data: Sequence[Sequence[float]],
    k: int,
    max_iter: int = 100,
    rng: random.Random | None = None,
) -> list[int]:
    """Cluster row vectors into k groups; return the group label of each row."""
    if k <= 0:
        raise ValueError("number of clusters must be positive")
    n = len(data)
    if n == 0:
        return []
    rng = rng if rng is not None else random.Random()
    perm = rng.sample(range(n), n)
    centroids = [list(data[perm[i % n]]) for i in range(k)]
    labels = [0] * n

    for iteration in range(max_iter):
        changed = False
        for i, point in enumerate(data):
            best = 0
            best_dist = float("inf")
            for j, centroid in enumerate(centroids):
                dist = sum((x - c) ** 2 for x, c in zip(point, centroid))
                if dist < best_dist:
                    best_dist = dist
                    best = j
            if labels[i] != best:
                labels[i] = best
                changed = True
        if not changed and iteration > 0:
            break

        dim = len(data[0])
        sums = [[0.0] * dim for _ in range(k)]
        counts = [0] * k
        for label, point in zip(labels, data):
            counts[label] += 1
            for d, x in enumerate(point):
                sums[label][d] += x
        for j in range(k):
            if counts[j]:
                centroids[j] = [s / counts[j] for s in sums[j]]
    return labels


def cluster_tasks(
    tasks: Sequence[ClusterTask], k: int, rng: random.Random | None = None
) -> dict[int, list[ClusterTask]]:
    """Group tasks into k clusters, keeping each connected chain together."""
    components = task_components(tasks)
    labels = k_means(component_features(components), k, 100, rng)
    clusters: dict[int, list[ClusterTask]] = defaultdict(list)
    for label, comp in zip(labels, components):
        clusters[label].extend(comp)
    return dict(clusters)


def cluster_uavs(
    uavs: Sequence[ClusterUav], k: int, rng: random.Random | None = None
) -> dict[int, list[ClusterUav]]:
    """Group UAVs into k clusters by resources and connectivity."""
    labels = k_means(uav_features(uavs), k, 100, rng)
    clusters: dict[int, list[ClusterUav]] = defaultdict(list)
    for label, uav in zip(labels, uavs):
        clusters[label].append(uav)
    return dict(clusters)


def _demo_data() -> tuple[list[ClusterUav], list[ClusterTask]]:
    uavs = [
        ClusterUav("uav1", {1: 15, 2: 25}, {"uav3": 12, "uav4": 11}),
        ClusterUav("uav2", {1: 24, 2: 16}, {"uav3": 13}),
        ClusterUav("uav3", {1: 8, 2: 25}, {"uav1": 12, "uav2": 13}),
        ClusterUav("uav4", {1: 31, 2: 20}, {"uav1": 11}),
    ]
    tasks = [
        ClusterTask("task1", "", "task2", 2, {1: 5, 2: 7}),
        ClusterTask("task2", "task1", "", 2, {1: 8, 2: 13}),
        ClusterTask("task3", "", "task4", 5, {1: 2, 2: 3}),
        ClusterTask("task4", "task3", "task5", 5, {1: 13, 2: 5}),
        ClusterTask("task5", "task4", "", 5, {1: 6, 2: 10}),
        ClusterTask("task6", "", "", 6, {1: 30, 2: 15}),
        ClusterTask("task7", "", "", 5, {1: 7, 2: 8}),
    ]
    return uavs, tasks


def demo_groups(
    k: int = 2, rng: random.Random | None = None
) -> list[tuple[list[ClusterTask], list[ClusterUav]]]:
    """Cluster the sample fleet and tasks; return (tasks, UAVs) for each group index."""
    uavs, tasks = _demo_data()
    task_clusters = cluster_tasks(tasks, k, rng)
    uav_clusters = cluster_uavs(uavs, k, rng)
    return [(task_clusters.get(i, []), uav_clusters.get(i, [])) for i in range(k)]