"""Task allocation to UAVs by repeated Kuhn-Munkres matching on a bipartite graph.

Tasks of type 0 (independent) and 1 (start of a chain) are placed first.
Chained tasks of type 2, 3 and so on follow one type at a time, so that the
upstream task of each is already placed. Within a round, tasks are matched
in batches as large as the fleet. Whatever a batch leaves over is given to
the best single UAV, if any can take it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .km_partial import KuhnMunkresZero
from .models import Task, Uav

_MAX_INT32 = 2**31 - 1


def filter_tasks(tasks: Iterable[Task], *args: int) -> list[Task]:
    """Return the tasks whose type is one of the given types, in their order."""
    wanted = set(args)
    return [task for task in tasks if task.task_type in wanted]


def resource_value(task: Task, uav: Uav) -> int:
    """Smallest resource margin left after the task, plus one; 0 if it does not fit."""
    min_diff = _MAX_INT32
    for res_type, need in task.need_resources.items():
        available = uav.resources.get(res_type)
        if available is None or available < need:
            return 0
        min_diff = min(min_diff, available - need)
    return min_diff + 1


def _by_priority_then_size(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda t: (t.priority, t.resource_sum()), reverse=True)


class GraphMatcher:
    """Assigns tasks to UAVs and remembers every assignment it has made."""

    def __init__(self) -> None:
        self.result: dict[str, str] = {}
        self.unassigned: list[Task] = []
        self.all_uavs: dict[str, Uav] = {}

    def match(
        self, uavs: Sequence[Uav], tasks: Sequence[Task]
    ) -> tuple[dict[str, str], list[Task]]:
        """Assign tasks to the UAVs, loading them; return task->UAV and the leftovers."""
        self.all_uavs.update((uav.uid, uav) for uav in uavs)
        self._assign(uavs, filter_tasks(tasks, 0, 1))
        max_type = max([0, *(task.task_type for task in tasks)])
        for task_type in range(2, max_type + 1):
            self._assign(uavs, filter_tasks(tasks, task_type))
        return dict(self.result), list(self.unassigned)

    def build_graph(self, uavs: Sequence[Uav], tasks: Sequence[Task]) -> list[list[int]]:
        """Weight matrix with one row per UAV and one column per task."""
        return [[self.calculate_weight(task, uav) for task in tasks] for uav in uavs]

    def calculate_weight(self, task: Task, uav: Uav) -> int:
        """Edge weight between a task and a UAV; 0 when the UAV cannot take it."""
        res_val = resource_value(task, uav)
        if res_val == 0:
            return 0
        comm = self.comm_value(task, uav)
        if comm == 0:
            return 0
        punish = 1.0 / float(len(uav.loaded_tasks) + 1) * 100
        return int(float(res_val) * float(task.priority) * comm * punish)

    def comm_value(self, task: Task, uav: Uav) -> float:
        """How well the UAV can talk to the UAV holding the task's upstream task."""
        if task.task_type in (0, 1):
            return 1.0
        prev_uid = self.result.get(task.prev)
        if prev_uid is None:
            return 0.0
        if prev_uid == uav.uid:
            return 10.0
        prev_uav = self.all_uavs.get(prev_uid)
        if prev_uav is None:
            return 0.0
        comm = prev_uav.next_uavs.get(uav.uid)
        if comm is None:
            return 0.0
        return float(comm)

    def _assign(self, uavs: Sequence[Uav], tasks: Sequence[Task]) -> None:
        ordered = _by_priority_then_size(tasks)
        batch_size = len(uavs)
        if batch_size == 0:
            remaining = ordered
        else:
            remaining = []
            for start in range(0, len(ordered), batch_size):
                batch = ordered[start : start + batch_size]
                remaining.extend(self._once_km(uavs, batch))
        self._fallback(uavs, remaining)

    def _once_km(self, uavs: Sequence[Uav], tasks: Sequence[Task]) -> list[Task]:
        km = KuhnMunkresZero(self.build_graph(uavs, tasks), m=len(tasks))
        km.max_weight_matching()
        remaining = []
        for task, uav_index in zip(tasks, km.match_v):
            if uav_index == -1:
                remaining.append(task)
            else:
                uav = uavs[uav_index]
                uav.load(task)
                self.result[task.task_id] = uav.uid
        return remaining

    def _fallback(self, uavs: Sequence[Uav], tasks: Iterable[Task]) -> None:
        for task in tasks:
            best_weight = 0
            best_uav: Uav | None = None
            for uav in uavs:
                weight = self.calculate_weight(task, uav)
                if weight > best_weight:
                    best_weight = weight
                    best_uav = uav
            if best_uav is None:
                self.unassigned.append(task)
            else:
                self.result[task.task_id] = best_uav.uid
                best_uav.load(task)


def graph_match(
    uavs: Sequence[Uav], tasks: Sequence[Task]
) -> tuple[dict[str, str], list[Task]]:
    """Assign tasks to UAVs with a fresh matcher; the UAVs are loaded in place."""
    return GraphMatcher().match(uavs, tasks)