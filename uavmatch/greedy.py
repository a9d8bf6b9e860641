"""Greedy task allocation: each task goes to the single UAV that scores best."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .graph_match import filter_tasks, resource_value
from .models import Task, Uav


class GreedyMatcher:
    """Assigns tasks one at a time, highest priority first."""

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

    def calculate_weight(self, task: Task, uav: Uav) -> int:
        """Score of giving the task to the UAV; 0 when the UAV cannot take it."""
        res_val = resource_value(task, uav)
        if res_val == 0:
            return 0
        comm = self.comm_value(task, uav)
        if comm == 0:
            return 0
        punish = 1.0 / float(len(uav.loaded_tasks) + 1)
        return int(float(res_val) * float(task.priority) * comm * punish * 1000)

    def comm_value(self, task: Task, uav: Uav) -> float:
        """Link quality to the UAV holding the upstream task, from its last digit."""
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
        return math.fmod(comm, 10) / 10.0

    def _assign(self, uavs: Sequence[Uav], tasks: Iterable[Task]) -> None:
        for task in sorted(tasks, key=lambda t: t.priority, reverse=True):
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


def greedy_match(
    uavs: Sequence[Uav], tasks: Sequence[Task]
) -> tuple[dict[str, str], list[Task]]:
    """Assign tasks greedily with a fresh matcher; the UAVs are loaded in place."""
    return GreedyMatcher().match(uavs, tasks)