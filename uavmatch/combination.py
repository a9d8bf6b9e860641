"""Exhaustive task allocation: try every assignment and keep the best one.

Each task is either left out or given to a UAV that has the resources for it
and, for chained tasks, can talk to the UAV holding the upstream task. The
best assignment places the most tasks. Ties go to the one with the lowest
load-balance variance, and among equal ones the first found wins.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .models import Task, Uav, copy_uavs


def _div(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan instead of raising on zero."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def load_balance(
    original_uavs: Sequence[Uav], tasks: Sequence[Task], current_uavs: Sequence[Uav]
) -> float:
    """Variance of the UAVs' weighted resource use.

    Each UAV's use is the mean share of its original resources spent, scaled by
    how far its task count is from the even share of tasks per UAV.
    """
    pool = {uav.uid: uav for uav in original_uavs}
    utils: list[float] = []
    for uav in current_uavs:
        if not original_uavs:
            raise ValueError("no original UAVs to compare against")
        original = pool[uav.uid]
        used = 0.0
        for res_type, left in uav.resources.items():
            start = original.resources.get(res_type, 0)
            used += _div(float(start - left), float(start))
        used = _div(used, float(len(uav.resources)))
        even_share = len(tasks) // len(original_uavs)
        used *= abs(float(len(uav.loaded_tasks)) - float(even_share))
        utils.append(used)
    average = _div(sum(utils), float(len(utils)))
    return _div(sum((u - average) ** 2 for u in utils), float(len(utils)))


class CombinationSearch:
    """Depth-first search over all assignments, keeping the best seen so far."""

    def __init__(self) -> None:
        self.result: dict[str, str] = {}
        self.unassigned: list[Task] = []
        self.best_clb: float = math.inf
        self.best_rate: float = 0.0
        self.best_uavs: list[Uav] | None = None
        self._original: list[Uav] = []
        self._all_uavs: dict[str, Uav] = {}

    def search(
        self, uavs: Sequence[Uav], tasks: Sequence[Task]
    ) -> tuple[dict[str, str], list[Task]]:
        """Find the best assignment; load the given UAVs with it and return it."""
        self._original = list(uavs)
        working = copy_uavs(list(uavs))
        self._all_uavs.update((uav.uid, uav) for uav in working)
        self._dfs(0, {}, working, tasks)
        self.unassigned.extend(task for task in tasks if task.task_id not in self.result)
        if self.best_uavs is not None:
            best = {uav.uid: uav for uav in self.best_uavs}
            for uav in uavs:
                chosen = best[uav.uid]
                uav.resources = dict(chosen.resources)
                uav.loaded_tasks = list(chosen.loaded_tasks)
                uav.next_uavs = dict(chosen.next_uavs)
        return dict(self.result), list(self.unassigned)

    def _dfs(
        self, index: int, path: dict[str, str], uavs: list[Uav], tasks: Sequence[Task]
    ) -> None:
        if index == len(tasks):
            self._evaluate(tasks, path, uavs)
            return
        task = tasks[index]
        self._dfs(index + 1, path, uavs, tasks)
        for uav in uavs:
            if not self._fits(task, uav) or not self._can_talk(task, uav, path):
                continue
            uav.load(task)
            path[task.task_id] = uav.uid
            self._dfs(index + 1, path, uavs, tasks)
            for res_type, need in task.need_resources.items():
                uav.resources[res_type] += need
            del path[task.task_id]
            uav.loaded_tasks.pop()

    @staticmethod
    def _fits(task: Task, uav: Uav) -> bool:
        return all(
            uav.resources.get(res_type, 0) >= need
            for res_type, need in task.need_resources.items()
        )

    def _can_talk(self, task: Task, uav: Uav, path: dict[str, str]) -> bool:
        if task.task_type < 2:
            return True
        prev_uid = path.get(task.prev)
        if prev_uid is None:
            return False
        if prev_uid == uav.uid:
            return True
        prev_uav = self._all_uavs.get(prev_uid)
        return prev_uav is not None and prev_uav.next_uavs.get(uav.uid, 0) != 0

    def _evaluate(
        self, tasks: Sequence[Task], path: dict[str, str], uavs: list[Uav]
    ) -> None:
        clb = load_balance(self._original, tasks, uavs)
        rate = _div(float(len(path)), float(len(tasks)))
        if rate < self.best_rate:
            return
        if rate > self.best_rate or clb < self.best_clb:
            self.best_clb = clb
            self.best_rate = rate
            self.result = dict(path)
            self.best_uavs = copy_uavs(uavs)


def simple_combination(
    uavs: Sequence[Uav], tasks: Sequence[Task]
) -> tuple[dict[str, str], list[Task]]:
    """Run a fresh exhaustive search; the given UAVs are loaded with the result."""
    return CombinationSearch().search(uavs, tasks)