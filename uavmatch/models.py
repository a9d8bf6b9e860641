"""Tasks and UAVs: the records that the matching algorithms work on."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Task:
    """A task that needs resources and may depend on an upstream task."""

    task_id: str
    task_type: int = 0
    priority: int = 0
    prev: str = ""
    next: str = ""
    need_resources: dict[int, int] = field(default_factory=dict)

    def resource_sum(self) -> int:
        """Total amount of all resources this task needs."""
        return sum(self.need_resources.values())


@dataclass(eq=False)
class Uav:
    """A UAV with resources, links to other UAVs and the tasks it carries."""

    uid: str
    resources: dict[int, int] = field(default_factory=dict)
    next_uavs: dict[str, int] = field(default_factory=dict)
    loaded_tasks: list[Task] = field(default_factory=list)

    def resource_sum(self) -> int:
        """Total amount of all resources the UAV still has."""
        return sum(self.resources.values())

    def load(self, task: Task) -> None:
        """Take on a task: spend its resources and record it as loaded."""
        for res_type, need in task.need_resources.items():
            self.resources[res_type] = self.resources.get(res_type, 0) - need
        self.loaded_tasks.append(task)

    def copy(self) -> Uav:
        """Return a copy whose resources, links and task list are independent."""
        return Uav(
            uid=self.uid,
            resources=dict(self.resources),
            next_uavs=dict(self.next_uavs),
            loaded_tasks=list(self.loaded_tasks),
        )


def copy_uavs(uavs: list[Uav]) -> list[Uav]:
    """Copy every UAV in the list, keeping the order."""
    return [uav.copy() for uav in uavs]