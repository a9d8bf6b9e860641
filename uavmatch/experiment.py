"""Experiments that compare the allocation algorithms on sample and random fleets."""

from __future__ import annotations

import argparse
import math
import random
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .clustering import demo_groups
from .combination import load_balance, simple_combination
from .graph_match import graph_match
from .greedy import greedy_match
from .models import Task, Uav, copy_uavs

Matcher = Callable[[Sequence[Uav], Sequence[Task]], "tuple[dict[str, str], list[Task]]"]

_HUB_RESOURCE = 500
_HUB_LINK = 100


@dataclass
class RunOutcome:
    """What one algorithm produced on one fleet."""

    name: str
    result: dict[str, str]
    unassigned: list[Task]
    uavs: list[Uav]
    millis: float
    clb: float
    rate: float


def _resource_need(rng: random.Random) -> dict[int, int]:
    """Small (70%), medium (20%) or large (10%) need for both resource types."""
    if rng.random() < 0.7:
        low = 10
    elif rng.random() < 0.9:
        low = 30
    else:
        low = 50
    return {1: rng.randrange(11) + low, 2: rng.randrange(11) + low}


def generate_tasks_and_uavs(
    m: int, n: int, rng: random.Random | None = None
) -> tuple[list[Uav], list[Task]]:
    """Build m random UAVs and n random tasks.

    UAVs get 80-100 of each resource and a few links of strength 1-10. The
    first UAV becomes a hub with 500 of each resource, linked both ways to
    every UAV with strength 100. Tasks are 40% independent, 30% chain starts,
    20% second links and the rest third links.
    """
    if m < 1:
        raise ValueError("at least one UAV is needed")
    if n < 0:
        raise ValueError("the number of tasks must not be negative")
    rng = rng if rng is not None else random.Random()

    uavs: list[Uav] = []
    for i in range(1, m + 1):
        uid = f"uav{i}"
        resources = {1: rng.randrange(21) + 80, 2: rng.randrange(21) + 80}
        links: dict[str, int] = {}
        for _ in range(rng.randrange(max(1, m // 10)) + 1):
            other = f"uav{rng.randrange(m) + 1}"
            if other != uid:
                links[other] = rng.randrange(10) + 1
        uavs.append(Uav(uid, resources, links))

    tasks: list[Task] = []
    for i in range(1, n + 1):
        priority = rng.randrange(9) + 1
        need = _resource_need(rng)
        tasks.append(Task(f"task{i}", 0, priority, "-1", need_resources=need))

    type0 = int(n * 0.4)
    type1 = int(n * 0.3)
    type2 = int(n * 0.2)
    starts = tasks[type0 : type0 + type1]
    middles = tasks[type0 + type1 : type0 + type1 + type2]
    ends = tasks[type0 + type1 + type2 :]
    if len(middles) > len(starts) or len(ends) > len(middles):
        raise ValueError(f"cannot link {n} tasks into chains")
    for task in starts:
        task.task_type = 1
    for prev, task in zip(starts, middles):
        task.task_type = 2
        task.prev = prev.task_id
    for prev, task in zip(middles, ends):
        task.task_type = 3
        task.prev = prev.task_id

    hub = uavs[0]
    hub.resources[1] = _HUB_RESOURCE
    hub.resources[2] = _HUB_RESOURCE
    for uav in uavs:
        hub.next_uavs[uav.uid] = _HUB_LINK
        uav.next_uavs[hub.uid] = _HUB_LINK
    return uavs, tasks


def assess(
    old_uavs: Sequence[Uav],
    tasks: Sequence[Task],
    result: dict[str, str],
    new_uavs: Sequence[Uav],
) -> tuple[float, float]:
    """Return the load-balance variance and the share of tasks that were assigned."""
    clb = load_balance(old_uavs, tasks, new_uavs)
    if tasks:
        rate = len(result) / len(tasks)
    else:
        rate = math.inf if result else math.nan
    return clb, rate


def format_uav(uav: Uav) -> str:
    """One line describing a UAV's resources, links and loaded tasks."""
    resources = "".join(f"({k}:{v})" for k, v in uav.resources.items())
    links = "".join(f"({k}:{v})" for k, v in uav.next_uavs.items())
    loaded = "".join(f"{task.task_id}\t" for task in uav.loaded_tasks)
    return f"UID：{uav.uid}\t\t资源：{resources}\t下一跳：{links}\t装载任务：{loaded}"


def format_task(task: Task) -> str:
    """One line describing a task."""
    needs = "".join(f"({k}:{v})" for k, v in task.need_resources.items())
    return (
        f"TaskID：{task.task_id}\t\t任务优先级：{task.priority}"
        f"\t任务类型：{task.task_type}\t上游任务：{task.prev}\t所需资源：{needs}"
    )


def format_result(result: dict[str, str], unassigned: Sequence[Task]) -> str:
    """Lines naming each assignment, then each task left unassigned."""
    lines = [f"任务{task_id}->无人机{uid}" for task_id, uid in result.items()]
    lines.extend(f"任务{task.task_id}未分配" for task in unassigned)
    return "\n".join(lines)


def _print_uavs(uavs: Sequence[Uav]) -> None:
    for uav in uavs:
        print(format_uav(uav))


def _run(name: str, matcher: Matcher, uavs: Sequence[Uav], tasks: Sequence[Task]) -> RunOutcome:
    copies = copy_uavs(list(uavs))
    start = time.perf_counter()
    result, unassigned = matcher(copies, tasks)
    millis = (time.perf_counter() - start) * 1000
    clb, rate = assess(uavs, tasks, result, copies)
    return RunOutcome(name, result, unassigned, copies, millis, clb, rate)


def _demo_fleet() -> tuple[list[Uav], list[Task]]:
    uavs = [
        Uav("uav1", {1: 15, 2: 25}, {"uav3": 12, "uav4": 11}),
        Uav("uav2", {1: 24, 2: 16}, {"uav3": 13}),
        Uav("uav3", {1: 8, 2: 25}, {"uav1": 12, "uav2": 13}),
        Uav("uav4", {1: 31, 2: 20}, {"uav1": 11}),
    ]
    tasks = [
        Task("task1", 1, 2, "-1", need_resources={1: 5, 2: 7}),
        Task("task2", 2, 2, "task1", need_resources={1: 3, 2: 3}),
        Task("task3", 1, 5, "-1", need_resources={1: 2, 2: 3}),
        Task("task4", 2, 5, "task3", need_resources={1: 3, 2: 3}),
        Task("task5", 3, 5, "task4", need_resources={1: 2, 2: 3}),
        Task("task6", 0, 6, "-1", need_resources={1: 12, 2: 6}),
        Task("task7", 0, 5, "-1", need_resources={1: 7, 2: 8}),
        Task("task8", 0, 4, "-1", need_resources={1: 5, 2: 6}),
        Task("task9", 0, 3, "-1", need_resources={1: 3, 2: 5}),
        Task("task10", 0, 2, "-1", need_resources={1: 6, 2: 6}),
    ]
    return uavs, tasks


def feasibility_demo() -> RunOutcome:
    """Run the graph matching on the sample fleet, print it and return the outcome."""
    uavs, tasks = _demo_fleet()
    print("初始无人机")
    _print_uavs(uavs)
    outcome = _run("graph_match", graph_match, uavs, tasks)
    report = format_result(outcome.result, outcome.unassigned)
    if report:
        print(report)
    print("拷贝无人机")
    _print_uavs(outcome.uavs)
    print("评估结果：", outcome.clb, outcome.rate)
    return outcome


def contrast_test(
    m: int,
    n: int,
    count: int,
    with_combination: bool = True,
    rng: random.Random | None = None,
) -> dict[str, tuple[float, float, float]]:
    """Compare the algorithms over count random fleets.

    Returns, per algorithm, the mean time in milliseconds, the mean
    load-balance variance and the mean assignment rate.
    """
    if count < 1:
        raise ValueError("count must be at least 1")
    rng = rng if rng is not None else random.Random()
    algorithms: list[tuple[str, str, Matcher]] = [
        ("graph_match", "图匹配", graph_match),
        ("greedy", "贪心", greedy_match),
    ]
    if with_combination:
        algorithms.append(("combination", "组合", simple_combination))
    labels = {key: label for key, label, _ in algorithms}
    totals = {key: [0.0, 0.0, 0.0] for key, _, _ in algorithms}

    print("对比试验开始----------")
    for i in range(1, count + 1):
        print(f"第 {i} 次实验")
        uavs, tasks = generate_tasks_and_uavs(m, n, rng)
        print("生成无人机与任务成功！")
        for task in tasks:
            print(format_task(task))
        print("初始无人机状态：")
        _print_uavs(uavs)

        outcomes = [_run(key, matcher, uavs, tasks) for key, _, matcher in algorithms]
        for outcome in outcomes:
            print(f"{labels[outcome.name]}算法结果：")
            report = format_result(outcome.result, outcome.unassigned)
            if report:
                print(report)
            _print_uavs(outcome.uavs)
        for outcome in outcomes:
            print(
                f"{labels[outcome.name]}耗时、负载均衡度、任务完成率为：",
                f"{outcome.millis:.3f}ms",
                outcome.clb,
                outcome.rate,
            )
            total = totals[outcome.name]
            total[0] += int(outcome.millis)
            total[1] += outcome.clb
            total[2] += outcome.rate

    averages = {key: (t[0] / count, t[1] / count, t[2] / count) for key, t in totals.items()}
    print("\n\n对比实验结束，结果如下：")
    for key, (millis, clb, rate) in averages.items():
        print(f"{labels[key]}平均耗时（毫秒）、负载均衡度、任务完成率为：", millis, clb, rate)
    return averages


def _print_clusters(rng: random.Random | None) -> None:
    for i, (task_group, uav_group) in enumerate(demo_groups(2, rng), start=1):
        print(f"第{i}组：{len(task_group)}个任务，{len(uav_group)}架无人机")


def main(argv: list[str] | None = None) -> int:
    """Run the sample demonstration, a contrast experiment or a random generation."""
    parser = argparse.ArgumentParser(description="UAV task allocation experiments.")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("demo", help="sample fleet with graph matching and clustering")
    contrast = sub.add_parser("contrast", help="compare the algorithms on random fleets")
    contrast.add_argument("m", type=int, help="number of UAVs")
    contrast.add_argument("n", type=int, help="number of tasks")
    contrast.add_argument("count", type=int, nargs="?", default=5, help="number of runs")
    contrast.add_argument("--no-combination", action="store_true")
    contrast.add_argument("--seed", type=int)
    generate = sub.add_parser("generate", help="print a random fleet and task set")
    generate.add_argument("m", type=int)
    generate.add_argument("n", type=int)
    generate.add_argument("--seed", type=int)
    args = parser.parse_args(argv)

    try:
        if args.command in (None, "demo"):
            feasibility_demo()
            _print_clusters(None)
        elif args.command == "contrast":
            contrast_test(
                args.m,
                args.n,
                args.count,
                with_combination=not args.no_combination,
                rng=random.Random(args.seed),
            )
        else:
            uavs, tasks = generate_tasks_and_uavs(args.m, args.n, random.Random(args.seed))
            _print_uavs(uavs)
            for task in tasks:
                print(format_task(task))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0