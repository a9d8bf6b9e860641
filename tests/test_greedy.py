from uavmatch.greedy import GreedyMatcher, greedy_match
from uavmatch.models import Task, Uav, copy_uavs


def _fleet():
    return [
        Uav("uav1", {1: 15, 2: 25}, {"uav3": 12, "uav4": 11}),
        Uav("uav2", {1: 24, 2: 16}, {"uav3": 13}),
        Uav("uav3", {1: 8, 2: 25}, {"uav1": 12, "uav2": 13}),
        Uav("uav4", {1: 31, 2: 20}, {"uav1": 11}),
    ]


def _tasks():
    return [
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


def test_weight_halves_with_one_loaded_task():
    matcher = GreedyMatcher()
    uav = Uav("a", {1: 100})
    task = Task("t", 0, 2, need_resources={1: 1})
    before = matcher.calculate_weight(task, uav)
    uav.loaded_tasks.append(Task("other"))
    assert before > 0
    assert matcher.calculate_weight(task, uav) * 2 == before


def test_weight_zero_when_resources_short():
    matcher = GreedyMatcher()
    assert matcher.calculate_weight(Task("t", 0, 5, need_resources={1: 9}), Uav("a", {1: 8})) == 0


def test_comm_value_uses_last_digit_of_link():
    a = Uav("a", {1: 10}, {"b": 10, "c": 3})
    b = Uav("b", {1: 10})
    c = Uav("c", {1: 10})
    matcher = GreedyMatcher()
    matcher.all_uavs = {"a": a, "b": b, "c": c}
    matcher.result["up"] = "a"
    task = Task("t", 2, 1, "up", need_resources={1: 1})
    assert matcher.comm_value(task, a) == 10.0
    assert matcher.comm_value(task, b) == 0.0
    assert matcher.comm_value(task, c) == 0.3
    assert matcher.calculate_weight(task, b) == 0


def test_comm_value_independent_task_is_one():
    matcher = GreedyMatcher()
    assert matcher.comm_value(Task("t", 1), Uav("a")) == 1.0


def test_higher_priority_picks_first():
    uav = Uav("solo", {1: 10})
    tasks = [
        Task("low", 0, 1, need_resources={1: 10}),
        Task("high", 0, 9, need_resources={1: 10}),
    ]
    result, unassigned = greedy_match([uav], tasks)
    assert result == {"high": "solo"}
    assert [t.task_id for t in unassigned] == ["low"]
    assert uav.resources[1] == 0


def test_chained_task_follows_upstream_uav():
    a = Uav("a", {1: 10})
    b = Uav("b", {1: 10})
    tasks = [
        Task("head", 1, 1, need_resources={1: 2}),
        Task("tail", 2, 1, "head", need_resources={1: 2}),
    ]
    result, unassigned = greedy_match([a, b], tasks)
    assert result["tail"] == result["head"]
    assert unassigned == []


def test_full_run_invariants():
    original = _fleet()
    uavs = copy_uavs(original)
    tasks = _tasks()
    result, unassigned = greedy_match(uavs, tasks)
    left = [t.task_id for t in unassigned]
    assert set(result).isdisjoint(left)
    assert set(result) | set(left) == {t.task_id for t in tasks}
    by_uid = {u.uid: u for u in uavs}
    for before, after in zip(original, uavs):
        for res_type, amount in before.resources.items():
            spent = sum(t.need_resources.get(res_type, 0) for t in after.loaded_tasks)
            assert amount - after.resources[res_type] == spent
            assert after.resources[res_type] >= 0
    for task in tasks:
        if task.task_type >= 2 and task.task_id in result:
            prev_uid = result[task.prev]
            here = result[task.task_id]
            assert here == prev_uid or by_uid[prev_uid].next_uavs[here] % 10 != 0


def test_no_uavs_leaves_everything_unassigned():
    tasks = _tasks()
    result, unassigned = greedy_match([], tasks)
    assert result == {}
    assert len(unassigned) == len(tasks)