import random
from collections import Counter

import pytest

from uavmatch.experiment import (
    assess,
    contrast_test,
    feasibility_demo,
    format_result,
    format_task,
    format_uav,
    generate_tasks_and_uavs,
    main,
)
from uavmatch.models import Task, Uav


def test_generate_ten_tasks_four_uavs_sizes_and_types():
    uavs, tasks = generate_tasks_and_uavs(4, 10, random.Random(1))
    assert len(uavs) == 4
    assert len(tasks) == 10
    assert Counter(t.task_type for t in tasks) == {0: 4, 1: 3, 2: 2, 3: 1}
    assert [t.task_id for t in tasks] == [f"task{i}" for i in range(1, 11)]


def test_generate_chains_link_in_order():
    _, tasks = generate_tasks_and_uavs(4, 10, random.Random(2))
    assert [t.prev for t in tasks[:7]] == ["-1"] * 7
    assert tasks[7].prev == "task5"
    assert tasks[8].prev == "task6"
    assert tasks[9].prev == "task8"


def test_generate_value_ranges():
    uavs, tasks = generate_tasks_and_uavs(12, 20, random.Random(3))
    assert uavs[0].resources == {1: 500, 2: 500}
    for uav in uavs[1:]:
        assert all(80 <= v <= 100 for v in uav.resources.values())
        assert uav.uid not in uav.next_uavs
        assert uav.next_uavs["uav1"] == 100
        assert all(1 <= v <= 10 or v == 100 for v in uav.next_uavs.values())
        assert uavs[0].next_uavs[uav.uid] == 100
    for task in tasks:
        assert 1 <= task.priority <= 9
        a, b = task.need_resources[1], task.need_resources[2]
        bands = [(10, 20), (30, 40), (50, 60)]
        assert any(lo <= a <= hi and lo <= b <= hi for lo, hi in bands)


def test_generate_is_reproducible_with_seed():
    first = generate_tasks_and_uavs(5, 10, random.Random(7))
    second = generate_tasks_and_uavs(5, 10, random.Random(7))
    assert [format_uav(u) for u in first[0]] == [format_uav(u) for u in second[0]]
    assert [format_task(t) for t in first[1]] == [format_task(t) for t in second[1]]


def test_generate_needs_a_uav():
    with pytest.raises(ValueError):
        generate_tasks_and_uavs(0, 10, random.Random(1))


def test_generate_rejects_unchainable_count():
    with pytest.raises(ValueError):
        generate_tasks_and_uavs(3, 1, random.Random(1))


def test_assess_variance_and_rate():
    old = [Uav("A", {1: 10}), Uav("B", {1: 10})]
    new = [Uav("A", {1: 5}), Uav("B", {1: 10})]
    tasks = [Task(f"t{i}") for i in range(4)]
    clb, rate = assess(old, tasks, {"t0": "A", "t1": "A", "t2": "B"}, new)
    assert clb == pytest.approx(0.25)
    assert rate == pytest.approx(0.75)


def test_assess_balanced_is_zero():
    old = [Uav("A", {1: 10}), Uav("B", {1: 10})]
    new = [Uav("A", {1: 5}, loaded_tasks=[Task("t0")]), Uav("B", {1: 10})]
    tasks = [Task("t0"), Task("t1")]
    clb, rate = assess(old, tasks, {"t0": "A"}, new)
    assert clb == 0.0
    assert rate == 0.5


def test_assess_without_tasks_gives_nan_rate():
    old = [Uav("A", {1: 10})]
    clb, rate = assess(old, [], {}, [Uav("A", {1: 10})])
    assert clb == 0.0
    assert str(rate) == "nan"


def test_format_uav():
    uav = Uav("uav1", {1: 15, 2: 25}, {"uav3": 12}, [Task("task1")])
    assert format_uav(uav) == "UID：uav1\t\t资源：(1:15)(2:25)\t下一跳：(uav3:12)\t装载任务：task1\t"


def test_format_task():
    task = Task("task2", 2, 5, "task1", need_resources={1: 3, 2: 4})
    assert format_task(task) == (
        "TaskID：task2\t\t任务优先级：5\t任务类型：2\t上游任务：task1\t所需资源：(1:3)(2:4)"
    )


def test_format_result():
    text = format_result({"task1": "uav2"}, [Task("task3")])
    assert text == "任务task1->无人机uav2\n任务task3未分配"


def test_feasibility_demo_invariants(capsys):
    outcome = feasibility_demo()
    ids = {f"task{i}" for i in range(1, 11)}
    unassigned = {t.task_id for t in outcome.unassigned}
    assert set(outcome.result) | unassigned == ids
    assert not set(outcome.result) & unassigned
    assert outcome.rate == pytest.approx(len(outcome.result) / 10)
    prevs = {"task2": "task1", "task4": "task3", "task5": "task4"}
    for task_id, prev in prevs.items():
        if task_id in outcome.result:
            assert prev in outcome.result
    for uav in outcome.uavs:
        assert all(v >= 0 for v in uav.resources.values())
    assert "评估结果" in capsys.readouterr().out


def test_contrast_without_combination(capsys):
    averages = contrast_test(4, 10, 2, with_combination=False, rng=random.Random(5))
    assert set(averages) == {"graph_match", "greedy"}
    for millis, _, rate in averages.values():
        assert millis >= 0
        assert 0.0 <= rate <= 1.0
    assert "对比实验结束" in capsys.readouterr().out


def test_contrast_combination_places_at_least_as_many():
    averages = contrast_test(2, 5, 1, with_combination=True, rng=random.Random(11))
    assert set(averages) == {"graph_match", "greedy", "combination"}
    best = averages["combination"][2]
    assert best >= averages["graph_match"][2]
    assert best >= averages["greedy"][2]


def test_contrast_rejects_zero_count():
    with pytest.raises(ValueError):
        contrast_test(2, 5, 0)


def test_main_generate(capsys):
    assert main(["generate", "2", "5", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "TaskID：task5" in out
    assert "UID：uav2" in out


def test_main_generate_error(capsys):
    assert main(["generate", "0", "5"]) == 1
    assert "error" in capsys.readouterr().err


def test_main_default_runs_demo_and_clusters(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "第1组" in out
    assert "评估结果" in out