# uavmatch

Assign tasks to a swarm of UAVs. Every UAV has resources (a mapping from
resource type to amount) and communication links to other UAVs (a mapping from
UAV id to link strength). Every task has a type, a priority, the resources it
needs, and may name an upstream task in `prev`.

The main allocator builds a weighted bipartite graph between UAVs and tasks and
solves it with the Kuhn–Munkres (KM) algorithm. An edge weight is the product
of:

- the smallest resource margin left on the UAV after taking the task, plus one
  (the weight is 0 if the UAV lacks any needed resource),
- the task's priority,
- a communication value: 1 for tasks of type 0 and 1; for chained tasks 10 if
  the UAV already holds the upstream task, otherwise the strength of the link
  from the upstream task's UAV to this one (0 if there is none),
- a load penalty of `100 / (loaded tasks + 1)`,

truncated to an integer. A weight of 0 means the UAV cannot take the task.

Tasks of type 0 and 1 (independent tasks and chain heads) are allocated first.
Chained tasks of type 2, 3 and so on follow, one type at a time, so that an
upstream task is always placed before the tasks that depend on it. Within a
round the tasks are sorted by priority, then by total resource need (both
descending) and matched in batches as large as the fleet. Tasks a batch leaves
over get one greedy attempt before they are reported as unassigned.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

No third-party libraries are needed.

## Library

- `uavmatch.models`: the `Task` and `Uav` dataclasses. `Uav.load(task)` spends
  the task's resources and records it as loaded; `Uav.copy()` and
  `copy_uavs(uavs)` make independent copies so several allocators can start
  from the same fleet. Both classes have `resource_sum()`.
- `uavmatch.kuhn_munkres`: `KuhnMunkres(graph)`, maximum-weight perfect
  matching on a square matrix where 0 means "no edge". `max_weight_matching()`
  returns the total weight and fills `match_u` / `match_v`; it raises
  `ValueError` when the existing edges allow no perfect matching.
  `parse_edges(text)` and `solve(text)` handle the edge-list text format
  described below.
- `uavmatch.km_partial`: `KuhnMunkresZero(graph, m=None)`, a variant for
  rectangular matrices that may leave vertices unmatched. It stops as soon as
  the labels can no longer be adjusted, so its matching is not always the
  maximum one. `solve(text)` reads the same edge-list format and reports
  unmatched right vertices as 0.
- `uavmatch.graph_match`: `graph_match(uavs, tasks)` and the `GraphMatcher`
  class behind it. Returns a dict from task id to UAV id and a list of
  unassigned tasks, and loads the given UAVs in place. `filter_tasks` and
  `resource_value` are exposed as helpers.
- `uavmatch.greedy`: `greedy_match(uavs, tasks)` / `GreedyMatcher`, a baseline
  that gives each task, highest priority first, to the UAV with the largest
  weight. Its weight uses a load penalty of `1000 / (loaded tasks + 1)` and, for
  a link to another UAV, the last digit of the link strength divided by 10.
- `uavmatch.combination`: `simple_combination(uavs, tasks)` /
  `CombinationSearch`, an exhaustive search over all assignments. It keeps the
  one that places the most tasks and, among those, has the lowest
  load-balance variance (`load_balance`). It is only practical for small inputs.
- `uavmatch.clustering`: `ClusterTask` and `ClusterUav`, grouping of tasks into
  dependency chains (`task_components`), feature vectors
  (`component_features`, `uav_features`), `k_means`, and `cluster_tasks` /
  `cluster_uavs`. `demo_groups(k, rng)` clusters a built-in sample.
- `uavmatch.experiment`: `generate_tasks_and_uavs(m, n, rng)` for random
  fleets, `assess(old_uavs, tasks, result, new_uavs)` returning the
  load-balance variance and the completion rate, the `format_uav`,
  `format_task` and `format_result` helpers, `feasibility_demo()` and
  `contrast_test(m, n, count, with_combination, rng)`.

Random functions take an optional `random.Random` so that runs can be repeated.

## Commands

### `uavmatch`

```
uavmatch                     # same as "uavmatch demo"
uavmatch demo
uavmatch contrast M N [COUNT] [--no-combination] [--seed SEED]
uavmatch generate M N [--seed SEED]
```

- `demo` runs graph matching on a built-in fleet of four UAVs and ten tasks,
  printing the fleet before and after, the assignment and the assessment
  scores, then the sizes of two k-means groups of a sample task set.
- `contrast` generates `COUNT` (default 5) random fleets of `M` UAVs and `N`
  tasks, runs graph matching, greedy and (unless `--no-combination`) the
  exhaustive search on each, and prints per-run and mean time, load-balance
  variance and completion rate.
- `generate` prints one random fleet and task set.

Output labels are in Chinese. Invalid arguments print an error and exit with
status 1.

### `uavmatch-km`

Solves one maximum-weight perfect matching read from a file or, if no file is
given, from standard input. The first two numbers are `n`, the number of
vertices on each side, and `m`, the number of edges. Then follow `m` triples
`a b w`: an edge from left vertex `a` to right vertex `b` (both counted from 1)
with weight `w`. Weight 0 means no edge.

```
printf '2 4\n1 1 3\n1 2 5\n2 1 4\n2 2 1\n' | uavmatch-km
```

It prints the total weight on one line and, on the next, for each right vertex
in turn the left vertex matched to it. If no perfect matching exists, it prints
an error and exits with status 1.

## Limitations

- Clustering only groups tasks and UAVs; nothing runs the matching inside each
  group, and the demo reports only how many tasks and UAVs each group holds.
- The rectangular `KuhnMunkresZero` solver has no command of its own; use
  `uavmatch.km_partial.solve` from Python.
- Nothing is stored: fleets, tasks and results live only in memory.