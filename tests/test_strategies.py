import random

import pytest

from pathviz.core.algorithms import Algorithm, make_algo
from pathviz.core.astar import AStarAlgo
from pathviz.core.best_first import BestFirstAlgo
from pathviz.core.greedy import GreedyAlgo
from pathviz.core.hill_climbing import HillClimbingAlgo
from pathviz.core.idastar import IDAStarAlgo
from pathviz.core.maps import random_grid
from pathviz.core.smastar import MEMORY_LIMIT, SMAStarAlgo
from pathviz.core.types import NodeEvicted, NodeLinked, StepLogged

from conftest import assert_valid_path, bfs_distance


def solve(algo, grid):
    """Step an algorithm to completion, collecting every emitted event."""
    algo.init(grid)
    events = []
    while True:
        res = algo.step()
        events.extend(res.events)
        if res.status != "running":
            return algo.result, events


def messages(events):
    return [e.message for e in events if isinstance(e, StepLogged)]


ALL = list(Algorithm)


# -------------------- end-to-end scenarios --------------------

def test_astar_open_grid(open5):
    result, _ = solve(AStarAlgo(), open5)
    assert result.success
    assert len(result.path) == 5
    assert_valid_path(open5, result.path)
    assert 1 <= result.nodes_explored <= 9


@pytest.mark.parametrize("algo", ALL)
def test_every_strategy_solves_open_grid(algo, open5):
    result, _ = solve(make_algo(algo), open5)
    assert result.success
    assert_valid_path(open5, result.path)
    assert len(result.path) == 5


@pytest.mark.parametrize("algo", ALL)
def test_walled_in_start_fails_everywhere(algo, sealed):
    result, _ = solve(make_algo(algo), sealed)
    assert not result.success
    assert result.path == []
    assert result.nodes_explored == 1


def test_astar_never_longer_than_greedy(trap):
    a, _ = solve(AStarAlgo(), trap)
    g, _ = solve(GreedyAlgo(), trap)
    assert a.success and g.success
    assert len(a.path) <= len(g.path)


def test_trap_optimal_length(trap):
    a, _ = solve(AStarAlgo(), trap)
    assert len(a.path) == 9
    assert len(a.path) - 1 == bfs_distance(trap)


# -------------------- A* / IDA* optimality --------------------

def reachable_grids(count, size=6):
    rng = random.Random(2024)
    found = []
    while len(found) < count:
        grid = random_grid(size, 0.25, rng=rng)
        if bfs_distance(grid) is not None:
            found.append(grid)
    return found


@pytest.mark.parametrize("grid", reachable_grids(15))
def test_astar_and_idastar_agree_on_optimal_length(grid):
    best = bfs_distance(grid)
    a, _ = solve(AStarAlgo(), grid)
    i, _ = solve(IDAStarAlgo(), grid)
    assert a.success and i.success
    assert len(a.path) - 1 == best
    assert len(i.path) - 1 == best
    assert_valid_path(grid, a.path)
    assert_valid_path(grid, i.path)


@pytest.mark.parametrize("grid", reachable_grids(10, size=8))
@pytest.mark.parametrize("algo", [Algorithm.BEST_FIRST, Algorithm.GREEDY, Algorithm.SMASTAR])
def test_complete_strategies_find_a_valid_path(grid, algo):
    result, _ = solve(make_algo(algo), grid)
    assert result.success
    assert_valid_path(grid, result.path)
    assert len(result.path) - 1 >= bfs_distance(grid)


# -------------------- determinism --------------------

@pytest.mark.parametrize("algo", ALL)
def test_repeated_runs_are_identical(algo):
    grid = reachable_grids(3)[2]
    r1, e1 = solve(make_algo(algo), grid)
    r2, e2 = solve(make_algo(algo), grid)
    assert r1 == r2
    assert e1 == e2


def test_reset_restarts_the_same_run(open5):
    algo = AStarAlgo()
    r1, e1 = solve(algo, open5)
    algo.reset()
    assert algo.nodes_explored == 0 and not algo.visited and not algo.came_from
    r2 = algo.run()
    assert r1 == r2


def test_step_before_init_is_idle():
    assert AStarAlgo().step().status == "idle"


def test_run_before_init_raises():
    with pytest.raises(RuntimeError):
        AStarAlgo().run()


def test_step_after_finish_keeps_reporting_done(open5):
    algo = AStarAlgo()
    algo.init(open5)
    algo.run()
    res = algo.step()
    assert res.status == "done"
    assert res.path == algo.result.path
    assert res.events == []


def test_step_results_carry_events_and_final_path(open5):
    algo = AStarAlgo()
    algo.init(open5)
    results = []
    while True:
        res = algo.step()
        results.append(res)
        if res.status != "running":
            break
    assert all(r.path is None for r in results[:-1])
    assert all(r.events for r in results[:-1])
    assert results[-1].status == "done"
    assert results[-1].path == algo.result.path


# -------------------- per-strategy behaviour --------------------

def test_astar_goal_not_counted_as_explored(open5):
    result, events = solve(AStarAlgo(), open5)
    assert "Exploring (3,3)" not in " ".join(messages(events))
    assert messages(events)[0] == "Exploring (1,1) f=4"


def test_best_first_counts_goal_before_returning(open5):
    result, events = solve(BestFirstAlgo(), open5)
    assert messages(events)[-1] == "Exploring (3,3) h=0"
    assert result.nodes_explored == 5


def test_greedy_keeps_stale_duplicates(open5):
    greedy = GreedyAlgo()
    solve(greedy, open5)
    best_first = BestFirstAlgo()
    solve(best_first, open5)
    g_cells = [e.cell for e in greedy.frontier.entries()]
    b_cells = [e.cell for e in best_first.frontier.entries()]
    assert g_cells.count((2, 2)) == 2
    assert b_cells.count((2, 2)) == 1


def test_best_first_overwrites_parent_without_improvement(open5):
    _, events = solve(BestFirstAlgo(), open5)
    links = [(e.child, e.parent) for e in events if isinstance(e, NodeLinked)]
    assert ((2, 2), (1, 2)) in links
    assert ((2, 2), (2, 3)) in links


def test_hill_climbing_stuck_in_local_optimum(trap):
    algo = HillClimbingAlgo()
    result, events = solve(algo, trap)
    assert not result.success
    assert result.path == []
    assert result.nodes_explored == 7
    assert algo.trail[-1] == (3, 5)
    msgs = messages(events)
    assert "Local optimum reached - cannot improve further" in msgs
    assert msgs[-1] == "✗ Failed - stuck in local optimum"


def test_hill_climbing_no_neighbors_message(sealed):
    _, events = solve(HillClimbingAlgo(), sealed)
    assert "No available neighbors - stuck" in messages(events)


def test_hill_climbing_success_path(open5):
    result, events = solve(HillClimbingAlgo(), open5)
    assert result.path == [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)]
    assert result.nodes_explored == 4
    assert "Reached target!" in messages(events)


@pytest.mark.parametrize("seed", range(20))
def test_hill_climbing_terminates_within_n_squared(seed):
    grid = random_grid(12, rng=random.Random(seed))
    result, _ = solve(HillClimbingAlgo(), grid)
    assert result.nodes_explored <= grid.size * grid.size
    if result.success:
        assert_valid_path(grid, result.path)
    else:
        assert result.path == []


def test_idastar_raises_bound_until_found(detour):
    result, events = solve(IDAStarAlgo(), detour)
    assert result.success
    assert len(result.path) == 9
    msgs = messages(events)
    assert "Increasing bound to 6" in msgs
    assert "Increasing bound to 8" in msgs
    assert_valid_path(detour, result.path)


def test_idastar_revisits_cells_across_iterations(detour):
    result, events = solve(IDAStarAlgo(), detour)
    explored = [m for m in messages(events) if m.startswith("Exploring (2,0)")]
    assert len(explored) == 3   # once per bound: 4, 6, 8
    assert result.nodes_explored > len(set(result.path))


def test_idastar_no_path_on_sealed_start(sealed):
    algo = IDAStarAlgo()
    result, events = solve(algo, sealed)
    assert result.path == []
    assert not any(m.startswith("Increasing bound") for m in messages(events))


def test_smastar_default_capacity():
    assert SMAStarAlgo().memory_limit == MEMORY_LIMIT == 100


def test_smastar_frontier_stays_within_capacity():
    grid = random_grid(12, 0.1, rng=random.Random(3))
    algo = SMAStarAlgo(memory_limit=4)
    algo.init(grid)
    while algo.step().status == "running":
        assert len(algo.frontier) <= 4
    assert algo.evicted_count > 0


def test_smastar_can_lose_the_only_route(detour):
    a, _ = solve(AStarAlgo(), detour)
    assert a.success

    result, events = solve(SMAStarAlgo(memory_limit=1), detour)
    assert not result.success
    assert result.path == []
    evicted = [e.cell for e in events if isinstance(e, NodeEvicted)]
    assert (1, 0) in evicted
    assert "Memory full - removed (1,0)" in messages(events)


def test_smastar_matches_astar_without_memory_pressure(trap):
    a, _ = solve(AStarAlgo(), trap)
    s, _ = solve(SMAStarAlgo(), trap)
    assert s.path == a.path
