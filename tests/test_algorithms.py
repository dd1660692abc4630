from collections import Counter, deque

import pytest

from grid import Grid
from algorithms import (
    REGISTRY,
    algorithms_by_tag,
    get_algorithm,
    list_algorithms,
    manhattan,
    resolve_algorithm,
    search,
)


ALL = list(REGISTRY)
SHORTEST = ["bfs", "uniform-cost", "astar", "iterative-deepening"]
NO_REPEATS = ["bfs", "dfs", "uniform-cost", "astar", "greedy-bfs"]


def true_distance(grid, start, end):
    """Reference BFS step count, or None when unreachable."""
    seen = {start: 0}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        if cur == end:
            return seen[cur]
        for nbr in grid.neighbours(cur):
            if nbr not in seen and not grid.is_wall(nbr):
                seen[nbr] = seen[cur] + 1
                queue.append(nbr)
    return None


def sample_grids():
    grids = [Grid(6, 6, start=(0, 0), end=(5, 5))]
    for seed in range(12):
        grids.append(Grid.generate_maze(8, 8, wall_prob=0.3, seed=seed, start=(0, 0), end=(7, 7)))
    return grids


def assert_valid_path(grid, result):
    path = result.path
    assert path[0] == grid.start
    assert path[-1] == grid.end
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1
    assert not any(grid.is_wall(p) for p in path)
    assert len(set(path)) == len(path)


class TestRegistry:
    def test_display_order(self):
        assert ALL == ["bfs", "dfs", "uniform-cost", "iterative-deepening", "greedy-bfs", "astar"]
        assert [a.key for a in list_algorithms()] == ALL

    def test_every_entry_is_complete(self):
        for key, info in REGISTRY.items():
            assert info.key == key
            assert info.label
            assert info.pseudocode
            assert callable(info.fn)

    def test_optimal_flags(self):
        assert sorted(a.key for a in list_algorithms() if a.optimal) == sorted(SHORTEST)

    def test_tags(self):
        assert {a.key for a in algorithms_by_tag("heuristic")} == {"astar", "greedy-bfs"}

    def test_lookup(self):
        assert get_algorithm("astar").label == "A* Search"
        assert get_algorithm("nope") is None

    def test_unknown_falls_back_to_bfs(self):
        assert resolve_algorithm("dijkstra").key == "bfs"
        assert resolve_algorithm(None).key == "bfs"


class TestExampleScenario:
    def test_bfs_through_the_gap(self, corridor_text):
        g = Grid.from_ascii(corridor_text)
        result = search(g, algorithm="bfs")

        assert result.success
        assert result.path == [(2, 0), (2, 1), (2, 2), (2, 3), (2, 4)]
        assert result.path_length == 4
        assert result.visited_in_order[0] == (2, 0)

        # level order: (2, 1) before anything further than one step away
        order = result.visited_in_order
        first_far = min(i for i, p in enumerate(order) if manhattan(p, (2, 0)) > 1)
        assert order.index((2, 1)) < first_far

    def test_bfs_first_ring_in_fixed_order(self, corridor_text):
        g = Grid.from_ascii(corridor_text)
        result = search(g, algorithm="bfs")
        assert result.visited_in_order[:4] == [(2, 0), (1, 0), (2, 1), (3, 0)]

    def test_dfs_tries_up_first(self, corridor_text):
        g = Grid.from_ascii(corridor_text)
        result = search(g, algorithm="dfs")
        assert result.visited_in_order[:3] == [(2, 0), (1, 0), (0, 0)]
        assert result.success

    @pytest.mark.parametrize("key", ALL)
    def test_every_algorithm_reaches_the_end(self, corridor_text, key):
        g = Grid.from_ascii(corridor_text)
        result = search(g, algorithm=key)
        assert result.success
        assert result.algorithm == key
        assert_valid_path(g, result)


class TestProperties:
    @pytest.mark.parametrize("key", ALL)
    def test_paths_are_contiguous(self, key):
        for g in sample_grids():
            result = search(g, algorithm=key)
            if result.success:
                assert_valid_path(g, result)
            else:
                assert result.path == []

    @pytest.mark.parametrize("key", SHORTEST)
    def test_shortest(self, key):
        for g in sample_grids():
            dist = true_distance(g, g.start, g.end)
            result = search(g, algorithm=key)
            if dist is None:
                assert not result.success
            else:
                assert result.success
                assert len(result.path) - 1 == dist

    @pytest.mark.parametrize("key", ["dfs", "greedy-bfs"])
    def test_complete_when_not_optimal(self, key):
        for g in sample_grids():
            dist = true_distance(g, g.start, g.end)
            result = search(g, algorithm=key)
            assert result.success == (dist is not None)
            if result.success:
                assert len(result.path) - 1 >= dist

    @pytest.mark.parametrize("key", ALL)
    def test_unreachable(self, island_text, key):
        g = Grid.from_ascii(island_text)
        result = search(g, algorithm=key)
        assert result.success is False
        assert result.path == []
        assert (0, 0) in result.visited_in_order
        assert not any(g.is_wall(p) for p in result.visited_in_order)

    @pytest.mark.parametrize("key", NO_REPEATS)
    def test_no_repeated_visits(self, key):
        for g in sample_grids():
            order = search(g, algorithm=key).visited_in_order
            assert len(order) == len(set(order))

    def test_equal_priorities_pop_in_push_order(self):
        g = Grid(3, 3, start=(1, 1), end=(0, 0))
        order = search(g, algorithm="uniform-cost").visited_in_order
        assert order[:5] == [(1, 1), (0, 1), (1, 2), (2, 1), (1, 0)]

    def test_iterative_deepening_repeats_cells(self):
        g = Grid(5, 5, start=(0, 0), end=(4, 4))
        order = search(g, algorithm="iterative-deepening").visited_in_order
        assert order.count((0, 0)) == 9           # one entry per pass, limits 0..8
        assert len(order) > len(set(order))

    def test_iterative_deepening_records_each_cell_once_per_pass(self):
        g = Grid.generate_maze(12, 12, wall_prob=0.2, seed=11, start=(0, 0), end=(11, 11))
        order = search(g, algorithm="iterative-deepening").visited_in_order
        counts = Counter(order)
        assert max(counts.values()) == counts[g.start]

    def test_iterative_deepening_stops_once_nothing_is_cut_off(self):
        g = Grid(20, 20, start=(0, 0), end=(19, 19))
        g.set_wall((18, 19))
        g.set_wall((19, 18))
        result = search(g, algorithm="iterative-deepening")
        assert result.success is False

        order = result.visited_in_order
        passes = order.count(g.start)
        # farthest reachable cell is 36 steps out, so limits 0..36 run
        assert passes == 37
        assert len(order) <= passes * g.area
        open_cells = {(r, c) for r in range(g.rows) for c in range(g.cols) if not g.is_wall((r, c))}
        assert set(order) == open_cells - {g.end}

    @pytest.mark.parametrize("key", ALL)
    def test_idempotent(self, key):
        g = Grid.generate_maze(10, 10, wall_prob=0.25, seed=3, start=(0, 0), end=(9, 9))
        first = search(g, algorithm=key)
        second = search(g, algorithm=key)
        assert first.visited_in_order == second.visited_in_order
        assert first.path == second.path

    @pytest.mark.parametrize("key", ALL)
    def test_search_does_not_touch_the_grid(self, key):
        g = Grid.generate_maze(8, 8, wall_prob=0.2, seed=5)
        before = g.to_ascii()
        search(g, algorithm=key)
        assert g.to_ascii() == before

    @pytest.mark.parametrize("key", ALL)
    def test_start_equals_end(self, key):
        g = Grid(4, 4)
        result = search(g, start=(1, 1), end=(1, 1), algorithm=key)
        assert result.success
        assert result.path == [(1, 1)]
        assert result.visited_in_order == [(1, 1)]


class TestHeuristics:
    def test_astar_explores_less_than_bfs_on_open_grid(self):
        g = Grid(15, 15, start=(7, 0), end=(7, 14))
        bfs = search(g, algorithm="bfs")
        astar = search(g, algorithm="astar")
        assert astar.visited_count < bfs.visited_count
        assert astar.path_length == bfs.path_length == 14

    def test_greedy_runs_straight_at_the_goal(self):
        g = Grid(9, 9, start=(4, 0), end=(4, 8))
        result = search(g, algorithm="greedy-bfs")
        assert result.path == [(4, c) for c in range(9)]
        assert result.visited_in_order == result.path

    def test_uniform_cost_matches_bfs_distance(self, corridor_text):
        g = Grid.from_ascii(corridor_text)
        assert search(g, algorithm="uniform-cost").path_length == 4


class TestSearchEntryPoint:
    def test_defaults_to_grid_endpoints(self):
        g = Grid(6, 6)
        result = search(g)
        assert result.algorithm == "bfs"
        assert result.path[0] == g.start
        assert result.path[-1] == g.end

    def test_unknown_name_runs_bfs(self, caplog):
        g = Grid(6, 6)
        with caplog.at_level("WARNING"):
            result = search(g, algorithm="teleport")
        assert result.algorithm == "bfs"
        assert "teleport" in caplog.text

    def test_to_dict(self, corridor_text):
        data = search(Grid.from_ascii(corridor_text)).to_dict()
        assert data["success"] is True
        assert data["path"][0] == [2, 0]
