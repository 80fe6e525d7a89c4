"""Depth-first search: LIFO order, pop-time visited check, naive parents."""

from algoglass.core.bfs import BFSAlgo
from algoglass.core.dfs import DFSAlgo
from algoglass.core.types import PATH
from conftest import build_grid, found, path_len


class TestDFS:
    def test_stack_order_and_next_pop(self, open_grid):
        seq = DFSAlgo().run(open_grid, (10, 10), (10, 30))
        assert seq[0].log_message == "DFS Started at (10,10)"
        assert [e.coord for e in seq[2].structure_state] == [
            (9, 10), (11, 10), (10, 9), (10, 11),
        ]
        assert seq[2].log_message == "Pushed 4 neighbors."
        # last pushed (right) comes off first
        assert seq[3].current_node.coord == (10, 11)
        assert seq[3].log_message == "Popped Node (10, 11)"

    def test_open_field_runs_straight_right(self, open_grid):
        seq = DFSAlgo().run(open_grid, (10, 10), (10, 30))
        assert path_len(seq) == 20

    def test_target_behind_start_gives_long_path(self, open_grid):
        grid = build_grid(20, 40, (10, 10), (10, 5))
        dfs = DFSAlgo().run(grid, (10, 10), (10, 5))
        bfs = BFSAlgo().run(grid, (10, 10), (10, 5))
        assert path_len(bfs) == 5
        assert path_len(dfs) > path_len(bfs)

    def test_last_pusher_wins_parent(self):
        """3x3 open grid: the parent chain follows the latest pushes, not the shortest route."""
        grid = build_grid(3, 3, (0, 0), (2, 2))
        seq = DFSAlgo().run(grid, (0, 0), (2, 2))
        final = seq[-1].grid_state
        assert seq[-1].log_message == "Path Found! Length: 8"
        assert final.cell((1, 1)).parent == (1, 2)
        assert final.cell((1, 0)).parent == (1, 1)
        assert final.cell((2, 1)).parent == (2, 0)
        assert final.count(PATH) == 7
        assert len(seq) == 20

    def test_duplicates_on_stack(self):
        grid = build_grid(3, 3, (0, 0), (2, 2))
        seq = DFSAlgo().run(grid, (0, 0), (2, 2))
        assert any(
            len(s.structure_state) != len({e.coord for e in s.structure_state}) for s in seq
        )

    def test_stale_entries_dropped_without_snapshot(self):
        grid = build_grid(3, 3, (0, 0), (2, 2), walls=[(1, 2), (2, 1)])
        seq = DFSAlgo().run(grid, (0, 0), (2, 2))
        assert not found(seq)
        # six accepted pops, two snapshots each, plus init and closing
        assert len(seq) == 14
        assert seq[-1].metrics["popped"] == 6
        assert seq[-1].metrics["closed_count"] == 6
        # the stack briefly holds (1, 0) twice
        assert any([e.coord for e in s.structure_state] == [(1, 0), (1, 0)] for s in seq)

    def test_finds_path_whenever_bfs_does(self):
        walls = [(1, c) for c in range(1, 6)] + [(3, c) for c in range(0, 5)]
        grid = build_grid(5, 6, (0, 0), (4, 0), walls=walls)
        assert found(DFSAlgo().run(grid, (0, 0), (4, 0)))
        assert found(BFSAlgo().run(grid, (0, 0), (4, 0)))
