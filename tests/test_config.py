"""Configuration resolution from defaults, environment and command line."""

from pathlib import Path

import pytest

from algoglass.core.config import SPEEDS, SimConfig, default_endpoints, resolve_config
from algoglass.core.types import UnknownAlgorithmError


class TestSimConfig:
    def test_defaults(self):
        cfg = SimConfig()
        assert (cfg.rows, cfg.cols) == (20, 40)
        assert (cfg.start, cfg.target) == ((10, 10), (10, 30))
        assert cfg.algorithm == "bfs"
        assert cfg.speed == "normal"
        assert cfg.map_path is None

    def test_speed_table(self):
        assert SPEEDS == {"slow": 500, "normal": 200, "fast": 50, "instant": 0}

    def test_small_grid_moves_default_endpoints(self):
        cfg = SimConfig(rows=5, cols=5)
        assert (cfg.start, cfg.target) == ((2, 1), (2, 3))

    @pytest.mark.parametrize("rows,cols,expected", [
        (1, 2, ((0, 0), (0, 1))),
        (2, 1, ((0, 0), (1, 0))),
        (3, 3, ((1, 0), (1, 2))),
    ])
    def test_default_endpoints_tiny(self, rows, cols, expected):
        assert default_endpoints(rows, cols) == expected

    def test_single_cell_rejected(self):
        with pytest.raises(ValueError):
            SimConfig(rows=1, cols=1)

    def test_explicit_endpoints_checked(self):
        with pytest.raises(ValueError, match="outside"):
            SimConfig(rows=4, cols=4, start=(0, 0), target=(4, 0))
        with pytest.raises(ValueError, match="differ"):
            SimConfig(rows=4, cols=4, start=(1, 1), target=(1, 1))

    def test_bad_algorithm(self):
        with pytest.raises(UnknownAlgorithmError):
            SimConfig(algorithm="greedy")

    def test_bad_speed(self):
        with pytest.raises(ValueError):
            SimConfig(speed="warp")


class TestResolveConfig:
    def test_no_overrides(self):
        assert resolve_config(argv=[], env={}) == SimConfig()

    def test_environment(self):
        env = {"ALGOGLASS_ROWS": "10", "ALGOGLASS_COLS": "12",
               "ALGOGLASS_ALGO": "AStar", "ALGOGLASS_SPEED": "fast"}
        cfg = resolve_config(argv=[], env=env)
        assert (cfg.rows, cfg.cols) == (10, 12)
        assert cfg.algorithm == "astar"
        assert cfg.speed == "fast"

    def test_argv_wins_over_env(self):
        cfg = resolve_config(argv=["--algo=dfs", "--map=maps/x.json", "--verbose"],
                             env={"ALGOGLASS_ALGO": "dijkstra"})
        assert cfg.algorithm == "dfs"
        assert cfg.map_path == Path("maps/x.json")

    def test_non_integer_rows(self):
        with pytest.raises(ValueError, match="rows"):
            resolve_config(argv=["--rows=many"], env={})
