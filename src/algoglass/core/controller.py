# src/algoglass/core/controller.py
#!/usr/bin/env python3
"""
Simulation controller: the only writer of the application state.

The presentation layer calls the operations below and reads `state` (plus the
small read helpers at the bottom); it never writes to `state` directly.

Edits that change the grid topology (walls, start, target, clear, fill, map)
discard the stored sequence and rewind the cursor, because snapshots are only
valid for the grid they were computed against. While playback is running
those edits are refused; pause or reset first.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from algoglass.core import grid as gridlib
from algoglass.core.config import SimConfig, check_speed
from algoglass.core.registry import check_algorithm, run, structure_title
from algoglass.core.types import (
    Coord, Grid, MapFormatError, PreconditionError, SimulationSequence, Snapshot,
    EMPTY, WALL, START, TARGET, ENDPOINT_KINDS,
)

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    grid: Grid
    start: Coord
    target: Coord
    algorithm: str = "bfs"
    speed: str = "normal"
    snapshots: SimulationSequence = ()
    run_algorithm: Optional[str] = None   # algorithm that produced `snapshots`
    cursor: int = 0
    is_playing: bool = False
    is_finished: bool = False
    message: str = "Ready to start."


class SimulationController:
    def __init__(self, config: Optional[SimConfig] = None):
        self.config = config or SimConfig()
        cfg = self.config
        self.state = SimulationState(
            grid=gridlib.create_grid(cfg.rows, cfg.cols),
            start=cfg.start,
            target=cfg.target,
            algorithm=cfg.algorithm,
            speed=cfg.speed,
        )
        if cfg.map_path is not None:
            if not self.load_map(cfg.map_path):
                raise MapFormatError(self.state.message)
        else:
            self.initialize_grid()

    # ---------- internals ----------
    def _invalidate(self) -> None:
        s = self.state
        s.snapshots = ()
        s.run_algorithm = None
        s.cursor = 0
        s.is_finished = False

    def _editable(self, action: str) -> bool:
        if self.state.is_playing:
            self.state.message = f"Pause playback before you {action}."
            logger.info("Rejected %s during playback", action)
            return False
        return True

    def _in_bounds(self, row: int, col: int) -> bool:
        if self.state.grid.in_bounds((row, col)):
            return True
        self.state.message = f"({row}, {col}) is outside the grid."
        logger.info("Rejected edit at (%d, %d): out of bounds", row, col)
        return False

    # ---------- grid edits ----------
    def initialize_grid(self) -> None:
        s = self.state
        s.grid = gridlib.create_grid(s.grid.rows, s.grid.cols)
        gridlib.place_endpoints(s.grid, s.start, s.target)
        self._invalidate()
        s.is_playing = False
        s.message = "Ready to start."

    def toggle_wall(self, row: int, col: int) -> bool:
        if not self._editable("edit walls") or not self._in_bounds(row, col):
            return False
        cell = self.state.grid.cell((row, col))
        if cell.kind in ENDPOINT_KINDS:
            return False
        cell.is_wall = not cell.is_wall
        cell.kind = WALL if cell.is_wall else EMPTY
        self._invalidate()
        return True

    def _move_endpoint(self, row: int, col: int, kind: str) -> bool:
        s = self.state
        if not self._editable(f"move the {kind}") or not self._in_bounds(row, col):
            return False
        old = s.start if kind == START else s.target
        other = s.target if kind == START else s.start
        if (row, col) == other:
            s.message = f"The {kind} cannot share a cell with the other endpoint."
            return False
        s.grid.cell(old).kind = EMPTY
        cell = s.grid.cell((row, col))
        cell.is_wall = False
        cell.kind = kind
        if kind == START:
            s.start = (row, col)
        else:
            s.target = (row, col)
        self._invalidate()
        return True

    def set_start_node(self, row: int, col: int) -> bool:
        return self._move_endpoint(row, col, START)

    def set_target_node(self, row: int, col: int) -> bool:
        return self._move_endpoint(row, col, TARGET)

    def clear_board(self) -> bool:
        if not self._editable("clear the board"):
            return False
        self.initialize_grid()
        return True

    def fill_walls(self) -> bool:
        """Turn every cell except start and target into a wall."""
        if not self._editable("fill walls"):
            return False
        for row in self.state.grid.cells:
            for cell in row:
                cell.reset_search()
                if cell.coord in (self.state.start, self.state.target):
                    continue
                cell.is_wall = True
                cell.kind = WALL
        self._invalidate()
        return True

    def load_map(self, path: Path) -> bool:
        if not self._editable("load a map"):
            return False
        try:
            grid, start, target = gridlib.load_map(path)
        except (MapFormatError, OSError) as ex:
            self.state.message = f"Failed to load map {path}: {ex}"
            logger.error(self.state.message)
            return False
        s = self.state
        s.grid, s.start, s.target = grid, start, target
        self._invalidate()
        s.message = f"Loaded map {Path(path).name}"
        logger.info("Loaded map %s (%dx%d)", path, grid.rows, grid.cols)
        return True

    # ---------- selection ----------
    def set_algorithm(self, kind: str) -> None:
        self.state.algorithm = check_algorithm(kind)

    def set_speed(self, speed: str) -> None:
        self.state.speed = check_speed(speed)

    # ---------- run & playback ----------
    def run_simulation(self, autoplay: bool = True) -> bool:
        s = self.state
        logger.info("Starting simulation: %s", s.algorithm)
        try:
            snapshots = run(gridlib.clean_for_run(s.grid), s.start, s.target, s.algorithm)
        except PreconditionError as ex:
            s.message = f"Run refused: {ex}"
            logger.warning(s.message)
            return False
        logger.info("Generated %d snapshots", len(snapshots))
        s.snapshots = snapshots
        s.run_algorithm = s.algorithm
        s.cursor = 0
        s.is_playing = autoplay
        s.is_finished = False
        s.message = snapshots[-1].log_message
        return True

    def play(self) -> bool:
        """Start button: run when there is nothing to replay, otherwise resume."""
        s = self.state
        if not s.snapshots or s.is_finished or s.run_algorithm != s.algorithm:
            return self.run_simulation()
        return self.set_playing(True)

    def set_playing(self, playing: bool) -> bool:
        s = self.state
        if playing and not s.snapshots:
            return False
        s.is_playing = playing
        return True

    def step(self, delta: int = 1) -> bool:
        s = self.state
        if not s.snapshots:
            return False
        new = s.cursor + delta
        if new > len(s.snapshots) - 1:
            s.is_playing = False
            s.is_finished = True
            return False
        if new < 0:
            return False
        s.cursor = new
        if delta < 0:
            s.is_finished = False
        return True

    def next_step(self) -> bool:
        return self.step(1)

    def prev_step(self) -> bool:
        return self.step(-1)

    def seek(self, index: int) -> None:
        s = self.state
        if not s.snapshots:
            return
        s.cursor = max(0, min(index, len(s.snapshots) - 1))
        s.is_finished = False

    def reset(self) -> None:
        s = self.state
        s.grid = gridlib.clean_for_run(s.grid)
        self._invalidate()
        s.is_playing = False
        s.message = "Ready to start."

    # ---------- read surface ----------
    @property
    def current_snapshot(self) -> Optional[Snapshot]:
        s = self.state
        if not s.snapshots:
            return None
        return s.snapshots[s.cursor]

    @property
    def display_grid(self) -> Grid:
        snap = self.current_snapshot
        return snap.grid_state if snap is not None else self.state.grid

    @property
    def structure_title(self) -> str:
        return structure_title(self.state.run_algorithm or self.state.algorithm)

    @property
    def log_message(self) -> str:
        snap = self.current_snapshot
        return snap.log_message if snap is not None else self.state.message
