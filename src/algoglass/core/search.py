#!/usr/bin/env python3
"""
Shared engine for the four grid searches.

Every algorithm implements the same contract:
- run(grid, start, target) -> SimulationSequence

The caller's grid is never touched: run() works on a clone, and every
snapshot owns its own deep copy of the working grid (cloned in _capture).

Snapshots are emitted at fixed points, identical for all algorithms:
  1. after initialization
  2. after a node is removed from the frontier (before expansion)
  3. if that node is the target: "target found", then stop expanding
  4. after the node's neighbours have been expanded
  5. closing: "path found" (after backtrace) or "no path found"

Subclasses provide the frontier container through a handful of hooks
(_seed, _frontier, _extract, _expand, _key) and their log wording.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, List, Optional, Sequence, Tuple

from algoglass.core.grid import clone_grid
from algoglass.core.types import (
    Cell, Coord, FrontierEntry, Grid, PreconditionError, SimulationSequence, Snapshot,
    CURRENT, PATH, VISITED, ENDPOINT_KINDS,
)

logger = logging.getLogger(__name__)


def validate_endpoints(grid: Grid, start: Coord, target: Coord) -> None:
    for label, c in (("start", start), ("target", target)):
        if not grid.in_bounds(c):
            raise PreconditionError(f"{label} {c} is outside the {grid.rows}x{grid.cols} grid")
        if grid.is_block(c):
            raise PreconditionError(f"{label} {c} sits on a wall")
    if start == target:
        raise PreconditionError(f"start and target coincide at {start}")


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class GridSearch:
    name: str = "search"
    structure_name: ClassVar[str] = "Frontier"

    # Internal state (valid for the duration of one run)
    grid: Optional[Grid] = None
    start: Optional[Coord] = None
    target: Optional[Coord] = None
    closed_set: set = field(default_factory=set)
    snapshots: List[Snapshot] = field(default_factory=list)
    path: List[Coord] = field(default_factory=list)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False

    # -------------------- public contract --------------------

    def run(self, grid: Grid, start: Coord, target: Coord) -> SimulationSequence:
        validate_endpoints(grid, start, target)
        self.init(grid, start, target)
        while not (self.done or self.no_path):
            self.step()
        self._close()
        logger.debug("%s produced %d snapshots", self.name, len(self.snapshots))
        return tuple(self.snapshots)

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Coord, target: Coord) -> None:
        self.grid = clone_grid(grid)
        self.start = start
        self.target = target
        self.reset()

    def reset(self) -> None:
        """Clear all state, seed the frontier with start and emit the first snapshot."""
        self.closed_set.clear()
        self.snapshots.clear()
        self.path = []
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self._seed(self.grid.cell(self.start))
        self._capture(None, self._init_message(self.grid.cell(self.start)))

    def step(self) -> None:
        """One extraction (and, unless it is the target, one expansion)."""
        if self.done or self.no_path:
            return
        if not self._frontier():
            self.no_path = True
            return

        u = self._extract()
        if u is None:
            return
        self.popped_count += 1
        self.closed_set.add(u)

        cell = self.grid.cell(u)
        self._paint(cell, CURRENT)
        self._capture(cell, self._pick_message(cell))

        if u == self.target:
            self.done = True
            self._capture(cell, f"TARGET FOUND at ({cell.row}, {cell.col})!", structure=())
            return

        added = self._expand(cell)
        self._paint(cell, VISITED)
        self._capture(cell, self._expand_message(added))

    # -------------------- hooks --------------------

    def _seed(self, start: Cell) -> None:
        raise NotImplementedError

    def _frontier(self) -> Sequence[Coord]:
        """Frontier contents in container order."""
        raise NotImplementedError

    def _extract(self) -> Optional[Coord]:
        """Remove the next node; None means a discarded duplicate."""
        raise NotImplementedError

    def _expand(self, cell: Cell) -> int:
        """Examine neighbours of `cell`; returns how many entered the frontier."""
        raise NotImplementedError

    def _key(self, cell: Cell) -> Optional[float]:
        return None

    def _init_message(self, start: Cell) -> str:
        return f"{self.name} Initialized. Start: ({start.row}, {start.col})"

    def _pick_message(self, cell: Cell) -> str:
        return f"Picked ({cell.row}, {cell.col})"

    def _expand_message(self, added: int) -> str:
        return f"Added {added} neighbors. Frontier: {len(self._frontier())}"

    def _found_message(self, length: int) -> str:
        return f"Path Found! Length: {length}"

    # -------------------- helpers --------------------

    @staticmethod
    def _paint(cell: Cell, kind: str) -> None:
        if cell.kind not in ENDPOINT_KINDS:
            cell.kind = kind

    def _structure(self) -> Tuple[FrontierEntry, ...]:
        out = []
        for c in self._frontier():
            cell = self.grid.cell(c)
            out.append(FrontierEntry(cell.row, cell.col, self._key(cell)))
        return tuple(out)

    def _capture(self, current: Optional[Cell], message: str,
                 structure: Optional[Tuple[FrontierEntry, ...]] = None) -> None:
        if structure is None:
            structure = self._structure()
        self.snapshots.append(Snapshot(
            grid_state=clone_grid(self.grid),
            structure_state=structure,
            current_node=current.copy() if current is not None else None,
            log_message=message,
            metrics=MappingProxyType(self._metrics(len(structure))),
        ))

    def _backtrace(self) -> List[Coord]:
        """Follow parents from target to start, colouring intermediate cells."""
        path: List[Coord] = []
        cur = self.target
        # parent chains are acyclic; the bound only guards against a broken grid
        for _ in range(self.grid.rows * self.grid.cols):
            path.append(cur)
            if cur == self.start:
                break
            cell = self.grid.cell(cur)
            self._paint(cell, PATH)
            cur = cell.parent
        else:
            raise RuntimeError(f"{self.name}: parent chain from {self.target} never reaches start")
        path.reverse()
        return path

    def _close(self) -> None:
        if self.done:
            self.path = self._backtrace()
            self._capture(None, self._found_message(len(self.path) - 1), structure=())
        else:
            self._capture(None, "No path found.", structure=())

    def _metrics(self, open_size: int) -> dict:
        # open_size is the length of the structure captured alongside
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": open_size,
            "closed_count": len(self.closed_set),
            "path_len": len(self.path) - 1 if self.path else 0,
        }
