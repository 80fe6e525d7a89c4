# src/algoglass/core/dfs.py
#!/usr/bin/env python3
"""
Iterative depth-first search.

Visited is checked when a node is POPPED, so a cell can sit on the stack
several times; stale copies are dropped silently when they surface. Each
push overwrites the cell's parent, so the reported path is whatever the
last discovery produced and is usually far from shortest.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Sequence

from algoglass.core.search import GridSearch
from algoglass.core.types import Cell, Coord, FRONTIER


@dataclass
class DFSAlgo(GridSearch):
    name: str = "DFS"
    structure_name: ClassVar[str] = "Stack (LIFO)"

    stack: List[Coord] = field(default_factory=list)

    def _seed(self, start: Cell) -> None:
        self.stack.clear()
        self.stack.append(start.coord)

    def _frontier(self) -> Sequence[Coord]:
        return self.stack

    def _extract(self) -> Optional[Coord]:
        u = self.stack.pop()
        if u in self.closed_set:
            return None
        return u

    def _expand(self, cell: Cell) -> int:
        added = 0
        for v in self.grid.neighbors4(cell.coord):
            if v in self.closed_set:
                continue
            n = self.grid.cell(v)
            n.parent = cell.coord
            self._paint(n, FRONTIER)
            self.stack.append(v)
            added += 1
        return added

    def _init_message(self, start: Cell) -> str:
        return f"DFS Started at ({start.row},{start.col})"

    def _pick_message(self, cell: Cell) -> str:
        return f"Popped Node ({cell.row}, {cell.col})"

    def _expand_message(self, added: int) -> str:
        return f"Pushed {added} neighbors."
